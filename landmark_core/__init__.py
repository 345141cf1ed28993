from .config import AppConfig, load_config
from .frame_source import Camera, FrameSourceError
from .providers import (
    FaceMeshProvider,
    HandsProvider,
    LandmarkProvider,
    PoseProvider,
    ProviderError,
)
from .snapshot_store import Landmark, Snapshot, SnapshotStore

__all__ = [
    "AppConfig",
    "load_config",
    "Camera",
    "FrameSourceError",
    "LandmarkProvider",
    "FaceMeshProvider",
    "PoseProvider",
    "HandsProvider",
    "ProviderError",
    "Landmark",
    "Snapshot",
    "SnapshotStore",
]
