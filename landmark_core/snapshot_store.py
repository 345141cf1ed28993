import threading
from dataclasses import dataclass, replace
from typing import Any, Iterable, NamedTuple, Optional, Sequence, Tuple


class Landmark(NamedTuple):
    x: float
    y: float
    z: float = 0.0


LandmarkSeq = Tuple[Landmark, ...]
Instances = Tuple[LandmarkSeq, ...]

PROVIDER_NAMES = ("face", "pose", "hands")


def to_landmarks(points: Iterable[Any]) -> LandmarkSeq:
    """Copy provider points (anything exposing .x/.y and optionally .z) into immutable Landmarks."""
    return tuple(
        Landmark(float(p.x), float(p.y), float(getattr(p, "z", 0.0) or 0.0))
        for p in points
    )


def landmark_at(seq: Optional[Sequence[Landmark]], idx: int) -> Optional[Landmark]:
    if seq is None or idx < 0 or idx >= len(seq):
        return None
    return seq[idx]


@dataclass(frozen=True)
class Snapshot:
    face: Instances = ()
    pose: Instances = ()
    hands: Instances = ()

    @property
    def primary_face(self) -> Optional[LandmarkSeq]:
        return self.face[0] if self.face else None

    @property
    def primary_pose(self) -> Optional[LandmarkSeq]:
        return self.pose[0] if self.pose else None


class SnapshotStore:
    """
    Latest landmark result per provider.

    Providers publish whole results; readers get an immutable Snapshot that is
    swapped under a lock, never mutated in place.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot = Snapshot()

    def publish(self, provider: str, instances: Iterable[Sequence[Landmark]]):
        if provider not in PROVIDER_NAMES:
            raise ValueError(f"Unknown provider '{provider}'. Expected one of: {', '.join(PROVIDER_NAMES)}")
        frozen: Instances = tuple(tuple(inst) for inst in instances)
        with self._lock:
            self._snapshot = replace(self._snapshot, **{provider: frozen})

    def read(self) -> Snapshot:
        with self._lock:
            return self._snapshot
