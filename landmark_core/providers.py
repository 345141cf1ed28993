from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

import numpy as np

from .snapshot_store import Instances, to_landmarks

ResultCallback = Callable[[Instances], None]


class ProviderError(RuntimeError):
    """Raised when a landmark provider cannot be configured or rejects a frame."""


def _import_mediapipe() -> Any:
    try:
        import mediapipe as mp  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "mediapipe is required for live landmark detection. Install with: pip install mediapipe"
        ) from exc
    return mp


class LandmarkProvider(ABC):
    """Boundary to an external landmark model: configure, subscribe, submit frames."""

    name = ""

    def __init__(self):
        self.options: Dict[str, Any] = {}
        self._callback: Optional[ResultCallback] = None

    def configure(self, options: Optional[Dict[str, Any]] = None):
        self.options = dict(options or {})
        self._build()

    def on_result(self, callback: ResultCallback):
        self._callback = callback

    def submit(self, frame_rgb: np.ndarray) -> Instances:
        try:
            instances = self._process(frame_rgb)
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError(f"{self.name} inference failed: {exc}") from exc

        if self._callback is not None:
            self._callback(instances)
        return instances

    def close(self):
        pass

    def _build(self):
        pass

    @abstractmethod
    def _process(self, frame_rgb: np.ndarray) -> Instances:
        """Run the model on one RGB frame and return the detected instances."""


class _MediaPipeProvider(LandmarkProvider):

    def __init__(self):
        super().__init__()
        self._solution = None

    def _build(self):
        self.close()
        try:
            mp = _import_mediapipe()
        except ImportError as exc:
            raise ProviderError(str(exc)) from exc
        try:
            self._solution = self._create(mp, self.options)
        except Exception as exc:
            raise ProviderError(f"could not initialise {self.name} model: {exc}") from exc

    def close(self):
        if self._solution is not None:
            self._solution.close()
            self._solution = None

    def _process(self, frame_rgb: np.ndarray) -> Instances:
        if self._solution is None:
            raise ProviderError(f"{self.name} provider used before configure()")
        results = self._solution.process(frame_rgb)
        return self._extract(results)

    @abstractmethod
    def _create(self, mp: Any, options: Dict[str, Any]) -> Any:
        ...

    @abstractmethod
    def _extract(self, results: Any) -> Instances:
        ...


class FaceMeshProvider(_MediaPipeProvider):
    name = "face"

    def _create(self, mp, options):
        return mp.solutions.face_mesh.FaceMesh(**options)

    def _extract(self, results):
        if not results.multi_face_landmarks:
            return ()
        return tuple(to_landmarks(face.landmark) for face in results.multi_face_landmarks)


class PoseProvider(_MediaPipeProvider):
    name = "pose"

    def _create(self, mp, options):
        return mp.solutions.pose.Pose(static_image_mode=False, **options)

    def _extract(self, results):
        if not results.pose_landmarks:
            return ()
        return (to_landmarks(results.pose_landmarks.landmark),)


class HandsProvider(_MediaPipeProvider):
    name = "hands"

    def _create(self, mp, options):
        return mp.solutions.hands.Hands(static_image_mode=False, **options)

    def _extract(self, results):
        if not results.multi_hand_landmarks:
            return ()
        return tuple(to_landmarks(hand.landmark) for hand in results.multi_hand_landmarks)
