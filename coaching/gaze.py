from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from landmark_core.config import AppConfig
from landmark_core.snapshot_store import Landmark, landmark_at

NOSE_TIP = 1


@dataclass
class GazeSignal:
    iris_pos: Optional[float]
    nose_x: Optional[float]


class GazeExtractor:
    """
    Horizontal gaze and head position from the face mesh.

    iris_pos is the iris location inside the eye span averaged over both eyes:
    0 at the inner corner, 1 at the outer corner. Needs refined (iris) landmarks.
    """

    def __init__(self, config: AppConfig):
        self.config = config

    @staticmethod
    def _eye_indices(left: bool = True) -> Dict[str, int]:
        if left:
            return {"inner": 133, "outer": 33, "iris": 468}
        else:
            return {"inner": 362, "outer": 263, "iris": 473}

    def update(self, face: Optional[Sequence[Landmark]]) -> GazeSignal:
        if not face:
            return GazeSignal(iris_pos=None, nose_x=None)

        nose = landmark_at(face, NOSE_TIP)
        nose_x = float(nose.x) if nose is not None else None

        left = self._iris_position(face, left=True)
        right = self._iris_position(face, left=False)
        iris_pos = None
        if left is not None and right is not None:
            iris_pos = (left + right) / 2.0

        return GazeSignal(iris_pos=iris_pos, nose_x=nose_x)

    def _iris_position(self, face: Sequence[Landmark], left: bool) -> Optional[float]:
        idx = self._eye_indices(left)
        inner = landmark_at(face, idx["inner"])
        outer = landmark_at(face, idx["outer"])
        iris = landmark_at(face, idx["iris"])
        if inner is None or outer is None or iris is None:
            return None

        eye_width = outer.x - inner.x
        if abs(eye_width) < 1e-6:
            return None
        return float((iris.x - inner.x) / eye_width)
