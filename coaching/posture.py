from dataclasses import dataclass
from typing import Optional, Sequence

from landmark_core.config import AppConfig
from landmark_core.snapshot_store import Landmark, landmark_at

LEFT_SHOULDER = 11
RIGHT_SHOULDER = 12


@dataclass
class PostureSignal:
    shoulder_diff: Optional[float]


class PostureExtractor:
    """Shoulder tilt, recomputed every frame with no memory."""

    def __init__(self, config: AppConfig):
        self.config = config

    def update(self, pose: Optional[Sequence[Landmark]]) -> PostureSignal:
        left = landmark_at(pose, LEFT_SHOULDER)
        right = landmark_at(pose, RIGHT_SHOULDER)
        if left is None or right is None:
            return PostureSignal(shoulder_diff=None)
        return PostureSignal(shoulder_diff=float(abs(left.y - right.y)))
