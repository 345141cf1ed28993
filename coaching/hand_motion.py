from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from landmark_core.config import AppConfig
from landmark_core.snapshot_store import Landmark


@dataclass
class HandMotionSignal:
    hands_count: int
    movement_energy: Optional[float]


def _as_xy(hand: Sequence[Landmark]) -> np.ndarray:
    return np.array([[lm.x, lm.y] for lm in hand], dtype=np.float64).reshape(-1, 2)


class HandMotionExtractor:
    """
    Frame-to-frame hand movement energy.

    Sum of squared xy displacements, hand by hand and landmark by landmark.
    Hands or landmarks without a counterpart in the previous frame add nothing.
    """

    def __init__(self, config: AppConfig):
        self.config = config
        self.last_hand_positions: Optional[list] = None

    def update(self, hands: Sequence[Sequence[Landmark]]) -> HandMotionSignal:
        if not hands:
            return HandMotionSignal(hands_count=0, movement_energy=None)

        current = [_as_xy(hand) for hand in hands]

        energy = None
        if self.last_hand_positions:
            energy = 0.0
            for cur, prev in zip(current, self.last_hand_positions):
                n = min(len(cur), len(prev))
                diff = cur[:n] - prev[:n]
                energy += float(np.sum(diff * diff))

        self.last_hand_positions = current
        return HandMotionSignal(hands_count=len(current), movement_energy=energy)
