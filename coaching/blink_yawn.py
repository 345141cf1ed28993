from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Sequence

import numpy as np

from landmark_core.config import AppConfig
from landmark_core.snapshot_store import Landmark, landmark_at

LEFT_EYE_LIDS = (159, 145)
RIGHT_EYE_LIDS = (386, 374)
INNER_LIPS = (13, 14)


@dataclass
class BlinkYawnSignal:
    face_detected: bool
    eye_aperture: Optional[float]
    mouth_open: Optional[float]
    blinked: bool
    blink_count: int
    yawn_count: int


class BlinkYawnExtractor:
    """
    Counts blinks over a sliding window and yawns over the whole session.

    Blinks are debounced: closed-eye frames closer than blink_debounce_ms to the
    last counted blink belong to the same blink. Yawns are edge-triggered on the
    mouth opening so one long yawn counts once.
    """

    def __init__(self, config: AppConfig):
        self.config = config
        self.last_blink_ms: Optional[float] = None
        self.blink_history: Deque[float] = deque()
        self.is_yawning = False
        self.yawn_count = 0

    def update(self, face: Optional[Sequence[Landmark]], now_ms: float) -> BlinkYawnSignal:
        aperture = self._eye_aperture(face) if face else None
        mouth_open = self._mouth_open(face) if face else None

        blinked = False
        if aperture is not None and aperture < self.config.blink_aperture_threshold:
            if self.last_blink_ms is None or now_ms - self.last_blink_ms > self.config.blink_debounce_ms:
                self.last_blink_ms = now_ms
                self.blink_history.append(now_ms)
                blinked = True

        while self.blink_history and now_ms - self.blink_history[0] >= self.config.blink_window_ms:
            self.blink_history.popleft()

        if mouth_open is not None:
            if mouth_open > self.config.yawn_mouth_threshold and not self.is_yawning:
                self.yawn_count += 1
                self.is_yawning = True
            elif mouth_open <= self.config.yawn_mouth_threshold:
                self.is_yawning = False

        return BlinkYawnSignal(
            face_detected=bool(face),
            eye_aperture=aperture,
            mouth_open=mouth_open,
            blinked=blinked,
            blink_count=len(self.blink_history),
            yawn_count=self.yawn_count,
        )

    @staticmethod
    def _eye_aperture(face: Sequence[Landmark]) -> Optional[float]:
        apertures = []
        for upper_idx, lower_idx in (LEFT_EYE_LIDS, RIGHT_EYE_LIDS):
            upper = landmark_at(face, upper_idx)
            lower = landmark_at(face, lower_idx)
            if upper is None or lower is None:
                return None
            apertures.append(abs(upper.y - lower.y))
        return float(np.mean(apertures))

    @staticmethod
    def _mouth_open(face: Sequence[Landmark]) -> Optional[float]:
        top = landmark_at(face, INNER_LIPS[0])
        bottom = landmark_at(face, INNER_LIPS[1])
        if top is None or bottom is None:
            return None
        return float(np.linalg.norm(np.array([top.x - bottom.x, top.y - bottom.y], dtype=np.float64)))
