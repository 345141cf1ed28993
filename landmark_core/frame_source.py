from typing import Optional

import cv2
import numpy as np

from .config import AppConfig


class FrameSourceError(RuntimeError):
    """Raised when the camera cannot be opened."""


class Camera:

    def __init__(self, config: AppConfig):
        self.config = config
        self.cap = None

    def open(self):
        cap = cv2.VideoCapture(self.config.camera_index)
        if not cap.isOpened():
            cap.release()
            raise FrameSourceError(f"Could not open camera index {self.config.camera_index}")
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.frame_width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.frame_height)
        self.cap = cap

    def read(self) -> Optional[np.ndarray]:
        if self.cap is None:
            return None
        ok, frame = self.cap.read()
        if not ok:
            return None
        return frame

    def release(self):
        if self.cap is not None:
            self.cap.release()
            self.cap = None
