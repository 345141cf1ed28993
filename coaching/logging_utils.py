import csv
import os
import time
import json
from typing import Iterable

from landmark_core.config import AppConfig
from .engine import FrameResult

FRAME_COLUMNS = [
    "timestamp",
    "tick_ms",
    "face_detected",
    "pose_detected",
    "hands_count",
    "iris_pos",
    "nose_x",
    "eye_aperture",
    "mouth_open",
    "blink_count",
    "yawn_count",
    "shoulder_diff",
    "movement_energy",
    "held",
    "emitted",
    "visible",
]


class EventLogger:
    def __init__(self, config: AppConfig):
        self.config = config
        self.enabled = config.enable_logging
        ts = time.strftime("%Y%m%d_%H%M%S")
        self.frame_log_path = os.path.join(config.log_dir, f"frames_{ts}.csv")
        self.event_log_path = os.path.join(config.log_dir, f"events_{ts}.csv")
        self._visible = set()

        if not self.enabled:
            return

        os.makedirs(config.log_dir, exist_ok=True)

        if config.log_frame_level:
            with open(self.frame_log_path, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(FRAME_COLUMNS)

        if config.log_event_level:
            with open(self.event_log_path, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(["timestamp", "event_type", "details", "details_json"])

    def log_frame(self, result: FrameResult):
        if not (self.enabled and self.config.log_frame_level):
            return

        sig = result.signals
        snap = result.snapshot
        t = time.time()
        with open(self.frame_log_path, "a", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(
                [
                    t,
                    result.timestamp_ms,
                    bool(snap.face),
                    bool(snap.pose),
                    len(snap.hands),
                    sig.gaze.iris_pos if sig else None,
                    sig.gaze.nose_x if sig else None,
                    sig.blink_yawn.eye_aperture if sig else None,
                    sig.blink_yawn.mouth_open if sig else None,
                    sig.blink_yawn.blink_count if sig else None,
                    sig.blink_yawn.yawn_count if sig else None,
                    sig.posture.shoulder_diff if sig else None,
                    sig.hand_motion.movement_energy if sig else None,
                    result.held,
                    "|".join(result.emitted),
                    "|".join(result.messages),
                ]
            )

    def log_message_changes(self, messages: Iterable[str]):
        current = set(messages)
        for msg in sorted(current - self._visible):
            self.log_event("MESSAGE_SHOWN", msg)
        for msg in sorted(self._visible - current):
            self.log_event("MESSAGE_CLEARED", msg)
        self._visible = current

    def log_event(self, event_type: str, details: str = "", details_obj=None):
        if not (self.enabled and self.config.log_event_level):
            return

        t = time.time()
        details_json = json.dumps(details_obj) if details_obj is not None else ""
        with open(self.event_log_path, "a", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow([t, event_type, details, details_json])
