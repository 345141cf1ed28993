import time
import threading
import queue
from typing import List, Optional, Sequence

import cv2
import numpy as np
import pyttsx3

from landmark_core.config import AppConfig
from landmark_core.snapshot_store import Landmark, Snapshot, landmark_at

FACE_BGR = (0, 255, 0)
POSE_BGR = (0, 0, 255)
HAND_BGR = (0, 255, 255)

POSE_CONNECTIONS = (
    (11, 13), (13, 15), (12, 14), (14, 16), (11, 12), (23, 24),
    (11, 23), (12, 24), (23, 25), (25, 27), (24, 26), (26, 28),
)

HAND_CONNECTIONS = (
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (5, 9), (9, 10), (10, 11), (11, 12),
    (9, 13), (13, 14), (14, 15), (15, 16),
    (13, 17), (17, 18), (18, 19), (19, 20),
    (0, 17),
)


class CueSpeaker:
    """
    Speaks coaching cues on a background thread.

    Cues queued while an earlier one is still being spoken replace each other,
    so only the newest unspoken cue is read out.
    """

    def __init__(self, rate: int, volume: float):
        self.rate = rate
        self.volume = volume
        self._cues: "queue.Queue[Optional[List[str]]]" = queue.Queue()
        self._thread = threading.Thread(target=self._loop, name="cue-speaker", daemon=True)
        self._thread.start()

    def say_cues(self, messages: Sequence[str]):
        cue = list(messages)
        if not cue:
            return
        while True:
            try:
                self._cues.get_nowait()
            except queue.Empty:
                break
        self._cues.put(cue)

    def close(self):
        self._cues.put(None)
        self._thread.join(timeout=2.0)

    def _loop(self):
        engine = None
        while True:
            cue = self._cues.get()
            if cue is None:
                break
            try:
                if engine is None:
                    engine = pyttsx3.init()
                    engine.setProperty("rate", self.rate)
                    engine.setProperty("volume", self.volume)
                engine.say(". ".join(cue))
                engine.runAndWait()
            except (RuntimeError, OSError) as exc:
                print(f"[TTS] could not speak {cue}: {exc}")
                engine = None
        if engine is not None:
            engine.stop()



class FeedbackManager:
    """Draws the landmark overlay and message box, and speaks newly shown messages."""

    def __init__(self, config: AppConfig):
        self.config = config
        self._prev_visible: List[str] = []
        self._last_spoken_time = 0.0

        self.tts = None
        if self.config.enable_tts:
            self.tts = CueSpeaker(rate=self.config.tts_rate, volume=self.config.tts_volume)

    def close(self):
        if self.tts is not None:
            self.tts.close()

    @staticmethod
    def _draw_transparent_box(img, x1, y1, x2, y2, bgr, alpha=0.55):
        overlay = img.copy()
        cv2.rectangle(overlay, (x1, y1), (x2, y2), bgr, thickness=-1)
        cv2.addWeighted(overlay, alpha, img, 1 - alpha, 0, img)

    @staticmethod
    def _put_text_outline(img, text, org, font, scale, color, thickness=2, outline=4):
        x, y = org
        cv2.putText(img, text, (x, y), font, scale, (0, 0, 0), outline, cv2.LINE_AA)
        cv2.putText(img, text, (x, y), font, scale, color, thickness, cv2.LINE_AA)

    @staticmethod
    def _to_px(lm: Landmark, w: int, h: int):
        return int(lm.x * w), int(lm.y * h)

    def _draw_skeleton(self, frame, landmarks: Sequence[Landmark], connections, color, radius):
        h, w = frame.shape[:2]
        for lm in landmarks:
            cv2.circle(frame, self._to_px(lm, w, h), radius, color, thickness=-1)
        for i, j in connections:
            a = landmark_at(landmarks, i)
            b = landmark_at(landmarks, j)
            if a is not None and b is not None:
                cv2.line(frame, self._to_px(a, w, h), self._to_px(b, w, h), color, 2, cv2.LINE_AA)

    def draw_landmarks(self, frame: np.ndarray, snapshot: Snapshot) -> np.ndarray:
        if not self.config.enable_overlay:
            return frame

        h, w = frame.shape[:2]
        face = snapshot.primary_face
        if face:
            for lm in face:
                cv2.circle(frame, self._to_px(lm, w, h), 2, FACE_BGR, thickness=-1)

        pose = snapshot.primary_pose
        if pose:
            self._draw_skeleton(frame, pose, POSE_CONNECTIONS, POSE_BGR, radius=4)

        for hand in snapshot.hands:
            self._draw_skeleton(frame, hand, HAND_CONNECTIONS, HAND_BGR, radius=3)

        return frame

    def draw_hud(self, frame: np.ndarray, messages: Sequence[str]) -> np.ndarray:
        if not messages:
            return frame

        h, w = frame.shape[:2]
        font = cv2.FONT_HERSHEY_SIMPLEX
        scale = 0.6
        thickness = 1
        pad = 12
        line_gap = 8

        sizes = [cv2.getTextSize(msg, font, scale, thickness)[0] for msg in messages]
        line_h = max(th for _, th in sizes)
        box_w = min(w - 20, max(tw for tw, _ in sizes) + 2 * pad)
        box_h = len(messages) * line_h + (len(messages) - 1) * line_gap + 2 * pad

        x1 = max(0, (w - box_w) // 2)
        x2 = x1 + box_w
        y2 = h - 10
        y1 = max(0, y2 - box_h)

        self._draw_transparent_box(frame, x1, y1, x2, y2, (0, 0, 0), alpha=0.70)

        y = y1 + pad + line_h
        for msg, (tw, _) in zip(messages, sizes):
            tx = x1 + max(pad, (box_w - tw) // 2)
            self._put_text_outline(frame, msg, (tx, y), font, scale, (255, 255, 255), thickness=thickness, outline=3)
            y += line_h + line_gap

        return frame

    def maybe_alert(self, messages: Sequence[str], now: Optional[float] = None):
        """Report messages that just became visible; speak them when TTS is on and cooled down."""
        now = time.time() if now is None else now
        new_msgs = [m for m in messages if m not in self._prev_visible]
        self._prev_visible = list(messages)

        if not new_msgs:
            return None

        cooled_down = (now - self._last_spoken_time) >= self.config.alert_cooldown_seconds
        spoken = False
        if self.tts is not None and cooled_down:
            self.tts.say_cues(new_msgs)
            self._last_spoken_time = now
            spoken = True

        return {"event": "ALERT_FIRED", "messages": new_msgs, "spoken": spoken}
