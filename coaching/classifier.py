from dataclasses import dataclass
from typing import List

from landmark_core.config import AppConfig
from .blink_yawn import BlinkYawnSignal
from .gaze import GazeSignal
from .hand_motion import HandMotionSignal
from .posture import PostureSignal

LOOKING_LEFT = "Looking left or off-screen"
LOOKING_RIGHT = "Looking right or off-screen"
MOVE_RIGHT = "Move slightly to your right."
MOVE_LEFT = "Move slightly to your left."
HIGH_BLINK_RATE = "High blink rate detected – possible nervousness"
YAWNING = "Yawning detected – possible drowsiness or low energy"
LEANING = "Sit straight, you're leaning."
HAND_MOVEMENT = "Avoid moving hands too much."

MESSAGE_CATALOG = (
    MOVE_RIGHT,
    MOVE_LEFT,
    LOOKING_LEFT,
    LOOKING_RIGHT,
    LEANING,
    HAND_MOVEMENT,
    HIGH_BLINK_RATE,
    YAWNING,
)


@dataclass
class FrameSignals:
    gaze: GazeSignal
    blink_yawn: BlinkYawnSignal
    posture: PostureSignal
    hand_motion: HandMotionSignal


class FeedbackClassifier:
    """
    Rule table from signals to coaching messages:
    - Head position (nose tip x against frame bounds)
    - Gaze (average iris position inside the eye span)
    - Shoulder tilt
    - Hand movement energy
    - Windowed blink count and session yawn count

    Each rule owns its own messages, so the output never repeats a string.
    """

    def __init__(self, config: AppConfig):
        self.config = config

    def classify(self, signals: FrameSignals) -> List[str]:
        messages: List[str] = []
        cfg = self.config

        nose_x = signals.gaze.nose_x
        if nose_x is not None:
            if nose_x < cfg.head_left_bound:
                messages.append(MOVE_RIGHT)
            elif nose_x > cfg.head_right_bound:
                messages.append(MOVE_LEFT)

        iris_pos = signals.gaze.iris_pos
        if iris_pos is not None:
            if iris_pos < cfg.gaze_left_threshold:
                messages.append(LOOKING_LEFT)
            elif iris_pos > cfg.gaze_right_threshold:
                messages.append(LOOKING_RIGHT)

        shoulder_diff = signals.posture.shoulder_diff
        if shoulder_diff is not None and shoulder_diff > cfg.shoulder_tilt_threshold:
            messages.append(LEANING)

        energy = signals.hand_motion.movement_energy
        if energy is not None and energy > cfg.hand_motion_threshold:
            messages.append(HAND_MOVEMENT)

        blink_yawn = signals.blink_yawn
        if blink_yawn.face_detected:
            if blink_yawn.blink_count > cfg.blink_rate_threshold:
                messages.append(HIGH_BLINK_RATE)
            if blink_yawn.yawn_count > cfg.yawn_count_threshold:
                messages.append(YAWNING)

        return messages
