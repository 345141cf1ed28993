from .blink_yawn import BlinkYawnExtractor, BlinkYawnSignal
from .classifier import MESSAGE_CATALOG, FeedbackClassifier, FrameSignals
from .decay_store import MessageDecayStore
from .engine import CoachingEngine, FrameResult
from .feedback import FeedbackManager
from .gaze import GazeExtractor, GazeSignal
from .hand_motion import HandMotionExtractor, HandMotionSignal
from .logging_utils import EventLogger
from .posture import PostureExtractor, PostureSignal
from .session import InterviewSession

__all__ = [
    "BlinkYawnExtractor",
    "BlinkYawnSignal",
    "MESSAGE_CATALOG",
    "FeedbackClassifier",
    "FrameSignals",
    "MessageDecayStore",
    "CoachingEngine",
    "FrameResult",
    "FeedbackManager",
    "GazeExtractor",
    "GazeSignal",
    "HandMotionExtractor",
    "HandMotionSignal",
    "EventLogger",
    "PostureExtractor",
    "PostureSignal",
    "InterviewSession",
]
