from dataclasses import dataclass, field
from typing import List, Optional

from landmark_core.config import AppConfig
from landmark_core.snapshot_store import Snapshot
from .blink_yawn import BlinkYawnExtractor
from .classifier import FeedbackClassifier, FrameSignals
from .decay_store import MessageDecayStore
from .gaze import GazeExtractor
from .hand_motion import HandMotionExtractor
from .posture import PostureExtractor


@dataclass
class FrameResult:
    timestamp_ms: float
    messages: List[str]
    emitted: List[str] = field(default_factory=list)
    signals: Optional[FrameSignals] = None
    snapshot: Snapshot = field(default_factory=Snapshot)
    held: bool = False


class CoachingEngine:
    """One tick: snapshot -> extractors -> classifier -> decay store."""

    def __init__(self, config: AppConfig):
        self.config = config
        self.gaze = GazeExtractor(config)
        self.blink_yawn = BlinkYawnExtractor(config)
        self.posture = PostureExtractor(config)
        self.hand_motion = HandMotionExtractor(config)
        self.classifier = FeedbackClassifier(config)
        self.decay = MessageDecayStore(config.message_ttl_ms)
        self.last_result: Optional[FrameResult] = None

    def tick(self, snapshot: Snapshot, now_ms: float) -> FrameResult:
        face = snapshot.primary_face
        signals = FrameSignals(
            gaze=self.gaze.update(face),
            blink_yawn=self.blink_yawn.update(face, now_ms),
            posture=self.posture.update(snapshot.primary_pose),
            hand_motion=self.hand_motion.update(snapshot.hands),
        )
        emitted = self.classifier.classify(signals)
        visible = self.decay.advance(emitted, now_ms)

        self.last_result = FrameResult(
            timestamp_ms=now_ms,
            messages=visible,
            emitted=emitted,
            signals=signals,
            snapshot=snapshot,
        )
        return self.last_result

    def hold(self, now_ms: float) -> FrameResult:
        """
        Repeat the previous visible set without running extraction or decay.

        Entries stay visible past their expiry for as long as ticks are held.
        """
        prev = self.last_result
        if prev is None:
            return FrameResult(timestamp_ms=now_ms, messages=[], held=True)
        return FrameResult(
            timestamp_ms=now_ms,
            messages=list(prev.messages),
            emitted=[],
            signals=prev.signals,
            snapshot=prev.snapshot,
            held=True,
        )
