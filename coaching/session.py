import threading
import time
from functools import partial
from typing import Callable, Dict, Optional, Tuple

import cv2
import numpy as np

from landmark_core.config import AppConfig
from landmark_core.frame_source import Camera
from landmark_core.providers import (
    FaceMeshProvider,
    HandsProvider,
    LandmarkProvider,
    PoseProvider,
    ProviderError,
)
from landmark_core.snapshot_store import SnapshotStore
from .engine import CoachingEngine, FrameResult
from .logging_utils import EventLogger

DisplayCallback = Callable[[np.ndarray, FrameResult], Optional[bool]]


def build_providers() -> Dict[str, LandmarkProvider]:
    return {
        "face": FaceMeshProvider(),
        "pose": PoseProvider(),
        "hands": HandsProvider(),
    }


class InterviewSession:
    """
    Owns the camera, the three landmark providers and the coaching engine.

    run() ticks until stop(), camera loss, or the display callback returning
    False. stop() may be called from another thread; it waits for the current
    tick to finish before releasing the camera and providers.
    """

    def __init__(
        self,
        config: AppConfig,
        frame_source=None,
        providers: Optional[Dict[str, LandmarkProvider]] = None,
        logger: Optional[EventLogger] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self.frame_source = frame_source if frame_source is not None else Camera(config)
        self.providers = providers if providers is not None else build_providers()
        self.logger = logger if logger is not None else EventLogger(config)
        self.clock = clock

        self.store = SnapshotStore()
        self.engine = CoachingEngine(config)

        self._stop_event = threading.Event()
        self._tick_lock = threading.Lock()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def _provider_options(self, name: str) -> dict:
        options = {
            "face": self.config.face_mesh_options,
            "pose": self.config.pose_options,
            "hands": self.config.hands_options,
        }
        return options.get(name, {})

    def start(self):
        if self._running:
            return

        self._stop_event.clear()
        try:
            self.frame_source.open()
            for name, provider in self.providers.items():
                provider.on_result(partial(self.store.publish, name))
                provider.configure(self._provider_options(name))
        except Exception:
            self._release()
            raise

        self._running = True
        self.logger.log_event("SESSION_START", f"camera_{self.config.camera_index}", {"providers": list(self.providers)})
        print(f"[Session] started with providers: {', '.join(self.providers)}")

    def tick(self) -> Optional[Tuple[np.ndarray, FrameResult]]:
        frame = self.frame_source.read()
        if frame is None:
            return None

        now_ms = self.clock() * 1000.0
        frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

        try:
            for provider in self.providers.values():
                provider.submit(frame_rgb)
        except ProviderError as exc:
            self.logger.log_event("PROVIDER_ERROR", str(exc))
            result = self.engine.hold(now_ms)
        else:
            result = self.engine.tick(self.store.read(), now_ms)

        self.logger.log_frame(result)
        self.logger.log_message_changes(result.messages)
        return frame, result

    def run(self, display: Optional[DisplayCallback] = None):
        if self._stop_event.is_set():
            return
        if not self._running:
            self.start()

        try:
            while not self._stop_event.is_set():
                with self._tick_lock:
                    if self._stop_event.is_set():
                        break
                    out = self.tick()

                if out is None:
                    self.logger.log_event("CAMERA_LOST")
                    break

                if display is not None and display(*out) is False:
                    break
        finally:
            self.stop()

    def stop(self):
        self._stop_event.set()
        with self._tick_lock:
            if self._running:
                self.logger.log_event("SESSION_STOP")
                print("[Session] stopped")
            self._release()

    def _release(self):
        self.frame_source.release()
        for provider in self.providers.values():
            provider.close()
        self._running = False
