import os
from dataclasses import dataclass
from typing import Any, Dict

import yaml


@dataclass
class AppConfig:
    camera_index: int
    frame_width: int
    frame_height: int

    face_mesh_options: Dict[str, Any]
    pose_options: Dict[str, Any]
    hands_options: Dict[str, Any]

    gaze_left_threshold: float
    gaze_right_threshold: float
    head_left_bound: float
    head_right_bound: float

    blink_aperture_threshold: float
    blink_debounce_ms: float
    blink_window_ms: float
    blink_rate_threshold: int

    yawn_mouth_threshold: float
    yawn_count_threshold: int

    shoulder_tilt_threshold: float
    hand_motion_threshold: float

    message_ttl_ms: float

    enable_overlay: bool
    enable_tts: bool
    alert_cooldown_seconds: float
    tts_rate: int
    tts_volume: float

    enable_logging: bool
    log_dir: str
    log_frame_level: bool
    log_event_level: bool


DEFAULT_FACE_MESH_OPTIONS: Dict[str, Any] = {
    "max_num_faces": 1,
    "refine_landmarks": True,
    "min_detection_confidence": 0.5,
    "min_tracking_confidence": 0.5,
}

DEFAULT_POSE_OPTIONS: Dict[str, Any] = {
    "model_complexity": 1,
    "smooth_landmarks": True,
    "enable_segmentation": False,
    "min_detection_confidence": 0.5,
    "min_tracking_confidence": 0.5,
}

DEFAULT_HANDS_OPTIONS: Dict[str, Any] = {
    "max_num_hands": 2,
    "model_complexity": 1,
    "min_detection_confidence": 0.5,
    "min_tracking_confidence": 0.5,
}


def _apply_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    out.update(overrides or {})
    return out


def load_config(path: str = "data/configs/default_config.yaml") -> AppConfig:
    with open(path, "r", encoding="utf-8") as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}

    log_dir = raw.get("log_dir", "data/logs")
    enable_logging = raw.get("enable_logging", True)
    if enable_logging:
        os.makedirs(log_dir, exist_ok=True)

    return AppConfig(
        camera_index=raw.get("camera_index", 0),
        frame_width=raw.get("frame_width", 640),
        frame_height=raw.get("frame_height", 480),

        face_mesh_options=_apply_overrides(DEFAULT_FACE_MESH_OPTIONS, raw.get("face_mesh_options")),
        pose_options=_apply_overrides(DEFAULT_POSE_OPTIONS, raw.get("pose_options")),
        hands_options=_apply_overrides(DEFAULT_HANDS_OPTIONS, raw.get("hands_options")),

        gaze_left_threshold=raw.get("gaze_left_threshold", 0.35),
        gaze_right_threshold=raw.get("gaze_right_threshold", 0.65),
        head_left_bound=raw.get("head_left_bound", 0.35),
        head_right_bound=raw.get("head_right_bound", 0.65),

        blink_aperture_threshold=raw.get("blink_aperture_threshold", 0.23),
        blink_debounce_ms=raw.get("blink_debounce_ms", 300.0),
        blink_window_ms=raw.get("blink_window_ms", 60000.0),
        blink_rate_threshold=raw.get("blink_rate_threshold", 20),

        yawn_mouth_threshold=raw.get("yawn_mouth_threshold", 0.05),
        yawn_count_threshold=raw.get("yawn_count_threshold", 2),

        shoulder_tilt_threshold=raw.get("shoulder_tilt_threshold", 0.1),
        hand_motion_threshold=raw.get("hand_motion_threshold", 0.02),

        message_ttl_ms=raw.get("message_ttl_ms", 3000.0),

        enable_overlay=raw.get("enable_overlay", True),
        enable_tts=raw.get("enable_tts", False),
        alert_cooldown_seconds=raw.get("alert_cooldown_seconds", 10.0),
        tts_rate=raw.get("tts_rate", 180),
        tts_volume=raw.get("tts_volume", 0.9),

        enable_logging=enable_logging,
        log_dir=log_dir,
        log_frame_level=raw.get("log_frame_level", True),
        log_event_level=raw.get("log_event_level", True),
    )
