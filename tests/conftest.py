from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from landmark_core.config import AppConfig, load_config
from landmark_core.snapshot_store import Landmark

FACE_POINT_COUNT = 478
POSE_POINT_COUNT = 33
HAND_POINT_COUNT = 21

# Neutral face: centered nose and irises, open eyes, closed mouth.
NEUTRAL_FACE_POINTS: dict[int, tuple[float, float]] = {
    1: (0.5, 0.5),
    133: (0.45, 0.4),
    33: (0.35, 0.4),
    468: (0.40, 0.4),
    362: (0.55, 0.4),
    263: (0.65, 0.4),
    473: (0.60, 0.4),
    159: (0.40, 0.2),
    145: (0.40, 0.5),
    386: (0.60, 0.2),
    374: (0.60, 0.5),
    13: (0.5, 0.70),
    14: (0.5, 0.72),
}


def build_landmarks(
    count: int,
    points: dict[int, tuple[float, float]] | None = None,
    default: tuple[float, float] = (0.5, 0.5),
) -> tuple[Landmark, ...]:
    out = [Landmark(default[0], default[1]) for _ in range(count)]
    for idx, (x, y) in (points or {}).items():
        if idx < count:
            out[idx] = Landmark(x, y)
    return tuple(out)


def write_config(tmp_path: Path, **overrides: Any) -> Path:
    raw: dict[str, Any] = {"log_dir": str(tmp_path / "logs"), "enable_logging": False}
    raw.update(overrides)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(raw), encoding="utf-8")
    return path


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return load_config(str(write_config(tmp_path)))


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., AppConfig]:
    def _make(**overrides: Any) -> AppConfig:
        return load_config(str(write_config(tmp_path, **overrides)))

    return _make


@pytest.fixture
def make_face() -> Callable[..., tuple[Landmark, ...]]:
    def _make(count: int = FACE_POINT_COUNT, **points: tuple[float, float]) -> tuple[Landmark, ...]:
        merged = dict(NEUTRAL_FACE_POINTS)
        merged.update({int(k.lstrip("p")): v for k, v in points.items()})
        return build_landmarks(count, merged)

    return _make


@pytest.fixture
def make_pose() -> Callable[..., tuple[Landmark, ...]]:
    def _make(left_shoulder_y: float = 0.4, right_shoulder_y: float = 0.4) -> tuple[Landmark, ...]:
        return build_landmarks(
            POSE_POINT_COUNT,
            {11: (0.6, left_shoulder_y), 12: (0.4, right_shoulder_y)},
        )

    return _make


@pytest.fixture
def make_hand() -> Callable[..., tuple[Landmark, ...]]:
    def _make(offset: tuple[float, float] = (0.0, 0.0), **points: tuple[float, float]) -> tuple[Landmark, ...]:
        base = {
            i: (0.3 + 0.01 * i + offset[0], 0.6 + 0.005 * i + offset[1])
            for i in range(HAND_POINT_COUNT)
        }
        base.update({int(k.lstrip("p")): v for k, v in points.items()})
        return build_landmarks(HAND_POINT_COUNT, base)

    return _make
