from __future__ import annotations

import pytest

from coaching.posture import PostureExtractor
from conftest import build_landmarks


def test_shoulder_difference(config, make_pose) -> None:
    signal = PostureExtractor(config).update(make_pose(0.40, 0.55))

    assert signal.shoulder_diff == pytest.approx(0.15)


def test_difference_is_absolute(config, make_pose) -> None:
    signal = PostureExtractor(config).update(make_pose(0.55, 0.40))

    assert signal.shoulder_diff == pytest.approx(0.15)


def test_missing_pose_or_shoulders_gives_no_opinion(config) -> None:
    extractor = PostureExtractor(config)

    assert extractor.update(None).shoulder_diff is None
    assert extractor.update(()).shoulder_diff is None
    assert extractor.update(build_landmarks(12)).shoulder_diff is None
