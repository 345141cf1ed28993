from __future__ import annotations

import pytest

from coaching.hand_motion import HandMotionExtractor


def test_first_frame_with_hands_has_no_energy(config, make_hand) -> None:
    signal = HandMotionExtractor(config).update([make_hand()])

    assert signal.hands_count == 1
    assert signal.movement_energy is None


def test_identical_snapshots_have_zero_energy(config, make_hand) -> None:
    extractor = HandMotionExtractor(config)
    extractor.update([make_hand()])

    assert extractor.update([make_hand()]).movement_energy == pytest.approx(0.0)


def test_single_landmark_displacement(config, make_hand) -> None:
    extractor = HandMotionExtractor(config)
    hand = make_hand()
    extractor.update([hand])
    moved = make_hand(p8=(hand[8].x + 0.03, hand[8].y - 0.04))

    signal = extractor.update([moved])

    assert signal.movement_energy == pytest.approx(0.03 ** 2 + 0.04 ** 2)


def test_whole_hand_shift_sums_over_landmarks(config, make_hand) -> None:
    extractor = HandMotionExtractor(config)
    extractor.update([make_hand()])

    signal = extractor.update([make_hand(offset=(0.01, 0.0))])

    assert signal.movement_energy == pytest.approx(21 * 0.01 ** 2)


def test_new_hand_without_counterpart_adds_nothing(config, make_hand) -> None:
    extractor = HandMotionExtractor(config)
    extractor.update([make_hand()])

    signal = extractor.update([make_hand(), make_hand(offset=(0.2, -0.3))])

    assert signal.hands_count == 2
    assert signal.movement_energy == pytest.approx(0.0)


def test_frames_without_hands_keep_last_positions(config, make_hand) -> None:
    extractor = HandMotionExtractor(config)
    extractor.update([make_hand()])

    empty = extractor.update([])
    signal = extractor.update([make_hand(offset=(0.0, 0.02))])

    assert empty.hands_count == 0
    assert empty.movement_energy is None
    assert signal.movement_energy == pytest.approx(21 * 0.02 ** 2)


def test_last_positions_update_whether_or_not_threshold_fires(config, make_hand) -> None:
    extractor = HandMotionExtractor(config)
    extractor.update([make_hand()])
    big = extractor.update([make_hand(offset=(0.1, 0.1))])
    still = extractor.update([make_hand(offset=(0.1, 0.1))])

    assert big.movement_energy > config.hand_motion_threshold
    assert still.movement_energy == pytest.approx(0.0)
