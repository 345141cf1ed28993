from __future__ import annotations

from coaching import classifier as msgs
from coaching.engine import CoachingEngine
from landmark_core.snapshot_store import Snapshot


def test_neutral_snapshot_shows_nothing(config, make_face, make_pose, make_hand) -> None:
    engine = CoachingEngine(config)
    snap = Snapshot(face=(make_face(),), pose=(make_pose(),), hands=(make_hand(),))

    result = engine.tick(snap, now_ms=0.0)

    assert result.messages == []
    assert result.emitted == []
    assert result.snapshot is snap
    assert result.held is False


def test_empty_snapshot_is_not_an_error(config) -> None:
    result = CoachingEngine(config).tick(Snapshot(), now_ms=0.0)

    assert result.messages == []
    assert result.signals.gaze.iris_pos is None
    assert result.signals.posture.shoulder_diff is None
    assert result.signals.hand_motion.movement_energy is None


def test_messages_persist_for_ttl_after_condition_ends(config, make_face, make_pose) -> None:
    engine = CoachingEngine(config)
    leaning = Snapshot(face=(make_face(),), pose=(make_pose(0.40, 0.55),))
    upright = Snapshot(face=(make_face(),), pose=(make_pose(0.40, 0.45),))

    assert engine.tick(leaning, 0.0).messages == [msgs.LEANING]
    later = engine.tick(upright, 2500.0)
    assert later.emitted == []
    assert later.messages == [msgs.LEANING]
    assert engine.tick(upright, 3001.0).messages == []


def test_nose_scenario_is_independent_of_other_signals(config, make_face, make_pose, make_hand) -> None:
    engine = CoachingEngine(config)
    face = make_face(p1=(0.2, 0.5), p468=(0.36, 0.4), p473=(0.64, 0.4))
    snap = Snapshot(face=(face,), pose=(make_pose(0.4, 0.6),), hands=(make_hand(),))

    result = engine.tick(snap, 0.0)

    assert msgs.MOVE_RIGHT in result.emitted
    assert msgs.LOOKING_RIGHT in result.emitted
    assert msgs.LEANING in result.emitted


def test_stale_snapshot_reuse_gives_zero_hand_motion(config, make_hand) -> None:
    engine = CoachingEngine(config)
    snap = Snapshot(hands=(make_hand(),))
    engine.tick(snap, 0.0)

    result = engine.tick(snap, 16.0)

    assert result.signals.hand_motion.movement_energy == 0.0
    assert msgs.HAND_MOVEMENT not in result.emitted


def test_hand_movement_message(config, make_hand) -> None:
    engine = CoachingEngine(config)
    engine.tick(Snapshot(hands=(make_hand(),)), 0.0)

    result = engine.tick(Snapshot(hands=(make_hand(offset=(0.05, 0.05)),)), 16.0)

    assert result.messages == [msgs.HAND_MOVEMENT]


def test_sustained_yawning_triggers_after_three_yawns(config, make_face) -> None:
    engine = CoachingEngine(config)
    open_mouth = Snapshot(face=(make_face(p13=(0.5, 0.7), p14=(0.5, 0.8)),))
    closed = Snapshot(face=(make_face(),))
    now = 0.0
    for _ in range(3):
        engine.tick(open_mouth, now)
        engine.tick(closed, now + 100.0)
        now += 1000.0

    assert msgs.YAWNING in engine.tick(closed, now).messages


def test_hold_repeats_previous_visible_set(config, make_pose) -> None:
    engine = CoachingEngine(config)
    engine.tick(Snapshot(pose=(make_pose(0.4, 0.6),)), 0.0)

    held = engine.hold(10000.0)

    assert held.held is True
    assert held.messages == [msgs.LEANING]
    assert held.emitted == []
    assert engine.decay.expiry(msgs.LEANING) == 3000.0


def test_hold_before_first_tick(config) -> None:
    held = CoachingEngine(config).hold(0.0)

    assert held.messages == []
    assert held.held is True
