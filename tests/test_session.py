"""Tests for the shot session orchestrator."""

import random
import pytest

from penalty.types import Ball, DifficultyProfile, DiveState, Outcome, ShotParams, Tally
from penalty.session import ShotSession, result_message, simulate_shot
from penalty import pitch


class FakeClock:
    """Manually advanced clock for the result hold."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


STILL_KEEPER = DifficultyProfile(
    key="still", label="Still", patrol_speed=0.0,
    reaction_ms=0, dive_chance=0.0, reach_multiplier=0.5,
)


def _play_out(session, limit=2000):
    """Tick until the current shot produces an outcome."""
    for _ in range(limit):
        outcome = session.tick()
        if outcome is not None:
            return outcome
    raise AssertionError("Shot never finished")


def _session(difficulty="medium", seed=42):
    clock = FakeClock()
    return ShotSession(difficulty, rng=random.Random(seed), clock=clock), clock


def test_new_session_state():
    """A fresh session has a full tally, the ball on the spot and an idle keeper."""
    session, _ = _session()
    assert session.tally == Tally(shots_remaining=pitch.SHOTS_PER_GAME)
    assert session.ball == Ball()
    assert session.keeper.dive is DiveState.IDLE
    assert session.showing_result is False
    assert session.game_over is False
    assert session.can_shoot is True


def test_take_shot_launches_ball():
    """take_shot seeds velocity from aim and power and sets the ball moving."""
    session, _ = _session()
    assert session.take_shot(0, 100, 0) is True
    assert session.ball.moving is True
    assert session.ball.vy == pytest.approx(-pitch.MAX_SHOT_SPEED)


def test_take_shot_while_moving_is_noop():
    """A second kick while the ball is live changes nothing."""
    session, _ = _session()
    session.take_shot(20, 80, 50)
    session.tick()
    before = session.ball.copy()

    assert session.take_shot(-40, 100, -100) is False
    assert session.ball == before


def test_take_shot_inputs_clamped():
    """Out-of-range input is forced into the allowed ranges."""
    session, _ = _session()
    assert session.take_shot(90, 500, -300) is True
    outcome = _play_out(session)
    shot = session.history[-1].shot
    assert shot == ShotParams(aim=45, power=100, curve=-100)
    assert outcome in Outcome


def test_straight_shot_at_centred_keeper_is_saved():
    """Full power straight at a keeper standing in the middle is a save, not a goal."""
    session, _ = _session(STILL_KEEPER)
    session.take_shot(0, 100, 0)
    assert _play_out(session) is Outcome.SAVE


def test_weak_shot_is_friction_miss():
    """Power 30 dies in the field: a miss with the ball still in bounds."""
    session, _ = _session("hard")
    session.take_shot(0, 30, 0)
    assert _play_out(session) is Outcome.MISS

    ball = session.ball
    assert 0 <= ball.x <= pitch.FIELD_WIDTH
    assert 0 <= ball.y <= pitch.FIELD_HEIGHT
    assert ball.speed() < pitch.MIN_VELOCITY


def test_outcome_updates_tally_and_holds():
    """One outcome = one tally entry, one history record, and a result hold."""
    session, _ = _session(STILL_KEEPER)
    session.take_shot(0, 100, 0)
    _play_out(session)

    t = session.tally
    assert t.shots_remaining == pitch.SHOTS_PER_GAME - 1
    assert t.goals + t.saves + t.misses == 1
    assert len(session.history) == 1
    assert session.history[0].number == 1
    assert session.history[0].ticks > 0
    assert session.showing_result is True
    assert session.shot_result is Outcome.SAVE
    assert session.ball.moving is False


def test_no_shot_during_result_hold():
    """take_shot is rejected while a result is on screen."""
    session, _ = _session()
    session.take_shot(0, 30, 0)
    _play_out(session)
    assert session.take_shot(0, 100, 0) is False
    assert session.ball.moving is False


def test_world_frozen_during_hold():
    """While the result is held, neither ball nor keeper moves."""
    session, clock = _session("hard")
    session.take_shot(0, 30, 0)
    _play_out(session)

    ball, keeper = session.ball.copy(), session.keeper.copy()
    for _ in range(30):
        clock.advance(0.01)
        assert session.tick() is None
    assert session.ball == ball
    assert session.keeper == keeper
    assert session.showing_result is True


def test_hold_expires_and_resets():
    """After the display time the ball returns exactly to the spot and the keeper resets."""
    for shot in (ShotParams(0, 30, 0), ShotParams(0, 100, 0), ShotParams(40, 100, 0)):
        session, clock = _session("easy")
        session.take_shot(shot.aim, shot.power, shot.curve)
        _play_out(session)

        clock.advance(session.result_seconds)
        session.tick()

        assert session.showing_result is False
        assert session.shot_result is None
        assert session.ball == Ball(
            x=pitch.BALL_START_X, y=pitch.BALL_START_Y,
            vx=0.0, vy=0.0, spin=0.0, moving=False,
        )
        assert session.keeper.dive is DiveState.IDLE
        assert session.keeper.x == pitch.KEEPER_START_X
        assert session.can_shoot is True


def test_full_game_counts_down_to_game_over():
    """Five outcomes, shots_remaining drops by one each time, game ends at zero."""
    session, clock = _session("medium", seed=9)
    shots = [ShotParams(0, 30, 0), ShotParams(40, 100, 0), ShotParams(0, 100, 0),
             ShotParams(-30, 90, 0), ShotParams(35, 90, -60)]

    for i, shot in enumerate(shots):
        assert session.take_shot(shot.aim, shot.power, shot.curve) is True
        before = session.tally.shots_remaining
        _play_out(session)
        assert session.tally.shots_remaining == before - 1
        assert len(session.history) == i + 1
        assert session.game_over is False

        clock.advance(session.result_seconds)
        session.tick()

    t = session.tally
    assert session.game_over is True
    assert t.shots_remaining == 0
    assert t.goals + t.saves + t.misses == len(shots)
    assert session.take_shot(0, 100, 0) is False


def test_streak_law():
    """streak counts trailing goals; max_streak never decreases."""
    sequence = [Outcome.GOAL, Outcome.GOAL, Outcome.SAVE, Outcome.GOAL, Outcome.MISS,
                Outcome.GOAL, Outcome.GOAL, Outcome.GOAL, Outcome.SAVE]
    tally = Tally(shots_remaining=len(sequence))
    prev_max = 0
    for i, outcome in enumerate(sequence):
        tally.record(outcome)
        trailing = 0
        for o in reversed(sequence[:i + 1]):
            if o is not Outcome.GOAL:
                break
            trailing += 1
        assert tally.streak == trailing
        assert tally.max_streak >= prev_max
        prev_max = tally.max_streak

    assert tally.max_streak == 3
    assert tally.goals == 6
    assert tally.saves == 2
    assert tally.misses == 1
    assert tally.shots_remaining == 0


def test_start_game_resets_everything():
    """start_game clears the tally mid-game and can switch difficulty."""
    session, _ = _session()
    session.take_shot(0, 30, 0)
    _play_out(session)

    session.start_game("hard")
    assert session.difficulty.key == "hard"
    assert session.tally == Tally(shots_remaining=pitch.SHOTS_PER_GAME)
    assert session.history == []
    assert session.showing_result is False
    assert session.ball == Ball()

    with pytest.raises(KeyError):
        session.start_game("impossible")


def test_start_game_aborts_shot_in_flight():
    """Re-entering start_game is the only way to cancel a live shot."""
    session, _ = _session()
    session.take_shot(10, 90, 0)
    session.tick()
    session.start_game()
    assert session.ball.moving is False
    assert session.tally.shots_remaining == pitch.SHOTS_PER_GAME


def test_reset_shot():
    """reset_shot returns the ball to the spot but not during a result hold."""
    session, _ = _session()
    session.take_shot(10, 90, 0)
    session.tick()
    session.reset_shot()
    assert session.ball == Ball()

    session.take_shot(0, 30, 0)
    _play_out(session)
    stopped = session.ball.copy()
    session.reset_shot()
    assert session.ball == stopped


def test_snapshot_shape():
    """snapshot() exposes plain values for the presentation layer."""
    session, _ = _session()
    session.take_shot(0, 80, 0)
    session.tick()
    snap = session.snapshot()

    assert set(snap) == {"ball", "keeper", "shot_result", "showing_result", "game_over", "tally"}
    assert set(snap["ball"]) == {"x", "y", "vx", "vy", "spin", "moving"}
    assert set(snap["keeper"]) == {"x", "dive_state", "dive_progress"}
    assert snap["keeper"]["dive_state"] in ("idle", "diving-left", "diving-right")
    assert snap["tally"]["shots_remaining"] == pitch.SHOTS_PER_GAME
    assert snap["shot_result"] is None


def test_far_corner_beats_easy_keeper():
    """Aim 40, power 100 against the easy keeper goes in most of the time."""
    rng = random.Random(2026)
    trials = 200
    goals = 0
    for _ in range(trials):
        _, outcome = simulate_shot(ShotParams(aim=40, power=100, curve=0), "easy", rng)
        goals += outcome is Outcome.GOAL
    assert goals >= trials * 0.8, f"Only {goals}/{trials} goals"


def test_hard_keeper_saves_more_straight_shots():
    """The hard keeper stops more central shots than the easy one."""
    def saves(level):
        rng = random.Random(77)
        shot = ShotParams(aim=0, power=100, curve=0)
        return sum(simulate_shot(shot, level, rng)[1] is Outcome.SAVE for _ in range(200))

    assert saves("hard") > saves("easy")


def test_simulate_shot_positions():
    """simulate_shot records every tick and ends with a stopped ball."""
    positions, outcome = simulate_shot(ShotParams(0, 30, 0), "medium", random.Random(1))
    assert outcome is Outcome.MISS
    assert positions[0].y == pitch.BALL_START_Y
    assert positions[-1].moving is False
    assert len(positions) > 100


@pytest.mark.parametrize("goals, max_streak, expected", [
    (5, 5, "Perfect! World Cup winner! Best streak: 5"),
    (4, 3, "Excellent shooting! Best streak: 3"),
    (3, 1, "Good performance!"),
    (1, 1, "Keep practicing!"),
    (0, 0, "Better luck next time!"),
])
def test_result_message(goals, max_streak, expected):
    """End-of-game messages by goals scored, with the streak when it is notable."""
    assert result_message(goals, max_streak) == expected
