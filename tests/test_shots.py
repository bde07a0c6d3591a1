"""Tests for the shot presets."""

import random

from penalty.types import Outcome, ShotParams
from penalty.shots import get_shot, list_shots, SHOT_PRESETS
from penalty.session import simulate_shot
from penalty import pitch


def test_all_presets_exist():
    """All documented presets should be available."""
    expected = [
        "straight_drive", "top_left", "top_right", "far_post",
        "curler_left", "curler_right", "scuffed",
    ]
    available = list_shots()
    for key in expected:
        assert key in available, f"Missing preset: {key}"


def test_get_shot_within_input_ranges():
    """Every preset is a legal shot: clamping leaves it unchanged."""
    for key in list_shots():
        shot = get_shot(key)
        assert isinstance(shot, ShotParams)
        assert shot.clamped() == shot, f"Preset {key} is outside the input ranges"
        assert "label" in SHOT_PRESETS[key]


def test_all_presets_finish():
    """Every preset resolves to an outcome on every difficulty."""
    rng = random.Random(42)
    for key in list_shots():
        for level in ("easy", "medium", "hard"):
            positions, outcome = simulate_shot(get_shot(key), level, rng)
            assert outcome in Outcome, f"Shot {key} on {level} never finished"
            assert len(positions) > 10


def test_scuffed_always_misses():
    """The scuffed preset never reaches the keeper."""
    rng = random.Random(1)
    for _ in range(20):
        positions, outcome = simulate_shot(get_shot("scuffed"), "hard", rng)
        assert outcome is Outcome.MISS
        assert min(p.y for p in positions) > pitch.KEEPER_Y + pitch.KEEPER_HEIGHT


def test_far_post_goes_in_off_the_post():
    """The far-post preset is deflected back inside by the post and scores."""
    positions, outcome = simulate_shot(get_shot("far_post"), "easy", random.Random(3))
    assert outcome is Outcome.GOAL
    vx_signs = {p.vx > 0 for p in positions if p.moving}
    assert vx_signs == {True, False}, "Ball should change horizontal direction off the post"
