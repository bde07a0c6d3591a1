"""Goalkeeper AI — idle patrol, shot prediction, and a single committed dive per shot.

Reach multipliers stay below 1.0: no tier can cover a shot placed tight to
either post.
"""

import logging
import random
from typing import Optional

from penalty.types import Ball, DifficultyProfile, DiveState, Keeper
from penalty import pitch

logger = logging.getLogger(__name__)


DIFFICULTY_LEVELS = {
    "easy": DifficultyProfile(
        key="easy",
        label="Easy",
        patrol_speed=0.4,
        reaction_ms=1000,
        dive_chance=0.2,
        reach_multiplier=0.5,  # can't reach far corners
    ),
    "medium": DifficultyProfile(
        key="medium",
        label="Medium",
        patrol_speed=0.7,
        reaction_ms=700,
        dive_chance=0.4,
        reach_multiplier=0.7,
    ),
    "hard": DifficultyProfile(
        key="hard",
        label="Hard",
        patrol_speed=1.0,
        reaction_ms=450,
        dive_chance=0.6,
        reach_multiplier=0.9,
    ),
}


def get_difficulty(key: str) -> DifficultyProfile:
    """Look up a difficulty tier by key."""
    try:
        return DIFFICULTY_LEVELS[key]
    except KeyError:
        known = ", ".join(DIFFICULTY_LEVELS)
        raise KeyError(f"Unknown difficulty {key!r} (expected one of: {known})") from None


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


class Goalkeeper:
    """Drives a Keeper through patrol, dive decision and dive motion."""

    def __init__(self, profile: DifficultyProfile, rng: Optional[random.Random] = None):
        """Create a controller.

        Args:
            profile: Difficulty tier tuning the keeper.
            rng: Random source for dive decisions and patrol direction.
                Pass a seeded random.Random for repeatable runs.
        """
        self.profile = profile
        self.rng = rng if rng is not None else random.Random()

    @property
    def max_dive_distance(self) -> float:
        return pitch.BASE_DIVE_REACH * self.profile.reach_multiplier

    @property
    def max_reach_distance(self) -> float:
        return pitch.BASE_PREDICTION_REACH * self.profile.reach_multiplier

    def reset(self) -> Keeper:
        """Fresh keeper in the middle of the goal, idle, random patrol direction."""
        return Keeper(
            x=pitch.KEEPER_START_X,
            direction=1 if self.rng.random() > 0.5 else -1,
            speed=self.profile.patrol_speed,
            dive=DiveState.IDLE,
            dive_progress=0.0,
            target_x=0.0,
            dive_origin=pitch.KEEPER_START_X,
            reaction_timer=0.0,
        )

    def predict_crossing_x(self, ball: Ball) -> Optional[float]:
        """Linear guess of the ball's x when it reaches the keeper's line.

        Returns None when the ball has no vertical speed, since it will never
        arrive.
        """
        if ball.vy == 0:
            return None
        time_to_keeper = abs((pitch.KEEPER_Y - ball.y) / ball.vy)
        drift = ball.vx + ball.spin * pitch.SPIN_PREDICTION_WEIGHT
        return ball.x + drift * time_to_keeper

    def update(self, keeper: Keeper, ball: Ball) -> None:
        """Advance the keeper by one tick."""
        if keeper.dive.is_diving:
            self._dive_step(keeper)
            return

        if ball.moving and keeper.reaction_timer <= 0:
            self._consider_dive(keeper, ball)
        elif keeper.reaction_timer > 0:
            keeper.reaction_timer -= pitch.FRAME_MS

        self._patrol(keeper)

    def _consider_dive(self, keeper: Keeper, ball: Ball) -> None:
        predicted_x = self.predict_crossing_x(ball)
        if predicted_x is None:
            return

        center = keeper.center
        distance = abs(predicted_x - center)

        # Commit early or not at all; all four must hold
        should_dive = (
            distance > pitch.COVERED_DISTANCE
            and distance < self.max_reach_distance
            and self.rng.random() < self.profile.dive_chance
            and ball.y < pitch.FIELD_HEIGHT / 2
        )
        if not should_dive:
            return

        keeper.dive = DiveState.DIVING_LEFT if predicted_x < center else DiveState.DIVING_RIGHT
        keeper.target_x = predicted_x - pitch.KEEPER_WIDTH / 2
        keeper.dive_origin = keeper.x
        keeper.dive_progress = 0.0
        keeper.reaction_timer = self.profile.reaction_ms
        logger.debug(
            "Keeper dives %s: predicted x=%.1f, distance=%.1f",
            keeper.dive.value, predicted_x, distance,
        )

    def _dive_step(self, keeper: Keeper) -> None:
        keeper.dive_progress = min(1.0, keeper.dive_progress + pitch.DIVE_INCREMENT)

        reach = self.max_dive_distance
        delta = _clamp(keeper.target_x - keeper.x, -reach, reach)
        keeper.x += delta * pitch.DIVE_APPROACH_RATE

        # Total travel for the whole dive is bounded by the same reach
        keeper.x = _clamp(keeper.x, keeper.dive_origin - reach, keeper.dive_origin + reach)

    def _patrol(self, keeper: Keeper) -> None:
        keeper.x += keeper.direction * keeper.speed

        if keeper.x <= pitch.PATROL_LEFT:
            keeper.x = pitch.PATROL_LEFT
            keeper.direction = 1
        elif keeper.x >= pitch.PATROL_RIGHT:
            keeper.x = pitch.PATROL_RIGHT
            keeper.direction = -1
