"""Shot session — one game of penalties against the keeper AI.

A ShotSession owns the ball, the keeper and the running tally. The render
loop calls tick() once per frame and reads state back between ticks; input
layers call take_shot() and start_game(). After every terminal outcome the
session holds the result on screen until a wall-clock deadline passes, then
lines up the next penalty or ends the game.
"""

import logging
import random
import time
from typing import Callable, Optional, Union

from penalty.types import Ball, DifficultyProfile, Keeper, Outcome, ShotParams, ShotRecord, Tally
from penalty.ball import integrate, launch, reset_ball
from penalty.collisions import resolve
from penalty.keeper import Goalkeeper, get_difficulty
from penalty import pitch

logger = logging.getLogger(__name__)


def _as_profile(difficulty: Union[str, DifficultyProfile]) -> DifficultyProfile:
    if isinstance(difficulty, DifficultyProfile):
        return difficulty
    return get_difficulty(difficulty)


class ShotSession:
    """State and tick loop for a fixed-length penalty shootout."""

    def __init__(
        self,
        difficulty: Union[str, DifficultyProfile] = "medium",
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        result_seconds: float = pitch.RESULT_DISPLAY_SECONDS,
        total_shots: int = pitch.SHOTS_PER_GAME,
    ):
        """Create a session and set up the first game.

        Args:
            difficulty: Tier key from DIFFICULTY_LEVELS or a custom profile.
            rng: Random source shared by the keeper; seed it for repeatable games.
            clock: Returns seconds; used only for the result hold deadline.
            result_seconds: How long a result stays on screen.
            total_shots: Penalties per game.
        """
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock
        self.result_seconds = result_seconds
        self.total_shots = total_shots

        self.difficulty = _as_profile(difficulty)
        self.goalkeeper = Goalkeeper(self.difficulty, self.rng)

        self.ball: Ball = reset_ball()
        self.keeper: Keeper = self.goalkeeper.reset()
        self.tally = Tally(shots_remaining=total_shots)
        self.history: list[ShotRecord] = []
        self.shot_result: Optional[Outcome] = None
        self.showing_result = False
        self.game_over = False

        self._current_shot: Optional[ShotParams] = None
        self._shot_ticks = 0
        self._result_deadline = 0.0

        self.start_game()

    def start_game(self, difficulty: Union[str, DifficultyProfile, None] = None) -> None:
        """Reset the tally and line up the first penalty.

        Also aborts any shot in flight.
        """
        if difficulty is not None:
            self.difficulty = _as_profile(difficulty)
            self.goalkeeper = Goalkeeper(self.difficulty, self.rng)

        self.tally = Tally(shots_remaining=self.total_shots)
        self.history = []
        self.shot_result = None
        self.showing_result = False
        self.game_over = False
        self._current_shot = None
        self._shot_ticks = 0
        self._reset_positions()
        logger.info("New game: %d shots, difficulty=%s", self.total_shots, self.difficulty.key)

    def _reset_positions(self) -> None:
        self.ball = reset_ball()
        self.keeper = self.goalkeeper.reset()

    @property
    def can_shoot(self) -> bool:
        return not (
            self.ball.moving
            or self.showing_result
            or self.tally.shots_remaining <= 0
        )

    def take_shot(self, aim: float, power: float, curve: float = 0.0) -> bool:
        """Kick the ball. Ignored (returns False) while the ball is live,
        a result is showing, or the game is out of shots.
        """
        if not self.can_shoot:
            return False

        shot = ShotParams(aim=aim, power=power, curve=curve).clamped()
        launch(self.ball, shot)
        self._current_shot = shot
        self._shot_ticks = 0
        return True

    def reset_shot(self) -> None:
        """Put the ball back on the spot, unless a result is being shown."""
        if self.showing_result:
            return
        self.ball = reset_ball()
        self._current_shot = None

    def tick(self) -> Optional[Outcome]:
        """Advance the simulation by one frame.

        Returns the outcome decided on this tick, if any.
        """
        if self.showing_result:
            self._check_result_hold()
            return None

        self.goalkeeper.update(self.keeper, self.ball)

        if not self.ball.moving:
            return None

        self._shot_ticks += 1
        outcome = integrate(self.ball)
        if outcome is None:
            outcome = resolve(self.ball, self.keeper)

        if outcome is not None:
            self._record(outcome)
        return outcome

    def _record(self, outcome: Outcome) -> None:
        self.ball.moving = False
        self.tally.record(outcome)
        self.history.append(ShotRecord(
            number=len(self.history) + 1,
            shot=self._current_shot or ShotParams(),
            outcome=outcome,
            ticks=self._shot_ticks,
        ))
        self.shot_result = outcome
        self.showing_result = True
        self._result_deadline = self.clock() + self.result_seconds
        logger.debug(
            "Shot %d: %s after %d ticks (%d left)",
            len(self.history), outcome.value, self._shot_ticks, self.tally.shots_remaining,
        )

    def _check_result_hold(self) -> None:
        if self.clock() < self._result_deadline:
            return

        self.shot_result = None
        self.showing_result = False
        self._current_shot = None

        if self.tally.shots_remaining <= 0:
            self.game_over = True
            logger.info(
                "Game over: %d goals, %d saves, %d misses",
                self.tally.goals, self.tally.saves, self.tally.misses,
            )
        else:
            self._reset_positions()

    def snapshot(self) -> dict:
        """Plain-data view of everything a presentation layer draws."""
        b, k, t = self.ball, self.keeper, self.tally
        return {
            "ball": {
                "x": b.x, "y": b.y, "vx": b.vx, "vy": b.vy,
                "spin": b.spin, "moving": b.moving,
            },
            "keeper": {
                "x": k.x,
                "dive_state": k.dive.value,
                "dive_progress": k.dive_progress,
            },
            "shot_result": self.shot_result.value if self.shot_result else None,
            "showing_result": self.showing_result,
            "game_over": self.game_over,
            "tally": {
                "shots_remaining": t.shots_remaining,
                "goals": t.goals,
                "saves": t.saves,
                "misses": t.misses,
                "streak": t.streak,
                "max_streak": t.max_streak,
            },
        }


def simulate_shot(
    shot: ShotParams,
    difficulty: Union[str, DifficultyProfile] = "medium",
    rng: Optional[random.Random] = None,
    max_ticks: int = 1000,
) -> tuple[list[Ball], Optional[Outcome]]:
    """Play a single penalty headlessly against a fresh keeper.

    Returns (positions, outcome) with the ball state after every tick.
    Outcome is None only if max_ticks ran out first.
    """
    goalkeeper = Goalkeeper(_as_profile(difficulty), rng)
    keeper = goalkeeper.reset()
    ball = reset_ball()
    launch(ball, shot.clamped())
    positions = [ball.copy()]

    for _ in range(max_ticks):
        goalkeeper.update(keeper, ball)
        outcome = integrate(ball)
        if outcome is None:
            outcome = resolve(ball, keeper)
        positions.append(ball.copy())
        if outcome is not None:
            return positions, outcome

    return positions, None


def result_message(goals: int, max_streak: int, total_shots: int = pitch.SHOTS_PER_GAME) -> str:
    """End-of-game verdict shown on the results screen."""
    if goals == total_shots:
        message = "Perfect! World Cup winner!"
    elif goals >= total_shots - 1:
        message = "Excellent shooting!"
    elif goals >= total_shots - 2:
        message = "Good performance!"
    elif goals >= 1:
        message = "Keep practicing!"
    else:
        message = "Better luck next time!"

    if max_streak > 1:
        message += f" Best streak: {max_streak}"
    return message
