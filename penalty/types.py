"""Core data types for the penalty shootout simulation."""

from dataclasses import dataclass, replace
from enum import Enum

from penalty import pitch


class Outcome(str, Enum):
    """Terminal result of a single penalty."""
    GOAL = "goal"
    SAVE = "save"
    MISS = "miss"


class DiveState(Enum):
    """Keeper state machine tag."""
    IDLE = "idle"
    DIVING_LEFT = "diving-left"
    DIVING_RIGHT = "diving-right"

    @property
    def is_diving(self) -> bool:
        return self is not DiveState.IDLE


@dataclass
class Ball:
    """Ball state in pitch units. Velocity and spin only mean something while moving."""
    x: float = pitch.BALL_START_X
    y: float = pitch.BALL_START_Y
    vx: float = 0.0
    vy: float = 0.0
    spin: float = 0.0
    moving: bool = False

    def speed(self) -> float:
        return (self.vx**2 + self.vy**2) ** 0.5

    def copy(self) -> "Ball":
        return replace(self)


@dataclass
class Keeper:
    """Goalkeeper state. `x` is the left edge of the keeper box."""
    x: float = pitch.KEEPER_START_X
    direction: int = 1
    speed: float = 0.0  # patrol speed, seeded from the difficulty on reset
    dive: DiveState = DiveState.IDLE
    dive_progress: float = 0.0
    target_x: float = 0.0
    dive_origin: float = pitch.KEEPER_START_X
    reaction_timer: float = 0.0  # ms

    @property
    def center(self) -> float:
        return self.x + pitch.KEEPER_WIDTH / 2

    def copy(self) -> "Keeper":
        return replace(self)


@dataclass(frozen=True)
class DifficultyProfile:
    """Keeper tuning for one difficulty tier."""
    key: str
    label: str
    patrol_speed: float
    reaction_ms: float
    dive_chance: float
    reach_multiplier: float


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    return max(bounds[0], min(bounds[1], value))


@dataclass(frozen=True)
class ShotParams:
    """Player input for one penalty."""
    aim: float = 0.0  # degrees, negative = left
    power: float = 70.0  # percent of max speed
    curve: float = 0.0  # -100 (bend left) .. 100 (bend right)

    def clamped(self) -> "ShotParams":
        return ShotParams(
            aim=_clamp(self.aim, pitch.AIM_RANGE),
            power=_clamp(self.power, pitch.POWER_RANGE),
            curve=_clamp(self.curve, pitch.CURVE_RANGE),
        )


@dataclass
class Tally:
    """Running score for the current game."""
    shots_remaining: int = pitch.SHOTS_PER_GAME
    goals: int = 0
    saves: int = 0
    misses: int = 0
    streak: int = 0
    max_streak: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome is Outcome.GOAL:
            self.goals += 1
            self.streak += 1
            self.max_streak = max(self.max_streak, self.streak)
        elif outcome is Outcome.SAVE:
            self.saves += 1
            self.streak = 0
        else:
            self.misses += 1
            self.streak = 0
        self.shots_remaining -= 1


@dataclass
class ShotRecord:
    """One completed penalty in the session history."""
    number: int
    shot: ShotParams
    outcome: Outcome
    ticks: int


@dataclass
class CareerStats:
    """Cumulative statistics across games."""
    total_shots: int = 0
    total_goals: int = 0
    total_saves: int = 0
    total_misses: int = 0
    best_streak: int = 0
    games_played: int = 0
    perfect_games: int = 0
