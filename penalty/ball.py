"""Ball kinematics — frame-stepped Euler integration with spin and rolling friction."""

import math
from typing import Optional

from penalty.types import Ball, Outcome, ShotParams
from penalty import pitch


def _apply_spin(ball: Ball) -> None:
    # Curve bends the ball sideways for as long as it moves
    if ball.spin != 0:
        ball.vx += ball.spin * pitch.SPIN_COEFFICIENT


def _apply_friction(ball: Ball) -> None:
    ball.vx *= pitch.FRICTION
    ball.vy *= pitch.FRICTION


def _has_stopped(ball: Ball) -> bool:
    left_spot = ball.y < pitch.BALL_START_Y - pitch.STOP_GUARD_DISTANCE
    return ball.speed() < pitch.MIN_VELOCITY and left_spot


def reset_ball() -> Ball:
    """Return a ball resting on the penalty spot."""
    return Ball(
        x=pitch.BALL_START_X,
        y=pitch.BALL_START_Y,
        vx=0.0,
        vy=0.0,
        spin=0.0,
        moving=False,
    )


def launch(ball: Ball, shot: ShotParams) -> None:
    """Seed velocity and spin from the shot input and set the ball moving."""
    angle = math.radians(shot.aim)
    speed = shot.power / 100 * pitch.MAX_SHOT_SPEED

    ball.vx = math.sin(angle) * speed
    ball.vy = -speed
    ball.spin = shot.curve / 100 * pitch.SPIN_SCALE
    ball.moving = True


def integrate(ball: Ball) -> Optional[Outcome]:
    """Advance the ball by one tick.

    Returns Outcome.MISS when friction has killed the shot short of the goal,
    otherwise None. A ball that is not moving is left untouched.
    """
    if not ball.moving:
        return None

    ball.x += ball.vx
    ball.y += ball.vy
    _apply_spin(ball)
    _apply_friction(ball)

    if _has_stopped(ball):
        ball.moving = False
        return Outcome.MISS
    return None


def simulate_flight(
    ball: Ball,
    max_ticks: int = 600,
) -> tuple[list[Ball], Optional[Outcome]]:
    """Integrate a free-flying ball with no goal or keeper in the way.

    Returns (positions, outcome) where positions holds the state after every
    tick and outcome is MISS if the ball died of friction within max_ticks.
    """
    state = ball.copy()
    positions = [state.copy()]
    outcome = None

    for _ in range(max_ticks):
        if not state.moving:
            break
        outcome = integrate(state)
        positions.append(state.copy())

    return positions, outcome
