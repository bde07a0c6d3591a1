"""Collision and outcome resolver — posts, crossbar, keeper box and goal line.

Checks run in a fixed order each tick and the first terminal result wins.
The keeper is tested before the goal line so a save always beats a goal on
the same tick. Post and crossbar hits only deflect the ball; a deflected shot
can still go in or drift wide on a later tick.
"""

from typing import Optional

from penalty.types import Ball, Keeper, Outcome
from penalty import pitch


def _out_of_bounds(ball: Ball) -> bool:
    return ball.x < 0 or ball.x > pitch.FIELD_WIDTH or ball.y < 0


def _hits_keeper(ball: Ball, keeper: Keeper) -> bool:
    r = pitch.BALL_RADIUS
    in_band = pitch.KEEPER_Y - r <= ball.y <= pitch.KEEPER_Y + pitch.KEEPER_HEIGHT
    in_box = keeper.x - r <= ball.x <= keeper.x + pitch.KEEPER_WIDTH + r
    return in_band and in_box


def _check_posts(ball: Ball) -> bool:
    """Bounce the ball off either post, damped. Returns True on contact."""
    if not pitch.GOAL_Y <= ball.y <= pitch.GOAL_BOTTOM:
        return False

    r = pitch.BALL_RADIUS
    hit = False

    left_post = pitch.GOAL_LEFT
    if left_post - r <= ball.x <= left_post + pitch.POST_WIDTH + r:
        ball.vx = abs(ball.vx) * pitch.POST_DAMPING
        ball.x = left_post + pitch.POST_WIDTH + r
        hit = True

    right_post = pitch.GOAL_RIGHT
    if right_post - pitch.POST_WIDTH - r <= ball.x <= right_post + r:
        ball.vx = -abs(ball.vx) * pitch.POST_DAMPING
        ball.x = right_post - pitch.POST_WIDTH - r
        hit = True

    return hit


def _check_crossbar(ball: Ball) -> bool:
    """Knock the ball back down off the bar. Returns True on contact."""
    r = pitch.BALL_RADIUS
    near_bar = pitch.GOAL_Y - r <= ball.y <= pitch.GOAL_Y + pitch.CROSSBAR_BAND
    between_posts = pitch.GOAL_LEFT + pitch.POST_WIDTH < ball.x < pitch.GOAL_RIGHT - pitch.POST_WIDTH
    if not (near_bar and between_posts):
        return False

    ball.vy = abs(ball.vy) * pitch.CROSSBAR_DAMPING
    ball.y = pitch.GOAL_Y + r + pitch.CROSSBAR_BAND
    return True


def _crossed_line(ball: Ball) -> bool:
    in_band = pitch.GOAL_Y <= ball.y <= pitch.GOAL_Y + pitch.GOAL_LINE_BAND
    inner_left = pitch.GOAL_LEFT + pitch.POST_WIDTH
    inner_right = pitch.GOAL_RIGHT - pitch.POST_WIDTH
    return in_band and inner_left < ball.x < inner_right


def resolve(ball: Ball, keeper: Keeper) -> Optional[Outcome]:
    """Run this tick's spatial checks.

    Returns the terminal Outcome (and stops the ball) or None if the shot
    is still live. Post and crossbar contacts mutate the ball in place.
    """
    if not ball.moving:
        return None

    if _out_of_bounds(ball):
        ball.moving = False
        return Outcome.MISS

    if _hits_keeper(ball, keeper):
        ball.moving = False
        return Outcome.SAVE

    _check_posts(ball)

    if _check_crossbar(ball):
        return None

    if _crossed_line(ball):
        ball.moving = False
        return Outcome.GOAL

    return None
