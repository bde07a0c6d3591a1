"""Pitch geometry and tuning constants for the penalty shootout.

All distances are in pitch units on a 160 x 200 field, y growing downward,
goal mouth at the top. Velocities are pitch units per tick.
"""

# Simulation clock. The integrator has no delta-time scaling; every
# step assumes one frame at this rate.
TICK_RATE_HZ = 60
FRAME_MS = 16  # reaction timer decrement per idle tick

# Field
FIELD_WIDTH = 160
FIELD_HEIGHT = 200

# Goal (top of the field)
GOAL_Y = 8
GOAL_WIDTH = 150
GOAL_HEIGHT = 70
POST_WIDTH = 2
GOAL_LEFT = (FIELD_WIDTH - GOAL_WIDTH) / 2
GOAL_RIGHT = GOAL_LEFT + GOAL_WIDTH
GOAL_BOTTOM = GOAL_Y + GOAL_HEIGHT
CROSSBAR_BAND = 3  # bar thickness below the goal line
GOAL_LINE_BAND = 10  # depth past the line that counts as in

# Keeper box
KEEPER_WIDTH = 5
KEEPER_HEIGHT = 20
KEEPER_Y = 52
KEEPER_START_X = FIELD_WIDTH / 2 - KEEPER_WIDTH / 2
PATROL_LEFT = GOAL_LEFT + POST_WIDTH
PATROL_RIGHT = GOAL_RIGHT - POST_WIDTH - KEEPER_WIDTH

# Ball
BALL_RADIUS = 5
BALL_START_X = 80
BALL_START_Y = 170
FRICTION = 0.985
MIN_VELOCITY = 0.1
STOP_GUARD_DISTANCE = 10  # ball must leave the spot before it can "stop"

# Shot input mapping
MAX_SHOT_SPEED = 5.0
SPIN_SCALE = 0.5  # curve of +/-100 -> spin of +/-0.5
SPIN_COEFFICIENT = 0.08  # spin added to vx per tick
AIM_RANGE = (-45.0, 45.0)
POWER_RANGE = (30.0, 100.0)
CURVE_RANGE = (-100.0, 100.0)

# Keeper behaviour
DIVE_INCREMENT = 0.08
DIVE_APPROACH_RATE = 0.15
BASE_DIVE_REACH = 35  # max travel in one dive, before reach multiplier
BASE_PREDICTION_REACH = 50  # max predicted distance worth diving for
COVERED_DISTANCE = 8  # predicted ball already on the keeper
SPIN_PREDICTION_WEIGHT = 0.5

# Rebounds
POST_DAMPING = 0.5
CROSSBAR_DAMPING = 0.5

# Session
SHOTS_PER_GAME = 5
RESULT_DISPLAY_SECONDS = 1.5
