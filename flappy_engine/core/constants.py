"""
Fixed game constants.

The time step is fixed; none of these are configurable at runtime.
"""

# Canvas dimensions
CANVAS_WIDTH = 600
CANVAS_HEIGHT = 400

# Bird sprite dimensions
BIRD_WIDTH = 42
BIRD_HEIGHT = 30
BIRD_X = CANVAS_WIDTH * 0.3

# Physics
PIPE_WIDTH = 50
TICK_RATE_MS = 16
GRAVITY = 0.4
PIPE_SPEED = 3
STRENGTH = -7

# Knockback
SEED = 1234
COLLISION_VELOCITY_DOWN = 5
COLLISION_VELOCITY_UP = -5
KNOCKBACK_SPREAD = 5

STARTING_LIVES = 3

# Recognized input key for a jump
JUMP_KEY = "Space"
