CANVAS_WIDTH = 600
CANVAS_HEIGHT = 800
UPDATE_RATE = 1 / 60

BALL_RADIUS = 20
GRID_ROWS = 8
GRID_COLS = 10
# Rows filled with random balls at the start of every game.
POPULATED_ROWS = 4

# Shooter sits centred horizontally, this far above the bottom edge.
SHOOTER_HEIGHT = 60
SHOOTER_ANGLE = -1.5707963267948966  # straight up (-pi/2)
SHOT_SPEED = 10.0  # pixels per tick, not per second

MIN_MATCH_SIZE = 3
POINTS_PER_BALL = 10

# Barrel drawn from the shooter centre along the aim angle.
BARREL_LENGTH = 40
BARREL_WIDTH = 10
