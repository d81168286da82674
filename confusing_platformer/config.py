"""Tuning constants for the simulation and the pygame host.

Units are pixels and ticks: the simulation advances exactly one step per
rendered frame, so speeds are px/tick and gravity is px/tick^2.
"""

# ----------------------------- Physics --------------------------------
GRAVITY = 0.86              # px/tick^2
MOVE_SPEED_BASE = 8.0       # px/tick at level 0
MOVE_SPEED_PER_LEVEL = 0.28
JUMP_IMPULSE = -16.0        # px/tick, made stronger by min(level, JUMP_LEVEL_CAP)
JUMP_LEVEL_CAP = 8
JUMP_READY_SPEED = 0.5      # |vy| below this counts as standing
LANDING_TOLERANCE = 26.0    # how far feet may sink past a platform top and still land
REVEAL_DISTANCE = 16.0      # hidden platforms appear when the player's center gets this close

# Surprise upward pulse while airborne
CONFUSION_IMPULSE = 14.0
CONFUSION_CHANCE_PER_LEVEL = 0.015
CONFUSION_LEVEL_CAP = 12
CONFUSION_FOG_CLEARANCE = 40.0

FALL_OUT_MARGIN = 220.0     # below the bottom of the screen

# ----------------------------- Player ---------------------------------
SPAWN_RECT = (80.0, 80.0, 130.0, 130.0)    # left, top, right, bottom

# ----------------------------- Level ----------------------------------
DEFAULT_SEED = 41
LEVEL_SEED_STEP = 13
HAZARD_SEED_SALT = 0x5EED     # keeps the pulse stream apart from level layouts
MIN_GENERATION_WIDTH = 900  # narrower viewports are laid out as if this wide

START_PLATFORM_RECT = (40.0, 180.0, 360.0, 220.0)

CHAIN_BASE_COUNT = 22
CHAIN_COUNT_PER_LEVEL = 2
CHAIN_START_Y = 320.0
CHAIN_START_X_FRACTION = 0.1
BASE_GAP = 170.0
GAP_JITTER = (-45, 95)      # randint-style [lo, hi)
X_JUMP = (-180, 180)
EDGE_MARGIN = 40.0

PLATFORM_WIDTH = 220.0
PLATFORM_WIDTH_SHIFT = (-70, 40)
PLATFORM_SHRINK_PER_LEVEL = 3.0
PLATFORM_MIN_WIDTH = 110.0
PLATFORM_THICKNESS = 34.0

# Kind probabilities: min(cap, base + per_level * level)
FAKE_CHANCE = (0.12, 0.03, 0.45)
DEADLY_CHANCE = (0.05, 0.02, 0.25)
HIDDEN_CHANCE = (0.08, 0.025, 0.40)

SIDE_TRAP_EVERY = 5
SIDE_TRAP_MIN_LEVEL = 3
SIDE_TRAP_GAP = 18.0
SIDE_TRAP_WIDTH = 82.0
SIDE_TRAP_RAISE = 20.0

GOAL_DROP = 180.0           # below the lowest platform top
GOAL_WIDTH = 240.0
GOAL_THICKNESS = 36.0

# ----------------------------- Camera & Fog ---------------------------
CAMERA_SMOOTHING = 0.09
CAMERA_ANCHOR = 0.45        # player is kept this far down the screen
FOG_START = 900.0
FOG_SPEED_BASE = 0.55
FOG_SPEED_PER_LEVEL = 0.06

# ----------------------------- Host -----------------------------------
WIDTH, HEIGHT = 960, 720
FPS = 60
CULL_MARGIN = 60

BG_COLOR = (15, 17, 30)
PLATFORM_COLOR = (75, 210, 140)
FAKE_COLOR = (80, 85, 95)
TRAP_COLOR = (240, 85, 85)
PLAYER_COLOR = (255, 255, 255)
TEXT_COLOR = (255, 255, 255)
