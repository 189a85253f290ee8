GRID_ROWS = 10
GRID_COLS = 6
INITIAL_ROWS = 4
MIN_VALUE = 1
MAX_VALUE = 9

# ============================================================================
# RULES
# ============================================================================
TARGET_BASE = 10
# Target variance grows with level but never beyond this many extra points.
TARGET_VARIANCE_CAP = 10
LEVEL_SCORE_STEP = 1000
ROUND_TIME_BASE = 10
ROUND_TIME_MIN = 5
# Length of one countdown step in time mode, in seconds.
TICK_INTERVAL = 0.1

# ============================================================================
# PERSISTENCE
# ============================================================================
HIGH_SCORE_FILE = "high_score.json"

# ============================================================================
# WINDOW & LAYOUT
# ============================================================================
WINDOW_WIDTH = 480
WINDOW_HEIGHT = 800
WINDOW_TITLE = "SumStack"
TILE_SIZE = 64
TILE_GAP = 4
BOTTOM_MARGIN = 24
# Height reserved above the board for target, score and the time bar.
HUD_HEIGHT = 150
BOARD_MAX_WIDTH_PCT = 0.9
MENU_BUTTON_WIDTH = 240.0
MENU_BUTTON_HEIGHT = 64.0
MENU_BUTTON_SPACING = 84.0

# Palette (RGB)
BACKGROUND_COLOR = (228, 227, 224)
INK_COLOR = (20, 20, 20)
BLOCK_COLOR = (255, 255, 255)
SELECTED_COLOR = (20, 20, 20)
DANGER_COLOR = (242, 125, 38)
OVERLAY_COLOR = (20, 20, 20, 200)
