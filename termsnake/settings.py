import logging

# Grid configuration
GRID_WIDTH = 60
GRID_HEIGHT = 20
START_LENGTH = 3
MAX_SNAKE_LENGTH = 100
FOOD_REWARD = 10

# Pacing (milliseconds)
BASE_INTERVAL = 100
INTERVAL_STEP = 3
MIN_INTERVAL = 60
PAUSE_DEBOUNCE_MS = 200

# Rejection samples before falling back to picking from the free cells.
FOOD_SAMPLE_ATTEMPTS = 1000

HIGHSCORE_PATH = "snake_highscore.txt"

# Glyphs
HEAD_GLYPH = "O"
BODY_GLYPH = "o"
FOOD_GLYPH = "@"
EMPTY_GLYPH = " "
BORDER_TOP = ("╔", "═", "╗")
BORDER_SIDE = "║"
BORDER_BOTTOM = ("╚", "═", "╝")
CONTROLS_HINT = "ARROWS / WASD | P=Pause | Q=Quit"

# Mirror window (R, G, B)
WINDOW_TITLE = "Snake"
FONT_SIZE = 16
BG_COLOR = (9, 14, 22)
TEXT_COLOR = (112, 224, 120)
WINDOW_PADDING = 8

LOG_FILE = "termsnake.log"
LOG_LEVEL = logging.INFO
