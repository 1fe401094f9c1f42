# Configuration file for draw.py and rings.py

# Display settings
WIDTH = 1280
HEIGHT = None  # If None, will be calculated as int(WIDTH * 0.5625)
FPS = 60
BACKGROUND_COLOR = "black"  # also: "honeydew", "steelblue"

# Recording settings
RECORD = False
OUTPUT_FILE = "rings.mp4"
FRAME_LIMIT = None

# Ring settings
RING_WEIGHT = 3.0
RING_GROWTH_RATE = 0.5

# Color settings, half-open [low, high) per channel
RED_RANGE = (0, 255)
GREEN_RANGE = (0, 255)
BLUE_RANGE = (200, 255)

# None draws a fresh seed each run
SEED = None

# Logging
LOG_LEVEL = "INFO"
LOG_FILE = None
LOG_INTERSECTIONS = True


def screen_size():
    height = HEIGHT if HEIGHT is not None else int(WIDTH * 0.5625)
    return WIDTH, height
