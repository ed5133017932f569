# settings.py

from pathlib import Path

# Window / display (demo host only)
WINDOW_WIDTH = 960
WINDOW_HEIGHT = 540
FPS = 60
TITLE = "Day Cycle"

# Simulation
TICKS_PER_SECOND = 20

# Time
DAY_LENGTH_TICKS = 24000
LUNAR_CYCLE_DAYS = 8
LUNAR_CYCLE_TICKS = LUNAR_CYCLE_DAYS * DAY_LENGTH_TICKS

# Largest number of whole lunar cycles that fits in a signed 32-bit counter
OVERFLOW_THRESHOLD = 11184 * LUNAR_CYCLE_TICKS

# Config files
CONFIG_DIR = Path(__file__).resolve().parent / "config"
TIME_CONFIG_FILE = CONFIG_DIR / "time_settings.json"
CLIENT_CONFIG_FILE = CONFIG_DIR / "client_settings.json"
