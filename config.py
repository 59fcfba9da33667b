"""
Configuration constants for the grid pathfinding visualizer.

Grid defaults, animation pacing, and server settings are defined here.
Anything deployment-specific is read from environment variables.
"""

import os
import secrets

# =============================================================================
# Grid Configuration
# =============================================================================

# Default grid dimensions (rows x cols)
DEFAULT_ROWS = 20
DEFAULT_COLS = 20

# Start and end must be distinct cells
MIN_GRID_SIDE = 2

# Side lengths offered by the size selector (the engine accepts any int >= 2)
GRID_SIZE_OPTIONS = (10, 15, 20, 25, 30)

# Fraction of cells blocked by "random walls"
DEFAULT_WALL_PROBABILITY = 0.25

# =============================================================================
# Animation Configuration
# =============================================================================

# Seconds between consecutive events when animating a run
VISITED_STEP_DELAY = 0.02
PATH_STEP_DELAY = 0.03

# Path steps are drawn a little slower than visited cells
PATH_DELAY_FACTOR = PATH_STEP_DELAY / VISITED_STEP_DELAY

# Seconds per visited step; "instant" collapses all delays (batch mode)
SPEED_PRESETS = {
    "slow": 0.1,
    "medium": 0.05,
    "fast": VISITED_STEP_DELAY,
    "instant": 0.0,
}

DEFAULT_SPEED = "fast"

# =============================================================================
# Server Configuration
# =============================================================================

HOST = os.environ.get("PATHFINDER_HOST", "127.0.0.1")
PORT = int(os.environ.get("PATHFINDER_PORT", "5000"))
DEBUG = os.environ.get("PATHFINDER_DEBUG", "0").lower() in ("1", "true", "yes")

# Session signing key; a random one is fine for a single-process dev server
SECRET_KEY = os.environ.get("PATHFINDER_SECRET_KEY") or secrets.token_hex(32)

# Per-session controllers kept in memory; least recently used are evicted first
MAX_SESSIONS = int(os.environ.get("PATHFINDER_MAX_SESSIONS", "256"))

# Controllers untouched for this many seconds are dropped
SESSION_IDLE_SECONDS = float(os.environ.get("PATHFINDER_SESSION_IDLE_SECONDS", "1800"))

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
