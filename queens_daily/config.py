"""
Configuration for the Queens daily puzzle, read from the environment.
"""

import logging
import os

logger = logging.getLogger(__name__)


def _env_int(name, default):
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %s", name, raw, default)
        return default


# ----- Puzzle generation -----
GRID_SIZE = _env_int("QUEENS_GRID_SIZE", 7)
MAX_ATTEMPTS = _env_int("QUEENS_MAX_ATTEMPTS", 100)
SEED_WINDOW_MS = _env_int("QUEENS_SEED_WINDOW_MS", 300_000)

MIN_GRID_SIZE = 4
MAX_GRID_SIZE = 9

# ----- Supabase config -----
SUPABASE_URL = os.environ.get("SUPABASE_URL")
SUPABASE_KEY = os.environ.get("SUPABASE_KEY")

TIMES_TABLE = "puzzle_times"
REQUEST_TIMEOUT = 10

# ----- Server -----
PORT = _env_int("PORT", 8080)
DEBUG = os.environ.get("QUEENS_DEBUG", "").lower() in ("1", "true", "yes")
