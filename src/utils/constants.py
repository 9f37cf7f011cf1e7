"""
Constants and configuration defaults for the FPL league tracker.
"""

from typing import Dict

# Upstream API
FPL_BASE_URL = "https://fantasy.premierleague.com/api"
STANDINGS_PATH = "/leagues-classic/{league_id}/standings/"
HISTORY_PATH = "/entry/{entry}/history/"

REQUEST_HEADERS: Dict[str, str] = {
    "Accept": "application/json",
    "User-Agent": "Mozilla/5.0",
}

# Retry policy: delay(attempt) = RETRY_BASE_DELAY * attempt
MAX_ATTEMPTS = 3
RETRY_BASE_DELAY = 2.0  # seconds

# Request pacing to stay under upstream rate limits
SETTLE_DELAY = 1.0  # seconds between standings and first team request
TEAM_DELAY = 2.0  # seconds before each team history request

# Response cache
CACHE_TTL_SECONDS = 60 * 60
CACHE_KEY_PREFIX = "fpl_data_"

# Form window
FORM_WINDOW = 5


def cache_key(league_id) -> str:
    """Storage key for a league's cached bundle."""
    return f"{CACHE_KEY_PREFIX}{league_id}"
