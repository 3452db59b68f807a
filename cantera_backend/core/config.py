import os

# =====================================
# Global configuration for Cantera
# =====================================
# Every value can be overridden through an environment variable so the
# same build runs locally, in tests and on the club server.

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# --- Database ---
DATABASE_URL = os.getenv(
    "CANTERA_DATABASE_URL",
    f"sqlite:///{os.path.join(BASE_DIR, 'cantera.db')}",
)
SQL_ECHO = _env_flag("CANTERA_SQL_ECHO", False)

# --- Logging ---
LOG_LEVEL = os.getenv("CANTERA_LOG_LEVEL", "INFO").upper()

# SEED_ON_STARTUP:
# When True, an empty database gets a default team and its squad on startup.
SEED_ON_STARTUP = _env_flag("CANTERA_SEED_ON_STARTUP", True)

# --- Club ---
# Wall-clock timezone used for training sessions and kickoffs.
CLUB_TIMEZONE = os.getenv("CANTERA_CLUB_TIMEZONE", "Europe/Madrid")

# Team used when a request does not name one (single club, single team per season).
PRIMARY_TEAM_ID = _env_int("CANTERA_PRIMARY_TEAM_ID", 2)

# LINEUP_STRICT_VALIDATION:
# When True, malformed explicit position assignments reject the whole lineup
# with a 400 instead of being dropped.
LINEUP_STRICT_VALIDATION = _env_flag("CANTERA_LINEUP_STRICT", False)
