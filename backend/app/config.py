import logging
import os
from datetime import timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def _canon_prefix(val):
    """
    Normalize API prefix to always be exactly like '/api':
      - defaults to '/api' when unset/empty
      - ensures a single leading slash
      - removes any trailing slash (except for root)
    """
    val = (val or "/api").strip()
    if not val.startswith("/"):
        val = "/" + val
    if len(val) > 1 and val.endswith("/"):
        val = val[:-1]
    return val


def _int_env(name: str, default: int, *, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s is not a valid integer (got %r); defaulting to %d", name, raw, default)
        return default
    if value < minimum:
        logger.warning("%s must be >= %d; defaulting to %d", name, minimum, default)
        return default
    return value


def _load_timezone(raw):
    name = (raw or "").strip()
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("SESSION_TIMEZONE %r is unknown; defaulting to UTC", name)
        return timezone.utc


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))

# Page size of the recent-games read.
RECENT_GAMES_LIMIT = _int_env("RECENT_GAMES_LIMIT", 10)
MAX_GAMES_LIMIT = _int_env("MAX_GAMES_LIMIT", 100)

# "Today" for the append lock is evaluated in this zone.
SESSION_TIMEZONE = _load_timezone(os.getenv("SESSION_TIMEZONE"))

ROUND_RATE_LIMIT = (os.getenv("ROUND_RATE_LIMIT") or "30/minute").strip()


def rate_limits_disabled() -> bool:
    return (os.getenv("DISABLE_RATE_LIMITS") or "").lower() == "true"
