"""
Timezone utilities

Xtream servers report their clock as a naive wall-clock string plus an IANA
timezone name that is not always valid. This module applies the zone when it
can be resolved.
"""
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

logger = logging.getLogger(__name__)


def resolve_timezone(name: str) -> ZoneInfo | None:
    """
    Resolve an IANA timezone name

    Args:
        name: Timezone name as reported by the server (e.g., 'Europe/London')

    Returns:
        ZoneInfo instance, or None if the name is empty or unknown
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.debug(f"Unknown timezone '{name}': {e}")
        return None


def localize_wall_clock(value: datetime | None, timezone_name: str) -> datetime | None:
    """
    Re-express a wall-clock datetime in the server's timezone

    The clock fields are kept as-is and only the zone is attached, because the
    server formats its local time without an offset. When the zone cannot be
    resolved the value is returned unchanged.

    Args:
        value: Decoded wall-clock datetime (UTC-tagged) or None
        timezone_name: IANA timezone name reported next to it

    Returns:
        Datetime carrying the resolved zone, or the original value
    """
    if value is None:
        return None

    zone = resolve_timezone(timezone_name)
    if zone is None:
        return value

    return value.replace(tzinfo=zone)
