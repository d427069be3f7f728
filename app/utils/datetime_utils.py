"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling across the application.

Functions:
- utc_now(): Current UTC time, used for every persisted timestamp
- ensure_utc(): Normalize naive/aware datetimes to aware UTC
- to_iso(): Convert datetime object to ISO 8601 string

Persisted timestamps are always UTC. The configured local timezone is only
used to interpret naive datetimes when formatting.
"""
import logging
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Optional
import zoneinfo

from ..core.config import get_settings

logger = logging.getLogger(__name__)


def _get_app_timezone() -> tzinfo:
    """
    Get the application timezone from config.
    Returns timezone object (defaults to UTC if invalid).
    """
    tz_str = get_settings().local_timezone
    
    if tz_str.upper() == "UTC":
        return dt_timezone.utc
    
    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Invalid timezone '{tz_str}', falling back to UTC")
        return dt_timezone.utc


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.

    Use this for all timestamps that will be persisted to MongoDB (BSON Date).
    """
    return datetime.now(dt_timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC (this matches MongoDB/PyMongo behavior)
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string.
    If datetime is naive, assumes application timezone.
    
    Args:
        dt: datetime object (timezone-aware or naive)
    
    Returns:
        ISO 8601 formatted string, or None if dt is None
    """
    if dt is None:
        return None
    
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_get_app_timezone())
    
    # Format with timezone offset, or 'Z' if UTC
    if dt.utcoffset() == dt_timezone.utc.utcoffset(None):
        return dt.astimezone(dt_timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    return dt.replace(microsecond=0).isoformat()
