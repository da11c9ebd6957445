"""
Time helpers: lookback windows and recency checks used by profiles and strategies.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as an aware UTC datetime (default engine clock)."""
    return datetime.now(timezone.utc)


def within_days(value: Optional[datetime], days: int, now: datetime) -> bool:
    """True if value lies in the closed window [now - days, now]."""
    if value is None:
        return False
    return now - timedelta(days=days) <= value <= now
