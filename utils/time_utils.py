"""
utils/time_utils.py

Purpose: Time and expiry helpers

- Code expiry calculation and checks
- Epoch conversions for API responses
"""

from datetime import datetime, timezone
from typing import Optional


def calculate_expiry(now: float, ttl_seconds: float) -> float:
    """
    Calculates the absolute expiry (epoch seconds) of a code issued at `now`.
    """
    return now + ttl_seconds


def is_expired(expires_at: float, now: float) -> bool:
    """
    A code is expired at or after its expiry instant.
    """
    return now >= expires_at


def to_epoch_millis(timestamp: Optional[float]) -> Optional[int]:
    """
    Converts epoch seconds to integer epoch milliseconds (JavaScript Date style).
    """
    if timestamp is None:
        return None
    return int(round(timestamp * 1000))


def format_timestamp(timestamp: Optional[float], format_str: str = "%Y-%m-%d %H:%M:%S") -> str:
    """
    Formats an epoch timestamp as a UTC string for logs.
    """
    if timestamp is None:
        return "N/A"
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(format_str)
