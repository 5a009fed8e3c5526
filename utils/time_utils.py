"""Clock helpers for notex.

All timestamps in the application are integer epoch milliseconds.
"""

import time
from datetime import datetime
from typing import Optional


def now_ms() -> int:
    """Return the current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def format_timestamp(ms: Optional[int]) -> str:
    """
    Format an epoch-millisecond timestamp for display.

    Returns format like "2025-01-15 14:30". Missing timestamps, and ones the
    platform clock cannot represent, render as an empty string.

    Args:
        ms: Epoch milliseconds, or None

    Returns:
        Formatted local time string
    """
    if ms is None:
        return ""
    try:
        return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M")
    except (OverflowError, OSError, ValueError):
        return ""
