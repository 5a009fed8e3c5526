"""Utility modules for notex.

This package provides clock and path display helpers.

Modules:
    time_utils: Epoch-millisecond clock and timestamp formatting
    path_utils: Shortened display form of storage paths
"""
from utils.time_utils import now_ms, format_timestamp
from utils.path_utils import format_display_path

__all__ = ["now_ms", "format_timestamp", "format_display_path"]
