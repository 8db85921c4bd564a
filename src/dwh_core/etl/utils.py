"""Shared utilities for the ETL runner."""

from __future__ import annotations


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as a human-readable string.

    Args:
        seconds: Duration in seconds (can be fractional).

    Returns:
        Formatted string like "5m 30.5s" or "45.2s".

    Examples:
        >>> format_duration(90.5)
        '1m 30.5s'
        >>> format_duration(45.2)
        '45.2s'

    """
    mins, secs = divmod(seconds, 60.0)
    if mins >= 1:
        return f"{int(mins)}m {secs:04.1f}s"
    else:
        return f"{secs:.1f}s"


def banner(char: str = "=", width: int = 48) -> str:
    return char * width
