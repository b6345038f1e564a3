"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """
    Current local time as a compact, sortable string.

    Used for naming per-run log directories.

    Returns:
        Timestamp string (e.g., "20251114_123456")
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def format_elapsed(seconds: float) -> str:
    """
    Format a duration for progress output.

    Examples:
        format_elapsed(0.42)   # "0.42s"
        format_elapsed(75.3)   # "1m 15s"
    """
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs}s"
