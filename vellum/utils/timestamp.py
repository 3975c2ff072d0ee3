"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Current local time for directory names (e.g. "20251114_183045")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")
