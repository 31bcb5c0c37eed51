"""Utility modules for the Keyword Intelligence Engine."""

from .config import Settings, get_settings
from .reporting import format_date_range, percentage_change

__all__ = [
    "Settings",
    "get_settings",
    "format_date_range",
    "percentage_change",
]
