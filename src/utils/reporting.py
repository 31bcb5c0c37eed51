"""Report formatting helpers."""

from datetime import date

from src.scoring.helpers import round_half_up


def percentage_change(current: float, previous: float) -> int:
    """
    Whole-number percent change from previous to current.

    A zero baseline reports 100 when anything was gained, else 0.
    """
    if previous == 0:
        return 100 if current > 0 else 0
    return round_half_up((current - previous) / previous * 100)


def format_date_range(start: date, end: date) -> str:
    """Format as 'Jan 5, 2025 - Feb 1, 2025'."""
    return f"{_format_date(start)} - {_format_date(end)}"


def _format_date(d: date) -> str:
    return f"{d.strftime('%b')} {d.day}, {d.year}"
