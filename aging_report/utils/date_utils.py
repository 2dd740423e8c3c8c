"""Date manipulation utilities"""

from datetime import date, timedelta

# Lower bound shown for open-ended ranges
DATE_FLOOR = date(1900, 1, 1)


def days_before(from_date: date, days: int) -> date:
    """Calendar date `days` whole days before from_date"""
    return from_date - timedelta(days=days)


def describe_range(start: date | None, end: date, arrow: str = "→") -> str:
    """Render an inclusive range as 'YYYY-MM-DD → YYYY-MM-DD'"""
    start = start or DATE_FLOOR
    return f"{start.isoformat()} {arrow} {end.isoformat()}"
