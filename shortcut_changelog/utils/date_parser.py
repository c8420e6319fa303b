"""Date parsing and week range utilities for changelog reports."""

from datetime import datetime, time, timedelta

from ..shortcut_client.models import WeekRange


def parse_date_input(date_str: str) -> datetime:
    """Parse various date formats into datetime objects.

    Supports:
    - ISO dates: 2024-01-01, 2024-01-01T10:00:00Z
    - Common formats: January 1, 2024, Jan 1 2024

    Args:
        date_str: Date string to parse

    Returns:
        Parsed datetime object

    Raises:
        ValueError: If date format is not recognized
    """
    formats = [
        "%Y-%m-%d",  # 2024-01-01
        "%Y-%m-%dT%H:%M:%SZ",  # 2024-01-01T10:00:00Z
        "%Y-%m-%dT%H:%M:%S",  # 2024-01-01T10:00:00
        "%B %d, %Y",  # January 1, 2024
        "%b %d, %Y",  # Jan 1, 2024
        "%B %d %Y",  # January 1 2024
        "%b %d %Y",  # Jan 1 2024
        "%Y/%m/%d",  # 2024/01/01
        "%m/%d/%Y",  # 01/01/2024
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            continue

    raise ValueError(
        f"Unable to parse date '{date_str}'. "
        f"Supported formats include: YYYY-MM-DD, YYYY-MM-DDTHH:MM:SSZ, "
        f"'January 1, 2024', 'Jan 1 2024', MM/DD/YYYY"
    )


def validate_date_range(start: datetime, end: datetime) -> None:
    """Validate date range logic.

    Raises:
        ValueError: If start is not before end
    """
    if start >= end:
        raise ValueError(
            f"Start date ({start.strftime('%Y-%m-%d')}) must be before "
            f"end date ({end.strftime('%Y-%m-%d')})"
        )


def week_bounds(day: datetime) -> tuple[datetime, datetime]:
    """Monday 00:00 to Sunday 23:59:59.999999 of the week containing ``day``."""
    monday = (day - timedelta(days=day.weekday())).date()
    start = datetime.combine(monday, time.min, tzinfo=day.tzinfo)
    end = datetime.combine(monday + timedelta(days=6), time.max, tzinfo=day.tzinfo)
    return start, end


def week_options(count: int = 5, now: datetime | None = None) -> list[WeekRange]:
    """Build the most recent week ranges, newest first.

    Args:
        count: Number of weeks to return
        now: Reference time (defaults to the current local time)

    Returns:
        List of WeekRange objects
    """
    if count <= 0:
        raise ValueError("Week count must be a positive integer")

    now = now or datetime.now().astimezone()
    options = []
    for i in range(count):
        start, end = week_bounds(now - timedelta(weeks=i))
        if i == 0:
            label = "This week"
        elif i == 1:
            label = "Last week"
        else:
            label = f"Week of {start.day} {start.strftime('%b')}"
        options.append(WeekRange(label=label, start=start, end=end))
    return options


def custom_range(start: datetime, end: datetime) -> WeekRange:
    """Wrap explicit dates as a range; a date-only end covers its whole day."""
    if end.time() == time.min:
        end = datetime.combine(end.date(), time.max, tzinfo=end.tzinfo)
    validate_date_range(start, end)
    label = f"{start.strftime('%Y-%m-%d')} to {end.strftime('%Y-%m-%d')}"
    return WeekRange(label=label, start=start, end=end)
