"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Layout of operation timestamps printed in bank statements
STATEMENT_DATETIME_FORMAT = "%d.%m.%Y %H:%M"


def parse_statement_datetime(value: str) -> datetime:
    """Parse a statement timestamp such as "15.01.2024 14:30".

    Only the exact ``DD.MM.YYYY HH:MM`` layout is accepted.

    Raises:
        ValueError: If the value does not follow the layout or names an
            impossible date
    """
    return datetime.strptime(value.strip(), STATEMENT_DATETIME_FORMAT)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "15.01.2024", "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this month"

    Day-first order is assumed for ambiguous numeric dates.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # ISO dates are unambiguous, everything else is read day first
    try:
        dt = date_parser.parse(date_str, dayfirst=not _looks_iso(date_str))
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _looks_iso(date_str: str) -> bool:
    return len(date_str) >= 4 and date_str[:4].isdigit()


def month_start(value: date | datetime) -> date:
    """Return the first day of the month containing ``value``."""
    if isinstance(value, datetime):
        value = value.date()
    return value.replace(day=1)


def next_month(value: date | datetime) -> date:
    """Return the first day of the month after ``value``."""
    return month_start(value) + relativedelta(months=1)


def month_key(value: date | datetime) -> str:
    """Return a sortable "YYYY-MM" key for the month containing ``value``."""
    return month_start(value).strftime("%Y-%m")
