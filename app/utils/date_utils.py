"""
Date utility functions for the YYYY-MM-DD wire format.
"""
from datetime import date, datetime
import re
from app.utils.constants import DATE_FORMAT

_ISO_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_day(value: str) -> date:
    """
    Parse a strict YYYY-MM-DD string to a date.

    strptime alone accepts unpadded months and days ("2020-5-3"), so the
    shape is checked first.

    Args:
        value: Date string to parse

    Returns:
        Parsed date

    Raises:
        ValueError: if the value is not a valid YYYY-MM-DD date
    """
    if not isinstance(value, str) or not _ISO_DAY_PATTERN.match(value):
        raise ValueError(f"expected YYYY-MM-DD, got {value!r}")
    return datetime.strptime(value, DATE_FORMAT).date()


def format_day(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)
