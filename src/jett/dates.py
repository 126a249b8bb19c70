"""
Calendar date parsing and formatting.

Accepted input forms, tried in order:
    2025-09-06     ISO calendar date
    6/9/2025       day/month/year, no zero padding required
    Sep 6 2025     English month abbreviation, day, year

Everything is rendered back as ``Sep 6 2025``.
"""
import re
from datetime import date
from typing import Callable, List, Optional, Tuple

from .recovery import InvalidDate

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_MONTH_NUMBERS = {name: number for number, name in enumerate(MONTHS, start=1)}

ISO_PATTERN = re.compile(r'^(\d{4})-(\d{2})-(\d{2})$')
SLASH_PATTERN = re.compile(r'^(\d{1,2})/(\d{1,2})/(\d{4})$')
MONTH_TEXT_PATTERN = re.compile(r'^([A-Za-z]{3}) (\d{1,2}) (\d{4})$')

def _from_iso(text: str) -> Optional[Tuple[int, int, int]]:
    match = ISO_PATTERN.match(text)
    if not match:
        return None
    year, month, day = match.groups()
    return int(year), int(month), int(day)

def _from_slash(text: str) -> Optional[Tuple[int, int, int]]:
    match = SLASH_PATTERN.match(text)
    if not match:
        return None
    day, month, year = match.groups()
    return int(year), int(month), int(day)

def _from_month_text(text: str) -> Optional[Tuple[int, int, int]]:
    match = MONTH_TEXT_PATTERN.match(text)
    if not match:
        return None
    month_name, day, year = match.groups()
    month = _MONTH_NUMBERS.get(month_name)
    if month is None:
        return None
    return int(year), month, int(day)

# First match wins
_READERS: List[Callable[[str], Optional[Tuple[int, int, int]]]] = [
    _from_iso,
    _from_slash,
    _from_month_text,
]

def parse_date(text: str) -> date:
    """
    Parse date text in any of the supported forms.

    Raises:
        InvalidDate: if the text is blank, matches no form, or names a day
            that does not exist on the calendar.
    """
    s = (text or "").strip()
    if not s:
        raise InvalidDate("Date cannot be blank.")

    for reader in _READERS:
        parts = reader(s)
        if parts is None:
            continue
        year, month, day = parts
        try:
            return date(year, month, day)
        except ValueError as e:
            raise InvalidDate(f"Invalid date: {s}") from e

    raise InvalidDate(f"Invalid date: {s}")

def format_date(value: date) -> str:
    """Render a date as ``MMM d yyyy``, e.g. ``Sep 6 2025``."""
    return f"{MONTHS[value.month - 1]} {value.day} {value.year}"
