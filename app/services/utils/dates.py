"""
Free-text date normalization for LLM-extracted work history.

Dates arrive in whatever format the resume used ("2020-01-15", "01/2020",
"2019", "Present"). `parse_date` always returns a calendar date: anything it
cannot read is treated as today. That fallback makes an unknown end date look
like an ongoing role, which inflates experience totals; callers rely on it, so
it is kept.
"""

import logging
import re
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple

from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

CURRENT_MARKERS = ("Present", "Current")


def _ymd(m: re.Match) -> date:
    return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def _mdy(m: re.Match) -> date:
    return date(int(m.group(3)), int(m.group(1)), int(m.group(2)))


def _my(m: re.Match) -> date:
    return date(int(m.group(2)), int(m.group(1)), 1)


def _y(m: re.Match) -> date:
    return date(int(m.group(1)), 1, 1)


# Tried in order, first match wins
_PATTERNS: List[Tuple[re.Pattern, Callable[[re.Match], date]]] = [
    (re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})"), _ymd),  # YYYY-M-D
    (re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})"), _mdy),  # M/D/YYYY
    (re.compile(r"(\d{1,2})-(\d{1,2})-(\d{4})"), _mdy),  # M-D-YYYY
    (re.compile(r"(\d{4})/(\d{1,2})/(\d{1,2})"), _ymd),  # YYYY/M/D
    (re.compile(r"(\d{1,2})/(\d{4})"), _my),  # M/YYYY
    (re.compile(r"(\d{4})"), _y),  # YYYY
]


def _parse_direct(text: str, now: date) -> Optional[date]:
    """Lenient parse ("Sept 2020", "Dec, 2020"); missing parts default to January 1."""
    try:
        return dateutil_parser.parse(text, default=datetime(now.year, 1, 1)).date()
    except (ValueError, OverflowError):
        return None


def parse_date(text: Optional[str], today: Optional[date] = None) -> date:
    """
    Convert a free-text date into a calendar date.

    Args:
        text: Raw date text. None, empty, "Present" and "Current" mean today.
        today: Reference date for "now"; defaults to the current date.

    Returns:
        The parsed date, or `today` when nothing matches.

    Example:
        >>> parse_date("03/2019")
        datetime.date(2019, 3, 1)
        >>> parse_date("2018")
        datetime.date(2018, 1, 1)
    """
    now = today or date.today()

    if not text or text in CURRENT_MARKERS:
        return now

    if not isinstance(text, str):
        logger.warning(f"Could not parse date: {text!r}, using current date")
        return now

    parsed = _parse_direct(text.strip(), now)
    if parsed is not None:
        return parsed

    for pattern, build in _PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        try:
            return build(match)
        except ValueError:
            # e.g. 13/45/2020 matches M/D/YYYY but is not a real date
            continue

    logger.warning(f"Could not parse date: {text}, using current date")
    return now
