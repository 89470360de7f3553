"""
Date Parser - multi-format date conversion for imported files.

Source files use inconsistent date conventions. Each accepted pattern is
tried in a fixed order, so an ambiguous value such as 01/02/2025 always
resolves as day/month/year.
"""

import re
from datetime import date, datetime
from functools import lru_cache
from typing import Pattern, Sequence, Union

from services.exceptions import FormatError

DATE_FORMATS = (
    'dd/MM/yyyy',  # 31/12/2025
    'd/M/yyyy',    # 1/1/2025
    'yyyy-MM-dd',  # 2025-12-31
    'MM/dd/yyyy',  # 12/31/2025
)

# Value given to a date column that is present but blank
ZERO_DATE = date.min

# Longest tokens first so 'dd' wins over 'd'
_TOKENS = (
    ('yyyy', r'(?P<year>[0-9]{4})'),
    ('MM', r'(?P<month>[0-9]{2})'),
    ('dd', r'(?P<day>[0-9]{2})'),
    ('M', r'(?P<month>[0-9]{1,2})'),
    ('d', r'(?P<day>[0-9]{1,2})'),
)


@lru_cache(maxsize=None)
def compile_pattern(pattern: str) -> Pattern:
    """
    Compile a dd/MM/yyyy style pattern into a regex (used with fullmatch).

    Raises:
        ValueError: If the pattern uses an unsupported token
    """
    regex = ''
    i = 0
    while i < len(pattern):
        for token, group in _TOKENS:
            if pattern.startswith(token, i):
                regex += group
                i += len(token)
                break
        else:
            char = pattern[i]
            if char.isalpha():
                raise ValueError(f"Unsupported date pattern token '{char}' in '{pattern}'")
            regex += re.escape(char)
            i += 1

    return re.compile(regex)


def try_parse(text: str, pattern: str):
    """Parse text with a single pattern, returning None when it does not match."""
    match = compile_pattern(pattern).fullmatch(text)
    if not match:
        return None

    try:
        return date(int(match['year']), int(match['month']), int(match['day']))
    except ValueError:
        # Right shape but not a calendar date, e.g. 31/02/2025
        return None


def parse_date(value: Union[str, date, datetime, None],
               formats: Sequence[str] = DATE_FORMATS) -> date:
    """
    Convert a date token to a date, trying each format in order.

    Args:
        value: Text from an import file (or a date from a spreadsheet cell)
        formats: Accepted patterns in priority order

    Returns:
        The first successful parse, or ZERO_DATE for empty/whitespace text

    Raises:
        FormatError: If non-empty text matches none of the formats
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if value is None or not value.strip():
        return ZERO_DATE

    for pattern in formats:
        parsed = try_parse(value, pattern)
        if parsed is not None:
            return parsed

    raise FormatError(value, formats)
