"""
Task model and input parsing helpers
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from .errors import InvalidDate, InvalidFrequency

DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


@dataclass
class Task:
    """A named chore that should be done every frequency_days days"""
    name: str
    frequency_days: int
    last_completed: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form; dates are kept as ISO strings so they round-trip exactly"""
        return {
            'name': self.name,
            'frequency_days': self.frequency_days,
            'last_completed': self.last_completed.isoformat() if self.last_completed else None,
        }


def parse_date(value: Any) -> date:
    """
    Parse a YYYY-MM-DD string into a date

    Args:
        value: String from the command line or the schedule file.
               A date instance is returned unchanged.

    Returns:
        The parsed date

    Raises:
        InvalidDate: if the value is not a real calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not DATE_PATTERN.match(text):
        raise InvalidDate(value)

    try:
        return date.fromisoformat(text)
    except ValueError:
        # Right shape, impossible day (2017-02-30)
        raise InvalidDate(value) from None


def parse_frequency(value: Any) -> int:
    """Parse a frequency in days; must be an integer >= 1"""
    if isinstance(value, bool):
        raise InvalidFrequency(value)

    if isinstance(value, int):
        days = value
    else:
        text = str(value).strip()
        if not re.fullmatch(r'[0-9]+', text):
            raise InvalidFrequency(value)
        days = int(text)

    if days < 1:
        raise InvalidFrequency(value)

    return days
