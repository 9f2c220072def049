"""
Due Calculator

Pure functions turning a task plus "today" into what the table shows.
"""

import sys
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from .models import Task

NEVER = 'never'
OVERDUE = 'overdue'
DUE = 'due'
OK = 'ok'


@dataclass(frozen=True)
class DueStatus:
    """Display state of one task relative to a given day"""
    days_since: Optional[int]
    days_until_due: Optional[int]
    last_completed_display: str  # "Never" or YYYY-MM-DD
    ago_display: Optional[str]  # "Today", "3 days ago", ...
    due_display: Optional[str]  # "Due in 4 days", "Due today", "2 days overdue!"
    level: str  # never, overdue, due, ok


def status(task: Task, today: date) -> DueStatus:
    """
    Compute the due status of a task

    Args:
        task: Task to evaluate
        today: The day to measure against

    Returns:
        DueStatus for the task

    Example:
        Done 2017-01-01, every 7 days, today 2017-10-21:
        293 days ago, 286 days overdue!
    """
    if task.last_completed is None:
        return DueStatus(
            days_since=None,
            days_until_due=None,
            last_completed_display='Never',
            ago_display=None,
            due_display=None,
            level=NEVER,
        )

    days_since = (today - task.last_completed).days
    days_until_due = task.frequency_days - days_since

    if days_until_due > 0:
        due_display = f"Due in {days_until_due} days"
        level = OK
    elif days_until_due == 0:
        due_display = "Due today"
        level = DUE
    else:
        due_display = f"{-days_until_due} days overdue!"
        level = OVERDUE

    return DueStatus(
        days_since=days_since,
        days_until_due=days_until_due,
        last_completed_display=task.last_completed.isoformat(),
        ago_display=format_ago(days_since),
        due_display=due_display,
        level=level,
    )


def format_ago(days_since: int) -> str:
    if days_since == 0:
        return "Today"
    if days_since == 1:
        return "1 day ago"
    if days_since == -1:
        return "Tomorrow"
    if days_since < 0:
        # Back-dated into the future with --on
        return f"In {-days_since} days"
    return f"{days_since} days ago"


def urgency_key(due: DueStatus) -> Tuple[int, int]:
    """Sort key: never-done tasks first, then the most overdue"""
    if due.days_until_due is None:
        return (0, -sys.maxsize)
    return (1, due.days_until_due)
