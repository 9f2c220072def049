"""
Table Renderer

Lays out (task, status) rows as fixed-width text:

    Task               Last completed
    ===                ===
    water plants   7d  2017-10-21             Today  (Due in 7 days)
    clean house    7d  2017-01-01      293 days ago  (286 days overdue!)
    taxes        365d  Never

Column widths follow the longest value printed. Each line carries a style
name so the caller can colour it.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .due import DUE, NEVER, OK, OVERDUE, DueStatus
from .models import Task

HEADER_TASK = 'Task'
HEADER_LAST = 'Last completed'
SEPARATOR = '==='

LEVEL_STYLES = {
    NEVER: 'red',
    OVERDUE: 'red',
    DUE: 'yellow',
    OK: 'green',
}


@dataclass(frozen=True)
class TableLine:
    text: str
    style: Optional[str] = None


def render_table(rows: Sequence[Tuple[Task, DueStatus]]) -> List[TableLine]:
    """
    Render rows as aligned table lines

    Args:
        rows: (task, status) pairs, printed in the given order

    Returns:
        Header, separator and one line per row
    """
    name_width = max([len(HEADER_TASK)] + [len(task.name) for task, _ in rows])
    freq_width = max([0] + [len(_frequency(task)) for task, _ in rows])
    date_width = max([len(HEADER_LAST)] + [len(due.last_completed_display) for _, due in rows])
    ago_width = max([0] + [len(due.ago_display or '') for _, due in rows])

    def layout(name: str, freq: str, last: str, rest: str = '') -> str:
        line = f"{name:<{name_width}} {freq:>{freq_width}}  {last:<{date_width}}{rest}"
        return line.rstrip()

    lines = [
        TableLine(layout(HEADER_TASK, '', HEADER_LAST)),
        TableLine(layout(SEPARATOR, '', SEPARATOR)),
    ]

    if not rows:
        lines.append(TableLine('No tasks yet. Add one with: clockq add "<name>" --frequency <days>'))
        return lines

    for task, due in rows:
        rest = ''
        if due.ago_display is not None:
            rest = f"  {due.ago_display:>{ago_width}}  ({due.due_display})"
        text = layout(task.name, _frequency(task), due.last_completed_display, rest)
        lines.append(TableLine(text, LEVEL_STYLES.get(due.level)))

    return lines


def _frequency(task: Task) -> str:
    return f"{task.frequency_days}d"
