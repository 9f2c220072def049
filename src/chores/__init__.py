"""
Recurring task tracking: storage, due computation and table layout
"""

from .models import Task
from .store import TaskStore
from .due import DueStatus, status
from .table import TableLine, render_table

__all__ = ['Task', 'TaskStore', 'DueStatus', 'status', 'TableLine', 'render_table']
