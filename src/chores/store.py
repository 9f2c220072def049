"""
Task Store

Keeps the ordered list of recurring tasks in a YAML schedule file:

    tasks:
    - name: water plants
      frequency_days: 7
      last_completed: '2017-10-15'

Order in the file is insertion order and is never rearranged.
"""

import os
import logging
from pathlib import Path
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import (
    AmbiguousTask,
    DuplicateTask,
    InvalidDate,
    InvalidTaskName,
    StoreCorrupt,
    StoreWriteError,
    TaskError,
    TaskNotFound,
)
from .models import Task, parse_date, parse_frequency


class TaskStore:
    """Durable, ordered collection of tasks backed by a YAML file"""

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: Schedule file location. It does not need to exist yet.
        """
        self.path = Path(path).expanduser()
        self.logger = logging.getLogger("Clockq.Store")
        self.tasks: List[Task] = []

    # ==================== Persistence ====================

    def load(self) -> List[Task]:
        """
        Read the schedule file into memory

        A missing or empty file is an empty schedule.

        Returns:
            The loaded tasks, in file order

        Raises:
            StoreCorrupt: if the file cannot be read or does not describe
                          a valid list of tasks
        """
        if not self.path.exists():
            self.logger.info(f"Schedule file not found at {self.path}, starting empty")
            self.tasks = []
            return self.tasks

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, ValueError) as e:
            # ValueError: unquoted impossible dates such as 2017-02-30
            raise StoreCorrupt(f"Failed to parse schedule file {self.path}: {e}") from e
        except OSError as e:
            raise StoreCorrupt(f"Failed to read schedule file {self.path}: {e}") from e

        self.tasks = self._parse_schedule(data)
        self.logger.info(f"Loaded {len(self.tasks)} tasks from {self.path}")
        return self.tasks

    def _parse_schedule(self, data: Any) -> List[Task]:
        if data is None:
            return []

        if not isinstance(data, dict):
            raise StoreCorrupt(f"Schedule file {self.path} must contain a mapping with a 'tasks' list")

        raw_tasks = data.get('tasks') or []
        if not isinstance(raw_tasks, list):
            raise StoreCorrupt(f"'tasks' in {self.path} must be a list")

        tasks = []
        seen = set()
        for index, raw in enumerate(raw_tasks, 1):
            task = self._parse_task(raw, index)
            if task.name in seen:
                raise StoreCorrupt(f"Duplicate task '{task.name}' in {self.path}")
            seen.add(task.name)
            tasks.append(task)

        return tasks

    def _parse_task(self, raw: Any, index: int) -> Task:
        if not isinstance(raw, dict):
            raise StoreCorrupt(f"Task #{index} in {self.path} is not a mapping")

        name = raw.get('name')
        if not isinstance(name, str) or not name.strip():
            raise StoreCorrupt(f"Task #{index} in {self.path} has no name")

        try:
            frequency_days = parse_frequency(raw.get('frequency_days'))
            last_completed = raw.get('last_completed')
            if last_completed is not None:
                last_completed = parse_date(last_completed)
        except TaskError as e:
            raise StoreCorrupt(f"Task '{name}' in {self.path} is invalid: {e}") from e

        return Task(name=name, frequency_days=frequency_days, last_completed=last_completed)

    def save(self) -> None:
        """
        Write every task back to the schedule file

        The file is written next to the target first and then moved into
        place, so an interrupted write never leaves a truncated schedule.

        Raises:
            StoreWriteError: on any filesystem failure
        """
        data = self.to_dict()
        tmp_path = self.path.with_name(self.path.name + '.tmp')

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path.is_file():
                tmp_path.unlink()
            raise StoreWriteError(f"Failed to write schedule file {self.path}: {e}") from e

        self.logger.info(f"Saved {len(self.tasks)} tasks to {self.path}")

    # ==================== Mutations ====================

    def add(self, name: str, frequency_days: int, initial_done: Optional[date] = None) -> Task:
        """
        Append a new task

        Args:
            name: Unique task name
            frequency_days: Target interval, at least 1 day
            initial_done: Completion date to start from, or None for "Never"

        Returns:
            The new task

        Raises:
            InvalidTaskName, InvalidFrequency, InvalidDate, DuplicateTask
        """
        name = (name or '').strip()
        if not name:
            raise InvalidTaskName(name)

        frequency_days = parse_frequency(frequency_days)
        if initial_done is not None:
            initial_done = _calendar_date(initial_done)

        if self.get(name) is not None:
            raise DuplicateTask(name)

        task = Task(name=name, frequency_days=frequency_days, last_completed=initial_done)
        self.tasks.append(task)
        self.logger.info(f"Added '{name}' every {frequency_days} days")
        return task

    def mark_done(self, task: Task, on: date) -> Task:
        """Record that task was completed on the given date"""
        on = _calendar_date(on)
        task.last_completed = on
        self.logger.info(f"Marked '{task.name}' done on {on.isoformat()}")
        return task

    def remove(self, name: str) -> Task:
        """Drop the task with exactly this name; remaining order is kept"""
        task = self.get(name)
        if task is None:
            raise TaskNotFound(name)

        self.tasks.remove(task)
        self.logger.info(f"Removed '{name}'")
        return task

    # ==================== Lookup ====================

    def get(self, name: str) -> Optional[Task]:
        for task in self.tasks:
            if task.name == name:
                return task
        return None

    def find(self, query: str) -> Task:
        """
        Resolve a partial name to exactly one task

        Strategy:
        1. Exact match (case-insensitive) wins outright
        2. Substring match (case-insensitive)
        3. Letters of the query in order within the name ("wtr plnts")

        The first strategy with any hits decides: one hit is the answer,
        several hits are ambiguous.

        Raises:
            TaskNotFound: if nothing matches
            AmbiguousTask: if several tasks match equally well
        """
        needle = (query or '').strip().lower()
        if not needle:
            raise TaskNotFound(query)

        task = self.get(query.strip())
        if task is not None:
            return task

        exact = [t for t in self.tasks if t.name.lower() == needle]
        if len(exact) == 1:
            return exact[0]

        for matcher in (_contains, _subsequence):
            hits = [t for t in self.tasks if matcher(needle, t.name.lower())]
            if len(hits) == 1:
                self.logger.debug(f"'{query}' resolved to '{hits[0].name}' ({matcher.__name__})")
                return hits[0]
            if hits:
                raise AmbiguousTask(query, [t.name for t in hits])

        raise TaskNotFound(query)

    def to_dict(self) -> Dict[str, Any]:
        return {'tasks': [task.to_dict() for task in self.tasks]}


def _calendar_date(value: Any) -> date:
    """Plain date for storage; a datetime keeps only its day"""
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise InvalidDate(value)
    return value


def _contains(needle: str, name: str) -> bool:
    return needle in name


def _subsequence(needle: str, name: str) -> bool:
    letters = iter(name)
    return all(ch in letters for ch in needle if not ch.isspace())
