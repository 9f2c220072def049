"""
Shared fixtures for clockq tests
"""

from datetime import date
from pathlib import Path

import pytest

from chores.store import TaskStore

TODAY = date(2017, 10, 21)


class ScriptedConfirm:
    """Answers confirmation prompts from a fixed list and remembers the questions"""

    def __init__(self, *answers: bool):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answers.pop(0)


@pytest.fixture()
def today():
    return lambda: TODAY


@pytest.fixture()
def schedule_path(tmp_path: Path) -> Path:
    return tmp_path / 'schedule.yaml'


@pytest.fixture()
def store(schedule_path: Path) -> TaskStore:
    store = TaskStore(schedule_path)
    store.load()
    return store
