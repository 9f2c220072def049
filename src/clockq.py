#!/usr/bin/env python3
"""
clockq

Keeps track of chores that need doing every so often:
1. Remembers each task with how often it should be done
2. Records when a task was last done (today, or back-dated)
3. Shows how long ago each task was done and whether it is overdue
"""

import sys
import yaml
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple
from datetime import date

from rich.console import Console
from rich.text import Text

from chores.errors import ClockqError, ConfigError
from chores.models import Task, parse_date, parse_frequency
from chores.store import TaskStore
from chores.due import DueStatus, status, urgency_key
from chores.table import TableLine, render_table

__version__ = '0.3.0'

DEFAULT_CONFIG_PATH = '~/.clockq'
DEFAULT_SCHEDULE_PATH = '~/.clockq_schedule'
DEFAULT_FREQUENCY_DAYS = 7

DEFAULT_CONFIG = {
    'schedule_file': DEFAULT_SCHEDULE_PATH,
    'log_level': 'WARNING',
    'color': True,
}


def ask_confirmation(prompt: str) -> bool:
    """Ask on stdin; only 'y' or 'yes' count as agreement"""
    try:
        answer = input(f"{prompt} ")
    except EOFError:
        return False
    return answer.strip().lower() in ('y', 'yes')


class Clockq:
    """
    Recurring task tracker

    One instance serves one command: it loads the schedule, applies at most
    one change, and saves before returning.
    """

    def __init__(
        self,
        schedule_path: Optional[str] = None,
        config_path: Optional[str] = None,
        today: Callable[[], date] = date.today,
        confirm: Callable[[str], bool] = ask_confirmation,
        verbose: bool = False
    ):
        """
        Args:
            schedule_path: Schedule file to use; without config_path the
                           dotfile is not read at all
            config_path: Config dotfile (default ~/.clockq, created if missing)
            today: Returns the current date
            confirm: Asks the user a yes/no question
            verbose: Log everything to stderr
        """
        self.logger = self._setup_logging()

        if schedule_path is None or config_path is not None:
            self.config = self._load_config(config_path)
        else:
            self.config = dict(DEFAULT_CONFIG)

        if schedule_path is None:
            schedule_path = self.config['schedule_file']
        else:
            self.config['schedule_file'] = schedule_path

        self._apply_log_level(logging.DEBUG if verbose else self.config['log_level'])

        self.today = today
        self.confirm = confirm
        self.store = TaskStore(schedule_path)
        self.store.load()

    def _setup_logging(self) -> logging.Logger:
        """Setup logging for the tracker"""
        logger = logging.getLogger("Clockq")

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - Clockq - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            logger.setLevel(logging.WARNING)

        return logger

    def _apply_log_level(self, level: Any) -> None:
        if isinstance(level, str):
            resolved = logging.getLevelName(level.upper())
            if not isinstance(resolved, int):
                self.logger.warning(f"Unknown log_level '{level}' in config, using WARNING")
                resolved = logging.WARNING
            level = resolved
        elif isinstance(level, bool) or not isinstance(level, int):
            raise ConfigError(f"'log_level' must be a level name such as WARNING, got {level!r}")
        self.logger.setLevel(level)

    def _load_config(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from the YAML dotfile

        The default dotfile is written with default values the first time
        clockq runs. An explicitly given path must already exist.
        """
        if config_path is None:
            path = Path(DEFAULT_CONFIG_PATH).expanduser()
            if not path.exists():
                self._write_default_config(path)
                return dict(DEFAULT_CONFIG)
        else:
            path = Path(config_path).expanduser()
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read config file {path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        config = dict(DEFAULT_CONFIG)
        config.update(loaded)

        if not isinstance(config['schedule_file'], str) or not config['schedule_file'].strip():
            raise ConfigError(f"'schedule_file' in {path} must be a path")

        level = config['log_level']
        if isinstance(level, bool) or not isinstance(level, (str, int)):
            raise ConfigError(f"'log_level' in {path} must be a level name such as WARNING")

        # YAML spells booleans true/false/yes/no; a quoted "false" is a string
        if not isinstance(config['color'], bool):
            raise ConfigError(f"'color' in {path} must be true or false")

        self.logger.debug(f"Loaded config from {path}")
        return config

    def _write_default_config(self, path: Path) -> None:
        try:
            with open(path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(DEFAULT_CONFIG, f, default_flow_style=False, sort_keys=False)
            self.logger.info(f"Created default config at {path}")
        except OSError as e:
            # Read-only home: carry on with defaults
            self.logger.warning(f"Could not create config file {path}: {e}")

    # ==================== Commands ====================

    def add_task(self, name: str, frequency: Any = DEFAULT_FREQUENCY_DAYS, done: bool = False) -> Task:
        """
        Start tracking a new task

        Args:
            name: Task name, must not already exist
            frequency: Days between completions
            done: Count the task as done today

        Returns:
            The new task
        """
        frequency_days = parse_frequency(frequency)
        initial_done = self.today() if done else None

        task = self.store.add(name, frequency_days, initial_done)
        self.store.save()
        return task

    def did_task(self, query: str, on: Optional[str] = None, yes: bool = False) -> Optional[Task]:
        """
        Mark the task matching query as done

        Args:
            query: Full or partial task name
            on: Completion date as YYYY-MM-DD (default: today)
            yes: Skip the confirmation prompt

        Returns:
            The updated task, or None if the user declined
        """
        when = parse_date(on) if on is not None else self.today()
        task = self.store.find(query)

        if not yes and not self.confirm(f"Mark task '{task.name}' as done on {when.isoformat()}? (y/N)"):
            self.logger.info(f"Not marking '{task.name}' done")
            return None

        self.store.mark_done(task, when)
        self.store.save()
        return task

    def remove_task(self, query: str, yes: bool = False) -> Optional[Task]:
        """Stop tracking the task matching query; None if the user declined"""
        task = self.store.find(query)

        if not yes and not self.confirm(f"Stop tracking task '{task.name}'? (y/N)"):
            self.logger.info(f"Not removing '{task.name}'")
            return None

        self.store.remove(task.name)
        self.store.save()
        return task

    # ==================== Reporting ====================

    def rows(self, sort: str = 'added') -> List[Tuple[Task, DueStatus]]:
        """
        Pair every task with its due status

        Args:
            sort: 'added' keeps insertion order, 'due' puts never-done and
                  most overdue tasks first

        Returns:
            List of (task, status) pairs
        """
        today = self.today()
        rows = [(task, status(task, today)) for task in self.store.tasks]

        if sort == 'due':
            rows.sort(key=lambda row: urgency_key(row[1]))

        return rows

    def table(self, sort: str = 'added') -> List[TableLine]:
        return render_table(self.rows(sort))


def print_table(console: Console, lines: List[TableLine], color: bool = True) -> None:
    for line in lines:
        style = line.style if color else None
        console.print(Text(line.text, style=style or ''), soft_wrap=True)


# ==================== CLI Interface ====================

def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog='clockq',
        description="clockq: track tasks which need doing regularly"
    )
    parser.add_argument(
        '--file', '-f',
        help='Schedule file to read and write (default: schedule_file from ~/.clockq)'
    )
    parser.add_argument(
        '--config',
        help='Path to config file (default: ~/.clockq; with --file, read only when given)'
    )
    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Print the table without colours'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log what clockq is doing to stderr'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='command')

    add = subparsers.add_parser('add', help='Add a task to track')
    add.add_argument('name', help='The name of the task to track')
    add.add_argument(
        '--frequency', '-f',
        default=str(DEFAULT_FREQUENCY_DAYS),
        help=f'How often the task should be done, in days (default: {DEFAULT_FREQUENCY_DAYS})'
    )
    add.add_argument(
        '--done',
        action='store_true',
        help='Count the task as done today'
    )

    did = subparsers.add_parser('did', help='Mark a task as done')
    did.add_argument('task', help='The task to mark done; partial names are matched')
    did.add_argument('--on', help='Date of completion, YYYY-MM-DD (default: today)')
    did.add_argument(
        '--yes', '-y',
        action='store_true',
        help='Skip the confirmation prompt'
    )

    remove = subparsers.add_parser('remove', help='Stop tracking a task')
    remove.add_argument('task', help='The task to remove; partial names are matched')
    remove.add_argument(
        '--yes', '-y',
        action='store_true',
        help='Skip the confirmation prompt'
    )

    show = subparsers.add_parser('list', help='Show all tasks (the default)')
    show.add_argument(
        '--sort',
        choices=['added', 'due'],
        default='added',
        help='Row order: as added, or most urgent first'
    )

    return parser


def main(
    argv: Optional[List[str]] = None,
    today: Callable[[], date] = date.today,
    confirm: Callable[[str], bool] = ask_confirmation
) -> int:
    """CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = logging.getLogger("Clockq")

    try:
        app = Clockq(
            schedule_path=args.file,
            config_path=args.config,
            today=today,
            confirm=confirm,
            verbose=args.verbose
        )

        if args.command == 'add':
            app.add_task(args.name, args.frequency, done=args.done)

        elif args.command == 'did':
            if app.did_task(args.task, on=args.on, yes=args.yes) is None:
                print("Cancelling", file=sys.stderr)

        elif args.command == 'remove':
            if app.remove_task(args.task, yes=args.yes) is None:
                print("Cancelling", file=sys.stderr)

    except ClockqError as e:
        logger.debug(f"{args.command or 'list'} failed", exc_info=True)
        print(f"clockq: error: {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        print("\nCancelling", file=sys.stderr)
        return 130

    color = app.config['color'] and not args.no_color
    console = Console(highlight=False, no_color=not color)
    print_table(console, app.table(sort=getattr(args, 'sort', 'added')), color=color)

    return 0


if __name__ == '__main__':
    sys.exit(main())
