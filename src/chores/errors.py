"""
Error taxonomy for clockq

Every failure the CLI can report derives from ClockqError and carries the
process exit code it maps to.
"""


class ClockqError(Exception):
    """Base class for all clockq failures"""
    exit_code = 1


class TaskError(ClockqError):
    """Invalid user input or a task lookup that cannot be satisfied"""
    exit_code = 1


class DuplicateTask(TaskError):
    def __init__(self, name: str):
        super().__init__(f"Task already exists: '{name}'")
        self.name = name


class TaskNotFound(TaskError):
    def __init__(self, query: str):
        super().__init__(f"No task matching '{query}'")
        self.query = query


class AmbiguousTask(TaskError):
    def __init__(self, query: str, candidates):
        names = ', '.join(f"'{c}'" for c in candidates)
        super().__init__(f"'{query}' matches more than one task: {names}")
        self.query = query
        self.candidates = list(candidates)


class InvalidFrequency(TaskError):
    def __init__(self, value):
        super().__init__(f"Frequency must be a whole number of days >= 1, got '{value}'")
        self.value = value


class InvalidDate(TaskError):
    def __init__(self, value):
        super().__init__(f"Invalid date '{value}', expected YYYY-MM-DD")
        self.value = value


class InvalidTaskName(TaskError):
    def __init__(self, value):
        super().__init__("Task name must not be empty")
        self.value = value


class StoreError(ClockqError):
    """The schedule or config file could not be read or written"""
    exit_code = 3


class StoreCorrupt(StoreError):
    pass


class StoreWriteError(StoreError):
    pass


class ConfigError(StoreError):
    pass
