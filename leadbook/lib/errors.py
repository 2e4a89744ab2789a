"""
Error taxonomy for leadbook.

Every error carries enough context (counts, index, path) for the CLI to
print a useful message. None of them are retried.
"""

from pathlib import Path


class LeadError(Exception):
    """Base class for all leadbook errors."""
    pass


class NotFound(LeadError):
    """Unknown company, or a todo/wait index past the end."""
    pass


class Ambiguous(LeadError):
    """Company has several positions and none was specified."""

    def __init__(self, company, count: int):
        self.company = company
        self.count = count
        super().__init__(
            f"'{company}' has {count} positions, specify one with --position (0-{count - 1})"
        )


class OutOfRange(LeadError):
    """Explicit position index exceeds the number of positions."""

    def __init__(self, company, count: int, index: int):
        self.company = company
        self.count = count
        self.index = index
        super().__init__(
            f"'{company}' has {count} position(s), index {index} is out of range"
        )


class PersistenceFailure(LeadError):
    """Reading, parsing or writing a store document failed."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ConfigError(LeadError):
    """Bad configuration or an unparseable command-line value."""
    pass
