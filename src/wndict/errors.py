"""
errors.py — Exception hierarchy for wndict runs.

Every fatal condition raised by the library derives from WndictError so the
CLI can report it with a single handler. Malformed data lines are not errors;
they degrade to an empty gloss (see definitions.py).
"""


class WndictError(Exception):
    """Base class for all fatal wndict errors."""


class ConfigError(WndictError):
    """Invalid filter options or configuration file."""


class InvalidDirectoryError(ConfigError):
    """A source or output directory is missing or not a directory."""


class SourceReadError(WndictError):
    """An index or data file could not be opened or read."""

    def __init__(self, path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Unable to read {path}: {cause}")


class NoWordsFoundError(WndictError):
    """The filter policy rejected every word."""

    def __init__(self, message: str = "No words found for given arguments!"):
        super().__init__(message)


class OutputWriteError(WndictError):
    """An output file could not be written."""

    def __init__(self, path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Unable to write {path}: {cause}")
