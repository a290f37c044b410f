"""Exception types raised by hyptrack."""


class HyptrackError(Exception):
    """Base class for hyptrack errors."""


class RecordError(HyptrackError, ValueError):
    """Raised when an input record cannot be turned into a model object."""

    def __init__(self, message: str, record: dict | None = None):
        self.record = record
        super().__init__(message)


class ConfigError(HyptrackError, ValueError):
    """Raised when configuration values are invalid."""


__all__ = ["HyptrackError", "RecordError", "ConfigError"]
