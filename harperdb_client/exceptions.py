"""HarperDB client exceptions."""


class HarperDBError(Exception):
    """Base exception for HarperDB client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(HarperDBError, ValueError):
    """Client was constructed with an invalid set of connection options."""

    pass
