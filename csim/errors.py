from __future__ import annotations


class CacheSimError(Exception):
    """Base class for all errors raised by the cache simulator."""


class ConfigurationError(CacheSimError, ValueError):
    """Illegal cache geometry or policy combination."""


class MalformedTraceError(CacheSimError, ValueError):
    """A trace line could not be turned into an access record."""

    def __init__(self, message: str, line_number: int | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
