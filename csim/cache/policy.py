from __future__ import annotations
from enum import Enum

from ..errors import ConfigurationError


class _FlagEnum(str, Enum):
    """A policy flag spelled on the command line the same way as its value."""

    @classmethod
    def parse(cls, value):
        """Accepts an enum member or its command-line spelling."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ConfigurationError(
                f"Unknown {cls.__name__} '{value}' (expected one of: {choices})"
            ) from None

    def __str__(self) -> str:
        return self.value


class WriteMissPolicy(_FlagEnum):
    """What a store miss does with the missing block."""
    WRITE_ALLOCATE = "write-allocate"
    NO_WRITE_ALLOCATE = "no-write-allocate"


class WriteHitPolicy(_FlagEnum):
    """When a store reaches backing memory."""
    WRITE_THROUGH = "write-through"
    WRITE_BACK = "write-back"


class EvictionPolicy(_FlagEnum):
    """How lines are ranked for replacement once a set is full."""
    LRU = "lru"
    FIFO = "fifo"
