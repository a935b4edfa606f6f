from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class AccessKind(str, Enum):
    """Operation codes that can appear in a trace."""
    LOAD = "l"
    STORE = "s"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AccessRecord:
    """One memory access read from a trace."""
    kind: AccessKind
    address: int
    size: int = 0  # Carried through from the trace, never interpreted
