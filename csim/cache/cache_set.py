from __future__ import annotations
from dataclasses import dataclass
from typing import List, NamedTuple


@dataclass
class CacheLine:
    """Represents a single line in a cache set."""
    valid: bool = False
    dirty: bool = False
    tag: int = 0
    recency: int = 0


class LookupResult(NamedTuple):
    """What one scan of a set found."""
    hit: int | None
    empty_slot: int | None
    eviction_candidate: int

    @property
    def is_hit(self) -> bool:
        return self.hit is not None

    @property
    def fill_target(self) -> int:
        """The slot a miss fills: the first empty line, else the eviction candidate."""
        return self.empty_slot if self.empty_slot is not None else self.eviction_candidate


class CacheSet:
    """A fixed number of line slots; slot order only breaks eviction ties."""

    def __init__(self, associativity: int):
        self.lines: List[CacheLine] = [CacheLine() for _ in range(associativity)]

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, slot: int) -> CacheLine:
        return self.lines[slot]

    def lookup(self, tag: int) -> LookupResult:
        """
        Scans the set once for a tag.

        Tracks the first invalid slot and the slot with the oldest recency
        stamp (lowest index on ties) while scanning, and stops at the first
        valid line whose tag matches.
        """
        empty_slot = None
        eviction_candidate = 0
        oldest = None
        for i, line in enumerate(self.lines):
            if line.valid and line.tag == tag:
                return LookupResult(i, empty_slot, eviction_candidate)
            if not line.valid and empty_slot is None:
                empty_slot = i
            if oldest is None or line.recency < oldest:
                oldest = line.recency
                eviction_candidate = i
        return LookupResult(None, empty_slot, eviction_candidate)

    def fill(self, slot: int, tag: int, stamp: int, dirty: bool = False) -> CacheLine:
        """Overwrites a slot with a freshly fetched block."""
        line = self.lines[slot]
        line.valid = True
        line.tag = tag
        line.recency = stamp
        line.dirty = dirty
        return line

    def touch(self, slot: int, stamp: int):
        self.lines[slot].recency = stamp
