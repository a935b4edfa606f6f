from __future__ import annotations
from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class RunSummary:
    """Final aggregates of one simulation run."""
    total_loads: int = 0
    total_stores: int = 0
    load_hits: int = 0
    load_misses: int = 0
    store_hits: int = 0
    store_misses: int = 0
    cycles: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


class RunStatistics:
    """Running totals and the logical clock of one simulation run."""

    def __init__(self):
        self._loads = [0, 0]   # [misses, hits]
        self._stores = [0, 0]
        self._cycles = 0
        self._time = 0

    @property
    def time_counter(self) -> int:
        return self._time

    @property
    def cycles(self) -> int:
        return self._cycles

    def tick(self) -> int:
        """Advances the logical clock by one access and returns the new stamp."""
        self._time += 1
        return self._time

    def record_load(self, hit: bool):
        self._loads[bool(hit)] += 1

    def record_store(self, hit: bool):
        self._stores[bool(hit)] += 1

    def add_cycles(self, cycles: int):
        if cycles < 0:
            raise ValueError(f"Cycle count must be non-negative, got {cycles}.")
        self._cycles += cycles

    def summary(self) -> RunSummary:
        load_misses, load_hits = self._loads
        store_misses, store_hits = self._stores
        return RunSummary(
            total_loads=load_hits + load_misses,
            total_stores=store_hits + store_misses,
            load_hits=load_hits,
            load_misses=load_misses,
            store_hits=store_hits,
            store_misses=store_misses,
            cycles=self._cycles,
        )
