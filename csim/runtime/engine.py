from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List

from ..cache.address import AddressDecoder
from ..cache.cache_config import CacheConfiguration
from ..cache.cache_set import CacheSet, LookupResult
from ..cache.policy import WriteMissPolicy, WriteHitPolicy, EvictionPolicy
from ..trace.record import AccessKind, AccessRecord
from ..utils.logging import get_logger
from .stats import RunStatistics, RunSummary

logger = get_logger(__name__)


@dataclass(frozen=True)
class AccessOutcome:
    """What a single access did to the cache and what it cost."""
    kind: AccessKind
    hit: bool
    set_index: int
    slot: int | None
    cycles: int
    evicted: bool = False
    written_back: bool = False


class CacheEngine:
    """
    A set-associative cache driven one access at a time.

    Owns the cache sets and the run statistics; every access is looked up,
    decided, applied and accounted before the next one starts. Instances are
    independent, so two engines can replay traces side by side.
    """

    def __init__(self, config: CacheConfiguration):
        self.config = config
        self.decoder = AddressDecoder(config.block_size, config.num_sets)
        self.sets: List[CacheSet] = [CacheSet(config.lines_per_set) for _ in range(config.num_sets)]
        self.stats = RunStatistics()

        cost = config.cost
        self._hit_cycles = cost.hit_cycles
        self._memory_cycles = cost.memory_cycles
        self._block_cycles = cost.block_transfer_cycles(config.block_size)

    def access(self, kind: AccessKind, address: int) -> AccessOutcome:
        set_index, tag = self.decoder.decode(address)
        cache_set = self.sets[set_index]
        found = cache_set.lookup(tag)
        now = self.stats.tick()

        if kind is AccessKind.LOAD:
            outcome = self._load(cache_set, set_index, tag, found, now)
            self.stats.record_load(outcome.hit)
        elif kind is AccessKind.STORE:
            outcome = self._store(cache_set, set_index, tag, found, now)
            self.stats.record_store(outcome.hit)
        else:
            raise ValueError(f"Unsupported access kind: {kind!r}")

        self.stats.add_cycles(outcome.cycles)
        return outcome

    def run(self, records: Iterable[AccessRecord]) -> RunSummary:
        """Replays every record in order and returns the aggregates."""
        for record in records:
            self.access(record.kind, record.address)
        return self.summary()

    def summary(self) -> RunSummary:
        return self.stats.summary()

    def _load(self, cache_set: CacheSet, set_index: int, tag: int,
              found: LookupResult, now: int) -> AccessOutcome:
        if found.is_hit:
            self._touch_on_hit(cache_set, found.hit, now)
            return AccessOutcome(AccessKind.LOAD, True, set_index, found.hit, self._hit_cycles)

        # Fetch the block, then one cycle to place it in the cache
        cycles = self._block_cycles + self._hit_cycles
        slot, evicted, flush_cycles = self._allocate(cache_set, set_index, tag, found, now)
        return AccessOutcome(AccessKind.LOAD, False, set_index, slot, cycles + flush_cycles,
                             evicted=evicted, written_back=flush_cycles > 0)

    def _store(self, cache_set: CacheSet, set_index: int, tag: int,
               found: LookupResult, now: int) -> AccessOutcome:
        if found.is_hit:
            cycles = self._write_into(cache_set[found.hit])
            self._touch_on_hit(cache_set, found.hit, now)
            return AccessOutcome(AccessKind.STORE, True, set_index, found.hit, cycles)

        write_miss = self.config.write_miss
        if write_miss is WriteMissPolicy.NO_WRITE_ALLOCATE:
            # Straight to memory, the cache is left alone
            return AccessOutcome(AccessKind.STORE, False, set_index, None, self._memory_cycles)
        elif write_miss is WriteMissPolicy.WRITE_ALLOCATE:
            cycles = self._block_cycles
            slot, evicted, flush_cycles = self._allocate(cache_set, set_index, tag, found, now)
            cycles += flush_cycles + self._write_into(cache_set[slot])
            return AccessOutcome(AccessKind.STORE, False, set_index, slot, cycles,
                                 evicted=evicted, written_back=flush_cycles > 0)
        raise ValueError(f"Unsupported write-miss policy: {write_miss!r}")

    def _write_into(self, line) -> int:
        """Applies a store to a resident line and returns its cost."""
        write_hit = self.config.write_hit
        if write_hit is WriteHitPolicy.WRITE_BACK:
            line.dirty = True
            return self._hit_cycles
        elif write_hit is WriteHitPolicy.WRITE_THROUGH:
            return self._hit_cycles + self._memory_cycles
        raise ValueError(f"Unsupported write-hit policy: {write_hit!r}")

    def _touch_on_hit(self, cache_set: CacheSet, slot: int, now: int):
        eviction = self.config.eviction
        if eviction is EvictionPolicy.LRU:
            cache_set.touch(slot, now)
        elif eviction is EvictionPolicy.FIFO:
            pass  # Insertion order only
        else:
            raise ValueError(f"Unsupported eviction policy: {eviction!r}")

    def _allocate(self, cache_set: CacheSet, set_index: int, tag: int,
                  found: LookupResult, now: int) -> tuple[int, bool, int]:
        """
        Picks the fill target for a miss and installs the new tag there.

        Returns (slot, evicted, flush_cycles). A dirty victim under write-back
        is charged a full block transfer before it is overwritten.
        """
        slot = found.fill_target
        victim = cache_set[slot]
        evicted = found.empty_slot is None and victim.valid
        flush_cycles = 0
        if found.empty_slot is None and self.config.write_back and victim.dirty:
            flush_cycles = self._block_cycles

        if evicted:
            logger.debug(
                "set %d: evicting block 0x%x from slot %d%s",
                set_index, self.decoder.reconstruct_address(victim.tag, set_index), slot,
                " (write-back)" if flush_cycles else "",
            )

        cache_set.fill(slot, tag, now)
        return slot, evicted, flush_cycles
