from __future__ import annotations
from dataclasses import dataclass
from itertools import product
from typing import List

from ..cache.cache_config import CacheConfiguration, CostModel
from ..cache.policy import WriteMissPolicy, WriteHitPolicy, EvictionPolicy
from ..errors import ConfigurationError
from ..trace.reader import open_trace, read_trace
from .simulator import run
from .stats import RunSummary


@dataclass(frozen=True)
class SweepResult:
    """One policy combination and the aggregates it produced."""
    config: CacheConfiguration
    summary: RunSummary

    @property
    def label(self) -> str:
        c = self.config
        return f"{c.write_miss}/{c.write_hit}/{c.eviction}"

    def to_row(self) -> dict:
        row = {
            "policy": self.label,
            "write_miss": self.config.write_miss.value,
            "write_hit": self.config.write_hit.value,
            "eviction": self.config.eviction.value,
        }
        row.update(self.summary.to_dict())
        return row


def legal_configurations(num_sets: int, lines_per_set: int, block_size: int,
                         cost: CostModel | None = None) -> List[CacheConfiguration]:
    """Every legal policy combination for one cache geometry."""
    configs = []
    for write_miss, write_hit, eviction in product(WriteMissPolicy, WriteHitPolicy, EvictionPolicy):
        try:
            configs.append(CacheConfiguration(num_sets, lines_per_set, block_size,
                                              write_miss, write_hit, eviction,
                                              cost if cost is not None else CostModel()))
        except ConfigurationError:
            if write_miss is WriteMissPolicy.NO_WRITE_ALLOCATE and write_hit is WriteHitPolicy.WRITE_BACK:
                continue
            raise
    return configs


def sweep(trace_path: str, num_sets: int, lines_per_set: int, block_size: int,
          cost: CostModel | None = None, strict: bool = False) -> List[SweepResult]:
    """Replays one trace file under each legal policy combination."""
    if trace_path == "-":
        raise ConfigurationError("A sweep re-reads its trace and needs a file, not stdin.")
    results = []
    for cache_config in legal_configurations(num_sets, lines_per_set, block_size, cost):
        with open_trace(trace_path) as stream:
            summary = run(read_trace(stream, strict=strict), cache_config)
        results.append(SweepResult(cache_config, summary))
    return results
