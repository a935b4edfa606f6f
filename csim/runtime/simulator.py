from __future__ import annotations
from typing import Iterable

from ..cache.cache_config import CacheConfiguration
from ..config import SimConfig
from ..trace.reader import open_trace, read_trace
from ..trace.record import AccessRecord
from ..utils.logging import get_logger
from .engine import CacheEngine
from .stats import RunSummary

logger = get_logger(__name__)


def run(records: Iterable[AccessRecord], cache_config: CacheConfiguration) -> RunSummary:
    """
    Replays a stream of access records against a fresh cache.

    This is the main entry point for the simulation. The records are consumed
    one at a time and never retained.
    """
    logger.info("Simulating %s", cache_config.describe())
    engine = CacheEngine(cache_config)
    summary = engine.run(records)
    logger.info("Simulation finished after %d accesses, %d cycles",
                engine.stats.time_counter, summary.cycles)
    return summary


def run_trace(config: SimConfig, cache_config: CacheConfiguration | None = None) -> RunSummary:
    """Simulates the configured trace, validating the configuration unless given one."""
    if cache_config is None:
        cache_config = config.to_cache_configuration()
    with open_trace(config.trace) as stream:
        return run(read_trace(stream, strict=config.strict_trace), cache_config)
