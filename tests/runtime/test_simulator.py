import pytest
from csim.cache.cache_config import validate_configuration
from csim.config import SimConfig
from csim.errors import ConfigurationError, MalformedTraceError
from csim.runtime.simulator import run, run_trace
from csim.runtime.stats import RunSummary
from csim.trace.record import AccessKind, AccessRecord


@pytest.fixture
def trace_file(tmp_path):
    path = tmp_path / "small.trace"
    path.write_text(
        "s 0x0 1\n"
        "s 0x0 1\n"
        "l 0x4 1\n"
        "l 0x0 1\n"
    )
    return path


def test_run_consumes_iterator():
    config = validate_configuration(1, 1, 4, "write-allocate", "write-back", "lru")
    records = iter([AccessRecord(AccessKind.LOAD, 0x0), AccessRecord(AccessKind.LOAD, 0x0)])

    summary = run(records, config)
    assert summary == RunSummary(total_loads=2, load_hits=1, load_misses=1, cycles=102)


def test_run_trace_from_file(trace_file):
    config = SimConfig(num_sets=1, blocks_per_set=1, block_size=4, trace=str(trace_file))
    summary = run_trace(config)

    assert summary == RunSummary(
        total_loads=2, total_stores=2,
        load_hits=0, load_misses=2,
        store_hits=1, store_misses=1,
        cycles=404,
    )


def test_run_trace_twice_is_identical(trace_file):
    config = SimConfig(num_sets=1, blocks_per_set=2, block_size=4,
                       write_policy="write-through", evict_policy="fifo", trace=str(trace_file))
    assert run_trace(config) == run_trace(config)


def test_run_trace_validates_before_reading(tmp_path):
    config = SimConfig(num_sets=3, trace=str(tmp_path / "missing.trace"))
    # Configuration error wins over the missing file
    with pytest.raises(ConfigurationError):
        run_trace(config)


def test_run_trace_strict(tmp_path):
    path = tmp_path / "bad.trace"
    path.write_text("l 0x0 1\nq 0x4 1\n")

    lenient = SimConfig(trace=str(path))
    assert run_trace(lenient).total_loads == 1

    strict = SimConfig(trace=str(path), strict_trace=True)
    with pytest.raises(MalformedTraceError):
        run_trace(strict)


def test_run_trace_uses_given_configuration(trace_file, monkeypatch):
    config = SimConfig(num_sets=1, blocks_per_set=1, block_size=4, trace=str(trace_file))
    cache_config = config.to_cache_configuration()

    def fail():
        raise AssertionError("configuration validated twice")

    monkeypatch.setattr(config, "to_cache_configuration", fail)
    assert run_trace(config, cache_config).cycles == 404
