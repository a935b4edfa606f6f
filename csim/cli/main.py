from __future__ import annotations
import argparse
import sys
from ..cache.policy import WriteMissPolicy, WriteHitPolicy, EvictionPolicy
from ..config import SimConfig
from ..errors import CacheSimError
from ..runtime.simulator import run_trace
from ..runtime.sweep import sweep
from ..utils.logging import get_logger, set_log_level
from ..utils.reporting import generate_report
from ..utils import viz

logger = get_logger(__name__)


class _Parser(argparse.ArgumentParser):
    """Argument errors exit with status 1, like configuration errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _add_geometry_args(p):
    p.add_argument("num_sets", type=int, metavar="numSets", help="Number of sets (power of 2)")
    p.add_argument("blocks_per_set", type=int, metavar="blocksPerSet", help="Lines per set (power of 2)")
    p.add_argument("block_size", type=int, metavar="blockSize", help="Bytes per block (power of 2, >= 4)")


def build_parser():
    p = _Parser(
        prog="csim",
        description="Trace-driven set-associative cache simulator. Reads '<op> <hex-address> <size>' lines.",
    )
    _add_geometry_args(p)
    p.add_argument("write_alloc", metavar="writeAllocPolicy",
                   help=f"One of: {', '.join(m.value for m in WriteMissPolicy)}")
    p.add_argument("write_policy", metavar="writePolicy",
                   help=f"One of: {', '.join(m.value for m in WriteHitPolicy)}")
    p.add_argument("evict_policy", metavar="evictPolicy",
                   help=f"One of: {', '.join(m.value for m in EvictionPolicy)}")

    p.add_argument("-c", "--config", type=str, default=None,
                   help="YAML file with cost model and reporting settings")
    p.add_argument("--trace", type=str, default=None,
                   help="Trace file to read instead of standard input")
    p.add_argument("--report", type=str, default=None, dest="report_dir",
                   help="Directory to save report.json")
    p.add_argument("--strict", action="store_true", default=None, dest="strict_trace",
                   help="Fail on unknown operations or malformed trace lines")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Log evictions and run progress to stderr")
    return p


def build_sweep_parser():
    p = _Parser(
        prog="csim-sweep",
        description="Replay one trace under every legal write/eviction policy combination.",
    )
    _add_geometry_args(p)
    p.add_argument("trace", help="Trace file")
    p.add_argument("-c", "--config", type=str, default=None,
                   help="YAML file with cost model settings")
    p.add_argument("--html", type=str, default=None,
                   help="Path to save an HTML bar chart of total cycles")
    p.add_argument("--strict", action="store_true", default=None, dest="strict_trace",
                   help="Fail on unknown operations or malformed trace lines")
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = SimConfig.from_args(args)
        set_log_level("DEBUG" if args.verbose else config.log_level)
        cache_config = config.to_cache_configuration()
        summary = run_trace(config, cache_config)
    except CacheSimError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: cannot read trace: {e}", file=sys.stderr)
        return 1

    generate_report(summary, cache_config, config.report_dir)
    return 0


def sweep_main(argv=None) -> int:
    parser = build_sweep_parser()
    args = parser.parse_args(argv)

    try:
        config = SimConfig.from_args(args)
        set_log_level(config.log_level)
        results = sweep(config.trace, config.num_sets, config.blocks_per_set, config.block_size,
                        cost=config.cost_model(), strict=bool(config.strict_trace))
    except CacheSimError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: cannot read trace: {e}", file=sys.stderr)
        return 1

    rows = [result.to_row() for result in results]
    print(viz.export_sweep_ascii(rows), end="")
    if args.html:
        viz.export_sweep_chart(rows, args.html)
        logger.info("Sweep chart written to %s", args.html)
    return 0


if __name__ == "__main__":
    sys.exit(main())
