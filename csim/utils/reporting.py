from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, Any
from ..cache.cache_config import CacheConfiguration
from ..runtime.stats import RunSummary

REPORT_LINES = (
    ("Total loads", "total_loads"),
    ("Total stores", "total_stores"),
    ("Load hits", "load_hits"),
    ("Load misses", "load_misses"),
    ("Store hits", "store_hits"),
    ("Store misses", "store_misses"),
    ("Total cycles", "cycles"),
)


def _rate(part: int, whole: int) -> float:
    return part / whole if whole else 0.0


def format_report(summary: RunSummary) -> str:
    """The seven-line text report, one '<label>: <value>' per line."""
    return "".join(f"{label}: {getattr(summary, key)}\n" for label, key in REPORT_LINES)


def generate_report_json(summary: RunSummary, cache_config: CacheConfiguration) -> Dict[str, Any]:
    """Generates a JSON-compatible dictionary from the run aggregates."""
    accesses = summary.total_loads + summary.total_stores
    report_data = summary.to_dict()
    report_data["hit_rates"] = {
        "load": _rate(summary.load_hits, summary.total_loads),
        "store": _rate(summary.store_hits, summary.total_stores),
        "overall": _rate(summary.load_hits + summary.store_hits, accesses),
    }
    report_data["avg_cycles_per_access"] = _rate(summary.cycles, accesses)
    report_data["config"] = cache_config.to_dict()
    return report_data


def generate_report(summary: RunSummary, cache_config: CacheConfiguration, report_dir: str | None = None):
    """Prints the text report and, if asked, writes report.json."""
    print(format_report(summary), end="")

    if report_dir:
        output_dir = Path(report_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        with open(output_dir / "report.json", "w") as f:
            json.dump(generate_report_json(summary, cache_config), f, indent=4)
