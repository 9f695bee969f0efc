"""Benchmark: command-style authorization latency.

Measures per-call latency of Ability.allows_execution_of() across a mix of
command names that match and do not match, reporting p99.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cani.cleaners.subject_cleaner import SubjectCleaner
from cani.permissions.ability import Ability

_ITERATIONS: int = 2_000

_COMMANDS: list[str] = [
    "RemoveInvoices",
    "ArchiveInvoice",
    "ListCustomers",
    "ModifyBill",
    "ShipOrder",
]


def _make_ability() -> Ability:
    clerk = Ability("clerk", subject_cleaner=SubjectCleaner(aliases={"invoice": ["bill"]}))
    clerk.allow("view", "customer")
    clerk.allow("edit", "invoice")
    clerk.allow("delete", "invoice")
    return clerk


def bench_command_latency() -> dict[str, object]:
    """Benchmark Ability.allows_execution_of() latency.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms.
    """
    clerk = _make_ability()
    latencies: list[float] = []

    for index in range(_ITERATIONS):
        command = _COMMANDS[index % len(_COMMANDS)]
        start = time.perf_counter()
        clerk.allows_execution_of(command)
        latencies.append(time.perf_counter() - start)

    total = sum(latencies)
    latencies.sort()
    p99 = latencies[int(len(latencies) * 0.99) - 1]

    result: dict[str, object] = {
        "operation": "command_authorization_latency",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1) if total > 0 else 0.0,
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
        "p99_latency_ms": round(p99 * 1000, 4),
    }
    print(
        f"[bench_command_latency] {result['operation']}: "
        f"avg {result['avg_latency_ms']:.4f} ms  p99 {result['p99_latency_ms']:.4f} ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_command_latency()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "command_latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
