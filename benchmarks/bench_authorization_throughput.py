"""Benchmark: Permission.authorizes throughput in checks per second.

Measures how many Ability.authorizes() calls complete per second for a
role with several permissions, a subject predicate and a capability flag
on the subject.
"""
from __future__ import annotations

import json
import sys
import time
from dataclasses import dataclass
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cani.permissions.ability import Ability

_ITERATIONS: int = 10_000


@dataclass
class Invoice:
    locked: bool = False
    can_edit: bool = True


def _make_ability() -> Ability:
    """Build a realistic clerk role for benchmarking."""
    clerk = Ability("clerk")
    clerk.allow("view", "customer")
    clerk.allow("create", "payment")
    clerk.allow("view", "invoice")
    clerk.allow("edit", "invoice").when(lambda invoice: not invoice.locked)
    return clerk


def bench_authorization_throughput() -> dict[str, object]:
    """Benchmark Ability.authorizes() throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms.
    """
    clerk = _make_ability()
    invoice = Invoice()

    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        clerk.authorizes("update", invoice)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "authorization_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
        "p99_latency_ms": 0.0,
    }
    print(
        f"[bench_authorization_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_authorization_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "authorization_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
