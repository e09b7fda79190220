#!/usr/bin/env python3
"""
Fluxivity Performance Benchmarks

Measures the core operations of the reactive runtime and prints the results as
a rich table. Each benchmark scales its workload until one run takes at least
TIME_LIMIT_SECONDS, then reports the largest workload and its throughput.

Usage:
    python scripts/benchmark.py              # Run all benchmarks
    python scripts/benchmark.py --config     # Show benchmark configuration
    python scripts/benchmark.py --only chain # Run benchmarks whose name matches

Requires the ``benchmark`` extra (rich).
"""

import argparse
import sys
import time
from dataclasses import dataclass
from typing import Callable, Dict, List

# Add the project root to the Python path
sys.path.insert(0, ".")

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fluxivity import Computed, Reactive, memoize

# Configuration constants - adjust these to change benchmark behavior
TIME_LIMIT_SECONDS = 0.5  # Target duration of the measured run
STARTING_N = 10  # Starting workload size
SCALE_FACTOR = 1.5  # How much to multiply N by each iteration
MAX_N = 2_000_000  # Safety limit


@dataclass
class BenchmarkResult:
    """Throughput of one benchmark at its largest workload."""

    name: str
    max_n: int
    elapsed: float

    @property
    def operations_per_second(self) -> float:
        return self.max_n / self.elapsed if self.elapsed > 0 else 0.0

    @property
    def latency_us(self) -> float:
        return self.elapsed / max(self.max_n, 1) * 1e6


def run_adaptive(name: str, operation: Callable[[int], None]) -> BenchmarkResult:
    """Grow ``n`` until ``operation(n)`` takes TIME_LIMIT_SECONDS."""
    n = STARTING_N
    while True:
        start = time.perf_counter()
        operation(n)
        elapsed = time.perf_counter() - start

        if elapsed >= TIME_LIMIT_SECONDS or n >= MAX_N:
            return BenchmarkResult(name=name, max_n=n, elapsed=elapsed)
        n = int(n * SCALE_FACTOR) + 1


def bench_creation(n: int) -> None:
    cells = [Reactive(i) for i in range(n)]
    for cell in cells:
        cell.dispose()


def bench_updates(n: int) -> None:
    cell = Reactive(0)
    for i in range(1, n + 1):
        cell.value = i


def bench_chain(n: int) -> None:
    head = Reactive(0)
    current = head
    links = []
    for _ in range(n):
        current = Computed([current], lambda s: s[0].value + 1)
        links.append(current)
    head.value = 1
    for link in links:
        link.dispose()


def bench_fanout(n: int) -> None:
    base = Reactive(0)
    dependents = [Computed([base], lambda s, i=i: s[0].value + i) for i in range(n)]
    base.value = 1
    for dependent in dependents:
        dependent.dispose()


def bench_batched_burst(n: int) -> None:
    cell = Reactive(0)
    received = []
    cell.subscribe(received.append)
    with cell.batch():
        for i in range(1, n + 1):
            cell.value = i


def bench_plain_reads(n: int) -> None:
    a, b = Reactive(1), Reactive(2)
    total = Computed([a, b], lambda s: s[0].value + s[1].value)
    for _ in range(n):
        total.value


def bench_memoized_reads(n: int) -> None:
    a, b = Reactive(1), Reactive(2)
    total = memoize(Computed([a, b], lambda s: s[0].value + s[1].value), cache_size=16)
    for _ in range(n):
        total.value


BENCHMARKS: Dict[str, Callable[[int], None]] = {
    "Reactive creation": bench_creation,
    "Reactive update": bench_updates,
    "Chain propagation": bench_chain,
    "Fan-out propagation": bench_fanout,
    "Batched burst": bench_batched_burst,
    "Computed read": bench_plain_reads,
    "Memoized read": bench_memoized_reads,
}


def print_config(console: Console) -> None:
    console.print(
        Panel(
            f"time limit: {TIME_LIMIT_SECONDS}s\n"
            f"starting n: {STARTING_N}\n"
            f"scale factor: {SCALE_FACTOR}\n"
            f"max n: {MAX_N}",
            title="Benchmark configuration",
            border_style="blue",
        )
    )


def render_results(console: Console, results: List[BenchmarkResult]) -> None:
    table = Table(title="Fluxivity Benchmark Results")
    table.add_column("Benchmark", style="cyan", no_wrap=True)
    table.add_column("Max Workload", style="magenta", justify="right")
    table.add_column("Ops/sec", style="green", justify="right")
    table.add_column("Latency", style="yellow", justify="right")

    for result in results:
        table.add_row(
            result.name,
            f"{result.max_n:,}",
            f"{result.operations_per_second:,.0f}",
            f"{result.latency_us:.2f} µs",
        )

    console.print()
    console.print(table)


def main():
    """Main entry point for the benchmark script."""
    parser = argparse.ArgumentParser(description="Fluxivity Performance Benchmarks")
    parser.add_argument(
        "--config", action="store_true", help="Show current benchmark configuration"
    )
    parser.add_argument(
        "--only", help="Run only benchmarks whose name contains this text"
    )
    args = parser.parse_args()

    console = Console()
    if args.config:
        print_config(console)
        return

    results = []
    start = time.time()
    for name, operation in BENCHMARKS.items():
        if args.only and args.only.lower() not in name.lower():
            continue
        console.print(f"[yellow]Running {name}...[/yellow]")
        results.append(run_adaptive(name, operation))

    render_results(console, results)
    console.print(f"[dim]Benchmark completed in {time.time() - start:.2f} seconds[/dim]")


if __name__ == "__main__":
    main()
