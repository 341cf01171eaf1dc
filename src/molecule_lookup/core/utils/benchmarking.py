# src/molecule_lookup/core/utils/benchmarking.py

import time
import logging
from typing import Dict, List, Optional
from contextlib import contextmanager
from dataclasses import dataclass, field
from statistics import mean

logger = logging.getLogger(__name__)


@dataclass
class Timer:
    """Context manager measuring wall time of a validation or search run."""

    name: str
    start_time: float = field(default=0.0)
    end_time: float = field(default=0.0)

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        self.end_time = 0.0
        return self

    def __exit__(self, *args) -> None:
        self.end_time = time.perf_counter()
        logger.debug(f"{self.name} took {self.elapsed_ms():.2f} ms")

    def elapsed(self) -> float:
        """Elapsed seconds, still running if the block has not exited."""
        if self.end_time == 0.0:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    def elapsed_ms(self) -> float:
        return self.elapsed() * 1000.0


@dataclass
class TimingStats:
    """Timings for one named step, e.g. one validation handler."""

    name: str
    times: List[float] = field(default_factory=list)
    items_processed: int = 0

    def add_timing(self, elapsed: float, items: int = 0) -> None:
        """Record a measurement.

        Args:
            elapsed: Time taken in seconds
            items: Number of molecules handled (optional)
        """
        self.times.append(elapsed)
        self.items_processed += items

    @property
    def count(self) -> int:
        return len(self.times)

    @property
    def total_time(self) -> float:
        return sum(self.times)

    @property
    def avg_time(self) -> float:
        return mean(self.times) if self.times else 0.0

    @property
    def throughput(self) -> float:
        """Molecules per second."""
        if self.total_time > 0 and self.items_processed > 0:
            return self.items_processed / self.total_time
        return 0.0

    def __str__(self) -> str:
        if not self.times:
            return f"{self.name}: No timing data"

        stats = [
            f"Total: {self.total_time:.3f}s",
            f"Count: {self.count}",
            f"Avg: {self.avg_time * 1000:.2f}ms",
        ]
        if self.throughput > 0:
            stats.append(f"Throughput: {self.throughput:.0f} mol/s")

        return f"{self.name}: " + ", ".join(stats)


class PerformanceStats:
    """Collects timings per step and formats a report."""

    def __init__(self) -> None:
        self.stats: Dict[str, TimingStats] = {}

    def get_stats(self, name: str) -> TimingStats:
        if name not in self.stats:
            self.stats[name] = TimingStats(name=name)
        return self.stats[name]

    def add_timing(self, name: str, elapsed: float, items: int = 0) -> None:
        self.get_stats(name).add_timing(elapsed, items)

    def report(self) -> str:
        if not self.stats:
            return "No performance data collected"
        return "\n".join(str(self.stats[name]) for name in sorted(self.stats))


@contextmanager
def timer(name: str, stats: Optional[PerformanceStats] = None, items: int = 0):
    """Time a block, adding the measurement to ``stats`` when given.

    Args:
        name: Name of the step being timed
        stats: Optional collector
        items: Number of molecules handled in the block
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if stats is not None:
            stats.add_timing(name, elapsed, items)
