#!/usr/bin/env python3

"""
Performance monitoring for the GFF coordinate remapper.

Each processing phase (building the mapping, reconciling features) records
how many items it handled, how long it took and the peak resident memory
seen while it ran. The pipeline polls check_memory_limit while streaming.
"""

import time
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional

import psutil

from ..core.exceptions import MemoryLimitError


@dataclass
class PhaseStats:
    """Work done in one processing phase."""
    name: str
    unit: str
    started: float
    finished: Optional[float] = None
    items: int = 0
    peak_memory_mb: float = 0.0

    @property
    def elapsed(self) -> float:
        end = self.finished if self.finished is not None else time.time()
        return end - self.started

    @property
    def rate(self) -> float:
        """Items per second."""
        elapsed = self.elapsed
        return self.items / elapsed if elapsed > 0 else 0.0

    def describe(self) -> str:
        return (f"{self.name}: {self.items:,} {self.unit} in {self.elapsed:.2f}s "
                f"({self.rate:,.0f} {self.unit}/s, peak {self.peak_memory_mb:.1f}MB)")


class PerformanceMonitor:
    """Phase timing and resident memory limit enforcement."""

    def __init__(self, memory_limit_mb: int = 4096, enabled: bool = True):
        self.memory_limit_mb = memory_limit_mb
        self.enabled = enabled
        self.phases: List[PhaseStats] = []
        self._current: Optional[PhaseStats] = None
        self._process = psutil.Process()

    def memory_mb(self) -> float:
        """Resident memory of this process in MB."""
        try:
            rss = self._process.memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            logging.warning(f"Could not read memory usage: {e}")
            return 0.0

        if self._current is not None:
            self._current.peak_memory_mb = max(self._current.peak_memory_mb, rss)
        return rss

    def check_memory_limit(self) -> None:
        """Raise MemoryLimitError when resident memory is above the limit."""
        if not self.enabled:
            return

        current = self.memory_mb()
        if current > self.memory_limit_mb:
            logging.warning(f"Memory usage {current:.1f}MB is above the "
                            f"{self.memory_limit_mb}MB limit")
            raise MemoryLimitError("Memory usage exceeded limit", current, self.memory_limit_mb)

    @contextmanager
    def phase(self, name: str, unit: str = "items") -> Iterator[PhaseStats]:
        """Time a phase; the caller sets items on the yielded stats."""
        stats = PhaseStats(name=name, unit=unit, started=time.time())
        self.phases.append(stats)
        self._current = stats
        self.memory_mb()
        try:
            yield stats
        finally:
            self.memory_mb()
            stats.finished = time.time()
            self._current = None
            logging.info(stats.describe())

    def log_report(self) -> None:
        """Log one line per phase plus the overall peak memory."""
        if not self.phases:
            return
        total = sum(stats.elapsed for stats in self.phases)
        peak = max(stats.peak_memory_mb for stats in self.phases)
        logging.info(f"Remapping took {total:.2f}s, peak memory {peak:.1f}MB")
        for stats in self.phases:
            logging.info(f"  {stats.describe()}")
