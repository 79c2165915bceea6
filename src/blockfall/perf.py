"""Frame timing statistics for the game loop."""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional


@dataclass
class PerfStat:
    """Aggregated timing information for a single section."""

    count: int = 0
    total: float = 0.0
    min_time: Optional[float] = None
    max_time: float = 0.0

    def add(self, elapsed: float) -> None:
        self.count += 1
        self.total += elapsed
        if self.min_time is None or elapsed < self.min_time:
            self.min_time = elapsed
        if elapsed > self.max_time:
            self.max_time = elapsed

    @property
    def average(self) -> float:
        """Return the average time in seconds."""

        return self.total / self.count if self.count else 0.0


class _Section:
    """Context manager that records a section's runtime."""

    __slots__ = ("_profiler", "_name", "_start")

    def __init__(self, profiler: "FrameProfiler", name: str) -> None:
        self._profiler = profiler
        self._name = name
        self._start = 0.0

    def __enter__(self) -> "_Section":
        self._start = self._profiler.clock()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._profiler.record(self._name, self._profiler.clock() - self._start)
        return False


class FrameProfiler:
    """Collect per-section timings and count frames that missed their budget."""

    def __init__(
        self,
        budget: float,
        *,
        clock: Optional[Callable[[], float]] = None,
        enabled: bool = True,
    ) -> None:
        self.budget = budget
        self.clock = clock or time.perf_counter
        self.enabled = enabled
        self.overruns = 0
        self._stats: Dict[str, PerfStat] = {}

    def section(self, name: str) -> _Section:
        """Return a context manager tracking ``name``'s runtime."""

        return _Section(self, name)

    def record(self, name: str, elapsed: float) -> None:
        if not self.enabled:
            return
        stat = self._stats.get(name)
        if stat is None:
            stat = PerfStat()
            self._stats[name] = stat
        stat.add(elapsed)

    def frame_done(self, elapsed: float) -> None:
        """Record a whole frame and note it if it overran the budget."""

        if not self.enabled:
            return
        self.record("frame", elapsed)
        if elapsed > self.budget:
            self.overruns += 1

    def snapshot(self) -> Dict[str, PerfStat]:
        """Return a copy of the accumulated statistics."""

        return {name: replace(stat) for name, stat in self._stats.items()}

    def summary(self) -> List[Dict[str, float | int | str]]:
        """Return one row per section, slowest total first."""

        items = sorted(self._stats.items(), key=lambda item: item[1].total, reverse=True)
        return [
            {
                "name": name,
                "count": stat.count,
                "total": stat.total,
                "average": stat.average,
                "min": stat.min_time if stat.min_time is not None else 0.0,
                "max": stat.max_time,
            }
            for name, stat in items
        ]

    def format_summary(self) -> str:
        if not self._stats:
            return "No timings recorded."
        parts = [
            f"{row['name']}: avg={row['average'] * 1000.0:.3f}ms, "
            f"max={row['max'] * 1000.0:.3f}ms, count={int(row['count'])}"
            for row in self.summary()
        ]
        parts.append(f"overruns={self.overruns}")
        return "; ".join(parts)


__all__ = ["PerfStat", "FrameProfiler"]
