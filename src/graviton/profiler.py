# MIT License (see LICENSE)
"""
Lightweight timing of simulation phases.

Session.step() wraps its probe, craft and goal phases in named sections
when a Profiler is attached.

Example:
    profiler = Profiler()
    session = Session(profiler=profiler)
    for _ in range(500):
        session.step()
    print(profiler.stats.summary())
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Raw timing samples (seconds) per section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def total(self, name: str) -> float:
        return sum(self.samples.get(name, ()))

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * sum(times) / len(times),
                "max_ms": 1e3 * max(times),
            }
        return out

    def reset(self) -> None:
        self.samples.clear()


class Profiler:
    """Collects ProfileStats through the section() context manager."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)


@contextmanager
def maybe_section(profiler: Profiler | None, name: str) -> Iterator[None]:
    """profiler.section(name) when a profiler is attached, else a no-op."""
    if profiler is None:
        yield
    else:
        with profiler.section(name):
            yield
