# MIT License (see LICENSE)
"""
Field registry: the set of active field sources for one session.

The registry is an explicit object owned by the session and passed to
every body and to the predictor. Whoever owns a source's lifetime (a dock,
a level loader, a test) calls register/unregister; the registry never
creates or destroys sources itself.

Sources are bucketed by kind, in the fixed order of FIELD_KINDS, so the
summation order is deterministic for a given registration history.
"""
from __future__ import annotations
from typing import Iterator

import numpy as np

from ..fields import FIELD_KINDS, FieldSource, GravityWell, field_acceleration
from ..util import f64, zero2


class FieldRegistry:
    """
    Per-kind buckets of registered field sources.

    Membership is by identity: registering the same object twice is a
    no-op, while two equal-looking sources are two entries.

    Example:
        registry = FieldRegistry()
        well = GravityWell(position=(0, 0), S=12)
        registry.register(well)
        a = registry.acceleration_at((3, 0), (0, 0), 0.0)
    """

    def __init__(self) -> None:
        self._buckets: dict[type, list[FieldSource]] = {kind: [] for kind in FIELD_KINDS}

    def _bucket(self, source: FieldSource) -> list[FieldSource]:
        try:
            return self._buckets[type(source)]
        except KeyError:
            raise TypeError(f"Unknown field source type: {type(source)}") from None

    def register(self, source: FieldSource) -> None:
        """Add a source to its kind bucket. Idempotent."""
        bucket = self._bucket(source)
        if not any(s is source for s in bucket):
            bucket.append(source)

    def unregister(self, source: FieldSource) -> None:
        """Remove a source if present. Idempotent."""
        bucket = self._buckets.get(type(source))
        if bucket is None:
            return
        for i, s in enumerate(bucket):
            if s is source:
                del bucket[i]
                return

    def clear(self) -> None:
        """Drop every registration (level reset)."""
        for bucket in self._buckets.values():
            bucket.clear()

    def acceleration_at(self, position, velocity=None, time: float = 0.0) -> np.ndarray:
        """
        Net acceleration from every enabled source.

        Args:
            position: Sample point [x, y].
            velocity: Sample velocity [vx, vy]; only velocity-dependent
                      sources (vortex) read it. None means zero.
            time: Simulation time. Accepted for time-varying fields; no
                  current source reads it.

        Returns:
            Sum of the individual accelerations; zeros(2) when nothing
            is registered or everything is disabled.
        """
        x = f64(position)
        v = zero2() if velocity is None else f64(velocity)
        a = zero2()
        for bucket in self._buckets.values():
            for src in bucket:
                if src.enabled:
                    a += field_acceleration(src, x, v)
        return a

    def sources(self, kind: type | None = None) -> list[FieldSource]:
        """Registered sources, optionally restricted to one kind."""
        if kind is not None:
            return list(self._buckets.get(kind, ()))
        return list(self)

    def attractors(self) -> list[GravityWell]:
        """Enabled wells with positive strength (lethal on contact)."""
        return [w for w in self._buckets[GravityWell] if w.enabled and w.is_attractor]

    def snapshot(self) -> tuple[FieldSource, ...]:
        """Immutable view of the current membership, in summation order."""
        return tuple(self)

    def __iter__(self) -> Iterator[FieldSource]:
        for bucket in self._buckets.values():
            yield from bucket

    def __len__(self) -> int:
        return sum(len(b) for b in self._buckets.values())

    def __contains__(self, source: object) -> bool:
        bucket = self._buckets.get(type(source), ())
        return any(s is source for s in bucket)
