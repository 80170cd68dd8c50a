# MIT License (see LICENSE)
"""
Renderer adapters for session visualization.

The simulation has no rendering dependency. An adapter receives one call
per drawable thing per frame; subclasses map those calls onto a graphics
backend (or, here, onto text and plain data for debugging and replays).
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

import numpy as np

from ..craft import Craft
from ..fields import FieldSource, GaussStabilizer, GravityWell, UniformPatch, Vortex
from ..probe import Probe

if TYPE_CHECKING:
    from ..session import Session


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Usage:
        renderer.begin_frame(session.time)
        for src in session.registry:
            renderer.draw_field(src)
        for probe in session.probes:
            renderer.draw_probe(probe)
        renderer.draw_craft(session.craft)
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_session(session)
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        ...

    @abstractmethod
    def draw_field(self, source: FieldSource) -> None:
        ...

    @abstractmethod
    def draw_probe(self, probe: Probe) -> None:
        ...

    @abstractmethod
    def draw_craft(self, craft: Craft) -> None:
        ...

    def draw_path(self, points: np.ndarray) -> None:
        """Draw the trajectory preview. Optional; ignored by default."""

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def render_session(self, session: "Session") -> None:
        """Render fields, probes, the craft and a visible preview."""
        self.begin_frame(session.time)
        for src in session.registry:
            self.draw_field(src)
        for probe in session.probes:
            self.draw_probe(probe)
        self.draw_craft(session.craft)
        if session.predictor.visible and len(session.predictor.points):
            self.draw_path(session.predictor.points)
        self.end_frame()


def describe_field(src: FieldSource) -> str:
    """One-line text description of a field source."""
    x, y = src.position
    if isinstance(src, GravityWell):
        kind = "Attractor" if src.is_attractor else "Repulsor"
        body = f"{kind} S={src.S:.2f}"
    elif isinstance(src, GaussStabilizer):
        body = f"Stabilizer U0={src.U0:.2f} R={src.R:.2f}"
    elif isinstance(src, UniformPatch):
        body = f"Jetstream E=({src.E[0]:.2f}, {src.E[1]:.2f})"
    elif isinstance(src, Vortex):
        body = f"Vortex ω={src.omega:.2f} {'cw' if src.clockwise else 'ccw'}"
    else:
        body = type(src).__name__
    state = "" if src.enabled else " (off)"
    return f"{body} @ ({x:.2f}, {y:.2f}){state}"


class DebugRenderer(RendererAdapter):
    """
    Console/text debug renderer.

    Output:
        === Frame t=0.4000 ===
        Attractor S=12.00 @ (0.00, 0.00)
        probe repulsor @ (1.20, 3.40) v=(2.00, -0.50)
        craft @ (0.00, -4.00) v=(0.00, 0.00) heading=0.0 fuel=1.00 [locked]
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw_field(self, source: FieldSource) -> None:
        self.output.write(describe_field(source) + "\n")

    def draw_probe(self, probe: Probe) -> None:
        pos = probe.position
        line = f"probe {probe.probe_type.value} @ ({pos[0]:.2f}, {pos[1]:.2f})"
        if self.verbose:
            vel = probe.velocity
            line += f" v=({vel[0]:.2f}, {vel[1]:.2f})"
        self.output.write(line + "\n")

    def draw_craft(self, craft: Craft) -> None:
        pos = craft.position
        line = f"craft @ ({pos[0]:.2f}, {pos[1]:.2f})"
        if self.verbose:
            vel = craft.velocity
            line += f" v=({vel[0]:.2f}, {vel[1]:.2f}) heading={craft.heading:.1f} fuel={craft.fuel:.2f}"
        if craft.locked:
            line += " [locked]"
        self.output.write(line + "\n")

    def draw_path(self, points: np.ndarray) -> None:
        end = points[-1]
        self.output.write(f"preview {len(points)} pts -> ({end[0]:.2f}, {end[1]:.2f})\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for benchmarks and headless runs."""

    def begin_frame(self, time: float) -> None:
        pass

    def draw_field(self, source: FieldSource) -> None:
        pass

    def draw_probe(self, probe: Probe) -> None:
        pass

    def draw_craft(self, craft: Craft) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Records every frame as plain data for replays or export.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            session.step()
            renderer.render_session(session)
        craft_track = [f["craft"]["position"] for f in renderer.frames]
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current_frame = {"time": time, "fields": [], "probes": [], "craft": None, "path": None}

    def draw_field(self, source: FieldSource) -> None:
        if self._current_frame is None:
            return
        self._current_frame["fields"].append({
            "kind": type(source).__name__,
            "position": source.position.tolist(),
            "enabled": source.enabled,
        })

    def draw_probe(self, probe: Probe) -> None:
        if self._current_frame is None:
            return
        self._current_frame["probes"].append({
            "type": probe.probe_type.value,
            "position": probe.position.tolist(),
            "velocity": probe.velocity.tolist(),
        })

    def draw_craft(self, craft: Craft) -> None:
        if self._current_frame is None:
            return
        self._current_frame["craft"] = {
            "position": craft.position.tolist(),
            "velocity": craft.velocity.tolist(),
            "heading": craft.heading,
            "fuel": craft.fuel,
            "launched": craft.launched,
        }

    def draw_path(self, points: np.ndarray) -> None:
        if self._current_frame is not None:
            self._current_frame["path"] = points.tolist()

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
