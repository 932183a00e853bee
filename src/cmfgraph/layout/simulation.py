"""Velocity Verlet force simulation over a set of point bodies.

A small, dependency-free counterpart of the d3-force module: an energy
value ``alpha`` cools towards ``alpha_target`` on every tick, each
registered force nudges body velocities in proportion to ``alpha``, and
velocities are damped before being integrated into positions. Pinned
bodies (``fx``/``fy`` set) are held in place.

The layout adapter is the only intended user; nothing here knows about
nodes, ids, or selection.
"""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

_INITIAL_RADIUS = 10.0
_INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


@dataclass
class Body:
    """Mutable simulation state for one point."""

    index: int
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    fx: float | None = None
    fy: float | None = None

    @property
    def pinned(self) -> bool:
        return self.fx is not None or self.fy is not None


class Force(Protocol):
    """A force mutates body velocities (or positions) once per tick."""

    def initialize(self, bodies: Sequence[Body], jiggle: Callable[[], float]) -> None: ...

    def apply(self, alpha: float) -> None: ...


class LinkForce:
    """Spring between linked bodies with a rest length and a strength.

    Strength below 1 keeps the spring underdamped: connected bodies
    cluster without rigid distance enforcement.
    """

    def __init__(
        self,
        links: Sequence[tuple[int, int]],
        *,
        distance: float = 30.0,
        strength: float = 1.0,
        iterations: int = 1,
    ) -> None:
        self.links = list(links)
        self.distance = distance
        self.strength = strength
        self.iterations = iterations
        self._bodies: Sequence[Body] = ()
        self._bias: list[float] = []
        self._jiggle: Callable[[], float] = lambda: 0.0

    def initialize(self, bodies: Sequence[Body], jiggle: Callable[[], float]) -> None:
        self._bodies = bodies
        self._jiggle = jiggle
        degree = [0] * len(bodies)
        for source, target in self.links:
            degree[source] += 1
            degree[target] += 1
        # Lower-degree endpoints move more
        self._bias = [
            degree[source] / (degree[source] + degree[target])
            for source, target in self.links
        ]

    def apply(self, alpha: float) -> None:
        for _ in range(self.iterations):
            for (source_index, target_index), bias in zip(self.links, self._bias):
                source = self._bodies[source_index]
                target = self._bodies[target_index]
                dx = target.x + target.vx - source.x - source.vx or self._jiggle()
                dy = target.y + target.vy - source.y - source.vy or self._jiggle()
                length = math.sqrt(dx * dx + dy * dy)
                scale = (length - self.distance) / length * alpha * self.strength
                dx *= scale
                dy *= scale
                target.vx -= dx * bias
                target.vy -= dy * bias
                source.vx += dx * (1 - bias)
                source.vy += dy * (1 - bias)


class ManyBodyForce:
    """All-pairs charge. Negative strength repels.

    Exact O(n²) summation; suitable for dashboard-sized graphs.
    """

    def __init__(self, *, strength: float = -30.0, distance_min: float = 1.0) -> None:
        self.strength = strength
        self.distance_min2 = distance_min * distance_min
        self._bodies: Sequence[Body] = ()
        self._jiggle: Callable[[], float] = lambda: 0.0

    def initialize(self, bodies: Sequence[Body], jiggle: Callable[[], float]) -> None:
        self._bodies = bodies
        self._jiggle = jiggle

    def apply(self, alpha: float) -> None:
        bodies = self._bodies
        for body in bodies:
            for other in bodies:
                if other is body:
                    continue
                dx = other.x - body.x
                dy = other.y - body.y
                if dx == 0:
                    dx = self._jiggle()
                if dy == 0:
                    dy = self._jiggle()
                dist2 = dx * dx + dy * dy
                if dist2 < self.distance_min2:
                    dist2 = math.sqrt(self.distance_min2 * dist2)
                weight = self.strength * alpha / dist2
                body.vx += dx * weight
                body.vy += dy * weight


class CenterForce:
    """Translate all bodies so their centroid sits at (x, y)."""

    def __init__(self, x: float = 0.0, y: float = 0.0, *, strength: float = 1.0) -> None:
        self.x = x
        self.y = y
        self.strength = strength
        self._bodies: Sequence[Body] = ()

    def initialize(self, bodies: Sequence[Body], jiggle: Callable[[], float]) -> None:
        self._bodies = bodies

    def apply(self, alpha: float) -> None:
        if not self._bodies:
            return
        n = len(self._bodies)
        shift_x = (sum(b.x for b in self._bodies) / n - self.x) * self.strength
        shift_y = (sum(b.y for b in self._bodies) / n - self.y) * self.strength
        for body in self._bodies:
            body.x -= shift_x
            body.y -= shift_y


class CollideForce:
    """Minimum separation: bodies are treated as circles of a fixed radius."""

    def __init__(self, radius: float = 1.0, *, strength: float = 1.0, iterations: int = 1) -> None:
        self.radius = radius
        self.strength = strength
        self.iterations = iterations
        self._bodies: Sequence[Body] = ()
        self._jiggle: Callable[[], float] = lambda: 0.0

    def initialize(self, bodies: Sequence[Body], jiggle: Callable[[], float]) -> None:
        self._bodies = bodies
        self._jiggle = jiggle

    def apply(self, alpha: float) -> None:
        reach = self.radius * 2
        reach2 = reach * reach
        bodies = self._bodies
        for _ in range(self.iterations):
            for i, body in enumerate(bodies):
                xi = body.x + body.vx
                yi = body.y + body.vy
                for other in bodies[i + 1:]:
                    dx = xi - other.x - other.vx
                    dy = yi - other.y - other.vy
                    dist2 = dx * dx + dy * dy
                    if dist2 >= reach2:
                        continue
                    if dx == 0:
                        dx = self._jiggle()
                        dist2 += dx * dx
                    if dy == 0:
                        dy = self._jiggle()
                        dist2 += dy * dy
                    dist = math.sqrt(dist2)
                    scale = (reach - dist) / dist * self.strength
                    dx *= scale
                    dy *= scale
                    # Equal radii: overlap is split evenly
                    body.vx += dx * 0.5
                    body.vy += dy * 0.5
                    other.vx -= dx * 0.5
                    other.vy -= dy * 0.5


class ForceSimulation:
    """Cooling force simulation driven by explicit :meth:`step` calls.

    Args:
        count: Number of bodies
        alpha_min: Energy below which the simulation stops ticking
        alpha_decay: Fraction of the gap to ``alpha_target`` closed per tick
        velocity_decay: Fraction of velocity lost per tick
        seed: Seed for the jiggle used to separate coincident bodies

    Example:
        >>> sim = ForceSimulation(3)
        >>> _ = sim.force("charge", ManyBodyForce(strength=-30))
        >>> sim.step()
        True
    """

    def __init__(
        self,
        count: int,
        *,
        alpha_min: float = 0.001,
        alpha_decay: float | None = None,
        velocity_decay: float = 0.4,
        seed: int | None = 0,
    ) -> None:
        self.alpha = 1.0
        self.alpha_min = alpha_min
        self.alpha_decay = alpha_decay if alpha_decay is not None else 1 - alpha_min ** (1 / 300)
        self.alpha_target = 0.0
        self.velocity_decay = velocity_decay
        self.bodies = [self._initial_body(i) for i in range(count)]
        self._forces: dict[str, Force] = {}
        self._tick_listeners: list[Callable[[], None]] = []
        self._rng = random.Random(seed)
        self._running = True

    @staticmethod
    def _initial_body(index: int) -> Body:
        # Phyllotaxis arrangement: deterministic and evenly spread
        radius = _INITIAL_RADIUS * math.sqrt(0.5 + index)
        angle = index * _INITIAL_ANGLE
        return Body(index=index, x=radius * math.cos(angle), y=radius * math.sin(angle))

    def _jiggle(self) -> float:
        return (self._rng.random() - 0.5) * 1e-6

    @property
    def running(self) -> bool:
        return self._running

    def force(self, name: str, force: Force | None = None) -> Force | None:
        """Register (or replace) a named force, or look one up by name."""
        if force is None:
            return self._forces.get(name)
        force.initialize(self.bodies, self._jiggle)
        self._forces[name] = force
        return force

    def on_tick(self, listener: Callable[[], None]) -> None:
        self._tick_listeners.append(listener)

    def restart(self) -> None:
        """Resume ticking after the simulation has cooled down."""
        self._running = True

    def stop(self) -> None:
        self._running = False

    def tick(self, iterations: int = 1) -> None:
        """Advance the physics without notifying tick listeners."""
        for _ in range(iterations):
            self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay
            for force in self._forces.values():
                force.apply(self.alpha)
            for body in self.bodies:
                if body.fx is None:
                    body.vx *= 1 - self.velocity_decay
                    body.x += body.vx
                else:
                    body.x = body.fx
                    body.vx = 0.0
                if body.fy is None:
                    body.vy *= 1 - self.velocity_decay
                    body.y += body.vy
                else:
                    body.y = body.fy
                    body.vy = 0.0

    def step(self) -> bool:
        """One timer frame: tick and notify listeners if still running.

        Returns:
            True if a tick happened, False if the simulation is at rest.
        """
        if not self._running:
            return False
        self.tick()
        for listener in self._tick_listeners:
            listener()
        if self.alpha < self.alpha_min:
            self._running = False
        return True
