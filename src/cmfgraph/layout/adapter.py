"""Layout adapter: positions for the capability graph.

Wraps a :class:`ForceSimulation` configured with link, charge, centering
and collision forces. The adapter is the single writer of node positions;
every other component reads the latest tick through :meth:`position`,
:meth:`positions` or a tick subscription.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cmfgraph.exceptions import UnknownNodeError
from cmfgraph.layout.simulation import (
    CenterForce,
    CollideForce,
    ForceSimulation,
    LinkForce,
    ManyBodyForce,
)

if TYPE_CHECKING:
    from cmfgraph.tables import DataTables

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutSettings:
    """Force and viewport parameters for the graph layout."""

    width: float = 960.0
    height: float = 600.0
    link_distance: float = 150.0
    link_strength: float = 0.5
    charge_strength: float = -300.0
    collision_radius: float = 30.0
    drag_alpha_target: float = 0.3

    @property
    def center(self) -> tuple[float, float]:
        return (self.width / 2, self.height / 2)


@dataclass(frozen=True)
class Position:
    """Snapshot of a node's position at one tick."""

    x: float
    y: float


PositionListener = Callable[[dict[str, Position]], None]


class LayoutAdapter:
    """Force-directed layout over the nodes of a :class:`DataTables`.

    Edges are resolved to node indices once at construction; the
    simulation never holds references to node records.

    Drag gestures are keyed by pointer id. Each pointer pins at most one
    node; drags on different pointers are independent. The first active
    drag raises the simulation's target energy so the layout reflows
    around the pinned node, and the last one to end lets it decay to zero.
    """

    def __init__(
        self,
        tables: DataTables,
        settings: LayoutSettings | None = None,
        *,
        seed: int | None = 0,
    ) -> None:
        self.settings = settings or LayoutSettings()
        self._tables = tables
        self._ids = [node.id for node in tables.nodes]
        self._links = [(tables.index_of(e.source), tables.index_of(e.target)) for e in tables.edges]
        self._simulation = self._build_simulation(seed)
        self._listeners: list[PositionListener] = []
        self._drags: dict[int, int] = {}  # pointer id -> body index
        self._closed = False
        self._simulation.on_tick(self._emit)

    def _build_simulation(self, seed: int | None) -> ForceSimulation:
        s = self.settings
        simulation = ForceSimulation(len(self._ids), seed=seed)
        simulation.force("link", LinkForce(self._links, distance=s.link_distance, strength=s.link_strength))
        simulation.force("charge", ManyBodyForce(strength=s.charge_strength))
        simulation.force("center", CenterForce(*s.center))
        simulation.force("collision", CollideForce(s.collision_radius))
        return simulation

    @property
    def simulation(self) -> ForceSimulation:
        return self._simulation

    @property
    def alpha_target(self) -> float:
        return self._simulation.alpha_target

    @property
    def running(self) -> bool:
        return self._simulation.running

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def _body(self, node_id: str):
        try:
            return self._simulation.bodies[self._tables.index_of(node_id)]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def position(self, node_id: str) -> Position:
        """Latest position of one node."""
        body = self._body(node_id)
        return Position(body.x, body.y)

    def positions(self) -> dict[str, Position]:
        """Latest positions of all nodes, keyed by id."""
        return {
            node_id: Position(body.x, body.y)
            for node_id, body in zip(self._ids, self._simulation.bodies)
        }

    def pinned(self, node_id: str) -> tuple[float, float] | None:
        """The pin override of a node, or None while it moves freely."""
        body = self._body(node_id)
        if body.fx is None or body.fy is None:
            return None
        return (body.fx, body.fy)

    def subscribe(self, listener: PositionListener) -> Callable[[], None]:
        """Call ``listener`` with fresh positions after every tick.

        Returns:
            A function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        if not self._listeners:
            return
        snapshot = self.positions()
        for listener in list(self._listeners):
            listener(snapshot)

    # ------------------------------------------------------------------
    # Ticking
    # ------------------------------------------------------------------

    def step(self) -> bool:
        """Advance one frame. Returns False once the layout is at rest."""
        return self._simulation.step()

    def warm_up(self, ticks: int, progress: Callable[[int], None] | None = None) -> int:
        """Run up to ``ticks`` frames, stopping early if the layout settles.

        Returns:
            Number of frames that actually ticked.
        """
        done = 0
        for _ in range(ticks):
            if not self.step():
                break
            done += 1
            if progress is not None:
                progress(done)
        return done

    async def run(self, interval: float = 1 / 60) -> None:
        """Tick forever on the event loop until :meth:`close` is called.

        A cooled simulation keeps the loop alive so that a later drag can
        restart it.
        """
        while not self._closed:
            self.step()
            await asyncio.sleep(interval)

    def close(self) -> None:
        """Stop ticking and end :meth:`run`."""
        self._closed = True
        self._simulation.stop()

    # ------------------------------------------------------------------
    # Dragging
    # ------------------------------------------------------------------

    def drag_start(self, node_id: str, pointer_id: int = 0) -> None:
        """Pin ``node_id`` at its current position under ``pointer_id``."""
        body = self._body(node_id)
        if pointer_id in self._drags:
            logger.debug("Pointer %s started a new drag; releasing the previous one", pointer_id)
            self.drag_end(pointer_id)
        if not self._drags:
            self._simulation.alpha_target = self.settings.drag_alpha_target
            self._simulation.restart()
        self._drags[pointer_id] = body.index
        body.fx = body.x
        body.fy = body.y
        logger.debug("Drag start: node %s (pointer %s)", node_id, pointer_id)

    def drag_move(self, x: float, y: float, pointer_id: int = 0) -> None:
        """Move the pin held by ``pointer_id``. Ignored if it holds none."""
        index = self._drags.get(pointer_id)
        if index is None:
            return
        body = self._simulation.bodies[index]
        body.fx = x
        body.fy = y

    def drag_end(self, pointer_id: int = 0) -> None:
        """Release the pin held by ``pointer_id``."""
        index = self._drags.pop(pointer_id, None)
        if index is None:
            return
        if not self._drags:
            self._simulation.alpha_target = 0.0
        if index not in self._drags.values():
            body = self._simulation.bodies[index]
            body.fx = None
            body.fy = None
        logger.debug("Drag end: node %s (pointer %s)", self._ids[index], pointer_id)
