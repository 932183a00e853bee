"""Force-directed layout for the capability graph."""

from cmfgraph.layout.adapter import LayoutAdapter, LayoutSettings, Position
from cmfgraph.layout.simulation import (
    Body,
    CenterForce,
    CollideForce,
    ForceSimulation,
    LinkForce,
    ManyBodyForce,
)

__all__ = [
    "Body",
    "CenterForce",
    "CollideForce",
    "ForceSimulation",
    "LayoutAdapter",
    "LayoutSettings",
    "LinkForce",
    "ManyBodyForce",
    "Position",
]
