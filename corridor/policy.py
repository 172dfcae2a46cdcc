#!/usr/bin/env python3
"""
corridor/policy.py
==================
Tunable engine parameters and the pluggable stepping policies.

Every constant lives in the frozen :class:`SafetyPolicy` dataclass so that
experiments can swap policies without touching the engine.

Stepping policies decide how a vehicle's heading follows the mesh:

* :class:`CellFollowing`: re-aim at the current cell's heading every step.
* :class:`TransitionSteering`: keep the heading and only re-aim when the
  vehicle enters a new cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from corridor.errors import InvalidArgument
from corridor.geometry import TriangleCell
from corridor.vehicle import Vehicle


@dataclass(frozen=True)
class SafetyPolicy:
    """Immutable bag of engine parameters.

    Groups: inter-vehicle collisions, point location.
    """

    # ── Inter-vehicle collisions ──────────────────────────────────────────
    vehicle_collision_enabled: bool = False
    """Terminate pairs of vehicles that come closer than the safety radius."""

    vehicle_safety_radius: Optional[float] = None
    """Pair distance that counts as a collision; ``None`` sums both radii."""

    # ── Point location ────────────────────────────────────────────────────
    global_relocation: bool = True
    """Search the whole mesh when the successor chain misses the vehicle."""

    def pair_radius(self, a: Vehicle, b: Vehicle) -> float:
        if self.vehicle_safety_radius is not None:
            return self.vehicle_safety_radius
        return a.radius + b.radius


class SteppingPolicy:
    """How a vehicle's heading is chosen while it moves through the mesh."""

    name: str = ""

    def heading(self, vehicle: Vehicle, cell: TriangleCell) -> Optional[float]:
        """Heading to apply before integrating, or ``None`` to keep ``th``."""
        raise NotImplementedError

    def on_transition(self, vehicle: Vehicle, cell: TriangleCell) -> None:
        """Called after *vehicle* moved into *cell*."""


class CellFollowing(SteppingPolicy):
    name = "cell-following"

    def heading(self, vehicle: Vehicle, cell: TriangleCell) -> Optional[float]:
        return cell.heading

    def on_transition(self, vehicle: Vehicle, cell: TriangleCell) -> None:
        pass


class TransitionSteering(SteppingPolicy):
    name = "transition"

    def heading(self, vehicle: Vehicle, cell: TriangleCell) -> Optional[float]:
        return None

    def on_transition(self, vehicle: Vehicle, cell: TriangleCell) -> None:
        vehicle.th = cell.heading


STEPPING_POLICIES: Dict[str, SteppingPolicy] = {
    CellFollowing.name: CellFollowing(),
    TransitionSteering.name: TransitionSteering(),
}


def get_stepping(choice=None) -> SteppingPolicy:
    if choice is None:
        return STEPPING_POLICIES[CellFollowing.name]
    if isinstance(choice, str):
        if choice not in STEPPING_POLICIES:
            raise InvalidArgument(
                f"unknown stepping policy {choice!r}; choose from {sorted(STEPPING_POLICIES)}"
            )
        return STEPPING_POLICIES[choice]
    return choice
