#!/usr/bin/env python3
"""
corridor/vehicle.py
===================
Point vehicle with constant-speed kinematics and a three-state lifecycle:
pending (not yet spawned) → active → finished.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Tuple


class TerminationReason(IntEnum):
    """Why a vehicle left the simulation.  Values match the log codes."""

    REACHED_EXIT = 0
    VEHICLE_COLLISION = 1
    WALL_COLLISION = 2


class VehicleState(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    FINISHED = "FINISHED"


@dataclass
class Vehicle:
    """A single vehicle in the corridor.

    Attributes
    ----------
    id : int
        Index in the engine's population array.
    x, y : float
        Position in world coordinates.
    th : float
        Heading in radians (``-pi .. pi``).
    v : float
        Speed along the heading.
    t_init : float
        Time at which the vehicle enters the corridor.
    radius : float
        Collision radius used for the wall check.
    t_end : float
        Time at which the vehicle finished; ``inf`` until then.
    triangle_index : int
        Index of the mesh cell the vehicle is currently in.
    """

    id: int
    x: float
    y: float
    th: float
    v: float
    t_init: float
    radius: float = 0.0
    t_end: float = math.inf
    triangle_index: int = 0
    active: bool = False
    finished: bool = False
    reason: Optional[TerminationReason] = field(default=None, repr=False)

    # ── derived state ─────────────────────────────────────────────────────
    @property
    def pos(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def pose(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.th)

    @property
    def vx(self) -> float:
        return self.v * math.cos(self.th)

    @property
    def vy(self) -> float:
        return self.v * math.sin(self.th)

    @property
    def life_span(self) -> float:
        """Time spent in the corridor (``inf`` while still running)."""
        return self.t_end - self.t_init

    @property
    def state(self) -> VehicleState:
        if self.finished:
            return VehicleState.FINISHED
        if self.active:
            return VehicleState.ACTIVE
        return VehicleState.PENDING

    # ── lifecycle ─────────────────────────────────────────────────────────
    def activate(self) -> None:
        if not self.finished:
            self.active = True

    def propagate(self, dt: float, heading: Optional[float] = None) -> None:
        """Advance the position by *dt* at constant velocity.

        When *heading* is given the vehicle turns to it instantly first.
        Pending and finished vehicles do not move.
        """
        if not self.active or self.finished:
            return
        if heading is not None:
            self.th = heading
        self.x += self.vx * dt
        self.y += self.vy * dt

    def terminate(self, t: float, reason: TerminationReason) -> None:
        """Mark the vehicle finished at time *t*.  Later calls are ignored."""
        if self.finished:
            return
        self.active = False
        self.finished = True
        self.t_end = t
        self.reason = reason

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "th": self.th,
            "v": self.v,
            "state": self.state.value,
            "triangle": self.triangle_index,
        }
