#!/usr/bin/env python3
"""
corridor/engine.py
==================
Step-driven corridor simulator.

The :class:`Simulator` owns the vehicle population, the immutable triangle
mesh, the pairwise distance matrix and the :class:`~corridor.metrics.TimeLog`.
Each call to :meth:`Simulator.step` advances every vehicle by one ``dT``,
resolves cell transitions and wall contacts, recomputes the distance matrix
over the active set and appends one row to the time log.

Rendering and persistence are not the engine's concern; see
:mod:`corridor.runner`.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from corridor.errors import ConfigError, GeometryError, InvalidArgument
from corridor.geometry import (
    BoundaryCurve,
    Point,
    Segment,
    TriangleCell,
    point_in_polygon,
    segments_cross,
)
from corridor.metrics import TimeLog, mean_closest_distance, mean_distance
from corridor.policy import SafetyPolicy, SteppingPolicy, get_stepping
from corridor.scenario import Scenario
from corridor.triangulation import (
    TriangulationStrategy,
    chain_from,
    get_triangulation,
    validate_mesh,
)
from corridor.vehicle import TerminationReason, Vehicle

log = logging.getLogger("engine")

# Emit the per-step debug summary every N steps.
_DEBUG_EVERY = 10


class Simulator:
    """Corridor traversal engine.

    Parameters
    ----------
    scenario : Scenario
        Boundary curves and simulation properties.
    triangulation : str or TriangulationStrategy or None
        Mesh builder; ``"closest"`` when *None*.
    policy : SafetyPolicy or None
        Tunable constants; uses defaults when *None*.
    stepping : str or SteppingPolicy or None
        Heading policy; ``"cell-following"`` when *None*.

    Raises
    ------
    ConfigError
        The scenario's map type does not match the triangulation.
    GeometryError
        The boundary curves cannot be triangulated.
    InvalidArgument
        Unknown strategy / policy names or a non-positive time step.
    """

    def __init__(
        self,
        scenario: Scenario,
        triangulation: Union[str, TriangulationStrategy, None] = None,
        policy: Optional[SafetyPolicy] = None,
        stepping: Union[str, SteppingPolicy, None] = None,
    ) -> None:
        self.scenario = scenario
        self.policy = policy or SafetyPolicy()
        self.strategy = get_triangulation(triangulation)
        self.stepping = get_stepping(stepping)

        if scenario.map_type != self.strategy.map_type:
            raise ConfigError(
                f"scenario {scenario.name!r} has map type {scenario.map_type!r} but "
                f"triangulation {self.strategy.name or self.strategy!r} expects "
                f"{self.strategy.map_type!r}"
            )
        if not scenario.dt > 0.0:
            raise InvalidArgument(f"time step must be positive (got {scenario.dt})")

        self.dT: float = scenario.dt
        self.triangles: List[TriangleCell] = []
        self._outline: List[Point] = []
        self.vehicles: List[Vehicle] = []
        self.distances: np.ndarray = np.empty((0, 0))
        self.time_log = TimeLog()
        self.t: float = 0.0
        self._steps: int = 0

        self.triangulate()
        self._init_vehicles()

    # ── initialisation / reset ────────────────────────────────────────────

    def triangulate(self) -> None:
        """Build and validate the routing mesh (once per simulator)."""
        cells = list(self.strategy.build(self.path1, self.path2))
        validate_mesh(cells)
        self.triangles = cells
        # Closed ring: path1 entry to exit, then path2 back to the entry.
        self._outline = list(self.path1.coords) + list(reversed(self.path2.coords))

    def _init_vehicles(self) -> None:
        """Place every vehicle on the entry edge with its spawn time.

        Spawn points come from a generator seeded with the scenario seed, so
        the population is identical on every run and after :meth:`reset`.
        """
        rng = random.Random(self.scenario.seed)
        (x1, y1), (x2, y2) = self.entry_edge
        dx, dy = x2 - x1, y2 - y1
        th0 = self.triangles[0].heading

        self.vehicles = []
        for idx, t0 in enumerate(self.scenario.spawn_times()):
            s = rng.random()
            self.vehicles.append(
                Vehicle(
                    id=idx,
                    x=x1 + dx * s,
                    y=y1 + dy * s,
                    th=th0,
                    v=self.scenario.velocity,
                    t_init=t0,
                    radius=self.scenario.radius,
                )
            )
        n = len(self.vehicles)
        self.distances = np.full((n, n), np.nan)
        self.time_log = TimeLog()
        self.t = 0.0
        self._steps = 0
        log.info("Simulator ready: %d cells, %d vehicles, dT=%g",
                 self.n_triangles, n, self.dT)

    def reset(self) -> None:
        """Re-create the population so the scenario replays identically."""
        self._init_vehicles()

    # ── queries ───────────────────────────────────────────────────────────

    @property
    def path1(self) -> BoundaryCurve:
        return self.scenario.path1

    @property
    def path2(self) -> BoundaryCurve:
        return self.scenario.path2

    @property
    def entry_edge(self) -> Segment:
        return (self.path1.first, self.path2.first)

    @property
    def exit_edge(self) -> Segment:
        return (self.path1.last, self.path2.last)

    @property
    def n_vehicles(self) -> int:
        return len(self.vehicles)

    @property
    def n_triangles(self) -> int:
        return len(self.triangles)

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def active_vehicles(self) -> List[int]:
        return [i for i, v in enumerate(self.vehicles) if v.active]

    @property
    def pending_vehicles(self) -> List[int]:
        return [i for i, v in enumerate(self.vehicles) if not v.active and not v.finished]

    @property
    def n_active_vehicles(self) -> int:
        return len(self.active_vehicles)

    @property
    def avg_closest_dist(self) -> float:
        return mean_closest_distance(self.distances)

    @property
    def avg_dist(self) -> float:
        return mean_distance(self.distances)

    @property
    def finished(self) -> bool:
        """True once no vehicle is active and none is still waiting to spawn."""
        return all(v.finished for v in self.vehicles)

    # ── physics tick ──────────────────────────────────────────────────────

    def step(self) -> None:
        """Advance the simulation by one ``dT``.

        Does nothing once :attr:`finished` is true.
        """
        if self.finished:
            return

        t = self.t
        for i, vehicle in enumerate(self.vehicles):
            if vehicle.finished:
                continue
            if t < vehicle.t_init:
                continue
            if not vehicle.active:
                vehicle.activate()
                log.debug("t=%.3f spawn vehicle %d at (%.2f, %.2f)",
                          t, i, vehicle.x, vehicle.y)

            cell = self.triangles[vehicle.triangle_index]
            prev = vehicle.pos
            vehicle.propagate(self.dT, self.stepping.heading(vehicle, cell))

            if not cell.contains(vehicle.pos):
                if cell.is_terminal:
                    self.terminate_vehicle(i, TerminationReason.REACHED_EXIT)
                    continue
                idx = self._locate(vehicle, cell.next_index)
                if idx is None:
                    self.terminate_vehicle(i, self._exit_reason(prev, vehicle.pos))
                    continue
                vehicle.triangle_index = idx
                self.stepping.on_transition(vehicle, self.triangles[idx])

            current = self.triangles[vehicle.triangle_index]
            if current.wall_distance(vehicle.pos) < vehicle.radius:
                self.terminate_vehicle(i, TerminationReason.WALL_COLLISION)

        self.update_distances()
        if self.policy.vehicle_collision_enabled:
            self._resolve_vehicle_collisions()

        self.time_log.append(t, self.n_active_vehicles,
                             self.avg_closest_dist, self.avg_dist)

        if self._steps % _DEBUG_EVERY == 0:
            log.debug("t=%.3f active=%d pending=%d avg_closest=%.3f avg=%.3f",
                      t, self.n_active_vehicles, len(self.pending_vehicles),
                      self.avg_closest_dist, self.avg_dist)

        if self.finished:
            log.info("Simulation finished at t=%.3f after %d steps",
                     t, self._steps + 1)
            return

        self._steps += 1
        self.t = self._steps * self.dT

    def _locate(self, vehicle: Vehicle, start: int) -> Optional[int]:
        """Index of the cell containing *vehicle*, searching from *start*.

        Follows the successor chain first (a fast vehicle may skip thin
        cells in one step), then the whole mesh, so a vehicle that steps
        back into an earlier cell is relocated there.  Returns ``None`` when
        the vehicle is outside the corridor outline.  Raises
        :class:`GeometryError` when it is inside the outline but no cell
        contains it.
        """
        pos = vehicle.pos
        for idx in chain_from(self.triangles, start):
            if self.triangles[idx].contains(pos):
                return idx
        if self.policy.global_relocation:
            for idx, cell in enumerate(self.triangles):
                if cell.contains(pos):
                    return idx
        if not point_in_polygon(pos, self._outline):
            return None
        raise GeometryError(
            f"vehicle {vehicle.id} at ({pos[0]:.3f}, {pos[1]:.3f}) is outside "
            f"every cell at t={self.t:.3f}"
        )

    def _exit_reason(self, prev: Point, pos: Point) -> TerminationReason:
        """Reason for a vehicle that moved from *prev* out of the corridor.

        Only a move that crosses the exit edge itself counts as reaching the
        exit; leaving anywhere else is a wall collision.
        """
        if segments_cross((prev, pos), self.exit_edge):
            return TerminationReason.REACHED_EXIT
        return TerminationReason.WALL_COLLISION

    # ── distances / collisions ────────────────────────────────────────────

    def terminate_vehicle(self, i: int, reason: TerminationReason) -> None:
        """Finish vehicle *i* and clear its row and column of distances."""
        vehicle = self.vehicles[i]
        vehicle.terminate(self.t, reason)
        self.distances[i, :] = np.nan
        self.distances[:, i] = np.nan
        log.debug("t=%.3f vehicle %d finished: %s", self.t, i, reason.name)

    def update_distances(self) -> None:
        """Recompute the full pairwise distance matrix over active vehicles."""
        self.distances.fill(np.nan)
        idx = np.asarray(self.active_vehicles, dtype=int)
        if idx.size < 2:
            return
        pts = np.array([self.vehicles[i].pos for i in idx], dtype=float)
        diff = pts[:, np.newaxis, :] - pts[np.newaxis, :, :]
        dist = np.hypot(diff[..., 0], diff[..., 1])
        np.fill_diagonal(dist, np.nan)
        self.distances[np.ix_(idx, idx)] = dist

    def _resolve_vehicle_collisions(self) -> int:
        """Terminate every active pair closer than the safety radius."""
        active = self.active_vehicles
        hit = set()
        for a_pos, i in enumerate(active):
            for j in active[a_pos + 1:]:
                radius = self.policy.pair_radius(self.vehicles[i], self.vehicles[j])
                if self.distances[i, j] < radius:
                    hit.add(i)
                    hit.add(j)
        for i in sorted(hit):
            self.terminate_vehicle(i, TerminationReason.VEHICLE_COLLISION)
        if hit:
            log.info("t=%.3f vehicle collision: %s", self.t, sorted(hit))
        return len(hit)

    # ── reporting ─────────────────────────────────────────────────────────

    def reasons(self) -> Dict[str, int]:
        """Count of finished vehicles per termination reason."""
        out: Dict[str, int] = {r.name: 0 for r in TerminationReason}
        for v in self.vehicles:
            if v.reason is not None:
                out[v.reason.name] += 1
        return out

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of the current state for rendering sinks."""
        return {
            "t": self.t,
            "active": self.n_active_vehicles,
            "pending": len(self.pending_vehicles),
            "avg_closest_dist": self.avg_closest_dist,
            "avg_dist": self.avg_dist,
            "vehicles": [v.as_dict() for v in self.vehicles if v.active],
        }

    def mesh_arrows(self) -> List[Tuple[Point, Point]]:
        """``(centroid, heading vector)`` per cell, scaled for display."""
        out = []
        for cell in self.triangles:
            length = cell.dir_length / 6.0
            out.append((cell.centroid, (cell.dir[0] * length, cell.dir[1] * length)))
        return out
