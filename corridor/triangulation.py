#!/usr/bin/env python3
"""
corridor/triangulation.py
=========================
Decomposes the corridor between two boundary curves into an ordered strip
of :class:`~corridor.geometry.TriangleCell` objects.  Cell *k* points at
cell *k + 1*; the last cell points at the exit edge and carries the
``None`` sentinel.

Strategies are looked up by name through :data:`TRIANGULATIONS`.  Any
object with a ``map_type`` attribute and a ``build(path1, path2)`` method
can be passed to :class:`~corridor.engine.Simulator` directly.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from corridor.errors import GeometryError, InvalidArgument
from corridor.geometry import (
    BoundaryCurve,
    Point,
    Segment,
    TriangleCell,
    distance,
    midpoint,
    triangle_area,
    triangle_centroid,
    unit_vector,
)

log = logging.getLogger("triangulation")

# Triangles at or below this area are rejected as degenerate.
_MIN_AREA = 1e-12


class TriangulationStrategy:
    """Base class for triangulation variants.

    ``map_type`` names the kind of scenario data the strategy consumes; the
    engine refuses to run a scenario whose ``type`` tag differs.
    """

    name: str = ""
    map_type: str = "Paths"

    def build(self, path1: BoundaryCurve, path2: BoundaryCurve) -> List[TriangleCell]:
        raise NotImplementedError


class ClosestTriangulation(TriangulationStrategy):
    """Closest-vertex strip triangulation (see :func:`closest_triangulation`)."""

    name = "closest"
    map_type = "Paths"

    def build(self, path1: BoundaryCurve, path2: BoundaryCurve) -> List[TriangleCell]:
        return closest_triangulation(path1, path2)


def closest_triangulation(path1: BoundaryCurve, path2: BoundaryCurve) -> List[TriangleCell]:
    """Triangulate the corridor by always taking the shorter cross-section.

    Both curves are walked from the entry edge.  At each step the cursor
    that produces the shorter new cross-section advances; once a curve is
    exhausted its last vertex is reused until the other one catches up.

    Parameters
    ----------
    path1, path2 : BoundaryCurve
        The two walls, each with at least two points.

    Returns
    -------
    list of TriangleCell
        ``(len(path1) - 1) + (len(path2) - 1)`` cells, entry to exit.
    """
    if len(path1) < 2 or len(path2) < 2:
        raise GeometryError(
            f"boundary curves need at least 2 points (got {len(path1)} and {len(path2)})"
        )

    raw: List[Tuple[Tuple[Point, Point, Point], Segment]] = []
    i, j = 0, 0
    last1, last2 = len(path1) - 1, len(path2) - 1
    while i < last1 or j < last2:
        if i < last1 and j < last2:
            advance_first = (
                distance(path1[i + 1], path2[j]) <= distance(path1[i], path2[j + 1])
            )
        else:
            advance_first = i < last1

        if advance_first:
            verts = (path1[i], path1[i + 1], path2[j])
            wall = (path1[i], path1[i + 1])
            i += 1
        else:
            verts = (path1[i], path2[j], path2[j + 1])
            wall = (path2[j], path2[j + 1])
            j += 1

        if triangle_area(verts) <= _MIN_AREA:
            raise GeometryError(f"degenerate triangle {len(raw)} at {verts}")
        raw.append((verts, wall))

    exit_mid = midpoint(path1.last, path2.last)
    cells = link_cells(raw, exit_mid)
    log.info("Closest triangulation: %d cells from %d + %d vertices",
             len(cells), len(path1), len(path2))
    return cells


def link_cells(
    raw: Sequence[Tuple[Tuple[Point, Point, Point], Segment]],
    exit_point: Point,
) -> List[TriangleCell]:
    """Turn an ordered list of ``(vertices, wall)`` into linked cells.

    Each cell heads from its centroid to the next centroid; the final cell
    heads to *exit_point*.
    """
    centroids = [triangle_centroid(verts) for verts, _ in raw]
    cells: List[TriangleCell] = []
    for k, (verts, wall) in enumerate(raw):
        last = k == len(raw) - 1
        target = exit_point if last else centroids[k + 1]
        direction, length = unit_vector(centroids[k], target)
        cells.append(
            TriangleCell(
                vertices=verts,
                dir=direction,
                next_index=None if last else k + 1,
                direction_edge=wall,
                dir_length=length,
            )
        )
    return cells


def validate_mesh(cells: Sequence[TriangleCell]) -> None:
    """Check that every successor chain reaches exactly one exit sentinel.

    Raises
    ------
    GeometryError
        Empty mesh, out-of-range successor, a cycle, or more than one
        terminal cell.
    """
    n = len(cells)
    if n == 0:
        raise GeometryError("triangulation produced no cells")
    terminals = [k for k, cell in enumerate(cells) if cell.is_terminal]
    if len(terminals) != 1:
        raise GeometryError(f"mesh must have exactly one exit cell (found {len(terminals)})")
    for k, cell in enumerate(cells):
        if cell.next_index is not None and not 0 <= cell.next_index < n:
            raise GeometryError(f"cell {k} points at missing cell {cell.next_index}")

    # A chain longer than n cells must revisit one of them.
    for start in range(n):
        idx: Optional[int] = start
        hops = 0
        while idx is not None:
            hops += 1
            if hops > n:
                raise GeometryError(f"successor cycle reachable from cell {start}")
            idx = cells[idx].next_index


def chain_from(cells: Sequence[TriangleCell], start: int) -> List[int]:
    """Cell indices visited when following successors from *start*."""
    out: List[int] = []
    idx: Optional[int] = start
    while idx is not None:
        out.append(idx)
        idx = cells[idx].next_index
    return out


# ── Registry ─────────────────────────────────────────────────────────────────

TRIANGULATIONS: Dict[str, TriangulationStrategy] = {
    ClosestTriangulation.name: ClosestTriangulation(),
}


def get_triangulation(
    choice: Union[str, TriangulationStrategy, None] = None,
) -> TriangulationStrategy:
    """Resolve a strategy name (or pass a strategy object through)."""
    if choice is None:
        return TRIANGULATIONS[ClosestTriangulation.name]
    if isinstance(choice, str):
        key = choice.strip().lower()
        if key not in TRIANGULATIONS:
            raise InvalidArgument(
                f"unknown triangulation {choice!r}; choose from {sorted(TRIANGULATIONS)}"
            )
        return TRIANGULATIONS[key]
    if not hasattr(choice, "build") or not hasattr(choice, "map_type"):
        raise InvalidArgument(f"{choice!r} is not a triangulation strategy")
    return choice
