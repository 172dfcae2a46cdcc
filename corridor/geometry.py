#!/usr/bin/env python3
"""
corridor/geometry.py
====================
Geometry primitives shared by the triangulation builder and the engine.

* :class:`BoundaryCurve`: one side of the corridor, entry to exit.
* :class:`TriangleCell`: one routing-mesh cell with heading and successor.
* :func:`point_in_triangle` / :func:`distance_to_segment`: the two tests
  the stepper runs for every active vehicle on every step.

Kept free of project imports (except :mod:`corridor.errors`) so it can be
unit tested in isolation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from corridor.errors import GeometryError

Point = Tuple[float, float]
Segment = Tuple[Point, Point]

# Sign tolerance for orientation tests; points on an edge count as inside.
_EPS = 1e-9


# ── Scalar helpers ────────────────────────────────────────────────────────────

def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def cross(o: Point, a: Point, b: Point) -> float:
    """Z component of ``(a - o) x (b - o)``; positive when *o, a, b* turn left."""
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5)


def heading_of(vec: Point) -> float:
    """Heading (radians, ``-pi .. pi``) of a direction vector."""
    return math.atan2(vec[1], vec[0])


def point_in_triangle(p: Point, a: Point, b: Point, c: Point) -> bool:
    """True when *p* lies inside or on the boundary of triangle *abc*.

    Works for either vertex winding: the point is inside when the three
    edge orientations never disagree in sign.
    """
    d1 = cross(a, b, p)
    d2 = cross(b, c, p)
    d3 = cross(c, a, p)
    has_neg = d1 < -_EPS or d2 < -_EPS or d3 < -_EPS
    has_pos = d1 > _EPS or d2 > _EPS or d3 > _EPS
    return not (has_neg and has_pos)


def point_in_polygon(p: Point, polygon: Sequence[Point]) -> bool:
    """Even-odd ray test; *polygon* is an implicitly closed vertex ring."""
    x, y = p
    inside = False
    n = len(polygon)
    for k in range(n):
        (x1, y1), (x2, y2) = polygon[k], polygon[(k + 1) % n]
        if (y1 > y) != (y2 > y):
            x_cross = x1 + (y - y1) * (x2 - x1) / (y2 - y1)
            if x < x_cross:
                inside = not inside
    return inside


def segments_cross(p: Segment, q: Segment) -> bool:
    """True when segments *p* and *q* share at least one point."""
    (p1, p2), (q1, q2) = p, q
    d1 = cross(q1, q2, p1)
    d2 = cross(q1, q2, p2)
    d3 = cross(p1, p2, q1)
    d4 = cross(p1, p2, q2)
    if abs(d1) <= _EPS and abs(d2) <= _EPS:
        # Collinear: overlap of the bounding boxes decides.
        return (
            min(p1[0], p2[0]) <= max(q1[0], q2[0]) + _EPS
            and min(q1[0], q2[0]) <= max(p1[0], p2[0]) + _EPS
            and min(p1[1], p2[1]) <= max(q1[1], q2[1]) + _EPS
            and min(q1[1], q2[1]) <= max(p1[1], p2[1]) + _EPS
        )
    return d1 * d2 <= 0.0 and d3 * d4 <= 0.0


def distance_to_segment(segment: Segment, p: Point) -> Tuple[float, Point]:
    """Shortest distance from *p* to *segment*.

    Returns
    -------
    (float, Point)
        The distance and the closest point on the segment.
    """
    (ax, ay), (bx, by) = segment
    dx = bx - ax
    dy = by - ay
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return distance((ax, ay), p), (ax, ay)
    s = ((p[0] - ax) * dx + (p[1] - ay) * dy) / length_sq
    s = max(0.0, min(1.0, s))
    closest = (ax + s * dx, ay + s * dy)
    return distance(closest, p), closest


# ── Boundary curve ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BoundaryCurve:
    """Polyline forming one wall of the corridor.

    The first point lies on the entry edge and the last on the exit edge.
    """

    points: Tuple[Point, ...]

    @classmethod
    def from_coords(cls, coords: Iterable[Sequence[float]]) -> "BoundaryCurve":
        return cls(tuple((float(x), float(y)) for x, y in coords))

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index: int) -> Point:
        return self.points[index]

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    @property
    def coords(self) -> Tuple[Point, ...]:
        return self.points

    @property
    def xs(self) -> Tuple[float, ...]:
        return tuple(p[0] for p in self.points)

    @property
    def ys(self) -> Tuple[float, ...]:
        return tuple(p[1] for p in self.points)

    @property
    def first(self) -> Point:
        return self.points[0]

    @property
    def last(self) -> Point:
        return self.points[-1]

    def segments(self) -> Iterator[Segment]:
        """Consecutive ``(p_k, p_k+1)`` wall segments."""
        for k in range(len(self.points) - 1):
            yield self.points[k], self.points[k + 1]


# ── Triangle cell ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TriangleCell:
    """One cell of the routing mesh.

    Attributes
    ----------
    vertices : tuple of three points
        Corners taken from the two boundary curves.
    dir : Point
        Unit heading toward the next cell (or the exit edge).
    next_index : int or None
        Index of the successor cell; ``None`` once the exit is reached.
    direction_edge : Segment
        The wall segment of this cell, used for wall-proximity checks.
    dir_length : float
        Length of the heading vector before normalisation.
    """

    vertices: Tuple[Point, Point, Point]
    dir: Point
    next_index: Optional[int]
    direction_edge: Segment
    dir_length: float = 1.0

    @property
    def centroid(self) -> Point:
        return triangle_centroid(self.vertices)

    @property
    def area(self) -> float:
        return triangle_area(self.vertices)

    @property
    def heading(self) -> float:
        return heading_of(self.dir)

    @property
    def is_terminal(self) -> bool:
        return self.next_index is None

    def contains(self, p: Point) -> bool:
        a, b, c = self.vertices
        return point_in_triangle(p, a, b, c)

    def wall_distance(self, p: Point) -> float:
        d, _ = distance_to_segment(self.direction_edge, p)
        return d


def triangle_centroid(vertices: Sequence[Point]) -> Point:
    a, b, c = vertices
    return ((a[0] + b[0] + c[0]) / 3.0, (a[1] + b[1] + c[1]) / 3.0)


def triangle_area(vertices: Sequence[Point]) -> float:
    a, b, c = vertices
    return abs(cross(a, b, c)) * 0.5


def unit_vector(src: Point, dst: Point) -> Tuple[Point, float]:
    """Unit vector from *src* to *dst* and the original length.

    Raises :class:`GeometryError` when the two points coincide.
    """
    dx = dst[0] - src[0]
    dy = dst[1] - src[1]
    length = math.hypot(dx, dy)
    if length <= _EPS:
        raise GeometryError(f"zero-length direction from {src} to {dst}")
    return (dx / length, dy / length), length
