#!/usr/bin/env python3
"""
Tests for the geometry primitives and the closest-vertex triangulation.
"""

from __future__ import annotations

import math
import unittest

from corridor.errors import GeometryError, InvalidArgument
from corridor.geometry import (
    BoundaryCurve,
    TriangleCell,
    distance_to_segment,
    point_in_polygon,
    point_in_triangle,
    segments_cross,
)
from corridor.triangulation import (
    ClosestTriangulation,
    chain_from,
    closest_triangulation,
    get_triangulation,
    validate_mesh,
)


def _straight(n: int, width: float = 4.0, spacing: float = 2.0):
    p1 = BoundaryCurve.from_coords([(k * spacing, 0.0) for k in range(n)])
    p2 = BoundaryCurve.from_coords([(k * spacing, width) for k in range(n)])
    return p1, p2


class PrimitiveTests(unittest.TestCase):
    def test_point_in_triangle_either_winding(self) -> None:
        a, b, c = (0.0, 0.0), (4.0, 0.0), (0.0, 4.0)
        self.assertTrue(point_in_triangle((1.0, 1.0), a, b, c))
        self.assertTrue(point_in_triangle((1.0, 1.0), a, c, b))
        self.assertFalse(point_in_triangle((3.0, 3.0), a, b, c))
        self.assertFalse(point_in_triangle((-0.1, 1.0), a, b, c))

    def test_point_on_edge_counts_as_inside(self) -> None:
        a, b, c = (0.0, 0.0), (4.0, 0.0), (0.0, 4.0)
        self.assertTrue(point_in_triangle((2.0, 0.0), a, b, c))
        self.assertTrue(point_in_triangle((2.0, 2.0), a, b, c))
        self.assertTrue(point_in_triangle(a, a, b, c))

    def test_distance_to_segment_perpendicular_and_clamped(self) -> None:
        seg = ((0.0, 0.0), (10.0, 0.0))
        d, closest = distance_to_segment(seg, (3.0, 2.0))
        self.assertAlmostEqual(d, 2.0)
        self.assertEqual(closest, (3.0, 0.0))

        d, closest = distance_to_segment(seg, (13.0, 4.0))
        self.assertAlmostEqual(d, 5.0)
        self.assertEqual(closest, (10.0, 0.0))

    def test_distance_to_degenerate_segment(self) -> None:
        d, closest = distance_to_segment(((1.0, 1.0), (1.0, 1.0)), (4.0, 5.0))
        self.assertAlmostEqual(d, 5.0)
        self.assertEqual(closest, (1.0, 1.0))

    def test_point_in_polygon_concave_ring(self) -> None:
        # U shape open at the top.
        ring = [(0, 0), (6, 0), (6, 4), (4, 4), (4, 2), (2, 2), (2, 4), (0, 4)]
        self.assertTrue(point_in_polygon((1.0, 3.0), ring))
        self.assertTrue(point_in_polygon((3.0, 1.0), ring))
        self.assertFalse(point_in_polygon((3.0, 3.0), ring))
        self.assertFalse(point_in_polygon((7.0, 1.0), ring))

    def test_segments_cross(self) -> None:
        exit_edge = ((4.0, -1.0), (4.0, 1.0))
        self.assertTrue(segments_cross(((3.0, 0.0), (5.0, 0.5)), exit_edge))
        # Same side of the edge, and past its end on the supporting line.
        self.assertFalse(segments_cross(((1.0, 0.0), (3.5, 0.0)), exit_edge))
        self.assertFalse(segments_cross(((3.0, -3.0), (5.0, -3.0)), exit_edge))
        # Touching an endpoint counts.
        self.assertTrue(segments_cross(((3.0, 1.0), (4.0, 1.0)), exit_edge))
        # Collinear: overlapping versus disjoint.
        self.assertTrue(segments_cross(((4.0, 0.5), (4.0, 3.0)), exit_edge))
        self.assertFalse(segments_cross(((4.0, 2.0), (4.0, 3.0)), exit_edge))

    def test_boundary_curve_accessors(self) -> None:
        curve = BoundaryCurve.from_coords([[0, 0], [1, 2], [3, 4]])
        self.assertEqual(len(curve), 3)
        self.assertEqual(curve.first, (0.0, 0.0))
        self.assertEqual(curve.last, (3.0, 4.0))
        self.assertEqual(curve.xs, (0.0, 1.0, 3.0))
        self.assertEqual(list(curve.segments()),
                         [((0.0, 0.0), (1.0, 2.0)), ((1.0, 2.0), (3.0, 4.0))])


class ClosestTriangulationTests(unittest.TestCase):
    def test_cell_count_and_chain(self) -> None:
        p1, p2 = _straight(4)
        cells = closest_triangulation(p1, p2)
        self.assertEqual(len(cells), (len(p1) - 1) + (len(p2) - 1))
        self.assertEqual(chain_from(cells, 0), list(range(len(cells))))
        self.assertIsNone(cells[-1].next_index)
        for k, cell in enumerate(cells[:-1]):
            self.assertEqual(cell.next_index, k + 1)
        validate_mesh(cells)

    def test_cells_are_non_degenerate_with_unit_headings(self) -> None:
        p1, p2 = _straight(5)
        for cell in closest_triangulation(p1, p2):
            self.assertGreater(cell.area, 0.0)
            self.assertAlmostEqual(math.hypot(*cell.dir), 1.0)
            self.assertGreater(cell.dir[0], 0.0)

    def test_entry_cell_touches_entry_edge(self) -> None:
        p1, p2 = _straight(3)
        first = closest_triangulation(p1, p2)[0]
        self.assertIn(p1.first, first.vertices)
        self.assertIn(p2.first, first.vertices)
        self.assertTrue(first.contains((0.0, 2.0)))

    def test_last_cell_holds_exit_edge_and_points_at_it(self) -> None:
        p1, p2 = _straight(3)
        last = closest_triangulation(p1, p2)[-1]
        self.assertTrue(last.is_terminal)
        self.assertIn(p1.last, last.vertices)
        self.assertIn(p2.last, last.vertices)
        cx, cy = last.centroid
        ex, ey = 4.0, 2.0
        self.assertAlmostEqual(last.dir_length, math.hypot(ex - cx, ey - cy))

    def test_wall_edges_lie_on_boundary_curves(self) -> None:
        p1, p2 = _straight(4)
        walls = set(p1.segments()) | set(p2.segments())
        cells = closest_triangulation(p1, p2)
        self.assertEqual({c.direction_edge for c in cells}, walls)

    def test_unequal_lengths_reuse_last_vertex(self) -> None:
        p1 = BoundaryCurve.from_coords([(0, 0), (2, 0), (4, 0), (6, 0), (8, 0)])
        p2 = BoundaryCurve.from_coords([(0, 4), (8, 4)])
        cells = closest_triangulation(p1, p2)
        self.assertEqual(len(cells), 5)
        validate_mesh(cells)
        self.assertTrue(all(c.area > 0 for c in cells))
        # Trailing cells all share the short curve's last vertex.
        self.assertIn(p2.last, cells[-1].vertices)
        self.assertIn(p2.last, cells[-2].vertices)
        self.assertEqual(cells[-1].direction_edge, ((6.0, 0.0), (8.0, 0.0)))

    def test_too_few_points_raise(self) -> None:
        p1 = BoundaryCurve.from_coords([(0, 0)])
        p2 = BoundaryCurve.from_coords([(0, 4), (4, 4)])
        with self.assertRaises(GeometryError):
            closest_triangulation(p1, p2)

    def test_collinear_curves_raise(self) -> None:
        p1 = BoundaryCurve.from_coords([(0, 0), (2, 0)])
        p2 = BoundaryCurve.from_coords([(4, 0), (6, 0)])
        with self.assertRaises(GeometryError):
            closest_triangulation(p1, p2)

    def test_strategy_registry(self) -> None:
        self.assertIsInstance(get_triangulation("closest"), ClosestTriangulation)
        self.assertIsInstance(get_triangulation(None), ClosestTriangulation)
        with self.assertRaises(InvalidArgument):
            get_triangulation("constant-turn")


class MeshValidationTests(unittest.TestCase):
    def _cell(self, nxt):
        return TriangleCell(
            vertices=((0.0, 0.0), (1.0, 0.0), (0.0, 1.0)),
            dir=(1.0, 0.0),
            next_index=nxt,
            direction_edge=((0.0, 0.0), (1.0, 0.0)),
        )

    def test_cycle_is_rejected(self) -> None:
        cells = [self._cell(1), self._cell(2), self._cell(1), self._cell(None)]
        with self.assertRaises(GeometryError):
            validate_mesh(cells)

    def test_missing_or_extra_sentinel_is_rejected(self) -> None:
        with self.assertRaises(GeometryError):
            validate_mesh([self._cell(1), self._cell(0)])
        with self.assertRaises(GeometryError):
            validate_mesh([self._cell(None), self._cell(None)])

    def test_out_of_range_successor_is_rejected(self) -> None:
        with self.assertRaises(GeometryError):
            validate_mesh([self._cell(5), self._cell(None)])

    def test_empty_mesh_is_rejected(self) -> None:
        with self.assertRaises(GeometryError):
            validate_mesh([])


if __name__ == "__main__":
    unittest.main()
