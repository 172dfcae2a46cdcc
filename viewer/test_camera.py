#!/usr/bin/env python3
"""
Camera and HUD text tests (no display needed).
"""

from __future__ import annotations

import unittest

from viewer.hud import hud_text
from viewer.types import Camera


class CameraTests(unittest.TestCase):
    def test_fit_centres_and_keeps_margin(self) -> None:
        pts = [(0.0, 0.0), (10.0, 0.0), (10.0, 4.0), (0.0, 4.0)]
        cam = Camera.fit(pts, 800, 600, margin_px=50)
        self.assertEqual((cam.world_x, cam.world_y), (5.0, 2.0))
        self.assertAlmostEqual(cam.zoom, 70.0)
        for x, y in pts:
            sx, sy = cam.world_to_screen(x, y)
            self.assertTrue(50 - 1e-9 <= sx <= 750 + 1e-9)
            self.assertTrue(0 <= sy <= 600)

    def test_y_axis_points_up(self) -> None:
        cam = Camera(200, 200, zoom=2.0)
        _, low = cam.world_to_screen(0.0, 0.0)
        _, high = cam.world_to_screen(0.0, 10.0)
        self.assertLess(high, low)

    def test_camera_centre_maps_to_screen_centre(self) -> None:
        cam = Camera(640, 480, world_x=3.0, world_y=-2.0, zoom=12.5)
        self.assertEqual(cam.world_to_screen(3.0, -2.0), (320.0, 240.0))
        self.assertEqual(cam.world_to_screen(4.0, -1.0), (332.5, 227.5))

    def test_fit_degenerate_inputs(self) -> None:
        self.assertEqual(Camera.fit([], 100, 100).zoom, 3.0)
        self.assertEqual(Camera.fit([(1.0, 1.0)], 100, 100).zoom, 1.0)


class HudTextTests(unittest.TestCase):
    def test_reads_snapshot_fields(self) -> None:
        state = {"t": 1.5, "active": 3, "pending": 2,
                 "avg_closest_dist": 0.75, "avg_dist": 2.0, "vehicles": []}
        text = hud_text(state)
        self.assertIn("t=   1.50", text)
        self.assertIn("active=  3", text)
        self.assertIn("pending=  2", text)
        self.assertIn("closest=  0.75", text)

    def test_missing_distances_shown_as_dash(self) -> None:
        state = {"t": 0.0, "active": 1, "pending": 0,
                 "avg_closest_dist": float("nan"), "avg_dist": float("nan")}
        self.assertNotIn("nan", hud_text(state))


if __name__ == "__main__":
    unittest.main()
