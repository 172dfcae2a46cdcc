"""
viewer/types.py
===============
Lightweight data containers used by the view.  No pygame import, so the
camera maths can be tested headless.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Tuple

ColorRGB = Tuple[int, int, int]


@dataclass
class Camera:
    """Viewport mapping world coordinates to screen pixels (y up)."""
    screen_w: int
    screen_h: int
    world_x: float = 0.0
    world_y: float = 0.0
    zoom: float = 3.0

    @classmethod
    def fit(
        cls,
        points: Iterable[Tuple[float, float]],
        screen_w: int,
        screen_h: int,
        margin_px: float = 40.0,
    ) -> "Camera":
        """Centre on *points* and zoom so they all fit inside the margin."""
        pts = list(points)
        if not pts:
            return cls(screen_w, screen_h)
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        span_x = max(xs) - min(xs)
        span_y = max(ys) - min(ys)
        usable_w = max(1.0, screen_w - 2 * margin_px)
        usable_h = max(1.0, screen_h - 2 * margin_px)
        zooms = []
        if span_x > 0:
            zooms.append(usable_w / span_x)
        if span_y > 0:
            zooms.append(usable_h / span_y)
        zoom = min(zooms) if zooms else 1.0
        return cls(
            screen_w=screen_w,
            screen_h=screen_h,
            world_x=(max(xs) + min(xs)) / 2,
            world_y=(max(ys) + min(ys)) / 2,
            zoom=zoom,
        )

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        """Pixel position of world point (*wx*, *wy*); screen y grows downward."""
        return (
            self.screen_w * 0.5 + self.zoom * (wx - self.world_x),
            self.screen_h * 0.5 + self.zoom * (self.world_y - wy),
        )
