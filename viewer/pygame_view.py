#!/usr/bin/env python3
"""
Live corridor view.  Draws the static mesh once and the active vehicles on
every step.

The view only reads from the simulator.  It is driven by
:func:`corridor.runner.run`, which calls :meth:`CorridorView.render` after
each step and :meth:`CorridorView.pace` to keep real-time playback.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional, Tuple

import pygame

from .constants import ViewConstants
from .hud import hud_text
from .types import Camera, ColorRGB

log = logging.getLogger("viewer")


class CorridorView(ViewConstants):
    """Pygame window showing boundary curves, triangles and vehicles.

    Parameters
    ----------
    width, height : int
        Window size in pixels.
    show_mesh_arrows : bool
        Draw the per-cell heading arrows.
    """

    def __init__(self, width: int = 1000, height: int = 700,
                 show_mesh_arrows: bool = True) -> None:
        self.width = width
        self.height = height
        self.show_mesh_arrows = show_mesh_arrows

        self.screen: Optional[pygame.Surface] = None
        self.background: Optional[pygame.Surface] = None
        self.font: Optional[pygame.font.Font] = None
        self.camera = Camera(width, height)
        self.is_open = False

    # ------------------------------------------------------------------ #
    #  Setup                                                               #
    # ------------------------------------------------------------------ #
    def open(self) -> None:
        pygame.init()
        pygame.display.set_caption("CORRIDOR SIM")
        self.screen = pygame.display.set_mode((self.width, self.height))
        self.font = pygame.font.SysFont("monospace", 13)
        self.is_open = True

    def show_mesh(self, sim: Any) -> None:
        """Fit the camera to the corridor and pre-render the static layer."""
        if not self.is_open:
            self.open()
        points = list(sim.path1.coords) + list(sim.path2.coords)
        self.camera = Camera.fit(points, self.width, self.height, self.MARGIN_PX)

        surf = pygame.Surface((self.width, self.height))
        surf.fill(self.BG_COLOR)
        for cell in sim.triangles:
            pts = [self._to_px(p) for p in cell.vertices]
            pygame.draw.polygon(surf, self.MESH_COLOR, pts, width=1)
        if self.show_mesh_arrows:
            for (cx, cy), (dx, dy) in sim.mesh_arrows():
                self._draw_arrow(surf, (cx, cy), (cx + dx, cy + dy), self.ARROW_COLOR)
        for path in (sim.path1, sim.path2):
            pts = [self._to_px(p) for p in path.coords]
            pygame.draw.lines(surf, self.WALL_COLOR, False, pts, self.WALL_WIDTH)
            for p in pts:
                pygame.draw.circle(surf, self.VERTEX_COLOR, p, self.VERTEX_RADIUS_PX, width=1)
        self._draw_segment(surf, sim.entry_edge, self.ENTRY_COLOR)
        self._draw_segment(surf, sim.exit_edge, self.EXIT_COLOR)
        self.background = surf

    # ------------------------------------------------------------------ #
    #  Per-step drawing                                                    #
    # ------------------------------------------------------------------ #
    def render(self, sim: Any) -> None:
        if not self.is_open or self.screen is None:
            return
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.close()
                return

        if self.background is not None:
            self.screen.blit(self.background, (0, 0))
        else:
            self.screen.fill(self.BG_COLOR)

        state = sim.snapshot()
        for v in state["vehicles"]:
            sx, sy = self._to_px((v["x"], v["y"]))
            pygame.draw.circle(self.screen, self.VEHICLE_COLOR, (sx, sy), self.VEHICLE_RADIUS_PX)
            hx = sx + math.cos(v["th"]) * self.HEADING_LENGTH_PX
            hy = sy - math.sin(v["th"]) * self.HEADING_LENGTH_PX
            pygame.draw.line(self.screen, self.VEHICLE_COLOR, (sx, sy), (hx, hy), 1)

        self._draw_hud(state)
        pygame.display.flip()

    def pace(self, seconds: float) -> None:
        """Block for *seconds* of wall-clock time (real-time playback)."""
        if self.is_open and seconds > 0.0:
            pygame.time.wait(int(seconds * 1000))

    def close(self) -> None:
        if self.is_open:
            pygame.quit()
        self.is_open = False
        self.screen = None

    # ------------------------------------------------------------------ #
    #  Helpers                                                             #
    # ------------------------------------------------------------------ #
    def _to_px(self, p: Tuple[float, float]) -> Tuple[int, int]:
        sx, sy = self.camera.world_to_screen(p[0], p[1])
        return int(round(sx)), int(round(sy))

    def _draw_segment(self, surf: pygame.Surface, seg, color: ColorRGB) -> None:
        a, b = seg
        pygame.draw.line(surf, color, self._to_px(a), self._to_px(b), self.EDGE_WIDTH)

    def _draw_arrow(self, surf: pygame.Surface, src, dst, color: ColorRGB) -> None:
        a = self._to_px(src)
        b = self._to_px(dst)
        pygame.draw.line(surf, color, a, b, 1)
        ang = math.atan2(b[1] - a[1], b[0] - a[0])
        for side in (-1, 1):
            tip = (
                b[0] - self.ARROW_HEAD_PX * math.cos(ang + side * math.pi / 6),
                b[1] - self.ARROW_HEAD_PX * math.sin(ang + side * math.pi / 6),
            )
            pygame.draw.line(surf, color, b, tip, 1)

    def _draw_hud(self, state: Dict[str, Any]) -> None:
        if self.font is None:
            return
        text = hud_text(state)
        label = self.font.render(text, True, self.HUD_TEXT_COLOR)
        self.screen.blit(label, (12, 10))
