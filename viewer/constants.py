#!/usr/bin/env python3
"""Visual constants shared by the corridor view."""

from __future__ import annotations

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    BG_COLOR: ColorRGB = (15, 15, 15)
    WALL_COLOR: ColorRGB = (86, 168, 255)
    VERTEX_COLOR: ColorRGB = (255, 88, 88)
    ENTRY_COLOR: ColorRGB = (0, 255, 127)
    EXIT_COLOR: ColorRGB = (255, 60, 60)
    MESH_COLOR: ColorRGB = (42, 90, 42)
    ARROW_COLOR: ColorRGB = (100, 226, 170)
    VEHICLE_COLOR: ColorRGB = (246, 191, 90)
    HUD_TEXT_COLOR: ColorRGB = (180, 180, 180)

    WALL_WIDTH = 2
    EDGE_WIDTH = 3
    VERTEX_RADIUS_PX = 3
    VEHICLE_RADIUS_PX = 4
    HEADING_LENGTH_PX = 10
    ARROW_HEAD_PX = 5
    MARGIN_PX = 40
