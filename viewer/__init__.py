"""Pygame rendering sink for the corridor simulator."""

from .types import Camera, ColorRGB
from .constants import ViewConstants
from .pygame_view import CorridorView
