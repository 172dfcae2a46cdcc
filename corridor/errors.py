"""
corridor/errors.py
==================
Exception hierarchy for the simulator.  Every error is fatal: it is raised
during setup (or, for an inconsistent mesh, during stepping) and propagates
to the run driver unchanged.
"""


class SimulationError(Exception):
    """Base class for every error raised by :mod:`corridor`."""


class ConfigError(SimulationError):
    """Malformed or missing scenario fields, or a map-type mismatch."""


class GeometryError(SimulationError):
    """Degenerate boundary data or a vehicle that no cell contains."""


class InvalidArgument(SimulationError, ValueError):
    """Out-of-range argument passed to engine or driver construction."""
