"""
corridor: simulation core
==========================

Modules
-------
geometry
    :class:`BoundaryCurve`, :class:`TriangleCell` and the point / segment
    tests used for point location and wall proximity.
triangulation
    Closest-vertex corridor triangulation and the strategy registry.
vehicle
    :class:`Vehicle` kinematic state and lifecycle.
policy
    :class:`SafetyPolicy` constants and the stepping policies.
metrics
    :class:`TimeLog` accumulator and distance statistics.
scenario
    JSON scenario schema and loader.
engine
    :class:`Simulator` stepper.
persistence
    CSV writers for the time log and vehicle lifespans.
runner
    Run driver tying the engine, an optional view and persistence together.
"""
