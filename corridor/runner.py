#!/usr/bin/env python3
"""
corridor/runner.py
==================
Run driver: steps a :class:`~corridor.engine.Simulator` until it reports
finished, feeds an optional view, then writes the logs.

The view is a pure observer.  It is only ever handed the simulator to
read; closing its window detaches it and the run carries on headless with
the same results.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from corridor.engine import Simulator
from corridor.errors import InvalidArgument
from corridor.persistence import (
    TIME_LOG_NAME,
    VEHICLE_LOG_NAME,
    log_dir_for,
    write_time_log,
    write_vehicle_log,
)

log = logging.getLogger("runner")


@dataclass
class RunResult:
    """Summary of one completed (or step-capped) run."""

    steps: int
    final_time: float
    finished: bool
    reasons: Dict[str, int]
    written: List[str] = field(default_factory=list)


def run(
    sim: Simulator,
    view: Optional[Any] = None,
    speedup: float = 1.0,
    log_dir: Optional[str] = None,
    max_steps: Optional[int] = None,
) -> RunResult:
    """Step *sim* to completion.

    Parameters
    ----------
    sim : Simulator
        The engine to drive.
    view : object or None
        Rendering sink with ``show_mesh``, ``render``, ``pace``, ``close``
        and ``is_open``.
    speedup : float
        Real-time playback factor; only affects pacing when a view is
        attached.
    log_dir : str or None
        Root directory for ``time.csv`` / ``vehicles.csv``; nothing is
        written when *None*.
    max_steps : int or None
        Stop early after this many steps.
    """
    if speedup <= 0.0:
        raise InvalidArgument(f"speedup must be positive (got {speedup})")
    if max_steps is not None and max_steps < 1:
        raise InvalidArgument(f"max_steps must be at least 1 (got {max_steps})")

    if view is not None:
        view.show_mesh(sim)

    log.info("Running %s: %d vehicles, %d cells",
             sim.scenario.name, sim.n_vehicles, sim.n_triangles)
    steps = 0
    while not sim.finished:
        if max_steps is not None and steps >= max_steps:
            log.warning("Stopped after %d steps with %d vehicles still running",
                        steps, sim.n_active_vehicles + len(sim.pending_vehicles))
            break
        sim.step()
        steps += 1

        if view is not None:
            view.render(sim)
            view.pace(sim.dT / speedup)
            if not view.is_open:
                log.info("View closed; continuing headless")
                view = None

    if view is not None:
        view.close()

    result = RunResult(
        steps=steps,
        final_time=sim.t,
        finished=sim.finished,
        reasons=sim.reasons(),
    )
    if log_dir is not None:
        out_dir = log_dir_for(log_dir, sim.scenario.name)
        result.written.append(
            write_time_log(sim.time_log, os.path.join(out_dir, TIME_LOG_NAME))
        )
        result.written.append(
            write_vehicle_log(sim.vehicles, os.path.join(out_dir, VEHICLE_LOG_NAME))
        )

    log.info("Run done: %d steps, t=%.3f, reasons=%s",
             result.steps, result.final_time, result.reasons)
    return result
