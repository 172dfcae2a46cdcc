#!/usr/bin/env python3
"""
main.py
=======
Command-line entry point: load a scenario, build the simulator, run it to
completion (optionally with the live view) and write the logs.

Usage::

    python main.py data/curvedPath.json --plot --speedup 4
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

import config
from logging_setup import setup_logging
from corridor.engine import Simulator
from corridor.errors import SimulationError
from corridor.policy import STEPPING_POLICIES, SafetyPolicy
from corridor.runner import run
from corridor.scenario import load_scenario
from corridor.triangulation import TRIANGULATIONS


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Triangulated-corridor traffic simulation")
    p.add_argument("scenario", nargs="?",
                   default=os.environ.get(config.ENV_SCENARIO, config.DEFAULT_SCENARIO_PATH),
                   help="scenario JSON file")
    p.add_argument("--triangulation", choices=sorted(TRIANGULATIONS),
                   default=config.DEFAULT_TRIANGULATION)
    p.add_argument("--stepping", choices=sorted(STEPPING_POLICIES),
                   default=config.DEFAULT_STEPPING)
    p.add_argument("--log-dir",
                   default=os.environ.get(config.ENV_LOG_DIR, config.DEFAULT_LOG_DIR))
    p.add_argument("--plot", action="store_true", help="show the live pygame view")
    p.add_argument("--speedup", type=float,
                   default=float(os.environ.get(config.ENV_SPEEDUP, config.DEFAULT_SPEEDUP)))
    p.add_argument("--max-steps", type=int, default=config.DEFAULT_MAX_STEPS)
    p.add_argument("--vehicle-collisions", action="store_true",
                   help="terminate vehicles that come closer than their combined radii")
    p.add_argument("--verbose", "-v", action="store_true")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, config.APP_LOG_FILE)
    log = logging.getLogger("main")

    try:
        scenario = load_scenario(args.scenario)
        sim = Simulator(
            scenario,
            triangulation=args.triangulation,
            policy=SafetyPolicy(vehicle_collision_enabled=args.vehicle_collisions),
            stepping=args.stepping,
        )
        view = None
        if args.plot:
            from viewer import CorridorView
            view = CorridorView(config.WINDOW_WIDTH, config.WINDOW_HEIGHT)
        result = run(sim, view=view, speedup=args.speedup,
                     log_dir=args.log_dir, max_steps=args.max_steps)
    except SimulationError as exc:
        log.error("%s: %s", type(exc).__name__, exc)
        return 2
    except KeyboardInterrupt:
        log.info("Shutting down...")
        return 130

    log.info("Finished in %d steps (t=%.2f): %s", result.steps,
             result.final_time, result.reasons)
    return 0


if __name__ == "__main__":
    sys.exit(main())
