"""
corridor/persistence.py
=======================
Writes the run's records to CSV with pandas.

Layout under the log root::

    <root>/<scenario name>/time.csv      one row per step
    <root>/<scenario name>/vehicles.csv  one row per vehicle
"""

from __future__ import annotations

import logging
import os
from typing import Sequence

import pandas as pd

from corridor.metrics import TimeLog
from corridor.vehicle import Vehicle

log = logging.getLogger("persistence")

TIME_LOG_NAME = "time.csv"
VEHICLE_LOG_NAME = "vehicles.csv"
VEHICLE_LOG_COLUMNS = ("Id", "TInit", "TEnd", "LifeSpan", "Reason")


def log_dir_for(root: str, scenario_name: str) -> str:
    """Return (and create) the log directory for *scenario_name*."""
    path = os.path.join(root, scenario_name)
    os.makedirs(path, exist_ok=True)
    return path


def write_time_log(time_log: TimeLog, path: str) -> str:
    """Write *time_log* as CSV: a header row plus one row per step."""
    df = time_log.to_frame()
    df.to_csv(path, index=False)
    log.info("Wrote %d time-log rows to %s", len(df), path)
    return path


def vehicle_frame(vehicles: Sequence[Vehicle]) -> pd.DataFrame:
    rows = []
    for v in vehicles:
        rows.append({
            "Id": v.id,
            "TInit": v.t_init,
            "TEnd": v.t_end,
            "LifeSpan": v.life_span,
            "Reason": v.reason.name if v.reason is not None else "",
        })
    return pd.DataFrame(rows, columns=list(VEHICLE_LOG_COLUMNS))


def write_vehicle_log(vehicles: Sequence[Vehicle], path: str) -> str:
    """Write one row per vehicle with its lifespan and termination reason."""
    df = vehicle_frame(vehicles)
    df.to_csv(path, index=False)
    log.info("Wrote %d vehicle rows to %s", len(df), path)
    return path
