#!/usr/bin/env python3
"""
corridor/scenario.py
====================
Scenario files: the two boundary curves plus the simulation properties.

File format (JSON)::

    {
      "type": "Paths",
      "paths": [{"coords": [[0, 0], [10, 0]]},
                {"coords": [[0, 4], [10, 4]]}],
      "properties": {"deltaT": 0.1, "spawnFreq": 1.0, "seed": 7,
                     "velocity": 1.5, "nVehicles": 10, "radius": 0.1}
    }

Either ``nVehicles`` or the spawn horizon ``tEnd`` must be present.
Every validation failure is reported as :class:`~corridor.errors.ConfigError`.
"""

from __future__ import annotations

import json
import logging
import math
import os
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from corridor.errors import ConfigError
from corridor.geometry import BoundaryCurve

log = logging.getLogger("scenario")


# ── Pydantic schemas ─────────────────────────────────────────────────────────

class PathModel(BaseModel):
    """One boundary curve as a list of ``[x, y]`` pairs."""
    coords: List[Tuple[float, float]]


class PropertiesModel(BaseModel):
    """Simulation-level parameters."""
    deltaT: float = Field(gt=0)
    spawnFreq: float = Field(gt=0)
    velocity: float = Field(gt=0)
    seed: int
    nVehicles: Optional[int] = Field(default=None, ge=0)
    tEnd: Optional[float] = Field(default=None, ge=0)
    radius: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def _count_or_horizon(self) -> "PropertiesModel":
        if self.nVehicles is None and self.tEnd is None:
            raise ValueError("either 'nVehicles' or 'tEnd' must be given")
        return self


class ScenarioModel(BaseModel):
    """Top-level scenario document."""
    type: str
    paths: List[PathModel]
    properties: PropertiesModel

    @field_validator("paths")
    @classmethod
    def _two_paths(cls, paths: List[PathModel]) -> List[PathModel]:
        if len(paths) != 2:
            raise ValueError(f"exactly 2 paths are required (got {len(paths)})")
        return paths


# ── Scenario ─────────────────────────────────────────────────────────────────

class Scenario:
    """Validated scenario with typed accessors used by the engine.

    Parameters
    ----------
    model : ScenarioModel
        Parsed document.
    name : str
        Short name used for the log directory (the file stem).
    """

    def __init__(self, model: ScenarioModel, name: str = "scenario") -> None:
        self.model = model
        self.name = name
        self.path1 = BoundaryCurve.from_coords(model.paths[0].coords)
        self.path2 = BoundaryCurve.from_coords(model.paths[1].coords)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], name: str = "scenario") -> "Scenario":
        try:
            model = ScenarioModel.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"invalid scenario {name!r}: {exc}") from exc
        return cls(model, name=name)

    @property
    def map_type(self) -> str:
        return self.model.type

    @property
    def dt(self) -> float:
        return self.model.properties.deltaT

    @property
    def spawn_freq(self) -> float:
        return self.model.properties.spawnFreq

    @property
    def seed(self) -> int:
        return self.model.properties.seed

    @property
    def velocity(self) -> float:
        return self.model.properties.velocity

    @property
    def radius(self) -> float:
        return self.model.properties.radius

    @property
    def n_vehicles(self) -> int:
        props = self.model.properties
        if props.nVehicles is not None:
            return props.nVehicles
        # Spawn times 0, 1/f, 2/f, ... up to and including the horizon.
        return int(math.floor(props.tEnd * props.spawnFreq + 1e-9)) + 1

    @property
    def spawn_horizon(self) -> float:
        """Latest spawn time."""
        return max(0, self.n_vehicles - 1) / self.spawn_freq

    def spawn_times(self) -> List[float]:
        return [i / self.spawn_freq for i in range(self.n_vehicles)]


def load_scenario(path: str) -> Scenario:
    """Read and validate a scenario JSON file.

    Raises
    ------
    ConfigError
        When the file is missing, is not valid JSON, or fails validation.
    """
    name = os.path.splitext(os.path.basename(path))[0]
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as exc:
        raise ConfigError(f"scenario file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"scenario file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"scenario file {path} must contain a JSON object")

    scenario = Scenario.from_dict(data, name=name)
    log.info(
        "Loaded scenario %s: type=%s, %d vehicles, dT=%g, %d + %d boundary points",
        name, scenario.map_type, scenario.n_vehicles, scenario.dt,
        len(scenario.path1), len(scenario.path2),
    )
    return scenario
