#!/usr/bin/env python3
"""
Scenario loading and validation tests.
"""

from __future__ import annotations

import json
import os
import tempfile
import unittest

from corridor.errors import ConfigError
from corridor.scenario import Scenario, load_scenario


def _doc(**props):
    properties = {"deltaT": 0.1, "spawnFreq": 2.0, "velocity": 1.5, "seed": 4,
                  "nVehicles": 6}
    properties.update(props)
    return {
        "type": "Paths",
        "paths": [
            {"coords": [[0, 0], [5, 0], [10, 1]]},
            {"coords": [[0, 4], [10, 5]]},
        ],
        "properties": properties,
    }


class ScenarioModelTests(unittest.TestCase):
    def test_valid_document(self) -> None:
        sc = Scenario.from_dict(_doc(), name="demo")
        self.assertEqual(sc.name, "demo")
        self.assertEqual(sc.map_type, "Paths")
        self.assertEqual(len(sc.path1), 3)
        self.assertEqual(sc.path2.last, (10.0, 5.0))
        self.assertEqual(sc.dt, 0.1)
        self.assertEqual(sc.seed, 4)
        self.assertEqual(sc.radius, 0.0)
        self.assertEqual(sc.n_vehicles, 6)
        self.assertEqual(sc.spawn_times(), [0.0, 0.5, 1.0, 1.5, 2.0, 2.5])
        self.assertAlmostEqual(sc.spawn_horizon, 2.5)

    def test_horizon_sets_vehicle_count(self) -> None:
        doc = _doc()
        del doc["properties"]["nVehicles"]
        doc["properties"]["tEnd"] = 3.0
        sc = Scenario.from_dict(doc)
        # Spawns at 0, 0.5, ..., 3.0 inclusive.
        self.assertEqual(sc.n_vehicles, 7)
        self.assertEqual(sc.spawn_times()[-1], 3.0)

    def test_count_or_horizon_required(self) -> None:
        doc = _doc()
        del doc["properties"]["nVehicles"]
        with self.assertRaises(ConfigError):
            Scenario.from_dict(doc)

    def test_seed_is_required(self) -> None:
        doc = _doc()
        del doc["properties"]["seed"]
        with self.assertRaises(ConfigError):
            Scenario.from_dict(doc)

    def test_missing_properties(self) -> None:
        doc = _doc()
        del doc["properties"]
        with self.assertRaises(ConfigError):
            Scenario.from_dict(doc)

    def test_non_positive_rates_rejected(self) -> None:
        for key in ("deltaT", "spawnFreq", "velocity"):
            with self.subTest(key=key):
                with self.assertRaises(ConfigError):
                    Scenario.from_dict(_doc(**{key: 0}))

    def test_negative_radius_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            Scenario.from_dict(_doc(radius=-1.0))

    def test_exactly_two_paths(self) -> None:
        doc = _doc()
        doc["paths"].append({"coords": [[0, 8], [10, 8]]})
        with self.assertRaises(ConfigError):
            Scenario.from_dict(doc)
        doc["paths"] = doc["paths"][:1]
        with self.assertRaises(ConfigError):
            Scenario.from_dict(doc)

    def test_bad_coordinate_pair(self) -> None:
        doc = _doc()
        doc["paths"][0]["coords"] = [[0, 0, 1], [5, 0]]
        with self.assertRaises(ConfigError):
            Scenario.from_dict(doc)


class LoadScenarioTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def _write(self, name: str, text: str) -> str:
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
        return path

    def test_load_uses_file_stem_as_name(self) -> None:
        path = self._write("straight.json", json.dumps(_doc()))
        sc = load_scenario(path)
        self.assertEqual(sc.name, "straight")
        self.assertEqual(sc.n_vehicles, 6)

    def test_missing_file(self) -> None:
        with self.assertRaises(ConfigError):
            load_scenario(os.path.join(self.tmp.name, "nope.json"))

    def test_invalid_json(self) -> None:
        path = self._write("broken.json", "{ not json")
        with self.assertRaises(ConfigError):
            load_scenario(path)

    def test_top_level_must_be_object(self) -> None:
        path = self._write("list.json", "[1, 2, 3]")
        with self.assertRaises(ConfigError):
            load_scenario(path)

    def test_bundled_sample_loads(self) -> None:
        root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        sc = load_scenario(os.path.join(root, "data", "curvedPath.json"))
        self.assertEqual(sc.map_type, "Paths")
        self.assertGreater(sc.n_vehicles, 0)


if __name__ == "__main__":
    unittest.main()
