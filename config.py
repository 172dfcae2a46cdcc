#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf; it never imports from
other project packages.
"""

# ── Run defaults ─────────────────────────────────────────────────────────────
DEFAULT_SCENARIO_PATH: str = "data/curvedPath.json"
DEFAULT_TRIANGULATION: str = "closest"
DEFAULT_STEPPING: str = "cell-following"
DEFAULT_SPEEDUP: float = 1.0
DEFAULT_MAX_STEPS: int = 100_000

# ── Output ───────────────────────────────────────────────────────────────────
DEFAULT_LOG_DIR: str = "logs"
APP_LOG_FILE: str = "corridor.log"

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 1000
WINDOW_HEIGHT: int = 700

# ── Environment variable names ───────────────────────────────────────────────
ENV_SCENARIO: str = "CORRIDOR_SCENARIO"
ENV_LOG_DIR: str = "CORRIDOR_LOG_DIR"
ENV_SPEEDUP: str = "CORRIDOR_SPEEDUP"
