"""
viewer/hud.py
=============
Status line shown at the top of the corridor view.  Built from
:meth:`corridor.engine.Simulator.snapshot`, so it needs no pygame.
"""

from __future__ import annotations

import math
from typing import Any, Dict


def _fmt_dist(value: float) -> str:
    return "   -  " if math.isnan(value) else f"{value:6.2f}"


def hud_text(state: Dict[str, Any]) -> str:
    """One-line summary: clock, active / pending counts and mean distances."""
    return (
        f"t={state['t']:7.2f}  active={state['active']:3d}  "
        f"pending={state['pending']:3d}  "
        f"closest={_fmt_dist(state['avg_closest_dist'])}  "
        f"avg={_fmt_dist(state['avg_dist'])}"
    )
