from __future__ import annotations
from collections.abc import Sequence


SCALE_UP_HEADER = "Scale-up options:"

# tiers offered when the base deployment contains a TS
TS_SCALE_UP_TIERS: tuple[str, ...] = (
    "  - Medium: 2 TS + OvD",
    "  - Large: 3 TS + OvD + HOvD",
    "  - Very large: 4 TS + OvD + HOvD/TC",
)

def scale_up_hints(base: Sequence[str]) -> list[str]:
    """Rationale lines describing how the base deployment can be scaled up."""

    hints = ["", SCALE_UP_HEADER]
    if any("TS" in unit for unit in base):
        hints.extend(TS_SCALE_UP_TIERS)
    return hints
