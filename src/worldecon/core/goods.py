"""
Commodity and industry enumerations for the settlement economy.

Both enumerations are closed: every economy array is a dense numpy vector
with one slot per member, addressed by ``member.idx``.
"""

from __future__ import annotations

from enum import Enum

import numpy as np


# ---------------------------------------------------------------------------
# Simulated time (days)
# ---------------------------------------------------------------------------

MONTH: float = 30.0
YEAR: float = 12.0 * MONTH
TICK_PERIOD: float = 3.0 * MONTH
HISTORY_DAYS: float = 500.0 * YEAR


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Good(str, Enum):
    """A tradeable commodity kind."""
    WHEAT = "wheat"
    FLOUR = "flour"
    MEAT = "meat"
    FISH = "fish"
    GAME = "game"
    FOOD = "food"
    LOGS = "logs"
    WOOD = "wood"
    ROCK = "rock"
    STONE = "stone"

    @property
    def idx(self) -> int:
        return _GOOD_INDEX[self]

    @property
    def decay_rate(self) -> float:
        """Fraction of the stock lost every tick."""
        return GOOD_DECAY_RATES.get(self, 0.0)

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Labor(str, Enum):
    """An industry; each one produces exactly one Good."""
    FARMER = "farmer"
    LUMBERJACK = "lumberjack"
    MINER = "miner"
    FISHER = "fisher"
    HUNTER = "hunter"
    COOK = "cook"

    @property
    def idx(self) -> int:
        return _LABOR_INDEX[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


_GOOD_INDEX: dict[Good, int] = {g: i for i, g in enumerate(Good)}
_LABOR_INDEX: dict[Labor, int] = {l: i for i, l in enumerate(Labor)}

N_GOODS = len(Good)
N_LABORS = len(Labor)

# Perishables rot; everything else keeps indefinitely.
GOOD_DECAY_RATES: dict[Good, float] = {
    Good.FOOD: 0.2,
    Good.WHEAT: 0.1,
    Good.MEAT: 0.25,
    Good.FISH: 0.2,
}


# ---------------------------------------------------------------------------
# Dense array helpers
# ---------------------------------------------------------------------------

def good_array(
    entries: dict[Good, float] | None = None, default: float = 0.0,
) -> np.ndarray:
    """Build a float vector over all goods, filled from ``entries``."""
    arr = np.full(N_GOODS, default, dtype=float)
    for good, amount in (entries or {}).items():
        arr[good.idx] = amount
    return arr


def labor_array(
    entries: dict[Labor, float] | None = None, default: float = 0.0,
) -> np.ndarray:
    """Build a float vector over all labors, filled from ``entries``."""
    arr = np.full(N_LABORS, default, dtype=float)
    for labor, amount in (entries or {}).items():
        arr[labor.idx] = amount
    return arr


def parse_good(name: str | Good) -> Good:
    """Resolve a good from its value (``"food"``) or member name (``"FOOD"``)."""
    if isinstance(name, Good):
        return name
    try:
        return Good(name.lower())
    except ValueError:
        raise KeyError(f"Unknown good: '{name}'") from None


def parse_labor(name: str | Labor) -> Labor:
    """Resolve a labor from its value (``"farmer"``) or member name."""
    if isinstance(name, Labor):
        return name
    try:
        return Labor(name.lower())
    except ValueError:
        raise KeyError(f"Unknown labor: '{name}'") from None
