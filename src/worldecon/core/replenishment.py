"""
Natural replenishment of renewable stocks.

The economy tick calls ``replenish`` exactly once per site per tick, after
stock decay. What a replenisher restores is its own business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from worldecon.core.goods import Good, parse_good

if TYPE_CHECKING:
    from worldecon.core.economy import Economy


class Replenisher(ABC):
    """Restores natural resources of one site over simulated time."""

    @abstractmethod
    def replenish(self, economy: Economy, time: float) -> None:
        """Mutate ``economy.stocks`` for the current world ``time`` (days)."""

    def to_dict(self) -> dict[str, Any]:
        return {"kind": type(self).__name__}


class NoReplenishment(Replenisher):
    """Nothing grows back."""

    def replenish(self, economy: Economy, time: float) -> None:
        pass


class RenewableStockReplenisher(Replenisher):
    """
    Regrow selected goods toward a carrying level.

    Each tick a stock below its target recovers ``rate`` of the gap. Stocks
    at or above target are left alone, so stockpiles are never confiscated.
    """

    def __init__(self, targets: dict[Good, tuple[float, float]]):
        self.targets = dict(targets)

    @classmethod
    def default(cls) -> RenewableStockReplenisher:
        return cls({
            Good.WHEAT: (50.0, 0.1),
            Good.LOGS: (80.0, 0.1),
            Good.ROCK: (120.0, 0.1),
            Good.GAME: (20.0, 0.1),
            Good.FISH: (10.0, 0.1),
        })

    @classmethod
    def from_config(cls, targets: dict[str, Any]) -> RenewableStockReplenisher:
        """Build from ``{"wheat": [target, rate], ...}``."""
        return cls({
            parse_good(name): (float(entry[0]), float(entry[1]))
            for name, entry in targets.items()
        })

    def replenish(self, economy: Economy, time: float) -> None:
        for good, (target, rate) in self.targets.items():
            stock = economy.stocks[good.idx]
            if stock < target:
                economy.stocks[good.idx] = stock + (target - stock) * rate

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": type(self).__name__,
            "targets": {
                good.value: [target, rate]
                for good, (target, rate) in self.targets.items()
            },
        }
