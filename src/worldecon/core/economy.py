"""
Economy record owned by a settlement site.

All per-good and per-labor quantities are dense numpy vectors indexed by
``Good.idx`` / ``Labor.idx``. Scarcity values are the one exception: a good
may be *unpriced* this tick, so ``values`` is a list of ``float | None``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from worldecon.core.goods import (
    N_GOODS, Good, Labor, good_array, labor_array,
)
from worldecon.core.replenishment import NoReplenishment, Replenisher


@dataclass
class Economy:
    """Mutable economic state of one site, advanced once per tick."""

    pop: float = 32.0
    stocks: np.ndarray = field(default_factory=good_array)
    values: list[float | None] = field(default_factory=lambda: [None] * N_GOODS)
    prices: np.ndarray = field(default_factory=good_array)
    surplus: np.ndarray = field(default_factory=good_array)
    marginal_surplus: np.ndarray = field(default_factory=good_array)
    labors: np.ndarray = field(default_factory=lambda: labor_array(default=0.01))
    productivity: np.ndarray = field(default_factory=lambda: labor_array(default=1.0))
    yields: np.ndarray = field(default_factory=lambda: labor_array(default=1.0))

    @classmethod
    def seeded(
        cls,
        pop: float,
        stocks: dict[Good, float] | None = None,
        labors: dict[Labor, float] | None = None,
        values: dict[Good, float] | None = None,
        default_labor: float = 0.01,
    ) -> Economy:
        """Create an economy from sparse seed values."""
        initial_values: list[float | None] = [None] * N_GOODS
        for good, v in (values or {}).items():
            initial_values[good.idx] = v
        return cls(
            pop=float(pop),
            stocks=good_array(stocks),
            values=initial_values,
            labors=labor_array(labors, default=default_labor),
        )

    # --- Accessors ---

    def stock(self, good: Good) -> float:
        return float(self.stocks[good.idx])

    def value(self, good: Good) -> float | None:
        return self.values[good.idx]

    def price(self, good: Good) -> float:
        return float(self.prices[good.idx])

    def labor_share(self, labor: Labor) -> float:
        return float(self.labors[labor.idx])

    def workers(self, labor: Labor) -> float:
        """Head-count assigned to an industry."""
        return float(self.labors[labor.idx] * self.pop)

    def copy(self) -> Economy:
        return Economy(
            pop=self.pop,
            stocks=self.stocks.copy(),
            values=list(self.values),
            prices=self.prices.copy(),
            surplus=self.surplus.copy(),
            marginal_surplus=self.marginal_surplus.copy(),
            labors=self.labors.copy(),
            productivity=self.productivity.copy(),
            yields=self.yields.copy(),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe view keyed by good / labor value."""
        return {
            "pop": float(self.pop),
            "stocks": {g.value: float(self.stocks[g.idx]) for g in Good},
            "values": {
                g.value: (float(v) if v is not None else None)
                for g, v in zip(Good, self.values)
            },
            "prices": {g.value: float(self.prices[g.idx]) for g in Good},
            "surplus": {g.value: float(self.surplus[g.idx]) for g in Good},
            "marginal_surplus": {
                g.value: float(self.marginal_surplus[g.idx]) for g in Good
            },
            "labors": {l.value: float(self.labors[l.idx]) for l in Labor},
            "productivity": {l.value: float(self.productivity[l.idx]) for l in Labor},
            "yields": {l.value: float(self.yields[l.idx]) for l in Labor},
        }


@dataclass
class Site:
    """A settlement. Placement belongs to the world generator."""
    id: str
    name: str
    economy: Economy = field(default_factory=Economy)
    replenisher: Replenisher = field(default_factory=NoReplenishment)
