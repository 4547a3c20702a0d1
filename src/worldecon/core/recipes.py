"""
Recipe catalog — what each industry consumes and what it produces.

``orders`` groups input requirements by the labor that consumes them, with
``None`` standing for base population upkeep (e.g. food eaten by everybody).
``productivity`` maps each labor to its output good and base rate.

The catalog is read-only input to the economy tick. Call ``validate()``
before simulating; the production step also refuses empty order groups.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from worldecon.core.goods import Good, Labor, parse_good, parse_labor

logger = logging.getLogger(__name__)

Order = list[tuple[Good, float]]
OrderGroup = tuple[Labor | None, Order]


class RecipeConfigurationError(ValueError):
    """The recipe catalog describes an industry that cannot run."""

    def __init__(self, labor: Labor | None, reason: str):
        self.labor = labor
        self.reason = reason
        super().__init__(f"Industry '{describe_labor(labor)}' {reason}")


def describe_labor(labor: Labor | None) -> str:
    return labor.value if labor is not None else "base upkeep"


@dataclass
class RecipeCatalog:
    """Per-industry input orders and output rates."""

    orders: list[OrderGroup] = field(default_factory=list)
    productivity: dict[Labor, tuple[Good, float]] = field(default_factory=dict)

    def get_orders(self) -> list[OrderGroup]:
        return self.orders

    def get_productivity(self) -> dict[Labor, tuple[Good, float]]:
        return self.productivity

    @property
    def labors(self) -> list[Labor]:
        """Industries that take part in this economy, in enum order."""
        return [l for l in Labor if l in self.productivity]

    def validate(self) -> None:
        """
        Raise ``RecipeConfigurationError`` on the first unusable entry.

        Every order group must list at least one input with a non-negative
        quantity, every labor with orders must have an output, and every
        productive labor must have an order group.
        """
        seen: set[Labor | None] = set()
        for labor, order in self.orders:
            if labor in seen:
                raise RecipeConfigurationError(labor, "has more than one order group")
            seen.add(labor)
            if not order:
                raise RecipeConfigurationError(labor, "requires at least one input order")
            for good, amount in order:
                if amount < 0:
                    raise RecipeConfigurationError(
                        labor, f"orders a negative quantity of {good.value}",
                    )
            if labor is not None and labor not in self.productivity:
                raise RecipeConfigurationError(labor, "has orders but no output good")

        for labor, (_, rate) in self.productivity.items():
            if labor not in seen:
                raise RecipeConfigurationError(labor, "requires at least one input order")
            if rate < 0:
                raise RecipeConfigurationError(labor, "has a negative production rate")

        logger.debug(
            "Recipe catalog valid: %d order groups, %d industries",
            len(self.orders), len(self.productivity),
        )

    # ------------------------------------------------------------------
    # Construction / serialization
    # ------------------------------------------------------------------
    @classmethod
    def default(cls) -> RecipeCatalog:
        """The standard settlement catalog."""
        return cls(
            orders=[
                (None, [(Good.FOOD, 0.5)]),
                (Labor.COOK, [
                    (Good.FLOUR, 12.0),
                    (Good.MEAT, 4.0),
                    (Good.WOOD, 1.5),
                    (Good.STONE, 1.0),
                ]),
                (Labor.LUMBERJACK, [(Good.LOGS, 0.5)]),
                (Labor.MINER, [(Good.ROCK, 0.5)]),
                (Labor.FISHER, [(Good.FISH, 4.0)]),
                (Labor.HUNTER, [(Good.GAME, 1.0)]),
                (Labor.FARMER, [(Good.WHEAT, 2.0)]),
            ],
            productivity={
                Labor.FARMER: (Good.FLOUR, 2.0),
                Labor.LUMBERJACK: (Good.WOOD, 0.5),
                Labor.MINER: (Good.STONE, 0.5),
                Labor.FISHER: (Good.MEAT, 4.0),
                Labor.HUNTER: (Good.MEAT, 1.0),
                Labor.COOK: (Good.FOOD, 16.0),
            },
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "orders": [
                {
                    "labor": labor.value if labor is not None else None,
                    "inputs": {good.value: amount for good, amount in order},
                }
                for labor, order in self.orders
            ],
            "productivity": {
                labor.value: {"output": good.value, "rate": rate}
                for labor, (good, rate) in self.productivity.items()
            },
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> RecipeCatalog:
        """Deserialize from a dict (does not validate)."""
        orders: list[OrderGroup] = []
        for group in d.get("orders", []):
            labor_name = group.get("labor")
            labor = parse_labor(labor_name) if labor_name is not None else None
            order = [
                (parse_good(name), float(amount))
                for name, amount in group.get("inputs", {}).items()
            ]
            orders.append((labor, order))

        productivity = {
            parse_labor(name): (parse_good(entry["output"]), float(entry["rate"]))
            for name, entry in d.get("productivity", {}).items()
        }
        return cls(orders=orders, productivity=productivity)
