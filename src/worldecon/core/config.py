"""
Master configuration for the settlement economy.

ALL tunable parameters live here. The economy tick reads its constants
from this object; the defaults reproduce the standard model.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from worldecon.core.goods import (
    HISTORY_DAYS, TICK_PERIOD, YEAR, Good, Labor, parse_good, parse_labor,
)
from worldecon.core.recipes import RecipeCatalog
from worldecon.core.replenishment import RenewableStockReplenisher


@dataclass
class EconomyConfig:
    """
    Master configuration — every rate, threshold and seed.

    Use ``to_dict()`` / ``from_dict()`` for serialization and comparison.
    """

    # === Experiment identity ===
    experiment_name: str = "default"
    random_seed: int | None = None

    # === World seeding ===
    num_sites: int = 1
    initial_population: float = 32.0
    population_jitter: float = 0.0  # Relative spread of initial pop across sites
    initial_stocks: dict[str, float] = field(default_factory=dict)
    default_labor_share: float = 0.01
    initial_labors: dict[str, float] = field(default_factory=dict)
    initial_values: dict[str, float] = field(default_factory=lambda: {
        "logs": 0.25,
        "rock": 0.25,
    })

    # === Time ===
    tick_period: float = TICK_PERIOD  # days
    history_years: float = HISTORY_DAYS / YEAR
    snapshot_interval: int = 5  # ticks between observer notifications

    # === Value rationalisation ===
    value_smoothing: float = 0.8
    value_floor: float = 0.001
    value_ceiling: float = 1000.0

    # === Labor reallocation ===
    labor_smoothing: float = 0.8
    labor_ratio_floor: float = 0.01
    labor_floor_divisor: float = 1000.0  # Every industry keeps sum/divisor weight

    # === Production ===
    scale_exponent: float = 1.1  # Returns to workforce size

    # === Stocks ===
    # Per-good overrides of Good.decay_rate
    decay_rates: dict[str, float] = field(default_factory=dict)
    # good -> [target, rate]; None uses the standard renewable resources
    replenishment: dict[str, list[float]] | None = None

    # === Demographics (per year) ===
    natural_birth_rate: float = 0.05
    death_rate: float = 0.005
    clamp_population: bool = True

    # === Recipes ===
    # Serialized RecipeCatalog; None uses RecipeCatalog.default()
    recipes: dict[str, Any] | None = None

    # ------------------------------------------------------------------
    # Derived / cached
    # ------------------------------------------------------------------
    _catalog: RecipeCatalog | None = field(default=None, repr=False, compare=False)

    @property
    def catalog(self) -> RecipeCatalog:
        """Lazily build and cache the RecipeCatalog instance."""
        if self._catalog is None:
            if self.recipes is None:
                self._catalog = RecipeCatalog.default()
            else:
                self._catalog = RecipeCatalog.from_dict(self.recipes)
        return self._catalog

    @property
    def total_ticks(self) -> int:
        return int(self.history_years * YEAR / self.tick_period)

    def decay_vector(self) -> np.ndarray:
        """Per-good decay fraction applied each tick."""
        rates = np.array([g.decay_rate for g in Good], dtype=float)
        for name, rate in self.decay_rates.items():
            rates[parse_good(name).idx] = rate
        return rates

    def build_replenisher(self) -> RenewableStockReplenisher:
        if self.replenishment is None:
            return RenewableStockReplenisher.default()
        return RenewableStockReplenisher.from_config(self.replenishment)

    def seed_stocks(self) -> dict[Good, float]:
        return {parse_good(k): float(v) for k, v in self.initial_stocks.items()}

    def seed_labors(self) -> dict[Labor, float]:
        return {parse_labor(k): float(v) for k, v in self.initial_labors.items()}

    def seed_values(self) -> dict[Good, float]:
        return {parse_good(k): float(v) for k, v in self.initial_values.items()}

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict (excludes cached objects)."""
        d: dict[str, Any] = {}
        for k, v in self.__dict__.items():
            if k.startswith("_"):
                continue
            d[k] = v
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> EconomyConfig:
        """Deserialize from a dict."""
        return cls(**{k: v for k, v in d.items() if not k.startswith("_")})

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    @classmethod
    def from_json(cls, s: str) -> EconomyConfig:
        return cls.from_dict(json.loads(s))

    def diff(self, other: EconomyConfig) -> dict[str, tuple[Any, Any]]:
        """Return parameters that differ between two configs."""
        diffs: dict[str, tuple[Any, Any]] = {}
        for k in self.to_dict():
            v1 = getattr(self, k)
            v2 = getattr(other, k)
            if v1 != v2:
                diffs[k] = (v1, v2)
        return diffs
