"""
Experiment presets — pre-configured economy templates.

Each preset returns an EconomyConfig exercising a different regime of the
settlement economy.
"""

from __future__ import annotations

from typing import Callable

from worldecon.core.config import EconomyConfig


def baseline() -> EconomyConfig:
    """Standard catalog, one settlement, default seed values."""
    return EconomyConfig(experiment_name="baseline")


def single_farm() -> EconomyConfig:
    """One farming industry burning wood to grow food."""
    return EconomyConfig(
        experiment_name="single_farm",
        initial_population=100.0,
        initial_stocks={"food": 50.0, "wood": 50.0},
        initial_labors={"farmer": 1.0},
        initial_values={},
        default_labor_share=0.0,
        replenishment={"wood": [50.0, 0.1]},
        recipes={
            "orders": [{"labor": "farmer", "inputs": {"wood": 0.1}}],
            "productivity": {"farmer": {"output": "food", "rate": 1.0}},
        },
    )


def timber_scarcity() -> EconomyConfig:
    """Forests regrow slowly; cooks compete for scarce wood."""
    return EconomyConfig(
        experiment_name="timber_scarcity",
        replenishment={
            "wheat": [50.0, 0.1],
            "logs": [20.0, 0.02],
            "rock": [120.0, 0.1],
            "game": [20.0, 0.1],
            "fish": [10.0, 0.1],
        },
    )


def many_sites() -> EconomyConfig:
    """Several independent settlements of varying size."""
    return EconomyConfig(
        experiment_name="many_sites",
        num_sites=8,
        population_jitter=0.3,
        random_seed=7,
    )


def famine() -> EconomyConfig:
    """Harsh demography: food rots fast and people die young."""
    return EconomyConfig(
        experiment_name="famine",
        decay_rates={"food": 0.6, "meat": 0.5},
        death_rate=0.04,
        natural_birth_rate=0.03,
    )


# Registry of all presets
PRESETS: dict[str, Callable[[], EconomyConfig]] = {
    "baseline": baseline,
    "single_farm": single_farm,
    "timber_scarcity": timber_scarcity,
    "many_sites": many_sites,
    "famine": famine,
}


def get_preset(name: str) -> EconomyConfig:
    """Get a preset config by name."""
    if name not in PRESETS:
        raise KeyError(f"Unknown preset: '{name}'. Available: {list(PRESETS.keys())}")
    return PRESETS[name]()


def list_presets() -> list[str]:
    """Return list of available preset names."""
    return list(PRESETS.keys())
