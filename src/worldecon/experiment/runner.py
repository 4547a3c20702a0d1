"""
Experiment Runner — long-horizon driving loop, comparisons and sweeps.

``simulate`` is the world-generation driver: it ticks every site for the
configured history and hands the world to observers every few ticks.
``ExperimentRunner`` wraps it for A/B tests, parameter sweeps and
multi-seed batches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from worldecon.core.config import EconomyConfig
from worldecon.core.economy_tick import tick
from worldecon.core.goods import YEAR, Good, good_array
from worldecon.core.world import WorldState, build_world
from worldecon.metrics.recorder import EconomyObserver, EconomyRecorder

logger = logging.getLogger(__name__)

YEAR_LOG_INTERVAL = 50


def simulate(
    world: WorldState,
    observers: list[EconomyObserver] | None = None,
    ticks: int | None = None,
) -> int:
    """
    Run ``ticks`` ticks (default: the configured history) of
    ``config.tick_period`` days each. Returns the number of ticks run.
    """
    config = world.config
    observers = observers or []
    n_ticks = config.total_ticks if ticks is None else ticks
    interval = max(config.snapshot_interval, 1)

    logger.info(
        "Simulating %d ticks (%.0f years) over %d site(s)",
        n_ticks, n_ticks * config.tick_period / YEAR, len(world.sites),
    )
    for i in range(n_ticks):
        year, day = divmod(world.time, YEAR)
        if int(year) % YEAR_LOG_INTERVAL == 0 and int(day) == 0:
            logger.debug("Year %d", int(year))

        tick(world, config.tick_period)

        if i % interval == 0:
            for observer in observers:
                observer.observe(i, world)

    logger.info("Simulation finished at year %.1f", world.time / YEAR)
    return n_ticks


@dataclass
class ExperimentResult:
    """Result of a single experiment run."""
    config: EconomyConfig
    world: WorldState
    recorder: EconomyRecorder | None
    ticks_run: int
    final_population: float
    peak_population: float
    final_stocks: dict[str, float] = field(default_factory=dict)
    unpriced_goods: list[str] = field(default_factory=list)


@dataclass
class ComparisonResult:
    """Result of comparing two or more experiments."""
    results: dict[str, ExperimentResult]
    config_diffs: dict[str, Any]


class ExperimentRunner:
    """
    Run, compare, and sweep economy experiments.
    """

    def run_experiment(
        self,
        config: EconomyConfig,
        record: bool = True,
        ticks: int | None = None,
    ) -> ExperimentResult:
        """Build a world from ``config``, simulate it and summarise."""
        world = build_world(config)
        recorder = EconomyRecorder() if record else None
        observers: list[EconomyObserver] = [recorder] if recorder is not None else []
        ticks_run = simulate(world, observers, ticks=ticks)

        sites = list(world.sites.values())
        total_stocks = (
            np.sum([s.economy.stocks for s in sites], axis=0) if sites else good_array()
        )
        # Total population across sites at each recorded tick
        totals_by_tick: dict[int, float] = {}
        if recorder is not None:
            for snaps in recorder.history.values():
                for snap in snaps:
                    totals_by_tick[snap.tick] = totals_by_tick.get(snap.tick, 0.0) + snap.pop
        peak = max(totals_by_tick.values(), default=0.0)
        final_pop = float(sum(s.economy.pop for s in sites))

        unpriced = sorted({
            g.value for s in sites for g in Good if s.economy.value(g) is None
        })

        return ExperimentResult(
            config=config,
            world=world,
            recorder=recorder,
            ticks_run=ticks_run,
            final_population=final_pop,
            peak_population=max(peak, final_pop),
            final_stocks={g.value: float(total_stocks[g.idx]) for g in Good},
            unpriced_goods=unpriced,
        )

    def compare_experiments(
        self,
        configs: dict[str, EconomyConfig],
        record: bool = True,
        ticks: int | None = None,
    ) -> ComparisonResult:
        """Run multiple experiments and compare results."""
        results: dict[str, ExperimentResult] = {}
        for name, config in configs.items():
            results[name] = self.run_experiment(config, record, ticks=ticks)

        config_names = list(configs.keys())
        diffs: dict[str, Any] = {}
        if len(config_names) >= 2:
            base = configs[config_names[0]]
            for name in config_names[1:]:
                diffs[f"{config_names[0]}_vs_{name}"] = base.diff(configs[name])

        return ComparisonResult(results=results, config_diffs=diffs)

    def run_ab_test(
        self,
        config_a: EconomyConfig,
        config_b: EconomyConfig,
        label_a: str = "A",
        label_b: str = "B",
        ticks: int | None = None,
    ) -> ComparisonResult:
        """Run an A/B test between two configurations."""
        return self.compare_experiments(
            {label_a: config_a, label_b: config_b}, ticks=ticks,
        )

    def run_parameter_sweep(
        self,
        base_config: EconomyConfig,
        param_name: str,
        values: list[Any],
        ticks: int | None = None,
    ) -> dict[str, ExperimentResult]:
        """
        Sweep a single parameter across multiple values.

        Args:
            base_config: Base configuration to modify
            param_name: Name of the parameter to sweep (attribute on EconomyConfig)
            values: List of values to test

        Returns:
            Dict mapping value label -> ExperimentResult
        """
        if param_name not in base_config.to_dict():
            raise KeyError(f"Unknown config parameter: '{param_name}'")

        results: dict[str, ExperimentResult] = {}
        for val in values:
            config_dict = base_config.to_dict()
            config_dict[param_name] = val
            config_dict["experiment_name"] = f"sweep_{param_name}={val}"
            config = EconomyConfig.from_dict(config_dict)

            label = f"{param_name}={val}"
            results[label] = self.run_experiment(config, record=False, ticks=ticks)

        return results

    def run_multi_seed(
        self,
        config: EconomyConfig,
        seeds: list[int],
        ticks: int | None = None,
    ) -> list[ExperimentResult]:
        """Same configuration under several seeds (site seeding varies)."""
        results: list[ExperimentResult] = []
        for seed in seeds:
            config_dict = config.to_dict()
            config_dict["random_seed"] = seed
            config_dict["experiment_name"] = f"{config.experiment_name}_seed{seed}"
            seed_config = EconomyConfig.from_dict(config_dict)
            results.append(self.run_experiment(seed_config, record=False, ticks=ticks))
        return results
