"""
Behavioural properties of the economy tick over many ticks.

Covers the stock/labor/value invariants, zero-length ticks, value
convergence, and the single-farm, broken-recipe and zero-demand scenarios.
"""

from __future__ import annotations

import numpy as np
import pytest

from worldecon.core.config import EconomyConfig
from worldecon.core.economy_tick import rationalize_values, tick, tick_site_economy
from worldecon.core.goods import TICK_PERIOD, Good, Labor, good_array
from worldecon.core.recipes import RecipeCatalog, RecipeConfigurationError
from worldecon.core.world import WorldState, build_world
from worldecon.experiment.presets import baseline, many_sites, single_farm


def _assert_invariants(world: WorldState) -> None:
    config = world.config
    labor_min = (1.0 - config.labor_smoothing) / config.labor_floor_divisor
    industries = [l.idx for l in world.catalog.labors]
    for site in world.sites.values():
        economy = site.economy
        assert np.all(economy.stocks >= 0.0)
        assert np.all(np.isfinite(economy.stocks))
        assert np.all(np.isfinite(economy.prices))
        assert np.all(np.isfinite(economy.surplus))
        assert economy.pop >= 0.0
        shares = economy.labors[industries]
        assert np.all(shares > 0.0)
        assert np.all(shares >= labor_min - 1e-12)
        assert np.all(shares <= 1.0)
        for v in economy.values:
            if v is not None:
                assert np.isfinite(v)
                assert config.value_floor < v < config.value_ceiling


class TestInvariants:
    def test_baseline_over_long_run(self):
        world = build_world(baseline())
        for _ in range(300):
            tick(world, TICK_PERIOD)
            _assert_invariants(world)

    def test_many_sites(self):
        world = build_world(many_sites())
        for _ in range(100):
            tick(world, TICK_PERIOD)
            _assert_invariants(world)

    def test_sites_are_independent(self):
        config = many_sites()
        together = build_world(config)
        alone = build_world(config)
        for _ in range(20):
            tick(together, TICK_PERIOD)
            tick_site_economy(alone, "site_3", TICK_PERIOD)
            alone.time += TICK_PERIOD
        a = together.sites["site_3"].economy
        b = alone.sites["site_3"].economy
        assert a.pop == pytest.approx(b.pop)
        np.testing.assert_allclose(a.stocks, b.stocks)
        np.testing.assert_allclose(a.labors, b.labors)


class TestZeroLengthTick:
    def test_economy_unchanged(self):
        world = build_world(baseline())
        for _ in range(10):
            tick(world, TICK_PERIOD)
        before = world.sites["site_0"].economy.copy()

        tick_site_economy(world, "site_0", 0.0)

        after = world.sites["site_0"].economy
        assert after.pop == before.pop
        np.testing.assert_array_equal(after.stocks, before.stocks)
        np.testing.assert_array_equal(after.prices, before.prices)
        np.testing.assert_array_equal(after.labors, before.labors)
        assert after.values == before.values

    def test_world_clock_unchanged(self):
        world = build_world(baseline())
        tick(world, 0.0)
        assert world.time == 0.0


class TestValueConvergence:
    def test_balanced_good_converges_to_neutral(self):
        config = EconomyConfig()
        economy = build_world(baseline()).sites["site_0"].economy
        economy.values[Good.STONE.idx] = 5.0
        demand = good_array({Good.STONE: 12.0})
        for _ in range(60):
            economy.surplus = demand.copy()
            rationalize_values(economy, demand, config)
        assert economy.value(Good.STONE) == pytest.approx(1.0, abs=1e-4)

    def test_monotone_approach(self):
        config = EconomyConfig()
        economy = build_world(baseline()).sites["site_0"].economy
        economy.values[Good.STONE.idx] = 0.1
        demand = good_array({Good.STONE: 3.0})
        seen = []
        for _ in range(20):
            economy.surplus = demand.copy()
            rationalize_values(economy, demand, config)
            seen.append(economy.value(Good.STONE))
        assert all(a < b for a, b in zip(seen, seen[1:]))
        assert seen[-1] < 1.0


class TestSingleFarmScenario:
    """pop=100, 50 food, 50 wood; farmers burn 0.1 wood per food."""

    def _run(self, ticks=100):
        world = build_world(single_farm())
        wood = []
        for _ in range(ticks):
            tick(world, TICK_PERIOD)
            wood.append(world.sites["site_0"].economy.stock(Good.WOOD))
        return world, wood

    def test_starting_state(self):
        economy = build_world(single_farm()).sites["site_0"].economy
        assert economy.pop == 100.0
        assert economy.stock(Good.FOOD) == 50.0
        assert economy.stock(Good.WOOD) == 50.0
        assert economy.labor_share(Labor.FARMER) == 1.0

    def test_population_grows(self):
        world, _ = self._run()
        assert world.sites["site_0"].economy.pop > 100.0

    def test_wood_stays_positive(self):
        _, wood = self._run()
        assert all(w > 0.0 for w in wood)

    def test_wood_stabilizes(self):
        _, wood = self._run()
        tail = np.array(wood[-10:])
        assert tail.min() > 0.0
        assert tail.max() - tail.min() < 0.05 * tail.mean()

    def test_food_stays_unpriced(self):
        world, _ = self._run(ticks=10)
        # Nobody consumes food in this economy
        assert world.sites["site_0"].economy.value(Good.FOOD) is None


class TestBrokenRecipeScenario:
    def _broken_catalog(self):
        return RecipeCatalog(
            orders=[
                (Labor.FARMER, [(Good.WHEAT, 2.0)]),
                (Labor.MINER, []),
            ],
            productivity={
                Labor.FARMER: (Good.FLOUR, 2.0),
                Labor.MINER: (Good.STONE, 0.5),
            },
        )

    def test_rejected_before_simulation(self):
        with pytest.raises(RecipeConfigurationError, match="miner"):
            WorldState(EconomyConfig(), catalog=self._broken_catalog())

    def test_tick_aborts_naming_industry(self):
        world = build_world(baseline())
        world.catalog = self._broken_catalog()
        stone_before = world.sites["site_0"].economy.stock(Good.STONE)
        with pytest.raises(RecipeConfigurationError) as exc:
            tick_site_economy(world, "site_0", TICK_PERIOD)
        assert exc.value.labor is Labor.MINER
        assert "miner" in str(exc.value)
        assert world.sites["site_0"].economy.stock(Good.STONE) == stone_before


class TestZeroDemandScenario:
    def test_no_nan_or_inf_values(self):
        world = build_world(single_farm())
        for _ in range(10):
            tick(world, TICK_PERIOD)
            economy = world.sites["site_0"].economy
            for good in Good:
                v = economy.value(good)
                assert v is None or np.isfinite(v)
            # Goods nobody orders stay unpriced with a zero price
            for good in (Good.FOOD, Good.STONE, Good.MEAT):
                assert economy.value(good) is None
                assert economy.price(good) == 0.0
