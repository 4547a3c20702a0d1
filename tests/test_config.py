"""Tests for EconomyConfig."""

import pytest

from worldecon.core.config import EconomyConfig
from worldecon.core.goods import Good, Labor
from worldecon.core.recipes import RecipeCatalog
from worldecon.core.replenishment import RenewableStockReplenisher
from worldecon.core.world import build_world


class TestConfigDefaults:
    def test_default_experiment_name(self):
        c = EconomyConfig()
        assert c.experiment_name == "default"

    def test_smoothing_constants(self):
        c = EconomyConfig()
        assert c.value_smoothing == 0.8
        assert c.labor_smoothing == 0.8

    def test_value_bounds(self):
        c = EconomyConfig()
        assert c.value_floor == 0.001
        assert c.value_ceiling == 1000.0

    def test_labor_floor(self):
        c = EconomyConfig()
        assert c.labor_ratio_floor == 0.01
        assert c.labor_floor_divisor == 1000.0

    def test_demographics(self):
        c = EconomyConfig()
        assert c.natural_birth_rate == 0.05
        assert c.death_rate == 0.005
        assert c.clamp_population is True

    def test_scale_exponent(self):
        assert EconomyConfig().scale_exponent == 1.1

    def test_total_ticks_covers_history(self):
        assert EconomyConfig().total_ticks == 2000
        assert EconomyConfig(history_years=10).total_ticks == 40


class TestCatalog:
    def test_default_catalog(self):
        c = EconomyConfig()
        assert c.catalog == RecipeCatalog.default()

    def test_catalog_cached(self):
        c = EconomyConfig()
        assert c.catalog is c.catalog

    def test_custom_recipes(self):
        c = EconomyConfig(recipes={
            "orders": [{"labor": "miner", "inputs": {"rock": 1.0}}],
            "productivity": {"miner": {"output": "stone", "rate": 0.5}},
        })
        assert c.catalog.labors == [Labor.MINER]


class TestDerived:
    def test_decay_vector_defaults(self):
        rates = EconomyConfig().decay_vector()
        assert rates[Good.FOOD.idx] == pytest.approx(0.2)
        assert rates[Good.STONE.idx] == 0.0

    def test_decay_override(self):
        rates = EconomyConfig(decay_rates={"stone": 0.05}).decay_vector()
        assert rates[Good.STONE.idx] == pytest.approx(0.05)
        assert rates[Good.FOOD.idx] == pytest.approx(0.2)

    def test_default_replenisher(self):
        rep = EconomyConfig().build_replenisher()
        assert isinstance(rep, RenewableStockReplenisher)
        assert Good.LOGS in rep.targets

    def test_custom_replenisher(self):
        rep = EconomyConfig(replenishment={"wood": [50.0, 0.1]}).build_replenisher()
        assert rep.targets == {Good.WOOD: (50.0, 0.1)}

    def test_seed_values(self):
        values = EconomyConfig().seed_values()
        assert values == {Good.LOGS: 0.25, Good.ROCK: 0.25}

    def test_non_positive_tick_period_rejected(self):
        with pytest.raises(ValueError, match="tick_period"):
            build_world(EconomyConfig(tick_period=0))


class TestSerialization:
    def test_to_dict_roundtrip(self):
        c = EconomyConfig(experiment_name="test", num_sites=3)
        c2 = EconomyConfig.from_dict(c.to_dict())
        assert c2.experiment_name == "test"
        assert c2.num_sites == 3

    def test_to_dict_excludes_cache(self):
        c = EconomyConfig()
        _ = c.catalog
        assert "_catalog" not in c.to_dict()

    def test_to_json_roundtrip(self):
        c = EconomyConfig(experiment_name="json_test", initial_stocks={"food": 5.0})
        c2 = EconomyConfig.from_json(c.to_json())
        assert c2.experiment_name == "json_test"
        assert c2.initial_stocks == {"food": 5.0}

    def test_diff(self):
        a = EconomyConfig()
        b = EconomyConfig(death_rate=0.01)
        assert a.diff(b) == {"death_rate": (0.005, 0.01)}

    def test_unknown_key_rejected(self):
        with pytest.raises(TypeError):
            EconomyConfig.from_dict({"warp_speed": 9})
