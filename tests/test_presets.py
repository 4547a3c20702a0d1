"""Tests for experiment presets."""

import pytest

from worldecon.core.config import EconomyConfig
from worldecon.core.economy_tick import tick
from worldecon.core.world import build_world
from worldecon.experiment.presets import PRESETS, get_preset, list_presets


class TestPresetRegistry:
    def test_five_presets_defined(self):
        assert len(PRESETS) == 5

    def test_list_presets(self):
        names = list_presets()
        assert "baseline" in names
        assert "single_farm" in names

    def test_get_unknown(self):
        with pytest.raises(KeyError):
            get_preset("utopia")


class TestPresetContents:
    def test_all_presets_return_config(self):
        for name, factory in PRESETS.items():
            config = factory()
            assert isinstance(config, EconomyConfig), f"{name} failed"
            assert config.experiment_name == name

    def test_all_presets_build_and_tick(self):
        for name in list_presets():
            world = build_world(get_preset(name))
            for _ in range(5):
                tick(world, world.config.tick_period)
            for site in world.sites.values():
                assert (site.economy.stocks >= 0).all(), name

    def test_many_sites_varies_population(self):
        world = build_world(get_preset("many_sites"))
        pops = {round(s.economy.pop, 6) for s in world.sites.values()}
        assert len(world.sites) == 8
        assert len(pops) > 1
