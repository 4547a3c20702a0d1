"""Tests for the Good / Labor enumerations and dense array helpers."""

import numpy as np
import pytest

from worldecon.core.goods import (
    HISTORY_DAYS, MONTH, N_GOODS, N_LABORS, TICK_PERIOD, YEAR,
    Good, Labor, good_array, labor_array, parse_good, parse_labor,
)


class TestTimeConstants:
    def test_calendar(self):
        assert MONTH == 30.0
        assert YEAR == 360.0
        assert TICK_PERIOD == 90.0

    def test_history_is_500_years(self):
        assert HISTORY_DAYS / YEAR == 500.0


class TestEnums:
    def test_good_indices_dense(self):
        assert sorted(g.idx for g in Good) == list(range(N_GOODS))

    def test_labor_indices_dense(self):
        assert sorted(l.idx for l in Labor) == list(range(N_LABORS))

    def test_perishables_decay(self):
        assert Good.FOOD.decay_rate == pytest.approx(0.2)
        assert Good.MEAT.decay_rate == pytest.approx(0.25)

    def test_durables_do_not_decay(self):
        assert Good.STONE.decay_rate == 0.0
        assert Good.WOOD.decay_rate == 0.0

    def test_labels(self):
        assert Good.FOOD.label == "Food"
        assert Labor.LUMBERJACK.label == "Lumberjack"


class TestArrays:
    def test_good_array_filled(self):
        arr = good_array({Good.WOOD: 5.0})
        assert arr.shape == (N_GOODS,)
        assert arr[Good.WOOD.idx] == 5.0
        assert arr.sum() == 5.0

    def test_labor_array_default(self):
        arr = labor_array({Labor.COOK: 0.5}, default=0.01)
        assert arr[Labor.COOK.idx] == 0.5
        assert arr[Labor.MINER.idx] == pytest.approx(0.01)
        assert arr.dtype == np.float64


class TestParsing:
    def test_parse_by_value_and_name(self):
        assert parse_good("food") is Good.FOOD
        assert parse_good("FOOD") is Good.FOOD
        assert parse_labor("Miner") is Labor.MINER

    def test_parse_passthrough(self):
        assert parse_good(Good.ROCK) is Good.ROCK

    def test_parse_unknown(self):
        with pytest.raises(KeyError):
            parse_good("unobtainium")
        with pytest.raises(KeyError):
            parse_labor("astronaut")
