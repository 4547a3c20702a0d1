"""
Shared test configuration.

Provides the small farming economy used across the tick and property
tests: one industry (farmer) burning wood to grow food.
"""

import pytest

from worldecon.core.goods import Good, Labor
from worldecon.core.recipes import RecipeCatalog


def make_farm_catalog(wood_per_food: float = 0.1, rate: float = 1.0) -> RecipeCatalog:
    return RecipeCatalog(
        orders=[(Labor.FARMER, [(Good.WOOD, wood_per_food)])],
        productivity={Labor.FARMER: (Good.FOOD, rate)},
    )


@pytest.fixture
def farm_catalog():
    return make_farm_catalog()
