"""
World state — simulated time plus the sites whose economies are ticked.

Terrain and site placement belong to the world generator; this module only
holds what the economy tick needs and seeds sites from an EconomyConfig.
"""

from __future__ import annotations

import logging

import numpy as np

from worldecon.core.config import EconomyConfig
from worldecon.core.economy import Economy, Site
from worldecon.core.recipes import RecipeCatalog

logger = logging.getLogger(__name__)


class WorldState:
    """
    Sites, shared recipe catalog and the world clock (days).

    The catalog is validated on construction so a misconfigured industry
    is reported before the first tick rather than halfway through history.
    """

    def __init__(
        self,
        config: EconomyConfig | None = None,
        catalog: RecipeCatalog | None = None,
    ):
        self.config = config or EconomyConfig()
        self.catalog = catalog if catalog is not None else self.config.catalog
        self.catalog.validate()
        self.decay_rates = self.config.decay_vector()
        self.time: float = 0.0
        self.sites: dict[str, Site] = {}

    def add_site(self, site: Site) -> Site:
        if site.id in self.sites:
            raise ValueError(f"Site '{site.id}' already exists")
        self.sites[site.id] = site
        return site

    def get_site(self, site_id: str) -> Site:
        try:
            return self.sites[site_id]
        except KeyError:
            raise KeyError(f"Site '{site_id}' not found") from None

    def site_ids(self) -> list[str]:
        return list(self.sites.keys())


def build_world(
    config: EconomyConfig | None = None,
    catalog: RecipeCatalog | None = None,
) -> WorldState:
    """Create a world with ``config.num_sites`` freshly seeded sites."""
    config = config or EconomyConfig()
    if config.tick_period <= 0:
        raise ValueError(f"tick_period must be positive (got {config.tick_period})")
    world = WorldState(config, catalog=catalog)
    rng = np.random.default_rng(config.random_seed)

    stocks = config.seed_stocks()
    labors = config.seed_labors()
    values = config.seed_values()
    for i in range(config.num_sites):
        pop = config.initial_population
        if config.population_jitter > 0:
            pop *= float(np.clip(
                1.0 + rng.normal(0.0, config.population_jitter), 0.1, None,
            ))
        economy = Economy.seeded(
            pop=pop,
            stocks=stocks,
            labors=labors,
            values=values,
            default_labor=config.default_labor_share,
        )
        world.add_site(Site(
            id=f"site_{i}",
            name=f"Settlement {i}",
            economy=economy,
            replenisher=config.build_replenisher(),
        ))

    logger.info(
        "Built world '%s' with %d site(s)", config.experiment_name, len(world.sites),
    )
    return world
