"""
Per-site economic tick.

Roughly the Lange-Lerner answer to the socialist calculation problem: every
commodity starts with an arbitrary value, and each tick the value is nudged
toward the commodity's final scarcity. Values act like prices for the
purpose of reassigning the workforce. Damping on both values and labor
keeps oscillations in value rationalisation from growing until they crash
the economy.

Every industry keeps a small workforce even while idle. That latent
capacity lets the economy pivot quickly when a missing input becomes
available (through trade, say): a whole arm of the economy can materialise
to exploit it.

Phases run strictly in this order, once per site per tick, with no
iteration inside a tick:

    aggregate demand/supply → rationalise values and prices
    → reallocate labor → produce → decay + replenish → demographics

Nothing here performs I/O; reporting observes the result from outside.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from worldecon.core.goods import N_GOODS, YEAR, Good, Labor, good_array
from worldecon.core.recipes import OrderGroup, RecipeConfigurationError

if TYPE_CHECKING:
    from worldecon.core.config import EconomyConfig
    from worldecon.core.economy import Economy
    from worldecon.core.world import WorldState

logger = logging.getLogger(__name__)


@dataclass
class MarketTotals:
    """Economy-wide demand and supply per good for one tick."""
    demand: np.ndarray
    supply: np.ndarray


def _headcount(economy: Economy) -> float:
    # An unclamped population may go negative; it has no workforce
    return max(float(economy.pop), 0.0)


def _order_scale(economy: Economy, labor: Labor | None) -> float:
    """Head-count an order group is scaled by (everybody for upkeep)."""
    share = economy.labors[labor.idx] if labor is not None else 1.0
    return float(share * _headcount(economy))


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------

def aggregate_demand_supply(
    economy: Economy,
    orders: list[OrderGroup],
    productivity: dict[Labor, tuple[Good, float]],
) -> MarketTotals:
    """
    Total demand and supply per good; overwrites both surplus vectors.

    Supply uses last tick's yields, so the tick never has to solve for a
    fixed point between output and allocation.
    """
    demand = good_array()
    for labor, order in orders:
        scale = _order_scale(economy, labor)
        for good, amount in order:
            demand[good.idx] += amount * scale

    supply = good_array()
    for labor, (output_good, _) in productivity.items():
        supply[output_good.idx] += (
            economy.yields[labor.idx] * economy.labors[labor.idx] * _headcount(economy)
        )

    economy.surplus = supply + economy.stocks - demand
    economy.marginal_surplus = supply - demand
    return MarketTotals(demand=demand, supply=supply)


def rationalize_values(
    economy: Economy, demand: np.ndarray, config: EconomyConfig,
) -> None:
    """
    Move each good's value toward ``2 ** (1 - surplus / demand)``.

    A surplus equal to demand is neutral (1.0); glut drives the value toward
    0 and shortage drives it up. Goods with no demand, or whose raw value
    falls outside ``(value_floor, value_ceiling)``, become unpriced (None).
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        raw = np.exp2(1.0 - economy.surplus / demand)
        priced = (
            (demand > 0.0)
            & (raw > config.value_floor)
            & (raw < config.value_ceiling)
        )

    smooth = config.value_smoothing
    for good in Good:
        i = good.idx
        previous = economy.values[i]
        if priced[i]:
            base = previous if previous is not None else raw[i]
            economy.values[i] = float(smooth * base + (1.0 - smooth) * raw[i])
        else:
            if previous is not None:
                logger.debug("Good %s is unpriced this tick", good.value)
            economy.values[i] = None


def rationalize_prices(
    economy: Economy, totals: MarketTotals, config: EconomyConfig,
) -> np.ndarray:
    """Instantaneous demand / (supply + stock); not smoothed, not fed back."""
    availability = totals.supply + economy.stocks
    prices = np.full(N_GOODS, config.value_ceiling, dtype=float)
    np.divide(totals.demand, availability, out=prices, where=availability > 0.0)
    prices[totals.demand <= 0.0] = 0.0
    return prices


def reallocate_labor(
    economy: Economy,
    productivity: dict[Labor, tuple[Good, float]],
    config: EconomyConfig,
) -> float:
    """
    Shift the workforce toward industries with valuable output.

    Returns the weight floor used this tick. No industry in the catalog is
    ever allocated exactly zero.
    """
    ratios: dict[Labor, float] = {}
    for labor, (output_good, _) in productivity.items():
        value = economy.values[output_good.idx]
        weight = value if value is not None else 0.0
        ratios[labor] = weight * float(economy.productivity[labor.idx])

    ratio_sum = max(sum(ratios.values()), config.labor_ratio_floor)
    floor = ratio_sum / config.labor_floor_divisor
    smooth = config.labor_smoothing
    for labor, ratio in ratios.items():
        economy.labors[labor.idx] = (
            smooth * economy.labors[labor.idx]
            + (1.0 - smooth) * (max(ratio, floor) / ratio_sum)
        )
    return floor


def _satisfaction(stock: float, demand: float) -> float:
    # An input nobody demands cannot be the bottleneck
    if demand <= 0.0:
        return 1.0
    return min(stock / demand, 1.0)


def execute_production(
    economy: Economy,
    orders: list[OrderGroup],
    productivity: dict[Labor, tuple[Good, float]],
    demand: np.ndarray,
    config: EconomyConfig,
) -> None:
    """
    Consume inputs and produce outputs, limited by the scarcest input.

    If an order needs 0.25 fish and 0.75 oats but only two thirds of the
    oats demanded economy-wide are in stock, every input of that order is
    consumed at two thirds and output is scaled down to match.

    Raises:
        RecipeConfigurationError: an order group lists no inputs.
    """
    stocks_before = economy.stocks.copy()
    for labor, order in orders:
        if not order:
            raise RecipeConfigurationError(labor, "requires at least one input order")

        scale = _order_scale(economy, labor)
        labor_productivity = min(
            _satisfaction(stocks_before[good.idx], demand[good.idx])
            for good, _ in order
        )

        for good, amount in order:
            used = amount * scale * labor_productivity
            economy.stocks[good.idx] = max(0.0, economy.stocks[good.idx] - used)

        if labor is not None:
            output_good, rate = productivity[labor]
            workers = _order_scale(economy, labor)
            yield_per_worker = labor_productivity * rate
            economy.yields[labor.idx] = yield_per_worker
            economy.productivity[labor.idx] = labor_productivity
            # Superlinear returns to workforce size
            economy.stocks[output_good.idx] += (
                yield_per_worker * workers ** config.scale_exponent
            )


def decay_stocks(economy: Economy, decay_rates: np.ndarray) -> None:
    economy.stocks *= 1.0 - decay_rates


def update_demographics(
    economy: Economy, dt: float, config: EconomyConfig,
) -> None:
    """Births only while food is in surplus; deaths at a constant rate."""
    birth_rate = (
        config.natural_birth_rate if economy.surplus[Good.FOOD.idx] > 0.0 else 0.0
    )
    economy.pop += dt / YEAR * economy.pop * (birth_rate - config.death_rate)
    if config.clamp_population and economy.pop < 0.0:
        logger.debug("Population extinct (clamped from %.3f)", economy.pop)
        economy.pop = 0.0


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def tick_site_economy(world: WorldState, site_id: str, dt: float) -> None:
    """
    Advance one site's economy by ``dt`` days, in place.

    A zero-length tick leaves the economy untouched.
    """
    if dt < 0:
        raise ValueError(f"Cannot tick backwards in time (dt={dt})")
    if dt == 0:
        return

    site = world.get_site(site_id)
    economy = site.economy
    config = world.config
    orders = world.catalog.get_orders()
    productivity = world.catalog.get_productivity()

    totals = aggregate_demand_supply(economy, orders, productivity)
    rationalize_values(economy, totals.demand, config)
    economy.prices = rationalize_prices(economy, totals, config)
    reallocate_labor(economy, productivity, config)
    execute_production(economy, orders, productivity, totals.demand, config)

    decay_stocks(economy, world.decay_rates)
    site.replenisher.replenish(economy, world.time)
    np.maximum(economy.stocks, 0.0, out=economy.stocks)

    update_demographics(economy, dt, config)


def tick(world: WorldState, dt: float) -> None:
    """Advance every site by ``dt`` days, then the world clock."""
    # Sites never read each other's state, so order does not matter
    for site_id in world.site_ids():
        tick_site_economy(world, site_id, dt)
    world.time += dt
