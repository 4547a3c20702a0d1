#!/usr/bin/env python3
"""Run a baseline settlement economy for the full history and export CSV."""

import logging
import sys

from worldecon.core.goods import YEAR, Good, Labor
from worldecon.core.world import build_world
from worldecon.experiment.presets import get_preset
from worldecon.experiment.runner import simulate
from worldecon.metrics.recorder import EconomyRecorder


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    preset = sys.argv[1] if len(sys.argv) > 1 else "baseline"
    config = get_preset(preset)

    print(f"=== Settlement economy: {config.experiment_name} ===")
    print(f"Sites: {config.num_sites}")
    print(f"History: {config.history_years:.0f} years, {config.tick_period:.0f}-day ticks")
    print()

    world = build_world(config)
    first_site = world.site_ids()[0]
    recorder = EconomyRecorder(site_ids=[first_site])
    simulate(world, [recorder])

    with open("economy.csv", "w", newline="") as f:
        rows = recorder.write_csv(f)
    print(f"Wrote {rows} snapshots to economy.csv")

    economy = world.get_site(first_site).economy
    print()
    print(f"=== Final State (Year {world.time / YEAR:.0f}) ===")
    print(f"Population: {economy.pop:.1f}")
    print(f"\n{'Good':10s} {'Stock':>10s} {'Value':>8s} {'Price':>8s}")
    for g in Good:
        v = economy.value(g)
        v_str = f"{v:8.3f}" if v is not None else f"{'-':>8s}"
        print(f"{g.label:10s} {economy.stock(g):10.2f} {v_str} {economy.price(g):8.3f}")
    print(f"\n{'Labor':10s} {'Workers':>10s} {'Prod':>8s}")
    for l in Labor:
        print(f"{l.label:10s} {economy.workers(l):10.2f} {economy.productivity[l.idx]:8.3f}")


if __name__ == "__main__":
    main()
