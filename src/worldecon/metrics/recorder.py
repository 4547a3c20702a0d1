"""
Economy Recorder — periodic snapshots of site economies.

Reporting sits behind the ``EconomyObserver`` interface so the economy tick
stays free of I/O. The driver notifies observers between ticks; observers
only read the world.
"""

from __future__ import annotations

import csv
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING, Any

import numpy as np

from worldecon.core.goods import YEAR, Good, Labor

if TYPE_CHECKING:
    from worldecon.core.economy import Economy
    from worldecon.core.world import WorldState

# Written in place of a value for goods that are currently unpriced
UNPRICED = -1.0


class EconomyObserver(ABC):
    """Read-only hook called by the driver after selected ticks."""

    @abstractmethod
    def observe(self, tick_index: int, world: WorldState) -> None:
        """Inspect ``world`` after tick ``tick_index`` has completed."""


@dataclass
class EconomySnapshot:
    """One site's economy at one point in simulated time."""
    tick: int
    time: float
    site_id: str
    pop: float
    values: list[float | None]
    prices: np.ndarray
    stocks: np.ndarray
    surplus: np.ndarray
    marginal_surplus: np.ndarray
    labors: np.ndarray
    productivity: np.ndarray

    @classmethod
    def capture(
        cls, tick: int, time: float, site_id: str, economy: Economy,
    ) -> EconomySnapshot:
        return cls(
            tick=tick,
            time=time,
            site_id=site_id,
            pop=float(economy.pop),
            values=list(economy.values),
            prices=economy.prices.copy(),
            stocks=economy.stocks.copy(),
            surplus=economy.surplus.copy(),
            marginal_surplus=economy.marginal_surplus.copy(),
            labors=economy.labors.copy(),
            productivity=economy.productivity.copy(),
        )

    @property
    def year(self) -> float:
        return self.time / YEAR

    def workers(self) -> np.ndarray:
        """Head-count per labor."""
        return self.labors * self.pop

    def to_dict(self) -> dict[str, Any]:
        return {
            "tick": self.tick,
            "time": self.time,
            "year": round(self.year, 3),
            "site_id": self.site_id,
            "pop": self.pop,
            "values": {
                g.value: (float(v) if v is not None else None)
                for g, v in zip(Good, self.values)
            },
            "prices": {g.value: float(self.prices[g.idx]) for g in Good},
            "stocks": {g.value: float(self.stocks[g.idx]) for g in Good},
            "surplus": {g.value: float(self.surplus[g.idx]) for g in Good},
            "marginal_surplus": {
                g.value: float(self.marginal_surplus[g.idx]) for g in Good
            },
            "labors": {l.value: float(self.labors[l.idx]) for l in Labor},
            "workers": {l.value: float(self.labors[l.idx] * self.pop) for l in Labor},
            "productivity": {
                l.value: float(self.productivity[l.idx]) for l in Labor
            },
        }


class EconomyRecorder(EconomyObserver):
    """
    Collects snapshots for some or all sites.

    ``site_ids=None`` records every site present at observation time.
    """

    def __init__(self, site_ids: list[str] | None = None):
        self.site_ids = site_ids
        self.history: dict[str, list[EconomySnapshot]] = {}

    def observe(self, tick_index: int, world: WorldState) -> None:
        ids = self.site_ids if self.site_ids is not None else world.site_ids()
        for site_id in ids:
            site = world.get_site(site_id)
            snap = EconomySnapshot.capture(tick_index, world.time, site_id, site.economy)
            self.history.setdefault(site_id, []).append(snap)

    def snapshots(self, site_id: str) -> list[EconomySnapshot]:
        try:
            return self.history[site_id]
        except KeyError:
            raise KeyError(f"No snapshots recorded for site '{site_id}'") from None

    def latest(self, site_id: str) -> EconomySnapshot | None:
        snaps = self.history.get(site_id)
        return snaps[-1] if snaps else None

    def get_time_series(self, site_id: str, field_name: str) -> list[Any]:
        """Extract a time series for one snapshot field of one site."""
        return [getattr(s, field_name) for s in self.snapshots(site_id)]

    def export_for_visualization(self, site_id: str) -> list[dict[str, Any]]:
        """Export all snapshots of a site as JSON-serializable dicts."""
        return [s.to_dict() for s in self.snapshots(site_id)]

    # ------------------------------------------------------------------
    # CSV
    # ------------------------------------------------------------------
    @staticmethod
    def csv_header() -> list[str]:
        header = ["Population"]
        header += [f"{g.label} Value" for g in Good]
        header += [f"{g.label} Price" for g in Good]
        header += [f"{g.label} Stock" for g in Good]
        header += [f"{g.label} Surplus" for g in Good]
        header += [f"{l.label} Labor" for l in Labor]
        header += [f"{l.label} Productivity" for l in Labor]
        return header

    @staticmethod
    def csv_row(snap: EconomySnapshot) -> list[float]:
        row = [snap.pop]
        row += [v if v is not None else UNPRICED for v in snap.values]
        row += snap.prices.tolist()
        row += snap.stocks.tolist()
        row += snap.marginal_surplus.tolist()
        row += snap.workers().tolist()
        row += snap.productivity.tolist()
        return row

    def write_csv(self, stream: IO[str], site_id: str | None = None) -> int:
        """
        Write one site's history as CSV; returns the number of data rows.

        Defaults to the first recorded site. Labor columns hold head-counts.
        """
        if site_id is None:
            if not self.history:
                raise ValueError("Nothing recorded yet")
            site_id = next(iter(self.history))
        snaps = self.snapshots(site_id)
        writer = csv.writer(stream)
        writer.writerow(self.csv_header())
        for snap in snaps:
            writer.writerow(self.csv_row(snap))
        return len(snaps)
