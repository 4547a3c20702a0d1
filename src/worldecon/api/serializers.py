"""
Serializers for converting sites and economies to JSON-safe dicts.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from worldecon.core.economy import Site
from worldecon.core.goods import Good
from worldecon.core.recipes import RecipeCatalog


def serialize_site_summary(site: Site, catalog: RecipeCatalog) -> dict[str, Any]:
    """Lightweight site summary for list views."""
    economy = site.economy
    industries = catalog.labors
    top = None
    if industries and economy.pop > 0:
        shares = np.array([economy.labors[l.idx] for l in industries])
        top = industries[int(np.argmax(shares))].value
    return {
        "id": site.id,
        "name": site.name,
        "pop": round(float(economy.pop), 4),
        "unpriced_goods": [g.value for g in Good if economy.value(g) is None],
        "top_industry": top,
    }


def serialize_site_detail(site: Site) -> dict[str, Any]:
    """Full economy record for the detail panel."""
    return {
        "id": site.id,
        "name": site.name,
        "replenisher": site.replenisher.to_dict(),
        "economy": site.economy.to_dict(),
    }
