"""
Economy API router — per-site economy records, history and CSV export.
"""

from __future__ import annotations

import io

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response

from worldecon.api.schemas import SiteDetail, SiteSummary
from worldecon.api.serializers import serialize_site_detail, serialize_site_summary

router = APIRouter()


def _get_session(request: Request, session_id: str):
    sm = request.app.state.session_manager
    try:
        return sm.get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")


def _get_site(session, site_id: str):
    try:
        return session.world.get_site(site_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Site '{site_id}' not found")


@router.get("/{session_id}/sites", response_model=list[SiteSummary])
def list_sites(request: Request, session_id: str):
    """Population, unpriced goods and leading industry per site."""
    session = _get_session(request, session_id)
    catalog = session.world.catalog
    return [
        serialize_site_summary(site, catalog)
        for site in session.world.sites.values()
    ]


@router.get("/{session_id}/sites/{site_id}", response_model=SiteDetail)
def get_site(request: Request, session_id: str, site_id: str):
    """Full economy record of one site."""
    session = _get_session(request, session_id)
    return serialize_site_detail(_get_site(session, site_id))


@router.get("/{session_id}/sites/{site_id}/history")
def get_site_history(request: Request, session_id: str, site_id: str):
    """Recorded snapshots of one site."""
    session = _get_session(request, session_id)
    _get_site(session, site_id)
    snaps = session.recorder.history.get(site_id, [])
    return {
        "site_id": site_id,
        "snapshots": [s.to_dict() for s in snaps],
    }


@router.get("/{session_id}/sites/{site_id}/export.csv")
def export_site_csv(request: Request, session_id: str, site_id: str):
    """Recorded snapshots of one site as CSV."""
    session = _get_session(request, session_id)
    _get_site(session, site_id)
    if site_id not in session.recorder.history:
        raise HTTPException(status_code=404, detail=f"No history for site '{site_id}'")
    buf = io.StringIO()
    session.recorder.write_csv(buf, site_id)
    return Response(content=buf.getvalue(), media_type="text/csv")


@router.get("/{session_id}/catalog")
def get_catalog(request: Request, session_id: str):
    """Recipe catalog the session's world runs on."""
    session = _get_session(request, session_id)
    return session.world.catalog.to_dict()
