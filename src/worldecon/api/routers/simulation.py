"""Simulation session management endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from worldecon.api.sessions import SessionManager
from worldecon.api.schemas import (
    CreateSessionRequest,
    RunRequest,
    SessionResponse,
    SessionSummary,
    StepRequest,
)
from worldecon.core.config import EconomyConfig
from worldecon.core.recipes import RecipeConfigurationError
from worldecon.experiment.presets import get_preset

router = APIRouter()


def _session_response(session) -> dict:
    return {
        **SessionManager.summarize(session),
        "config": session.config.to_dict(),
    }


def _get(request: Request, session_id: str):
    mgr = request.app.state.session_manager
    try:
        return mgr.get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")


@router.post("/sessions", response_model=SessionResponse)
def create_session(req: CreateSessionRequest, request: Request):
    mgr = request.app.state.session_manager

    config = None
    try:
        if req.preset:
            config = get_preset(req.preset)
        elif req.config:
            config = EconomyConfig.from_dict(req.config)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e.args[0]))
    except TypeError as e:
        raise HTTPException(status_code=422, detail=f"Invalid config: {e}")

    try:
        session = mgr.create_session(config=config, name=req.name)
    except (RecipeConfigurationError, KeyError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (ValueError, TypeError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid config: {e}")
    return _session_response(session)


@router.get("/sessions", response_model=list[SessionSummary])
def list_sessions(request: Request):
    mgr = request.app.state.session_manager
    return mgr.list_sessions()


@router.get("/sessions/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, request: Request):
    return _session_response(_get(request, session_id))


@router.delete("/sessions/{session_id}")
def delete_session(session_id: str, request: Request):
    mgr = request.app.state.session_manager
    try:
        mgr.delete_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return {"deleted": True}


@router.post("/sessions/{session_id}/step", response_model=SessionResponse)
def step_session(session_id: str, req: StepRequest, request: Request):
    mgr = request.app.state.session_manager
    _get(request, session_id)
    session = mgr.step(session_id, req.n)
    return _session_response(session)


@router.post("/sessions/{session_id}/run", response_model=SessionResponse)
def run_session(session_id: str, req: RunRequest, request: Request):
    mgr = request.app.state.session_manager
    _get(request, session_id)
    session = mgr.run(session_id, req.ticks)
    return _session_response(session)
