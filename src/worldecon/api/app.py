"""
FastAPI application factory for the settlement economy API.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from worldecon.api.sessions import SessionManager
from worldecon.api.routers import economy, simulation

# Load .env — project root first, then CWD
_project_root = Path(__file__).resolve().parents[3]  # src/worldecon/api/app.py → project root
load_dotenv(_project_root / ".env")
load_dotenv(Path.cwd() / ".env")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    logging.basicConfig(level=os.environ.get("WORLDECON_LOG_LEVEL", "INFO").upper())

    application = FastAPI(
        title="Settlement Economy API",
        description="REST API for stepping and inspecting settlement economies",
        version="0.1.0",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.session_manager = SessionManager()

    application.include_router(simulation.router, prefix="/api/simulation", tags=["simulation"])
    application.include_router(economy.router, prefix="/api/economy", tags=["economy"])

    @application.get("/api/health")
    def health_check():
        return {"status": "ok"}

    return application


app = create_app()
