"""
Session manager for economy simulations.

Each session wraps a WorldState + EconomyRecorder and supports
step-by-step execution. Sessions live in memory only.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Any

from worldecon.core.config import EconomyConfig
from worldecon.core.economy_tick import tick
from worldecon.core.world import WorldState, build_world
from worldecon.metrics.recorder import EconomyRecorder

logger = logging.getLogger(__name__)


@dataclass
class EconomySession:
    """A running or completed economy simulation."""

    id: str
    name: str
    config: EconomyConfig
    world: WorldState
    recorder: EconomyRecorder
    status: str = "created"  # created | running | completed
    current_tick: int = 0
    max_ticks: int = 0


class SessionManager:
    """Manages multiple in-memory simulation sessions."""

    def __init__(self) -> None:
        self.sessions: dict[str, EconomySession] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        config: EconomyConfig | None = None,
        name: str | None = None,
    ) -> EconomySession:
        """Create a new session; raises RecipeConfigurationError on bad recipes."""
        if config is None:
            config = EconomyConfig()

        world = build_world(config)
        session = EconomySession(
            id=uuid.uuid4().hex[:8],
            name=name or config.experiment_name,
            config=config,
            world=world,
            recorder=EconomyRecorder(),
            max_ticks=config.total_ticks,
        )
        with self._lock:
            self.sessions[session.id] = session
        logger.info("Created session %s (%s)", session.id, session.name)
        return session

    def get_session(self, session_id: str) -> EconomySession:
        """Get a session by ID. Raises KeyError if not found."""
        try:
            return self.sessions[session_id]
        except KeyError:
            raise KeyError(f"Session '{session_id}' not found") from None

    def list_sessions(self) -> list[dict[str, Any]]:
        return [self.summarize(s) for s in self.sessions.values()]

    def delete_session(self, session_id: str) -> None:
        with self._lock:
            if session_id not in self.sessions:
                raise KeyError(f"Session '{session_id}' not found")
            del self.sessions[session_id]

    def step(self, session_id: str, n: int = 1) -> EconomySession:
        """Advance a session by up to N ticks."""
        session = self.get_session(session_id)
        if session.status == "completed":
            return session

        session.status = "running"
        world = session.world
        interval = max(session.config.snapshot_interval, 1)
        try:
            for _ in range(n):
                if session.current_tick >= session.max_ticks:
                    break
                tick(world, session.config.tick_period)
                if session.current_tick % interval == 0:
                    session.recorder.observe(session.current_tick, world)
                session.current_tick += 1
        except Exception:
            logger.exception("Tick failed for session %s", session_id)
            raise

        if session.current_tick >= session.max_ticks:
            session.status = "completed"
        return session

    def run(self, session_id: str, ticks: int | None = None) -> EconomySession:
        """Run ``ticks`` more ticks, or to the end of the configured history."""
        session = self.get_session(session_id)
        remaining = session.max_ticks - session.current_tick
        return self.step(session_id, remaining if ticks is None else ticks)

    @staticmethod
    def summarize(session: EconomySession) -> dict[str, Any]:
        return {
            "id": session.id,
            "name": session.name,
            "status": session.status,
            "current_tick": session.current_tick,
            "max_ticks": session.max_ticks,
            "time": session.world.time,
            "site_count": len(session.world.sites),
            "total_population": float(
                sum(s.economy.pop for s in session.world.sites.values())
            ),
        }
