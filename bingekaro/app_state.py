"""
Application state container.

Holds the runtime resources created at startup: the shared HTTP client and
the OMDb client built on it. Endpoints reach them through FastAPI
dependencies rather than module globals, which keeps them easy to replace
in tests.

Usage:
    # In lifespan function:
    app.state.app_state = AppState.create(settings)

    # In endpoints (via dependency):
    omdb: OMDbClient = Depends(get_omdb_client)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import httpx
from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bingekaro.database import SessionLocal
from bingekaro.search.omdb import OMDbClient
from bingekaro.settings import Settings

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


@dataclass
class AppState:
    """
    Container for application runtime state.

    Attributes:
        http_client: Shared async HTTP client for outbound calls
        omdb: OMDb client using ``http_client``
        started_at: When the application finished starting
    """

    http_client: httpx.AsyncClient
    omdb: OMDbClient
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, settings: Settings) -> "AppState":
        http_client = httpx.AsyncClient(
            timeout=settings.omdb_timeout_seconds,
            headers={"User-Agent": f"bingekaro/{APP_VERSION}", "Accept": "application/json"},
        )
        return cls(http_client=http_client, omdb=OMDbClient(settings, http_client))

    async def close(self) -> None:
        await self.http_client.aclose()

    @staticmethod
    def database_reachable() -> bool:
        """Run a trivial query against the configured database."""
        try:
            with SessionLocal() as db:
                db.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.exception("Database health check failed")
            return False

    def get_health_status(self) -> dict[str, Any]:
        """
        Generate health check status for all components.

        Returns:
            Dictionary with status of the database and the OMDb client
        """
        status = {
            "status": "ok",
            "version": APP_VERSION,
            "services": {}
        }

        if self.database_reachable():
            status["services"]["database"] = {"status": "ok"}
        else:
            status["services"]["database"] = {"status": "error", "error": "Database unreachable"}
            status["status"] = "degraded"

        if self.omdb.configured:
            status["services"]["omdb"] = {"status": "ok"}
        else:
            status["services"]["omdb"] = {"status": "error", "error": "OMDB_API_KEY not set"}
            status["status"] = "degraded"

        return status


def get_app_state(request: Request) -> AppState:
    """Dependency injection for application state."""
    return request.app.state.app_state


def get_omdb_client(request: Request) -> OMDbClient:
    """Dependency injection for the OMDb client."""
    return get_app_state(request).omdb
