"""Application factory and context for the visual DNA lab API.

This module provides a factory for creating the FastAPI app without
import-time side effects. All runtime state (the lab, its evolution context
and RNG) lives in an ``AppContext`` attached to ``app.state.context``, so
each test can build a fresh, independently seeded app.

Usage:
------
    # For production (settings from environment)
    app = create_app()

    # For testing (deterministic lab)
    app = create_app(context=AppContext(rng_seed=42))
"""

import logging
import os
import random as pyrandom
import socket
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.logging_config import configure_logging
from backend.models import ServerInfo
from visual_dna.config.lab import LabSettings
from visual_dna.config.server import API_VERSION, DEFAULT_API_PORT
from visual_dna.events import SurpriseDiscoveredEvent
from visual_dna.exceptions import ConfigurationError, LabError
from visual_dna.lab import DnaLab, EvolutionContext


def _env_seed() -> Optional[int]:
    raw = os.getenv("VISUAL_DNA_SEED")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"VISUAL_DNA_SEED must be an integer, got {raw!r}") from exc


@dataclass
class AppContext:
    """Runtime context holding all application state."""

    settings: LabSettings = field(default_factory=LabSettings.from_env)
    rng_seed: Optional[int] = field(default_factory=_env_seed)
    api_port: int = field(
        default_factory=lambda: int(os.getenv("VISUAL_DNA_API_PORT", str(DEFAULT_API_PORT)))
    )
    allowed_origins: list = field(
        default_factory=lambda: os.getenv("VISUAL_DNA_ALLOWED_ORIGINS", "*").split(",")
    )

    # Built in __post_init__
    lab: Optional[DnaLab] = None

    server_start_time: float = field(default_factory=time.time)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("visual_dna.backend"))

    def __post_init__(self) -> None:
        if self.lab is None:
            rng = pyrandom.Random(self.rng_seed)
            self.lab = DnaLab(EvolutionContext(rng=rng, settings=self.settings))
        self.lab.context.event_bus.subscribe(SurpriseDiscoveredEvent, self._on_surprise)

    def _on_surprise(self, event: SurpriseDiscoveredEvent) -> None:
        self.logger.info("Surprise recorded: %s", event.experiment.experiment_id)

    def get_server_info(self) -> ServerInfo:
        stats = self.lab.context.stats()
        return ServerInfo(
            version=API_VERSION,
            hostname=socket.gethostname(),
            port=self.api_port,
            uptime_seconds=time.time() - self.server_start_time,
            total_experiments=stats.total_experiments,
            surprise_count=stats.surprise_count,
        )


def create_app(*, context: Optional[AppContext] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        context: Pre-configured AppContext (for testing). If None, creates a new one.

    Returns:
        Configured FastAPI application with context attached as app.state.context
    """
    logger = configure_logging(extra_loggers=("backend",))

    if context is None:
        context = AppContext()
    context.logger = logger

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ctx = app.state.context
        ctx.logger.info("Visual DNA lab API %s starting", API_VERSION)
        yield
        ctx.logger.info("Visual DNA lab API shutting down")

    app = FastAPI(title="Visual DNA Lab API", version=API_VERSION, lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=context.allowed_origins,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(LabError)
    async def lab_error_handler(request: Request, exc: LabError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/api/health")
    async def health():
        return {"status": "ok", "version": API_VERSION}

    @app.get("/api/server", response_model=ServerInfo)
    async def server_info():
        return context.get_server_info()

    _setup_routers(app, context)
    return app


def _setup_routers(app: FastAPI, ctx: AppContext) -> None:
    """Include the genome and lab routers."""
    from backend.routers import experiments, genomes

    app.include_router(genomes.setup_router())
    app.include_router(experiments.setup_router(ctx.lab))
    ctx.logger.debug("API routers configured")
