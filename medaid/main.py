"""FastAPI application entry point.

Usage:
    python -m medaid.main

Serves the pricing, persona and comparison engines over HTTP.
"""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn
from fastapi import FastAPI

from medaid.api import router
from medaid.config import settings

# ── Logging setup ────────────────────────────────────────────────────

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    stream=sys.stdout,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger(__name__)

# ── FastAPI app ──────────────────────────────────────────────────────

app = FastAPI(
    title="Medical Aid Compare API",
    description="Premium, savings and risk comparison for medical aid plans",
    version="0.1.0",
)
app.include_router(router)


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "environment": settings.environment,
    }


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    logger.info("starting_api", host=settings.api_host, port=settings.api_port, env=settings.environment)
    uvicorn.run(
        "medaid.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
