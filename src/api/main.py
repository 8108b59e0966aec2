"""FastAPI application entry point for the capability gate.

Thin HTTP surface over the capability engine and the answerability gate.
"""

import logging

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.answerability import router as answerability_router
from src.api.capabilities import router as capabilities_router
from src.capabilities.features import FEATURE_REGISTRY
from src.capabilities.registry import CAPABILITY_REGISTRY
from src.config.settings import Environment, get_settings

APP_VERSION = "0.1.0"

settings = get_settings()

_LOG_NAME_TO_LEVEL: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# --- Structured logging ---
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if settings.ENVIRONMENT == Environment.DEV
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        _LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value],
    ),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)
logging.basicConfig(level=_LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value])

logger: structlog.stdlib.BoundLogger = structlog.get_logger()

# --- FastAPI app ---
app = FastAPI(
    title="Capability Gate API",
    description="Data capability gating and answerability checks for recruiting analytics.",
    version=APP_VERSION,
)

# --- CORS middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.ENVIRONMENT == Environment.DEV else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Routers ---
app.include_router(capabilities_router)
app.include_router(answerability_router)

logger.info(
    "capability_gate_started",
    capabilities=len(CAPABILITY_REGISTRY),
    features=len(FEATURE_REGISTRY),
    unknown_intent_policy=settings.UNKNOWN_INTENT_POLICY.value,
)


# --- Infrastructure Endpoints ---


@app.get("/health")
async def health_check() -> dict:
    """Liveness probe. The gate has no external dependencies to check."""
    checks: dict[str, bool] = {
        "api": True,
        "registries": bool(CAPABILITY_REGISTRY) and bool(FEATURE_REGISTRY),
    }
    all_ok = all(checks.values())

    return {
        "status": "ok" if all_ok else "degraded",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "checks": checks,
    }


@app.get("/api/version")
async def get_version() -> dict[str, str]:
    """Return application name, version, and environment."""
    return {
        "name": "capability-gate",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
    }
