"""
LifeIndex API
=============
FastAPI application entry point. Mount routers here.

Every endpoint is a stateless wrapper around the scoring engines in
``lifeindex.services``. Nothing is stored and nothing is fetched.
"""

import logging
import math

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lifeindex.config import get_settings
from lifeindex.routers import nutrition, recovery, scores, sleep

logger = logging.getLogger(__name__)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="LifeIndex API",
    description="Composite health scoring: daily, sleep, recovery and nutrition",
    version="0.1.0",
    docs_url="/api/docs" if settings.environment != "production" else None,
    redoc_url="/api/redoc" if settings.environment != "production" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(scores.router)
app.include_router(sleep.router)
app.include_router(recovery.router)
app.include_router(nutrition.router)


@app.get("/api/v1/health")
async def health_check() -> dict:
    return {"status": "ok", "service": "lifeindex-api"}


def _json_safe_float(value: float):
    # JSON has no Infinity/NaN; echo rejected inputs back as strings.
    return value if math.isfinite(value) else str(value)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """422 with pydantic's error list, safe for non-finite inputs."""
    logger.info("Rejected %s %s: %d validation error(s)", request.method, request.url.path, len(exc.errors()))
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(exc.errors(), custom_encoder={float: _json_safe_float})},
    )
