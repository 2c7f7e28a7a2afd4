"""FastAPI application factory and app configuration for Elevate Control.

This module creates the FastAPI `app`, configures middleware (CORS, rate limiting),
registers the entity routers under `elevate.routers.*`, maps every error onto
the standard `{"error": {"code", "message"}}` payload and initializes the DB
once on startup (calls `elevate.database.init_db`).
"""

from __future__ import annotations

import logging
import os
import warnings
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from elevate.database import init_db
from elevate.errors import error_payload, make_validation_error_response
from elevate.routers import automacoes, catalog, faixas, impressoras, modelos, users

logger = logging.getLogger(__name__)
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

DEFAULT_RATE_LIMIT = os.getenv("RATE_LIMIT", "100/minute")
limiter = Limiter(key_func=get_remote_address, default_limits=[DEFAULT_RATE_LIMIT])

# argon2 cffi exposes a deprecated attribute access that creates a lot of noise
warnings.filterwarnings("ignore", message=r"Accessing argon2.__version__ is deprecated")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Lifespan startup: registering entity tables")
    init_db()
    yield
    logger.info("Lifespan shutdown: cleaning up resources")


app = FastAPI(
    title="Elevate Control - Gestão de TI",
    description="Sistema de gerenciamento para administração de TI empresarial",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

origins = os.getenv("CORS_ORIGINS", "*")
if origins == "*":
    allowed_origins: List[str] = ["*"]
else:
    allowed_origins = [o.strip() for o in origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(status_code=429, content={"error": {"code": "rate_limited", "message": "Rate limit exceeded"}})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Missing fields and schema violations are client errors (400), not 422
    return JSONResponse(status_code=400, content=make_validation_error_response(exc.errors()))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": {"code": "internal_error", "message": str(exc) or "Internal server error"}})


@app.get("/api/health", tags=["Health"])
async def health() -> dict:
    return {"status": "ok"}


for _router in (
    faixas.router,
    catalog.marcas_router,
    catalog.tipos_router,
    modelos.router,
    impressoras.router,
    automacoes.router,
    users.router,
):
    app.include_router(_router)
    logger.debug("Included router: %s", _router.prefix)


__all__ = ["app", "limiter"]
