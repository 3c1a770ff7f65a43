from __future__ import annotations

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kondate.shared.config.settings import settings
from kondate.shared.errors import KondateError
from kondate.shared.logging.logger import setup_logging

from kondate.shared.api.health import router as health_router
from kondate.features.pantry.api.routes import router as pantry_router
from kondate.features.recipes.api.routes import router as recipes_router

log = logging.getLogger("app")


def _split(value: str):
    return [v.strip() for v in (value or "").split(",")] if value and value != "*" else ["*"]


async def _kondate_error(request: Request, exc: KondateError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, type(exc).__name__)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "invalid request")
    return JSONResponse({"error": f"{where}: {msg}" if where else msg}, status_code=400)


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="kondate", version="1.0.0")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_split(settings.CORS_ALLOW_ORIGINS),
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=_split(settings.CORS_ALLOW_METHODS),
        allow_headers=_split(settings.CORS_ALLOW_HEADERS),
    )

    app.add_exception_handler(KondateError, _kondate_error)
    app.add_exception_handler(RequestValidationError, _validation_error)

    # Routers
    app.include_router(health_router)
    app.include_router(recipes_router, prefix="/v1")
    app.include_router(pantry_router,  prefix="/v1")

    if not settings.GEMINI_API_KEY:
        log.warning("GEMINI_API_KEY is not set; recipe endpoints will answer 500")

    return app

# Uvicorn/Gunicorn entry point
app = create_app()
