"""FastAPI application factory.

Routes
------
All endpoints live in :mod:`api.routes` and are mounted at the root:

    POST /api/audit      : full audit (all five analyzers)
    GET  /api/<analyzer> : a single analyzer (speed, meta, links, robots, headers)
    GET  /api/health     : liveness probe
    GET  /robots.txt, /sitemap.xml : the service's own crawl hints

Errors
------
Every error body is ``{"error": "<message>"}``: ``InvalidInput`` maps to 400,
anything else escaping a route maps to 500.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from api import routes
from errors import InvalidInput
from log import configure_logging


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="SEO Audit API",
        description=(
            "Runs page-speed, meta tag, link, robots/sitemap and HTTP header "
            "checks against a URL and returns a scored report with "
            "prioritized recommendations."
        ),
        version="1.0.0",
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InvalidInput, _invalid_input_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(routes.router)
    return app


async def _invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request body on {}: {}", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid URL format"})


# Module-level instance used by uvicorn:
#   uvicorn api.app:app --reload
configure_logging()
app = create_app()
