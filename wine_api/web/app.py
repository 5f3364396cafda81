"""FastAPI application factory for the Wine API."""

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wine_api.db.store import StoreUnavailable
from wine_api.services.query_engine import InvalidQuery

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

logger = logging.getLogger(__name__)


async def _store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": exc.message})


async def _invalid_query_handler(request: Request, exc: InvalidQuery) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Wine API",
        description="Read-only query access to a catalog of rated wines",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreUnavailable, _store_unavailable_handler)
    app.add_exception_handler(InvalidQuery, _invalid_query_handler)

    # Include routers (import here to avoid circular imports)
    from wine_api.web.routes import summaries, wines

    app.include_router(wines.router)
    app.include_router(summaries.router)

    logger.info("Wine API application created")
    return app


# Application instance
app = create_app()
