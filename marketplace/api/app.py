"""
FastAPI application factory.

* Registers routes for vendor search and admin.
* Maps domain errors onto the ``{"error": ...}`` response body.
* Applies rate-limiting middleware.
* Disposes the database engine on shutdown via lifespan events.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from marketplace.api.middleware import limiter
from marketplace.api.routes import admin, vendors
from marketplace.domain.errors import DataSourceError, QueryValidationError
from marketplace.infrastructure.database import engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release pooled DB connections on shutdown."""
    yield
    await engine.dispose()


async def _query_validation_handler(
    request: Request, exc: QueryValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _data_source_handler(
    request: Request, exc: DataSourceError
) -> JSONResponse:
    logger.error(
        "Nearby vendor search failed for %s: %s",
        request.url.path,
        exc,
        exc_info=exc,
    )
    # Generic message only; details stay in the logs
    return JSONResponse(
        status_code=500, content={"error": "Failed to search nearby vendors"}
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Nearby Vendors API",
        description=(
            "Finds mobile vendors near a customer.  Vendors are ranked by "
            "great-circle distance and limited to a 1-50 km search radius."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain errors
    app.add_exception_handler(QueryValidationError, _query_validation_handler)
    app.add_exception_handler(DataSourceError, _data_source_handler)

    # Routers
    app.include_router(vendors.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
