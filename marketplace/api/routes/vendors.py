"""
Vendor search endpoints
=======================

GET /api/v1/vendors/nearby        -- vendors within ``radiusKm`` of a point
GET /api/v1/users/vendors/nearby  -- same handler, path used by older clients

Query values arrive as raw strings and are parsed here so that malformed
input produces the ``{"error": ...}`` 400 body the clients expect rather
than FastAPI's default 422.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.api.dependencies import get_db, get_proximity_engine
from marketplace.api.middleware import limiter
from marketplace.api.schemas import ErrorResponse, NearbyVendorsResponse
from marketplace.config import settings
from marketplace.domain.errors import QueryValidationError
from marketplace.domain.proximity import ProximityEngine
from marketplace.infrastructure.repositories import VendorRepository

router = APIRouter(tags=["vendors"])


def _parse_number(raw: Optional[str], name: str) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        raise QueryValidationError(f"{name} must be a number") from None


@router.get(
    "/vendors/nearby",
    response_model=NearbyVendorsResponse,
    summary="Find vendors near a point",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid query."},
        500: {"model": ErrorResponse, "description": "Vendor lookup failed."},
    },
)
@router.get(
    "/users/vendors/nearby",
    response_model=NearbyVendorsResponse,
    include_in_schema=False,
)
@limiter.limit(settings.rate_limit)
async def nearby_vendors(
    request: Request,
    latitude: Optional[str] = Query(None, description="Decimal degrees."),
    longitude: Optional[str] = Query(None, description="Decimal degrees."),
    radius_km: Optional[str] = Query(
        None, alias="radiusKm", description="Search radius in km (1-50, default 5)."
    ),
    db: AsyncSession = Depends(get_db),
    engine: ProximityEngine = Depends(get_proximity_engine),
):
    query = engine.build_query(
        _parse_number(latitude, "latitude"),
        _parse_number(longitude, "longitude"),
        _parse_number(radius_km, "radiusKm"),
    )
    repo = VendorRepository(db, products_limit=settings.featured_products_limit)
    result = await engine.search(query, repo)
    return NearbyVendorsResponse.from_result(result)
