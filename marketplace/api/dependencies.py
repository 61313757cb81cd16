"""FastAPI dependency injection helpers."""

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config import settings
from marketplace.domain.enums import CoordinatePolicy
from marketplace.domain.proximity import ProximityEngine
from marketplace.infrastructure.database import async_session_factory


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_proximity_engine() -> ProximityEngine:
    """Build the engine from current settings (cheap, stateless)."""
    policy = (
        CoordinatePolicy.ZERO_IS_MISSING
        if settings.legacy_zero_coordinates
        else CoordinatePolicy.ABSENT_ONLY
    )
    return ProximityEngine(
        policy=policy,
        default_radius_km=settings.default_radius_km,
        min_radius_km=settings.min_radius_km,
        max_radius_km=settings.max_radius_km,
        spatial_prefilter=settings.spatial_prefilter,
        fetch_timeout=settings.vendor_fetch_timeout_seconds,
    )
