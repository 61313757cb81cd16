"""
Proximity Query Engine
======================

1. **Validate**     -- coordinates present (per ``CoordinatePolicy``),
   finite and in range; radius inside ``[min_radius_km, max_radius_km]``.
   A rejected query never touches the vendor source.
2. **Fetch**        -- one bulk read of active vendors, bounded by a
   timeout.  Optionally narrowed by a lat/lng bounding box; the box is a
   strict superset of the search circle so the final result is the same
   as a full scan.
3. **Annotate**     -- haversine distance (meters) per candidate.  Records
   with broken coordinates are dropped and logged, not fatal.
4. **Filter**       -- keep ``distance_m <= radius_m`` (boundary included).
5. **Sort**         -- stable ascending sort, ties keep retrieval order.
6. **Shape**        -- ``distance_km`` rounded to one decimal, halves up.

Rounding
--------
``round_km`` reproduces ``Math.round(m / 1000 * 10) / 10`` used by the
existing mobile clients (round-half-up, which for non-negative distances
is the same as round-half-away-from-zero).  Python's ``round`` is
half-to-even and is deliberately not used here.

Complexity
----------
Let N = active vendors returned by the source, K = vendors in radius.

* Annotate + filter:  O(N)
* Sort:               O(K log K)
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Iterable, Optional, Protocol

from .distance import BoundingBox, bounding_box, distance_m
from .entities import (
    Location,
    NearbyVendors,
    ProximityQuery,
    RankedVendor,
    VendorCandidate,
)
from .enums import CoordinatePolicy
from .errors import DataSourceError, QueryValidationError

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_KM = 5.0
MIN_RADIUS_KM = 1.0
MAX_RADIUS_KM = 50.0


class VendorSource(Protocol):
    """Anything that can list active vendors (see ``VendorRepository``)."""

    async def list_active_vendors(
        self, bbox: Optional[BoundingBox] = None
    ) -> list[VendorCandidate]: ...


# ── Pure helpers ──────────────────────────────────────────────────────


def round_km(meters: float) -> float:
    """Meters -> kilometers with one decimal place, halves rounded up."""
    return math.floor(meters / 1000 * 10 + 0.5) / 10


def build_query(
    latitude: Optional[float],
    longitude: Optional[float],
    radius_km: Optional[float] = None,
    *,
    policy: CoordinatePolicy = CoordinatePolicy.ABSENT_ONLY,
    default_radius_km: float = DEFAULT_RADIUS_KM,
    min_radius_km: float = MIN_RADIUS_KM,
    max_radius_km: float = MAX_RADIUS_KM,
) -> ProximityQuery:
    """Validate raw query values and return a ``ProximityQuery``.

    Raises ``QueryValidationError`` with a message safe to show the user.
    """
    missing = latitude is None or longitude is None
    if not missing and policy is CoordinatePolicy.ZERO_IS_MISSING:
        missing = latitude == 0 or longitude == 0
    if missing:
        raise QueryValidationError("latitude and longitude are required")

    if not math.isfinite(latitude) or not -90.0 <= latitude <= 90.0:
        raise QueryValidationError("latitude must be between -90 and 90")
    if not math.isfinite(longitude) or not -180.0 <= longitude <= 180.0:
        raise QueryValidationError("longitude must be between -180 and 180")

    if radius_km is None:
        radius_km = default_radius_km
    if not math.isfinite(radius_km) or not (
        min_radius_km <= radius_km <= max_radius_km
    ):
        raise QueryValidationError(
            f"radius must be between {min_radius_km:g}km and {max_radius_km:g}km"
        )

    return ProximityQuery(origin=Location(latitude, longitude), radius_km=radius_km)


def rank_vendors(
    query: ProximityQuery, candidates: Iterable[VendorCandidate]
) -> list[RankedVendor]:
    """Annotate, filter and sort *candidates* for *query*.  No I/O."""
    radius_m = query.radius_m
    ranked: list[RankedVendor] = []

    for candidate in candidates:
        if not candidate.location.is_valid():
            logger.warning(
                "Skipping vendor %s: invalid coordinates (%r, %r)",
                candidate.id,
                candidate.location.latitude,
                candidate.location.longitude,
            )
            continue

        meters = distance_m(query.origin, candidate.location)
        if meters <= radius_m:
            ranked.append(
                RankedVendor(
                    vendor=candidate,
                    distance_m=meters,
                    distance_km=round_km(meters),
                )
            )

    # list.sort is stable: equal distances keep the source's order
    ranked.sort(key=lambda r: r.distance_m)
    return ranked


# ── Engine facade ─────────────────────────────────────────────────────


class ProximityEngine:
    """High-level API used by the HTTP layer."""

    def __init__(
        self,
        *,
        policy: CoordinatePolicy = CoordinatePolicy.ABSENT_ONLY,
        default_radius_km: float = DEFAULT_RADIUS_KM,
        min_radius_km: float = MIN_RADIUS_KM,
        max_radius_km: float = MAX_RADIUS_KM,
        spatial_prefilter: bool = True,
        fetch_timeout: Optional[float] = None,
    ):
        self.policy = policy
        self.default_radius_km = default_radius_km
        self.min_radius_km = min_radius_km
        self.max_radius_km = max_radius_km
        self.spatial_prefilter = spatial_prefilter
        self.fetch_timeout = fetch_timeout

    def build_query(
        self,
        latitude: Optional[float],
        longitude: Optional[float],
        radius_km: Optional[float] = None,
    ) -> ProximityQuery:
        return build_query(
            latitude,
            longitude,
            radius_km,
            policy=self.policy,
            default_radius_km=self.default_radius_km,
            min_radius_km=self.min_radius_km,
            max_radius_km=self.max_radius_km,
        )

    async def search(
        self, query: ProximityQuery, source: VendorSource
    ) -> NearbyVendors:
        """Fetch candidates from *source* and rank them for *query*.

        Any source failure, including a timeout, fails the whole query
        with ``DataSourceError``; a truncated vendor list is never ranked.
        """
        bbox = (
            bounding_box(query.origin, query.radius_m)
            if self.spatial_prefilter
            else None
        )

        try:
            candidates = await asyncio.wait_for(
                source.list_active_vendors(bbox=bbox),
                timeout=self.fetch_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise DataSourceError(
                f"Vendor source timed out after {self.fetch_timeout}s"
            ) from exc
        except Exception as exc:
            raise DataSourceError("Vendor source failed") from exc

        ranked = rank_vendors(query, candidates)
        logger.debug(
            "Proximity search at (%.5f, %.5f) r=%gkm: %d candidates, %d in range",
            query.origin.latitude,
            query.origin.longitude,
            query.radius_km,
            len(candidates),
            len(ranked),
        )
        return NearbyVendors(vendors=ranked)

    async def find_nearby_vendors(
        self,
        latitude: Optional[float],
        longitude: Optional[float],
        radius_km: Optional[float],
        source: VendorSource,
    ) -> NearbyVendors:
        query = self.build_query(latitude, longitude, radius_km)
        return await self.search(query, source)
