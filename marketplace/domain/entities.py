"""
Domain entities for the proximity search.

All records here are immutable: the vendor source hands out
``VendorCandidate`` snapshots, and ranking produces new ``RankedVendor``
objects rather than annotating candidates in place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        """Finite and inside [-90, 90] x [-180, 180]."""
        return (
            math.isfinite(self.latitude)
            and math.isfinite(self.longitude)
            and -90.0 <= self.latitude <= 90.0
            and -180.0 <= self.longitude <= 180.0
        )


@dataclass(frozen=True)
class FeaturedProduct:
    id: int
    name: str
    price: float
    image: Optional[str] = None


@dataclass(frozen=True)
class VendorOwner:
    id: int
    name: str
    email: str
    avatar: Optional[str] = None
    phone: Optional[str] = None


# ── Entities ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class VendorCandidate:
    id: int
    business_name: str
    location: Location
    owner: Optional[VendorOwner] = None
    description: Optional[str] = None
    rating: float = 0.0
    products: tuple[FeaturedProduct, ...] = ()
    review_count: int = 0


@dataclass(frozen=True)
class RankedVendor:
    vendor: VendorCandidate
    distance_m: float
    distance_km: float


@dataclass(frozen=True)
class ProximityQuery:
    origin: Location
    radius_km: float = 5.0

    @property
    def radius_m(self) -> float:
        return self.radius_km * 1000


@dataclass(frozen=True)
class NearbyVendors:
    vendors: list[RankedVendor] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.vendors)
