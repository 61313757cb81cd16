"""Pydantic response schemas for the REST API.

Field aliases keep the camelCase wire format the mobile clients already
consume (``businessName``, ``_count``).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from marketplace.domain.entities import NearbyVendors, RankedVendor


# ── Responses ─────────────────────────────────────────────────────────


class ProductSummary(BaseModel):
    id: int
    name: str
    price: float
    image: Optional[str] = None


class VendorUserSummary(BaseModel):
    id: int
    name: str
    email: str
    avatar: Optional[str] = None
    phone: Optional[str] = None


class ReviewCount(BaseModel):
    reviews: int = 0


class NearbyVendorResponse(BaseModel):
    id: int
    business_name: str = Field(..., alias="businessName")
    description: Optional[str] = None
    rating: float = 0.0
    latitude: float
    longitude: float
    distance: float = Field(..., description="Kilometers, one decimal place.")
    user: Optional[VendorUserSummary] = None
    products: list[ProductSummary] = []
    counts: ReviewCount = Field(default_factory=ReviewCount, alias="_count")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_ranked(cls, ranked: RankedVendor) -> "NearbyVendorResponse":
        vendor = ranked.vendor
        owner = vendor.owner
        return cls(
            id=vendor.id,
            business_name=vendor.business_name,
            description=vendor.description,
            rating=vendor.rating,
            latitude=vendor.location.latitude,
            longitude=vendor.location.longitude,
            distance=ranked.distance_km,
            user=(
                VendorUserSummary(
                    id=owner.id,
                    name=owner.name,
                    email=owner.email,
                    avatar=owner.avatar,
                    phone=owner.phone,
                )
                if owner
                else None
            ),
            products=[
                ProductSummary(id=p.id, name=p.name, price=p.price, image=p.image)
                for p in vendor.products
            ],
            counts=ReviewCount(reviews=vendor.review_count),
        )


class NearbyVendorsResponse(BaseModel):
    count: int
    vendors: list[NearbyVendorResponse] = []

    @classmethod
    def from_result(cls, result: NearbyVendors) -> "NearbyVendorsResponse":
        return cls(
            count=result.count,
            vendors=[NearbyVendorResponse.from_ranked(r) for r in result.vendors],
        )


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    error: str
