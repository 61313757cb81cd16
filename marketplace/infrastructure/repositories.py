"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
domain-relevant queries only.  ``VendorRepository`` is the ``VendorSource``
the proximity engine reads from; it returns immutable domain records,
never ORM rows.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import ProductModel, ReviewModel, UserModel, VendorModel
from marketplace.domain.distance import BoundingBox
from marketplace.domain.entities import (
    FeaturedProduct,
    Location,
    VendorCandidate,
    VendorOwner,
)


def to_candidate(
    vendor,
    user,
    products: tuple[FeaturedProduct, ...] = (),
    review_count: int = 0,
) -> VendorCandidate:
    """Project ORM rows onto the read-only ``VendorCandidate`` record."""
    return VendorCandidate(
        id=vendor.id,
        business_name=vendor.business_name,
        description=vendor.description,
        rating=vendor.rating or 0.0,
        location=Location(vendor.latitude, vendor.longitude),
        owner=VendorOwner(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            phone=user.phone,
        ),
        products=products,
        review_count=review_count,
    )


class VendorRepository:
    vendor_model = VendorModel
    user_model = UserModel
    product_model = ProductModel
    review_model = ReviewModel

    def __init__(self, session: AsyncSession, products_limit: int = 5):
        self.session = session
        self.products_limit = products_limit

    async def create_vendor(
        self,
        *,
        user_id: int,
        business_name: str,
        latitude: float,
        longitude: float,
        description: str | None = None,
        rating: float = 0.0,
        is_active: bool = True,
    ):
        """Create a vendor with both float and PostGIS location columns."""
        vendor = self.vendor_model(
            user_id=user_id,
            business_name=business_name,
            description=description,
            rating=rating,
            latitude=latitude,
            longitude=longitude,
            location=self._point(latitude, longitude),
            is_active=is_active,
        )
        self.session.add(vendor)
        await self.session.flush()
        return vendor

    async def get_by_id(self, vendor_id: int):
        return await self.session.get(self.vendor_model, vendor_id)

    async def list_active_vendors(
        self, bbox: Optional[BoundingBox] = None
    ) -> list[VendorCandidate]:
        """
        All active vendors ordered by id, optionally narrowed to *bbox*.

        No distance filtering happens here; the box only trims rows that
        cannot possibly be inside the search circle.
        """
        vendor, user = self.vendor_model, self.user_model
        query = (
            select(vendor, user)
            .join(user, vendor.user_id == user.id)
            .where(vendor.is_active.is_(True))
            .order_by(vendor.id)
        )
        if bbox is not None:
            query = query.where(
                vendor.latitude.between(bbox.min_lat, bbox.max_lat),
                vendor.longitude.between(bbox.min_lng, bbox.max_lng),
            )

        rows = (await self.session.execute(query)).all()
        if not rows:
            return []

        vendor_ids = [v.id for v, _ in rows]
        products = await self._featured_products(vendor_ids)
        reviews = await self._review_counts(vendor_ids)

        return [
            to_candidate(v, u, tuple(products.get(v.id, ())), reviews.get(v.id, 0))
            for v, u in rows
        ]

    # ── Internals ─────────────────────────────────────────────────────

    @staticmethod
    def _point(latitude: float, longitude: float):
        from geoalchemy2.functions import ST_MakePoint

        return func.ST_SetSRID(ST_MakePoint(longitude, latitude), 4326)

    async def _featured_products(
        self, vendor_ids: list[int]
    ) -> dict[int, list[FeaturedProduct]]:
        """First ``products_limit`` products per vendor (by id)."""
        product = self.product_model
        numbered = (
            select(
                product.id,
                product.vendor_id,
                product.name,
                product.price,
                product.image,
                func.row_number()
                .over(partition_by=product.vendor_id, order_by=product.id)
                .label("position"),
            )
            .where(product.vendor_id.in_(vendor_ids))
            .subquery()
        )
        result = await self.session.execute(
            select(numbered)
            .where(numbered.c.position <= self.products_limit)
            .order_by(numbered.c.vendor_id, numbered.c.id)
        )

        by_vendor: dict[int, list[FeaturedProduct]] = defaultdict(list)
        for row in result:
            by_vendor[row.vendor_id].append(
                FeaturedProduct(
                    id=row.id, name=row.name, price=row.price, image=row.image
                )
            )
        return by_vendor

    async def _review_counts(self, vendor_ids: list[int]) -> dict[int, int]:
        review = self.review_model
        result = await self.session.execute(
            select(review.vendor_id, func.count(review.id))
            .where(review.vendor_id.in_(vendor_ids))
            .group_by(review.vendor_id)
        )
        return {vendor_id: count for vendor_id, count in result.all()}
