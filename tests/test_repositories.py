"""Repository tests against the in-memory SQLite database."""

from __future__ import annotations

import pytest

from marketplace.domain.distance import bounding_box
from marketplace.domain.entities import Location
from tests.conftest import SALVADOR, TestVendorRepository, seed_vendor


@pytest.mark.asyncio
async def test_only_active_vendors_are_listed(db_session):
    active = await seed_vendor(db_session, "Acaraje", *SALVADOR)
    await seed_vendor(db_session, "Closed Stall", -12.972, -38.511, is_active=False)

    vendors = await TestVendorRepository(db_session).list_active_vendors()
    assert [v.id for v in vendors] == [active.id]


@pytest.mark.asyncio
async def test_vendors_ordered_by_id(db_session):
    ids = [
        (await seed_vendor(db_session, f"Stall {i}", -12.97 - i / 100, -38.51)).id
        for i in range(4)
    ]
    vendors = await TestVendorRepository(db_session).list_active_vendors()
    assert [v.id for v in vendors] == sorted(ids)


@pytest.mark.asyncio
async def test_candidate_projection(db_session):
    vendor = await seed_vendor(db_session, "Tapioca", -13.0, -38.5, products=2, reviews=3)

    (candidate,) = await TestVendorRepository(db_session).list_active_vendors()
    assert candidate.id == vendor.id
    assert candidate.business_name == "Tapioca"
    assert candidate.location == Location(-13.0, -38.5)
    assert candidate.owner.email == "tapioca@example.com"
    assert [p.name for p in candidate.products] == ["Tapioca item 0", "Tapioca item 1"]
    assert candidate.review_count == 3


@pytest.mark.asyncio
async def test_featured_products_are_limited(db_session):
    await seed_vendor(db_session, "Big Menu", *SALVADOR, products=8)
    await seed_vendor(db_session, "Small Menu", -12.98, -38.51, products=1)

    big, small = await TestVendorRepository(db_session, products_limit=5).list_active_vendors()
    assert len(big.products) == 5
    assert [p.name for p in big.products] == [f"Big Menu item {i}" for i in range(5)]
    assert len(small.products) == 1


@pytest.mark.asyncio
async def test_vendor_without_products_or_reviews(db_session):
    await seed_vendor(db_session, "Bare", *SALVADOR)
    (candidate,) = await TestVendorRepository(db_session).list_active_vendors()
    assert candidate.products == ()
    assert candidate.review_count == 0


@pytest.mark.asyncio
async def test_bounding_box_narrows_rows(db_session):
    near = await seed_vendor(db_session, "Near", -12.98, -38.51)
    await seed_vendor(db_session, "Feira de Santana", -12.2664, -38.9663)

    box = bounding_box(Location(*SALVADOR), 5_000)
    vendors = await TestVendorRepository(db_session).list_active_vendors(bbox=box)
    assert [v.id for v in vendors] == [near.id]


@pytest.mark.asyncio
async def test_empty_table(db_session):
    assert await TestVendorRepository(db_session).list_active_vendors() == []


@pytest.mark.asyncio
async def test_create_vendor_stores_point(db_session):
    vendor = await seed_vendor(db_session, "Pointy", -12.5, -38.25)
    stored = await TestVendorRepository(db_session).get_by_id(vendor.id)
    assert stored.location == "POINT(-38.25 -12.5)"
