"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL.  PostGIS-specific features (Geometry columns) are
mocked by using plain String columns in the test models, and
``TestVendorRepository`` points the production repository at them.
"""

from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from marketplace.domain.entities import (
    FeaturedProduct,
    Location,
    VendorCandidate,
    VendorOwner,
)
from marketplace.infrastructure.repositories import VendorRepository


# ── Test DB (SQLite in-memory) ────────────────────────────────────────

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(TEST_DB_URL, echo=False)
TestSessionFactory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)

# Salvador city centre, used as the search origin throughout the tests
SALVADOR = (-12.9714, -38.5104)


class TestBase(DeclarativeBase):
    pass


# Mirror the production models but without PostGIS Geometry columns
# (SQLite doesn't support them).

class TestUserModel(TestBase):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    avatar = Column(String(500), nullable=True)
    phone = Column(String(32), nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class TestVendorModel(TestBase):
    __tablename__ = "vendors"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    business_name = Column(String(160), nullable=False)
    description = Column(Text, nullable=True)
    rating = Column(Float, default=0.0, nullable=False)
    location = Column(String, nullable=True)  # stub for Geometry
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now())


class TestProductModel(TestBase):
    __tablename__ = "products"
    id = Column(Integer, primary_key=True, autoincrement=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    name = Column(String(160), nullable=False)
    price = Column(Float, nullable=False)
    image = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class TestReviewModel(TestBase):
    __tablename__ = "reviews"
    id = Column(Integer, primary_key=True, autoincrement=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class TestVendorRepository(VendorRepository):
    """``VendorRepository`` bound to the SQLite-friendly test models."""

    vendor_model = TestVendorModel
    user_model = TestUserModel
    product_model = TestProductModel
    review_model = TestReviewModel

    @staticmethod
    def _point(latitude: float, longitude: float):
        return f"POINT({longitude} {latitude})"


# ── Builders ──────────────────────────────────────────────────────────


def make_candidate(
    vendor_id: int,
    lat: float,
    lng: float,
    name: str | None = None,
    products: int = 0,
) -> VendorCandidate:
    return VendorCandidate(
        id=vendor_id,
        business_name=name or f"Vendor {vendor_id}",
        location=Location(lat, lng),
        owner=VendorOwner(
            id=vendor_id, name=f"Owner {vendor_id}", email=f"v{vendor_id}@example.com"
        ),
        products=tuple(
            FeaturedProduct(id=vendor_id * 100 + i, name=f"Item {i}", price=5.0 + i)
            for i in range(products)
        ),
    )


async def seed_vendor(
    session: AsyncSession,
    name: str,
    lat: float,
    lng: float,
    *,
    is_active: bool = True,
    products: int = 0,
    reviews: int = 0,
) -> TestVendorModel:
    """Insert a user + vendor (+ products / reviews) and return the vendor."""
    slug = name.lower().replace(" ", "-")
    user = TestUserModel(name=f"{name} Owner", email=f"{slug}@example.com")
    session.add(user)
    await session.flush()

    vendor = await TestVendorRepository(session).create_vendor(
        user_id=user.id,
        business_name=name,
        latitude=lat,
        longitude=lng,
        is_active=is_active,
    )
    for i in range(products):
        session.add(
            TestProductModel(vendor_id=vendor.id, name=f"{name} item {i}", price=2.5 * (i + 1))
        )
    for i in range(reviews):
        session.add(TestReviewModel(vendor_id=vendor.id, user_id=user.id, rating=5))
    await session.flush()
    return vendor


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield a session, then drop everything."""
    async with test_engine.begin() as conn:
        await conn.run_sync(TestBase.metadata.create_all)

    async with TestSessionFactory() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(TestBase.metadata.drop_all)
