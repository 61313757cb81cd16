"""
SQLAlchemy ORM models  (maps to PostgreSQL + PostGIS).

Tables
------
* ``users``     -- account owners (customers and vendors)
* ``vendors``   -- mobile vendor profiles with their current position
* ``products``  -- items a vendor sells
* ``reviews``   -- customer reviews, only counted by the nearby search

Indexes
-------
* **GIST** on ``vendors.location`` for PostGIS spatial queries.
* **B-Tree** on ``(latitude, longitude)`` backing the bounding-box
  pre-filter, and on ``is_active`` / foreign keys for the bulk read.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from geoalchemy2 import Geometry

from .database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    avatar = Column(String(500), nullable=True)
    phone = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class VendorModel(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    business_name = Column(String(160), nullable=False)
    description = Column(Text, nullable=True)
    rating = Column(Float, default=0.0, nullable=False)

    # Stored as PostGIS geometry for spatial indexing
    location = Column(Geometry("POINT", srid=4326), nullable=True)

    # Also stored as plain floats for fast reads (avoids ST_X / ST_Y)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_vendors_latitude"),
        CheckConstraint(
            "longitude BETWEEN -180 AND 180", name="ck_vendors_longitude"
        ),
        Index("idx_vendors_location", "location", postgresql_using="gist"),
        Index("idx_vendors_lat_lng", "latitude", "longitude"),
        Index("idx_vendors_active", "is_active"),
    )


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    name = Column(String(160), nullable=False)
    price = Column(Float, nullable=False)
    image = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("idx_products_vendor", "vendor_id"),)


class ReviewModel(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("idx_reviews_vendor", "vendor_id"),)
