"""Initial schema with PostGIS extension and the vendor search tables.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from geoalchemy2 import Geometry


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Enable PostGIS extension
    op.execute("CREATE EXTENSION IF NOT EXISTS postgis")

    # ── users ─────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("avatar", sa.String(500), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )

    # ── vendors ───────────────────────────────────────────────────────
    op.create_table(
        "vendors",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id"),
            unique=True,
            nullable=False,
        ),
        sa.Column("business_name", sa.String(160), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("rating", sa.Float, nullable=False, server_default="0"),
        sa.Column("location", Geometry("POINT", srid=4326), nullable=True),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
        sa.Column(
            "is_active", sa.Boolean, nullable=False, server_default=sa.true()
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "latitude BETWEEN -90 AND 90", name="ck_vendors_latitude"
        ),
        sa.CheckConstraint(
            "longitude BETWEEN -180 AND 180", name="ck_vendors_longitude"
        ),
    )
    op.create_index(
        "idx_vendors_location",
        "vendors",
        ["location"],
        postgresql_using="gist",
    )
    op.create_index("idx_vendors_lat_lng", "vendors", ["latitude", "longitude"])
    op.create_index("idx_vendors_active", "vendors", ["is_active"])

    # ── products ──────────────────────────────────────────────────────
    op.create_table(
        "products",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "vendor_id", sa.Integer, sa.ForeignKey("vendors.id"), nullable=False
        ),
        sa.Column("name", sa.String(160), nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_products_vendor", "products", ["vendor_id"])

    # ── reviews ───────────────────────────────────────────────────────
    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "vendor_id", sa.Integer, sa.ForeignKey("vendors.id"), nullable=False
        ),
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("comment", sa.Text, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_reviews_vendor", "reviews", ["vendor_id"])


def downgrade() -> None:
    op.drop_table("reviews")
    op.drop_table("products")
    op.drop_table("vendors")
    op.drop_table("users")
