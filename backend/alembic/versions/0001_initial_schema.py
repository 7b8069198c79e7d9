"""Initial holiday lets schema.

Revision ID: 0001
Revises:
Create Date: 2025-06-01
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

USER_ROLES = ("ADMIN", "OWNER", "STAFF")
ACCOMMODATION_TYPES = (
    "COTTAGE",
    "APARTMENT",
    "FLAT",
    "HOUSE",
    "BUNGALOW",
    "FARMHOUSE",
    "LODGE",
    "STUDIO",
)
AMENITIES = (
    "WIFI",
    "PET_FRIENDLY",
    "WASHING_MACHINE",
    "DISHWASHER",
    "HOT_TUB",
    "WOOD_BURNER",
    "EV_CHARGING",
    "AIR_CONDITIONING",
    "BBQ",
)
BOOKING_STATUSES = ("PENDING", "CONFIRMED", "CANCELLED", "COMPLETED", "NO_SHOW")


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("role", sa.Enum(*USER_ROLES, name="userrole"), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "guests",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.String(length=50), nullable=False),
        sa.Column("last_name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("address", sa.String(length=250)),
        _timestamp("created_at"),
    )
    op.create_index("ix_guests_email", "guests", ["email"])

    op.create_table(
        "accommodations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "owner_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=150), nullable=False),
        sa.Column("name", sa.String(length=150)),
        sa.Column("description", sa.String(length=4000), nullable=False),
        sa.Column(
            "type",
            sa.Enum(*ACCOMMODATION_TYPES, name="accommodationtype"),
            nullable=False,
        ),
        sa.Column("address_line1", sa.String(length=150), nullable=False),
        sa.Column("address_line2", sa.String(length=100)),
        sa.Column("town", sa.String(length=100), nullable=False),
        sa.Column("post_code", sa.String(length=10), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("distance_to_nearest_beach_km", sa.Float()),
        sa.Column("bedrooms", sa.Integer(), nullable=False),
        sa.Column("bathrooms", sa.Integer(), nullable=False),
        sa.Column("max_occupancy", sa.Integer(), nullable=False),
        sa.Column("has_sea_view", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("image_urls", sa.JSON(), nullable=False),
        sa.Column("base_price_per_night", sa.Numeric(10, 2), nullable=False),
        sa.Column("cleaning_fee", sa.Numeric(10, 2)),
        sa.Column("security_deposit", sa.Numeric(10, 2)),
        sa.Column("average_rating", sa.Numeric(3, 2)),
        sa.Column("review_count", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.CheckConstraint("max_occupancy >= 1", name="ck_accommodations_occupancy"),
        sa.CheckConstraint(
            "base_price_per_night >= 0", name="ck_accommodations_base_price"
        ),
    )
    op.create_index("ix_accommodations_owner_id", "accommodations", ["owner_id"])
    op.create_index("ix_accommodations_town", "accommodations", ["town"])

    op.create_table(
        "accommodation_amenities",
        sa.Column(
            "accommodation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("accommodations.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "amenity",
            sa.Enum(*AMENITIES, name="amenitytype"),
            primary_key=True,
        ),
    )

    op.create_table(
        "availability_periods",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "accommodation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("accommodations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("price_per_night_override", sa.Numeric(10, 2)),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("minimum_stay_nights", sa.Integer()),
        sa.Column("notes", sa.String(length=100)),
        sa.CheckConstraint("end_date >= start_date", name="ck_availability_dates"),
    )
    op.create_index(
        "ix_availability_periods_accommodation_id",
        "availability_periods",
        ["accommodation_id"],
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "accommodation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("accommodations.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "guest_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("guests.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("check_in_date", sa.Date(), nullable=False),
        sa.Column("check_out_date", sa.Date(), nullable=False),
        sa.Column("guest_count", sa.Integer(), nullable=False),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "status",
            sa.Enum(*BOOKING_STATUSES, name="bookingstatus"),
            nullable=False,
        ),
        sa.Column("special_requests", sa.String(length=500)),
        sa.Column("booking_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("cancellation_date", sa.DateTime(timezone=True)),
        sa.Column("cancellation_reason", sa.String(length=500)),
        sa.CheckConstraint("check_out_date > check_in_date", name="ck_bookings_dates"),
        sa.CheckConstraint("guest_count >= 1", name="ck_bookings_guest_count"),
    )
    op.create_index("ix_bookings_guest_id", "bookings", ["guest_id"])
    op.create_index(
        "ix_bookings_stay",
        "bookings",
        ["accommodation_id", "check_in_date", "check_out_date"],
    )

    op.create_table(
        "reviews",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "accommodation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("accommodations.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "guest_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("guests.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "booking_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("bookings.id", ondelete="RESTRICT"),
            nullable=False,
            unique=True,
        ),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.String(length=2000)),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("review_date", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),
    )
    op.create_index("ix_reviews_accommodation_id", "reviews", ["accommodation_id"])


def downgrade() -> None:
    op.drop_index("ix_reviews_accommodation_id", table_name="reviews")
    op.drop_table("reviews")
    op.drop_index("ix_bookings_stay", table_name="bookings")
    op.drop_index("ix_bookings_guest_id", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index(
        "ix_availability_periods_accommodation_id", table_name="availability_periods"
    )
    op.drop_table("availability_periods")
    op.drop_table("accommodation_amenities")
    op.drop_index("ix_accommodations_town", table_name="accommodations")
    op.drop_index("ix_accommodations_owner_id", table_name="accommodations")
    op.drop_table("accommodations")
    op.drop_index("ix_guests_email", table_name="guests")
    op.drop_table("guests")
    op.drop_table("users")
    for enum_name in ("bookingstatus", "amenitytype", "accommodationtype", "userrole"):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
