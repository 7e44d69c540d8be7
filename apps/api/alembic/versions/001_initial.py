"""Initial schema: accounts, service categories, provider profiles, service links, reviews.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
import uuid
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from marketplace.core.constants import DEFAULT_SERVICE_CATEGORIES

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user_accounts",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("role IN ('consumer', 'provider')", name="ck_user_accounts_role"),
    )
    op.create_index("ix_user_accounts_email", "user_accounts", ["email"], unique=True)

    categories = op.create_table(
        "service_categories",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )

    op.create_table(
        "provider_profiles",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=False),
            sa.ForeignKey("user_accounts.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("experience_years", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("pincode", sa.String(20), nullable=False, server_default=""),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("average_rating", sa.Numeric(3, 2), nullable=False, server_default="0"),
        sa.Column("total_reviews", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("experience_years >= 0", name="ck_provider_profiles_experience_years"),
        sa.CheckConstraint("hourly_rate >= 0", name="ck_provider_profiles_hourly_rate"),
    )
    op.create_index(
        "ix_provider_profiles_pincode_verified", "provider_profiles", ["pincode", "is_verified"]
    )

    op.create_table(
        "provider_services",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column(
            "provider_id",
            sa.Uuid(as_uuid=False),
            sa.ForeignKey("provider_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "category_id",
            sa.Uuid(as_uuid=False),
            sa.ForeignKey("service_categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.UniqueConstraint("provider_id", "category_id", name="uq_provider_services_provider_category"),
    )
    op.create_index("ix_provider_services_provider_id", "provider_services", ["provider_id"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column(
            "provider_id",
            sa.Uuid(as_uuid=False),
            sa.ForeignKey("provider_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "consumer_id",
            sa.Uuid(as_uuid=False),
            sa.ForeignKey("user_accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.UniqueConstraint("provider_id", "consumer_id", name="uq_reviews_provider_consumer"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),
    )
    op.create_index("ix_reviews_provider_created", "reviews", ["provider_id", "created_at"])

    op.bulk_insert(
        categories,
        [
            {"id": str(uuid.uuid4()), "name": name, "description": description}
            for name, description in DEFAULT_SERVICE_CATEGORIES
        ],
    )


def downgrade() -> None:
    op.drop_index("ix_reviews_provider_created", table_name="reviews")
    op.drop_table("reviews")
    op.drop_index("ix_provider_services_provider_id", table_name="provider_services")
    op.drop_table("provider_services")
    op.drop_index("ix_provider_profiles_pincode_verified", table_name="provider_profiles")
    op.drop_table("provider_profiles")
    op.drop_table("service_categories")
    op.drop_index("ix_user_accounts_email", table_name="user_accounts")
    op.drop_table("user_accounts")
