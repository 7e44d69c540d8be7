import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    Integer,
    Numeric,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
    CheckConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


def uuid4_str():
    return str(uuid.uuid4())


class UserAccount(Base):
    __tablename__ = "user_accounts"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)  # consumer | provider
    full_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    provider_profile = relationship("ProviderProfile", back_populates="user", uselist=False)
    reviews_written = relationship("Review", back_populates="consumer")

    __table_args__ = (
        CheckConstraint("role IN ('consumer', 'provider')", name="ck_user_accounts_role"),
    )


class ServiceCategory(Base):
    __tablename__ = "service_categories"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ProviderProfile(Base):
    """Provider-side details of a provider account (one row per account, created on first save)."""
    __tablename__ = "provider_profiles"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(
        Uuid(as_uuid=False), ForeignKey("user_accounts.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    bio = Column(Text, nullable=True)
    experience_years = Column(Integer, nullable=False, default=0)
    hourly_rate = Column(Numeric(10, 2), nullable=False, default=0)
    pincode = Column(String(20), nullable=False, default="")
    address = Column(Text, nullable=True)

    # Set by moderation, never by the provider
    is_verified = Column(Boolean, nullable=False, default=False)

    # Maintained from reviews
    average_rating = Column(Numeric(3, 2), nullable=False, default=0)
    total_reviews = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("UserAccount", back_populates="provider_profile")
    services = relationship(
        "ProviderServiceLink",
        back_populates="provider",
        cascade="all, delete-orphan",
        order_by="ProviderServiceLink.created_at",
    )
    reviews = relationship("Review", back_populates="provider", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_provider_profiles_pincode_verified", "pincode", "is_verified"),
        CheckConstraint("experience_years >= 0", name="ck_provider_profiles_experience_years"),
        CheckConstraint("hourly_rate >= 0", name="ck_provider_profiles_hourly_rate"),
    )


class ProviderServiceLink(Base):
    __tablename__ = "provider_services"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    provider_id = Column(
        Uuid(as_uuid=False), ForeignKey("provider_profiles.id", ondelete="CASCADE"), nullable=False
    )
    category_id = Column(
        Uuid(as_uuid=False), ForeignKey("service_categories.id", ondelete="CASCADE"), nullable=False
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    provider = relationship("ProviderProfile", back_populates="services")
    category = relationship("ServiceCategory")

    __table_args__ = (
        UniqueConstraint("provider_id", "category_id", name="uq_provider_services_provider_category"),
        Index("ix_provider_services_provider_id", "provider_id"),
    )


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    provider_id = Column(
        Uuid(as_uuid=False), ForeignKey("provider_profiles.id", ondelete="CASCADE"), nullable=False
    )
    consumer_id = Column(
        Uuid(as_uuid=False), ForeignKey("user_accounts.id", ondelete="CASCADE"), nullable=False
    )
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    provider = relationship("ProviderProfile", back_populates="reviews")
    consumer = relationship("UserAccount", back_populates="reviews_written")

    __table_args__ = (
        UniqueConstraint("provider_id", "consumer_id", name="uq_reviews_provider_consumer"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),
        Index("ix_reviews_provider_created", "provider_id", "created_at"),
    )
