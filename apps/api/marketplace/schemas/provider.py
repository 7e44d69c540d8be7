from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, field_serializer

from marketplace.schemas.catalog import ServiceCategoryResponse
from marketplace.schemas.review import ReviewResponse


def _serialize_decimal(v: Optional[Decimal]) -> Optional[float]:
    """Serialize Decimal for JSON responses."""
    return float(v) if v is not None else None


class ProviderProfileUpdate(BaseModel):
    """Editable provider attributes plus the full set of offered service categories.

    Verification and rating fields are never set by the provider.
    """
    bio: Optional[str] = None
    experience_years: int = 0
    hourly_rate: Decimal = Decimal("0")
    pincode: str = ""
    address: Optional[str] = None
    service_category_ids: list[str] = []


class ProviderOwnerResponse(BaseModel):
    full_name: str
    phone: Optional[str] = None


class ProviderServiceResponse(BaseModel):
    id: str
    category_id: str
    category: Optional[ServiceCategoryResponse] = None


class ProviderProfileResponse(BaseModel):
    id: str
    user_id: str
    bio: Optional[str] = None
    experience_years: int
    hourly_rate: Decimal
    pincode: str
    address: Optional[str] = None
    is_verified: bool
    average_rating: Decimal
    total_reviews: int
    owner: Optional[ProviderOwnerResponse] = None
    services: list[ProviderServiceResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("hourly_rate", "average_rating")
    def _ser_decimal(self, v: Optional[Decimal]) -> Optional[float]:
        return _serialize_decimal(v)


class ProviderDashboardResponse(BaseModel):
    profile: Optional[ProviderProfileResponse] = None  # None until the first save
    selected_category_ids: list[str] = []
    reviews: list[ReviewResponse] = []
