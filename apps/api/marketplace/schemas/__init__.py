"""Pydantic request/response schemas."""

from marketplace.schemas.auth import (
    SignupRequest,
    LoginRequest,
    TokenResponse,
    LogoutResponse,
    AccountResponse,
    MeResponse,
)
from marketplace.schemas.catalog import ServiceCategoryResponse
from marketplace.schemas.review import ReviewCreate, ReviewResponse
from marketplace.schemas.provider import (
    ProviderProfileUpdate,
    ProviderOwnerResponse,
    ProviderServiceResponse,
    ProviderProfileResponse,
    ProviderDashboardResponse,
)
from marketplace.schemas.search import SearchRequest

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "TokenResponse",
    "LogoutResponse",
    "AccountResponse",
    "MeResponse",
    "ServiceCategoryResponse",
    "ReviewCreate",
    "ReviewResponse",
    "ProviderProfileUpdate",
    "ProviderOwnerResponse",
    "ProviderServiceResponse",
    "ProviderProfileResponse",
    "ProviderDashboardResponse",
    "SearchRequest",
]
