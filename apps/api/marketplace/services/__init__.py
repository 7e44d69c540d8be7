from .auth import auth_service
from .catalog import catalog_service
from .provider_profile import provider_profile_service
from .review import review_service
from .search import search_service

__all__ = [
    "auth_service",
    "catalog_service",
    "provider_profile_service",
    "review_service",
    "search_service",
]
