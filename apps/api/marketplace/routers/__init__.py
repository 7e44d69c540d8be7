from .auth import router as auth_router
from .me import router as me_router
from .catalog import router as catalog_router
from .search import router as search_router
from .providers import router as providers_router

ROUTERS = (auth_router, me_router, catalog_router, search_router, providers_router)

__all__ = [
    "ROUTERS",
    "auth_router",
    "me_router",
    "catalog_router",
    "search_router",
    "providers_router",
]
