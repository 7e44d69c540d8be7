"""Core configuration, auth, and shared infrastructure."""

from marketplace.core.config import Settings, get_settings
from marketplace.core.constants import (
    ROLE_CONSUMER,
    ROLE_PROVIDER,
    USER_ROLES,
    MIN_RATING,
    MAX_RATING,
)
from marketplace.core.auth import (
    verify_password,
    hash_password,
    create_access_token,
    decode_access_token,
)
from marketplace.core.limiter import limiter

__all__ = [
    "Settings",
    "get_settings",
    "ROLE_CONSUMER",
    "ROLE_PROVIDER",
    "USER_ROLES",
    "MIN_RATING",
    "MAX_RATING",
    "verify_password",
    "hash_password",
    "create_access_token",
    "decode_access_token",
    "limiter",
]
