from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from apps/api so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    database_url: str = "postgresql://localhost/marketplace"
    sql_echo: bool = False

    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Rate limiting (per-user when authenticated, else per IP)
    search_rate_limit: str = "30/minute"
    review_rate_limit: str = "10/minute"
    auth_login_rate_limit: str = "10/minute"
    auth_signup_rate_limit: str = "5/minute"

    # Reviews shown on a provider's public card
    review_page_size: int = 10

    # CORS (comma-separated origins; * allows all)
    cors_origins: str = "*"

    @property
    def async_database_url(self) -> str:
        """database_url rewritten for the asyncpg driver (Heroku/Render style URLs included)."""
        url = self.database_url
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @property
    def cors_origins_list(self) -> list[str]:
        """Parsed CORS origins for middleware."""
        raw = self.cors_origins.strip()
        return ["*"] if not raw else [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
