"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Supabase
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str

    # Session cookies
    ACCESS_COOKIE_NAME: str = "sb-access-token"
    REFRESH_COOKIE_NAME: str = "sb-refresh-token"
    ACCESS_COOKIE_MAX_AGE: int = 60 * 60 * 24 * 7
    REFRESH_COOKIE_MAX_AGE: int = 60 * 60 * 24 * 30
    COOKIE_SECURE: bool = False
    AUTH_TIMEOUT_SECONDS: float = 10.0

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Catalog
    DEFAULT_TVA_PCT: float = 20.0

    LOG_LEVEL: str = "INFO"

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache()
def get_settings() -> Settings:
    return Settings()
