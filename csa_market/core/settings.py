from functools import lru_cache
from pathlib import Path

from pydantic import PostgresDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database - PostgreSQL in production, SQLite for development and tests
    database_url: PostgresDsn | str = "sqlite:///./csa_market.db"
    database_pool_size: int = 20
    database_max_overflow: int = 40

    # Application
    app_name: str = "CSA Marketplace"
    debug: bool = False
    log_level: str = "INFO"
    logs_dir: Path = Path("logs")
    cors_origins: list[str] = ["*"]

    # Farm listing
    listing_default_limit: int = 20
    listing_max_limit: int = 50
    search_max_length: int = 100

    # Identity provider tokens
    jwt_secret_key: str = "dev-only-secret-change-me-in-production-0000"
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = None
    jwt_issuer: str | None = None
    access_token_expire_minutes: int = 60

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v):
        if not v:
            raise ValueError("DATABASE_URL must be set")
        return v

    @property
    def is_sqlite(self) -> bool:
        return str(self.database_url).startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
