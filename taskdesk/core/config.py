"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    APP_NAME: str = "TaskDesk"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # API
    API_PREFIX: str = "/api"
    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:4200",
        "http://127.0.0.1:4200",
    ]

    # Database
    DATABASE_URL: str = "sqlite:///./taskdesk.db"

    # JWT
    JWT_SECRET_KEY: str = "jwt-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours

    # Tenant identification
    TENANT_HEADER: str = "X-Tenant-ID"
    TENANT_HEADER_ALT: str = "X-Tenant"
    TENANT_QUERY_PARAM: str = "tenant"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 15
    MAX_PAGE_SIZE: int = 100

    # Subscription given to freshly registered tenants
    DEFAULT_PLAN: str = "basic"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
