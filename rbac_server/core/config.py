"""Application configuration from environment variables."""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "RBAC Server"
    DEBUG: bool = True
    CORS_ORIGINS: list[str] = [
        "http://localhost:4200",
        "http://localhost:3000",
    ]

    # Document store
    DOCUMENT_PATH: str = "data/db.json"
    AUTO_SEED: bool = False

    # Auth
    TOKEN_PREFIX: str = "mock-jwt-token"
    TOKEN_EXPIRY_MINUTES: int = 0  # 0 disables expiry
    STRICT_TOKEN_BINDING: bool = False

    # Hierarchy
    MANAGEMENT_ROLES: list[str] = ["Manager", "Admin"]
    SUPER_ADMIN_ROLE_NAME: str = "Super Admin"

    # Super Admin Seed
    SUPER_ADMIN_USERNAME: str = "superadmin"
    SUPER_ADMIN_PASSWORD: str = "changeme123"
    SUPER_ADMIN_EMAIL: Optional[str] = "superadmin@rbac.local"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
