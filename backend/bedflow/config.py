"""
Centralized application configuration.
Every tunable value lives here, read from the environment or a .env file.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Main system configuration."""

    # ============================================
    # APPLICATION
    # ============================================
    APP_TITLE: str = "Hospital Bed Management"
    APP_DESCRIPTION: str = "Real-time bed allocation and patient prioritization"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = "/api"

    # ============================================
    # CORS
    # ============================================
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["GET", "POST", "PATCH", "DELETE"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # ============================================
    # IDENTIFIERS
    # ============================================
    BED_ID_PREFIX: str = "BED"
    PATIENT_ID_PREFIX: str = "P"

    # ============================================
    # LOGGING
    # ============================================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global configuration instance
settings = Settings()
