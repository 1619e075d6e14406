"""
Application configuration management using Pydantic Settings
Handles all environment variables and application settings
"""

from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache

class Settings(BaseSettings):
    """Main application settings"""

    # Application Settings
    APP_NAME: str = "Wishlist API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 4

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    CORS_ALLOW_CREDENTIALS: bool = True

    # Firebase Configuration
    FIREBASE_CREDENTIALS_JSON: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CHECK_REVOKED: bool = False

    # Document store
    STORE_BACKEND: str = "firestore"  # firestore | memory
    WISHLIST_USERS_COLLECTION: str = "users"
    WISHLIST_COLLECTION: str = "wishlist"
    WISHLIST_ATOMIC_TOGGLE: bool = False

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "100/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    # Peers whose X-Forwarded-For header is believed
    TRUSTED_PROXIES: List[str] = []

    # Monitoring
    PROMETHEUS_ENABLED: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def firebase_configured(self) -> bool:
        """Whether any Firebase credentials or project were supplied"""
        return bool(
            self.FIREBASE_CREDENTIALS_JSON
            or self.FIREBASE_CREDENTIALS_PATH
            or self.FIREBASE_PROJECT_ID
        )

@lru_cache()
def get_settings() -> Settings:
    """
    Create cached settings instance
    This ensures settings are loaded only once
    """
    return Settings()

# Global settings instance
settings = get_settings()
