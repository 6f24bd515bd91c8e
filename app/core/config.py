"""
Application configuration management using Pydantic Settings
Handles all environment variables and storefront settings
"""

from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache

class Settings(BaseSettings):
    """Main application settings"""

    # Application Settings
    APP_NAME: str = "QuickCart Storefront"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Remote record store (backend-as-a-service)
    REMOTE_STORE_URL: str = "https://api.apper.io/v1"
    REMOTE_STORE_PROJECT_ID: str = ""
    REMOTE_STORE_PUBLIC_KEY: str = ""
    REMOTE_STORE_TIMEOUT: float = 10.0

    # Table names (application fields carry the "_c" suffix)
    PRODUCTS_TABLE: str = "products_c"
    WISHLIST_TABLE: str = "wishlist_items_c"
    ORDERS_TABLE: str = "orders_c"

    # Local cart storage
    CART_STORAGE_KEY: str = "quickcart_cart"
    REDIS_URL: Optional[str] = "redis://localhost:6379"
    REDIS_DECODE_RESPONSES: bool = True
    REDIS_MAX_CONNECTIONS: int = 10

    # Catalog
    FEATURED_MIN_RATING: float = 4.7
    FEATURED_LIMIT: int = 6
    RELATED_LIMIT: int = 4

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = True

@lru_cache()
def get_settings() -> Settings:
    """
    Create cached settings instance
    This ensures settings are loaded only once
    """
    return Settings()

# Global settings instance
settings = get_settings()
