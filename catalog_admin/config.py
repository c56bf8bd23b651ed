"""
Configuration management for the product catalog admin
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Product Catalog Admin"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./catalog.db"

    # Listing
    PAGE_SIZE: int = 10
    SEARCH_CONFIG: str = "simple"  # text search configuration (language agnostic)

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # List view client
    API_BASE_URL: str = "http://localhost:8000/api"
    LIST_DEBOUNCE_MS: int = 300

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
