"""
Configuration settings for GreenGrocer
"""
from pydantic_settings import BaseSettings
from typing import List, Literal, Optional


class Settings(BaseSettings):
    """Application settings"""
    
    # Storage
    STORAGE_BACKEND: Literal["database", "memory"] = "database"
    DATABASE_URL: str = "sqlite:///./greengrocer.db"
    SEED_DEFAULT_CATEGORIES: bool = True
    
    # Sessions
    SESSION_SECRET: str = "CHANGE_ME_IN_PRODUCTION"
    SESSION_COOKIE: str = "greengrocer.sid"
    SESSION_MAX_AGE: int = 7 * 24 * 60 * 60
    
    # Admin bootstrap (skipped when either is empty)
    ADMIN_USERNAME: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    
    # Service
    SERVICE_NAME: str = "greengrocer"
    SERVICE_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    
    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5000",
        "http://localhost:5173"
    ]
    
    # Business rules
    TAX_RATE: float = 0.10
    LOW_STOCK_THRESHOLD: float = 10
    DEFAULT_PRODUCT_IMAGE: str = "https://example.com/default-product-image.jpg"
    RECENT_ORDERS_LIMIT: int = 5
    ENFORCE_STATUS_TRANSITIONS: bool = False
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
