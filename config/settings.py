# config/settings.py

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, validator
import os
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Geofenced Attendance"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")

    # CORS
    CORS_ORIGINS: str = ""

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if not self.CORS_ORIGINS:
            return ["*"] if self.DEBUG else []
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]

    # Database
    DATABASE_URL: str = "sqlite:///./attendance.db"
    DB_POOL_SIZE: int = Field(default=20, ge=5, le=100)
    DB_MAX_OVERFLOW: int = Field(default=30, ge=5, le=100)
    DB_POOL_RECYCLE: int = Field(default=3600, ge=300)
    DB_TIMEOUT_SECONDS: int = Field(default=30, ge=1, le=300)
    AUTO_CREATE_TABLES: bool = True

    # Security (tokens are issued by the identity provider)
    JWT_SECRET: str = Field(min_length=8)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, ge=1, le=1440)

    # Attendance sessions
    DEFAULT_SESSION_DURATION_MINUTES: int = Field(default=15, ge=1, le=1440)
    MAX_SESSION_DURATION_MINUTES: int = Field(default=1440, ge=1)
    ENFORCE_SESSION_ACTIVE: bool = False

    # Listing limits
    SESSION_LIST_LIMIT: int = Field(default=10, ge=1, le=500)
    RECORD_LIST_LIMIT: int = Field(default=100, ge=1, le=1000)
    HISTORY_LIST_LIMIT: int = Field(default=20, ge=1, le=500)

    # Monitoring
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Server
    PORT: Optional[int] = Field(default=8000, ge=1, le=65535)

    @validator('JWT_SECRET')
    def validate_secrets(cls, v):
        """Ensure secrets are strong enough"""
        if len(v) < 32:
            import warnings
            warnings.warn(f"JWT secret is only {len(v)} characters. Consider using at least 32 characters for production.", UserWarning)
        return v

    @validator('DATABASE_URL')
    def validate_database_url(cls, v):
        """Validate database URL format"""
        if not v.startswith(('postgresql://', 'postgresql+psycopg2://', 'sqlite://')):
            raise ValueError('Unsupported database URL format')
        return v

    @validator('CORS_ORIGINS')
    def validate_cors_origins(cls, v):
        """Validate CORS origins in production"""
        environment = os.getenv('ENVIRONMENT', 'development')
        if environment == 'production' and ('*' in v or not v):
            raise ValueError('Wildcard CORS origins not allowed in production')
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
