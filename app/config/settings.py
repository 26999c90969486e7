"""
Environment configuration for the HR workflow service.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Set, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class TokenSettings:
    """Signing material and lifetimes handed to the token service."""

    access_secret: str
    refresh_secret: str
    algorithm: str
    access_ttl: timedelta
    refresh_ttl: timedelta


@dataclass(frozen=True)
class StorageSettings:
    """Object store configuration handed to the storage adapters."""

    provider: str
    bucket: Optional[str]
    region: Optional[str]
    endpoint_url: Optional[str]
    access_key_id: Optional[str]
    secret_access_key: Optional[str]
    upload_dir: str
    url_expiry: timedelta


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @staticmethod
    def get_secret_key_default() -> str:
        """Generate a default secret key if not provided"""
        import secrets
        return secrets.token_urlsafe(32)

    # Application configuration
    APP_NAME: str = "HR Workflow API"
    API_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: List[str] = Field(default=["http://localhost:3000"])

    # Database configuration
    DATABASE_URL: str = "sqlite:///./hr.db"
    DATABASE_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_POOL_OVERFLOW: int = 5

    # Security configuration
    JWT_ACCESS_SECRET: str = Field(default_factory=lambda: Settings.get_secret_key_default())
    JWT_REFRESH_SECRET: str = Field(default_factory=lambda: Settings.get_secret_key_default())
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    PASSWORD_BCRYPT_ROUNDS: int = 12

    # File storage
    STORAGE_PROVIDER: str = "local"
    S3_BUCKET: Optional[str] = None
    S3_REGION: Optional[str] = None
    S3_ENDPOINT_URL: Optional[str] = None
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024
    ALLOWED_UPLOAD_MIME_TYPES: Set[str] = Field(
        default={"application/pdf", "image/jpeg", "image/png"}
    )
    FILE_URL_EXPIRE_MINUTES: int = 10

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "logs"

    # Validators
    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS_ORIGINS from string to list"""
        if isinstance(v, str):
            # Handle JSON string format from .env
            if v.startswith('[') and v.endswith(']'):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator('ALLOWED_UPLOAD_MIME_TYPES', mode='before')
    @classmethod
    def parse_mime_types(cls, v: Union[str, Set[str], List[str]]) -> Set[str]:
        if isinstance(v, str):
            return {item.strip() for item in v.split(",") if item.strip()}
        return set(v)

    @field_validator('STORAGE_PROVIDER')
    @classmethod
    def validate_storage_provider(cls, v: str) -> str:
        v = v.lower()
        if v not in {"s3", "local"}:
            raise ValueError("STORAGE_PROVIDER must be 's3' or 'local'")
        return v

    def get_database_url(self) -> str:
        return self.DATABASE_URL

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"

    @property
    def token_settings(self) -> TokenSettings:
        return TokenSettings(
            access_secret=self.JWT_ACCESS_SECRET,
            refresh_secret=self.JWT_REFRESH_SECRET,
            algorithm=self.JWT_ALGORITHM,
            access_ttl=timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=self.REFRESH_TOKEN_EXPIRE_DAYS),
        )

    @property
    def storage_settings(self) -> StorageSettings:
        return StorageSettings(
            provider=self.STORAGE_PROVIDER,
            bucket=self.S3_BUCKET,
            region=self.S3_REGION,
            endpoint_url=self.S3_ENDPOINT_URL,
            access_key_id=self.AWS_ACCESS_KEY_ID,
            secret_access_key=self.AWS_SECRET_ACCESS_KEY,
            upload_dir=self.UPLOAD_DIR,
            url_expiry=timedelta(minutes=self.FILE_URL_EXPIRE_MINUTES),
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
