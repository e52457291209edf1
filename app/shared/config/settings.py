# 📄 File: app/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads all settings from environment variables
# and provides them to the rest of the GreenMate app in an organized way.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for all application configuration parameters.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - typing for type hints
#
# 🔄 Connected Modules / Calls From:
# - app.main (application factory and lifespan)
# - Upload service (size limits, image defaults)
# - Weather provider client (API key, base URL, timeout)
# - Object storage backends, rate limiter factory, logging setup

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="GreenMate Care API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="Plant photo uploads and weather-driven care recommendations",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=False, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log output format (json or text)")
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    RELOAD: bool = Field(default=False, description="Auto-reload on changes")

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="CORS allowed origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="CORS allow credentials")

    # =========================================================================
    # WEATHER API
    # =========================================================================

    OPENWEATHER_API_KEY: Optional[str] = Field(None, description="OpenWeather API key")
    OPENWEATHER_API_URL: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="OpenWeather API URL"
    )
    WEATHER_TIMEOUT_SECONDS: int = Field(default=10, description="Weather API request timeout")

    # =========================================================================
    # UPLOADS & IMAGE PROCESSING
    # =========================================================================

    UPLOAD_MAX_FILE_SIZE: int = Field(default=10485760, description="Max upload size (10MB)")
    UPLOAD_MAX_FILES: int = Field(default=5, description="Max files per upload request")

    IMAGE_MAX_WIDTH: int = Field(default=1200, description="Max stored image width")
    IMAGE_MAX_HEIGHT: int = Field(default=1200, description="Max stored image height")
    IMAGE_QUALITY: int = Field(default=85, ge=1, le=100, description="Image compression quality")
    IMAGE_OUTPUT_FORMAT: str = Field(default="jpeg", description="Stored image format")
    THUMBNAIL_SIZE: int = Field(default=300, description="Thumbnail edge in pixels")

    # =========================================================================
    # OBJECT STORAGE
    # =========================================================================

    STORAGE_BACKEND: str = Field(default="local", description="Object storage backend")
    STORAGE_LOCAL_ROOT: str = Field(default="./storage", description="Local storage directory")
    STORAGE_PUBLIC_BASE_URL: str = Field(
        default="http://localhost:8000/static",
        description="Public base URL for locally stored files"
    )

    SUPABASE_URL: Optional[str] = Field(None, description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, description="Supabase service role key")
    SUPABASE_STORAGE_BUCKET: str = Field(
        default="plant-photos",
        description="Supabase storage bucket"
    )

    # =========================================================================
    # RATE LIMITING
    # =========================================================================

    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable request rate limiting")
    # redis:// URIs are opened by slowapi through the optional "redis" extra
    RATE_LIMIT_STORAGE_URI: str = Field(
        default="memory://",
        description="Rate limit storage (memory:// or redis://host:port/db)"
    )
    UPLOAD_RATE_LIMIT: str = Field(default="20/hour", description="Upload rate limit")
    WEATHER_RATE_LIMIT: str = Field(default="100/15minutes", description="Weather rate limit")

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed_formats = ["json", "text"]
        if v.lower() not in allowed_formats:
            raise ValueError(f"Log format must be one of {allowed_formats}")
        return v.lower()

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Validate object storage backend."""
        allowed_backends = ["local", "supabase"]
        if v.lower() not in allowed_backends:
            raise ValueError(f"Storage backend must be one of {allowed_backends}")
        return v.lower()

    @field_validator("IMAGE_OUTPUT_FORMAT")
    @classmethod
    def validate_image_format(cls, v: str) -> str:
        allowed_formats = ["jpeg", "png", "webp"]
        if v.lower() not in allowed_formats:
            raise ValueError(f"Image output format must be one of {allowed_formats}")
        return v.lower()

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        """Validate CORS origins format."""
        origins = [origin.strip() for origin in v.split(",")]
        for origin in origins:
            if not origin.startswith(("http://", "https://", "*")):
                raise ValueError(f"Invalid CORS origin format: {origin}")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.ENVIRONMENT == "test"

    @property
    def weather_enabled(self) -> bool:
        """Weather-based care needs an OpenWeather key."""
        return bool(self.OPENWEATHER_API_KEY)

    def get_image_processing_defaults(self) -> dict:
        """Get default options for image normalization."""
        return {
            "max_width": self.IMAGE_MAX_WIDTH,
            "max_height": self.IMAGE_MAX_HEIGHT,
            "quality": self.IMAGE_QUALITY,
            "format": self.IMAGE_OUTPUT_FORMAT,
        }


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
