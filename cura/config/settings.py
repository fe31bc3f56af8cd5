from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and `.env`.
    """

    PROJECT_NAME: str = "CURA Department Operations"
    VERSION: str = "0.1.0"

    # Backend REST API
    API_BASE_URL: str = Field("https://localhost:5000/api", description="Base URL of the hospital REST backend")
    API_TIMEOUT: float = Field(30.0, description="Request timeout in seconds")
    API_VERIFY_SSL: bool = Field(True, description="Verify TLS certificates of the backend")

    # Payments
    PHARMACY_BRAND_NAME: str = Field("CURA Pharmacy", description="Merchant name shown on the checkout")
    RAZORPAY_KEY_ID: str | None = Field(None, description="Public Razorpay key used by the checkout widget")
    PAYMENT_CURRENCY: str = Field("INR", description="Currency code for gateway orders")

    # Authentication
    AUTH_USERNAME: str = Field("admin", description="Username accepted by the static credential verifier")
    AUTH_PASSWORD: str = Field("password123", description="Password accepted by the static credential verifier")

    # List layout
    VIEWPORT_HEADER_HEIGHT: int = Field(200, description="Header height used for page size computation")
    VIEWPORT_HEADER_HEIGHT_EXTENDED: int = Field(300, description="Header height on screens with info blocks")
    VIEWPORT_ROW_HEIGHT: int = Field(60, description="Height of a single table row")
    VIEWPORT_PAGINATION_HEIGHT: int = Field(80, description="Height of the pagination bar")
    MIN_ITEMS_PER_PAGE: int = Field(5, description="Lower bound for computed page size")

    # Inventory
    EXPIRY_WARNING_DAYS: int = Field(30, description="Days ahead considered 'expiring soon'")

    # UI state persistence
    STATE_FILE_PATH: str | None = Field(None, description="JSON file for persisted session and tab state")

    # Application
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    LOG_FORMAT: str = Field("colored", description="'colored', 'json' or 'plain'")
    LOG_FILE: str | None = Field(None, description="Optional file receiving JSON logs")
    DEBUG: bool = Field(False, description="Debug mode")
    ENVIRONMENT: str = Field("production", description="Execution environment")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("API_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("API_TIMEOUT must be greater than 0")
        return v

    @field_validator("VIEWPORT_ROW_HEIGHT", "MIN_ITEMS_PER_PAGE")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Layout values must be at least 1")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("colored", "json", "plain"):
            raise ValueError("LOG_FORMAT must be 'colored', 'json' or 'plain'")
        return v

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in ("development", "dev", "local", "test")


# Singleton
_settings_instance = None


def get_settings() -> Settings:
    """
    Return a cached settings instance so the environment is read once.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached instance (used by tests that patch the environment)."""
    global _settings_instance
    _settings_instance = None
