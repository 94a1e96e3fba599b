"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "TravelBuddy"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./travelbuddy.db"
    DB_ECHO: bool = False

    # JWT
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:5173"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Matching
    MATCH_DEFAULT_LIMIT: int = 10
    MATCH_MAX_LIMIT: int = 50

    # SSLCommerz payment gateway
    SSL_STORE_ID: str = ""
    SSL_STORE_PASS: str = ""
    SSL_PAYMENT_API: str = "https://sandbox.sslcommerz.com/gwprocess/v4/api.php"
    SSL_VALIDATION_API: str = "https://sandbox.sslcommerz.com/validator/api/validationserverAPI.php"
    SSL_SUCCESS_BACKEND_URL: str = "http://localhost:8000/api/payments/ssl/success"
    SSL_FAIL_BACKEND_URL: str = "http://localhost:8000/api/payments/ssl/fail"
    SSL_CANCEL_BACKEND_URL: str = "http://localhost:8000/api/payments/ssl/cancel"
    SSL_IPN_URL: str = "http://localhost:8000/api/payments/ssl/ipn"
    PAYMENT_TIMEOUT_SECONDS: float = 15.0

    # Premium pricing (in PAYMENT_CURRENCY)
    PAYMENT_CURRENCY: str = "BDT"
    SUBSCRIPTION_MONTHLY_PRICE: int = 499
    SUBSCRIPTION_YEARLY_PRICE: int = 4999
    VERIFIED_BADGE_PRICE: int = 299

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
