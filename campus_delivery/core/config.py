"""Application configuration."""

from decimal import Decimal
from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Campus Delivery API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    log_level: str = getenv("LOG_LEVEL", "INFO")
    database_url: str = getenv("DATABASE_URL", "sqlite:///./campus_delivery.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    admin_user: str = getenv("ADMIN_USER", "")
    admin_pass: str = getenv("ADMIN_PASS", "")
    app_timezone: str = getenv("APP_TIMEZONE", "Asia/Karachi")
    routing_base_url: str = getenv("ROUTING_BASE_URL", "https://router.project-osrm.org")
    routing_timeout_seconds: float = float(getenv("ROUTING_TIMEOUT_SECONDS", "5"))
    default_base_delivery_fee: Decimal = Decimal(getenv("DEFAULT_BASE_DELIVERY_FEE", "75"))
    default_delivery_fee_per_km: Decimal = Decimal(getenv("DEFAULT_DELIVERY_FEE_PER_KM", "25"))
    default_max_owned_restaurants: int = int(getenv("DEFAULT_MAX_OWNED_RESTAURANTS", "2"))
    cache_ttl_seconds: int = int(getenv("CACHE_TTL_SECONDS", "600"))
    smtp_host: str = getenv("SMTP_HOST", "")
    smtp_port: int = int(getenv("SMTP_PORT", "587"))
    smtp_username: str = getenv("SMTP_USERNAME", "")
    smtp_password: str = getenv("SMTP_PASSWORD", "")
    smtp_from: str = getenv("SMTP_FROM", "no-reply@campus-delivery.local")
    cloudinary_cloud_name: str = getenv("CLOUDINARY_CLOUD_NAME", "")
    cloudinary_api_key: str = getenv("CLOUDINARY_API_KEY", "")
    cloudinary_api_secret: str = getenv("CLOUDINARY_API_SECRET", "")


settings: Settings = Settings()
