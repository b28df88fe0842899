"""Application configuration loaded via pydantic settings."""

from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Strongly-typed application settings with environment overrides."""

    # Application
    APP_NAME: str = "Stripe Connect Reports"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Stripe
    STRIPE_PAGE_LIMIT: int = 100
    STRIPE_API_VERSION: Optional[str] = None
    STRIPE_MAX_NETWORK_RETRIES: int = 2

    # Reports
    DEFAULT_TIMEZONE: str = "UTC"
    REPORT_DEFAULT_PAGE_SIZE: int = 10
    REPORT_MAX_PAGE_SIZE: int = 100
    REPORT_MAX_WORKERS: int = 1
    REPORT_MAX_RANGE_DAYS: int = 1096  # 0 disables the limit

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = "./connect_reports/logs/app.log"
    LOG_TRACE_CALLS: bool = True

    class Config:
        """Configure environment file loading behavior."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
