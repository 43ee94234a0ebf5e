"""
Configuration management using Pydantic Settings.
Reads from environment variables.
"""

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    model_config = ConfigDict(env_file=".env", case_sensitive=False)

    # Slack Configuration
    slack_webhook_url: str | None = Field(default=None, alias="SLACK_WEBHOOK_URL")
    notifier_timeout_seconds: float = Field(default=5.0, alias="NOTIFIER_TIMEOUT_SECONDS")

    # Google Sheet Configuration
    sheet_id: str = Field(default="", alias="SHEET_ID")
    sheet_name: str = Field(default="Leaves_request", alias="SHEET_NAME")
    google_service_account_file: str = Field(
        default="service_account.json", alias="GOOGLE_SERVICE_ACCOUNT_FILE"
    )

    # Store write retries
    store_retry_attempts: int = Field(default=3, alias="STORE_RETRY_ATTEMPTS")
    store_retry_base_delay: float = Field(default=1.0, alias="STORE_RETRY_BASE_DELAY")

    # Status lookups
    status_cache_ttl_seconds: int = Field(default=300, alias="STATUS_CACHE_TTL_SECONDS")

    # Timezone used for "today" and request timestamps (None = system local)
    leave_timezone: str | None = Field(default=None, alias="LEAVE_TIMEZONE")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


# Global settings instance
settings = Settings()
