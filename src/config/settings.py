from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = True
    # Where browsers are sent after a successful action; JSON responses when empty
    frontend_url: str = ""
    cors_origins: list[str] = ["*"]

    ENVIRONMENT: str = "Production"

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/events.db"
    log_db: bool = False

    # Admin
    admin_pin: str = ""

    # Rate limiting
    rate_limit: str = "100 per 15 minutes"
    admin_rate_limit: str = "20 per 15 minutes"

    # Lightning payments (Strike)
    strike_api_key: str = ""
    strike_api_url: str = "https://api.strike.me/v1"
    price_api_url: str = "https://mempool.space/api/v1/prices"
    fiat_currency: str = "GBP"
    invoice_description: str = "Events App Payment"
    http_timeout_seconds: float = 10.0
    payment_ttl_minutes: int = 60

    # Email (SMTP)
    smtp_host: str = "localhost"
    smtp_port: int = 1025
    smtp_user: str = ""
    smtp_password: str = ""
    emails_from: str = "events@example.com"
    admin_email_receivers: list[str] = []

    # Email (Resend) - if set, use Resend API instead of SMTP
    resend_api_key: str = ""

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0

    RUN_MIGRATIONS_ON_STARTUP: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def redirect_url(self, **params: str | int) -> str | None:
        """Frontend URL with query flags appended, or None when no frontend is configured."""
        if not self.frontend_url:
            return None
        query = "&".join(f"{key.replace('_', '-')}={value}" for key, value in params.items())
        return f"{self.frontend_url.rstrip('/')}/?{query}"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
