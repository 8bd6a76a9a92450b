from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str

    REDIS_URL: Optional[str] = None

    SECRET_KEY: str = "change-me"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours

    RATE_LIMIT: int = 100
    RATE_LIMIT_WINDOW: int = 600  # 10 minutes

    IDEMPOTENCY_TTL: int = 300  # 5 minutes

    CELERY_BROKER_URL: str = "redis://localhost:6379/1"
    CELERY_BACKEND: str = "redis://localhost:6379/2"
    LIFECYCLE_SWEEP_INTERVAL: int = 3600  # 1 hour

    CORS_ORIGINS: List[str] = ["http://localhost:5000"]

    API_TITLE: str = "Freight Brokerage API"
    API_DESCRIPTION: str = "Leads, quotes, orders, dispatches, invoices and follow-ups for a freight brokerage"
    API_VERSION: str = "1.0.0"
    COMPANY_NAME: str = "EverFlown Logistics"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
