"""Configuration management for dynamo-store."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "dynamo-store"
    max_workers: int = 8

    model_config = {
        "env_prefix": "DYNAMO_STORE_",
        "case_sensitive": False,
    }


settings = Settings()
