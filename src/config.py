import os
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.liveness import LivenessPolicy


def get_env_file() -> str:
    """Determine which .env file to load based on APP_ENV."""
    app_env = os.getenv("APP_ENV", "").lower()
    if app_env == "local":
        return ".env.local"
    elif app_env == "prod":
        return ".env.prod"
    return ".env"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=get_env_file(), extra="ignore")

    # Event log store (market data node database)
    database_url: Optional[str] = None  # Overrides the postgres_* fields when set
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "vega"
    postgres_password: str = "vega"
    postgres_db: str = "vega"
    query_timeout_seconds: Optional[float] = None

    # Export
    bucket_minutes: int = 1
    liveness_policy: LivenessPolicy = LivenessPolicy.STRICT
    output_dir: str = "."

    log_level: str = "INFO"

    @field_validator("bucket_minutes")
    @classmethod
    def validate_bucket_minutes(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"bucket_minutes must be at least 1, got {v}")
        return v

    @property
    def postgres_dsn(self) -> str:
        if self.database_url:
            return self.database_url
        return f"postgresql://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
