"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "jobboard_user"
    postgres_password: str = "password"
    postgres_db: str = "jobboard_db"

    # Full URL override (e.g. sqlite:// for tests)
    database_url: str = ""

    # Blob storage: "local" or "s3"
    storage_backend: str = "local"
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_size_mb: int = 5

    # S3
    s3_bucket_name: str = ""
    aws_region: str = "us-east-1"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""

    # Password hashing
    bcrypt_rounds: int = 12

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sqlalchemy_url(self) -> str:
        return self.database_url or self.postgres_url

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
