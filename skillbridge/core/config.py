"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL (identity store)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "skillbridge_user"
    postgres_password: str = "password"
    postgres_db: str = "skillbridge_db"

    # Full SQLAlchemy URL, overrides the postgres_* fields when set
    database_url: str = ""

    # MongoDB (document store)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "skillbridge_docs"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # EmailJS (notification sender)
    emailjs_api_url: str = "https://api.emailjs.com/api/v1.0/email/send"
    emailjs_service_id: str = ""
    emailjs_public_key: str = ""
    emailjs_private_key: str = ""
    emailjs_welcome_template: str = "template_welcome"
    emailjs_status_template: str = "template_status"
    email_timeout_seconds: float = 10.0
    platform_name: str = "SkillBridge"
    app_base_url: str = "http://localhost:5173"

    # Matching
    recommendation_top_n: int = 3

    # App
    debug: bool = True
    log_level: str = "INFO"
    log_file: str = ""

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sql_url(self) -> str:
        return self.database_url or self.postgres_url

    @property
    def email_enabled(self) -> bool:
        return bool(self.emailjs_service_id and self.emailjs_public_key)

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
