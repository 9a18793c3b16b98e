"""
Configuration Management
Environment-based settings for the database pool, hashing and logging
"""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App config
    app_name: str = "Membership Service"
    version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # Database - DATABASE_URL wins over the individual parts
    database_url: Optional[str] = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "membership"
    db_service_user: str = "membership_service"
    db_service_password: str = "membership_service_secure_pass_change_me"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_command_timeout: float = 30.0
    db_create_schema: bool = True

    # Password hashing work factor
    bcrypt_rounds: int = 10

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"
    logging_config_path: Optional[str] = None
    log_buffer_size: int = 100

    # CORS
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v):
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        v = v.lower()
        if v not in ("console", "json"):
            raise ValueError("LOG_FORMAT must be 'console' or 'json'")
        return v

    @field_validator("log_buffer_size")
    @classmethod
    def validate_log_buffer_size(cls, v):
        if v < 1:
            raise ValueError("LOG_BUFFER_SIZE must be at least 1")
        return v

    @property
    def dsn(self) -> str:
        """Build PostgreSQL connection string"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.db_service_user}:{self.db_service_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
