"""Application configuration settings."""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database configuration
    database_url: str = Field(default="sqlite+aiosqlite:///./addresses.db", env="DATABASE_URL")
    database_echo: bool = Field(default=False, env="DATABASE_ECHO")
    database_pool_size: int = Field(default=5, env="DATABASE_POOL_SIZE")

    # API configuration
    api_host: str = Field(default="0.0.0.0", env="API_HOST")
    api_port: int = Field(default=8000, env="API_PORT")
    api_debug: bool = Field(default=False, env="API_DEBUG")

    # Authentication: comma-separated list of accepted bearer tokens
    api_tokens: str = Field(default="", env="API_TOKENS")

    # Logging configuration
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_format: str = Field(default="json", env="LOG_FORMAT")  # json or text

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def api_token_list(self) -> List[str]:
        """Accepted bearer tokens with blanks removed."""
        return [token.strip() for token in self.api_tokens.split(",") if token.strip()]


# Global settings instance
settings = Settings()
