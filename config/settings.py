"""
Application settings and configuration management.
Loads from environment variables with sensible defaults.

Settings are resolved once by the entry points and passed explicitly
into the provider clients and forwarder.
"""
from functools import lru_cache
from typing import Literal, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False
    }

    # Football-Data.org
    football_data_api_key: str = Field(default="", repr=False, description="Football-Data.org API key")
    football_data_base_url: str = Field(default="https://api.football-data.org/v4")

    # NFL API Data (RapidAPI)
    nfl_api_key: str = Field(default="", repr=False, description="RapidAPI key for the NFL API")
    nfl_api_host: str = Field(default="nfl-api-data.p.rapidapi.com")
    nfl_base_url: Optional[str] = Field(default=None, description="Defaults to https://<nfl_api_host>")

    # Ingestion service
    ingestion_url: str = Field(default="http://localhost:8080/ingest")
    ingest_host: str = Field(default="0.0.0.0")
    ingest_port: int = Field(default=8080)

    # HTTP
    request_timeout: float = Field(default=10.0, description="Per-request client timeout in seconds")

    # Behaviour when forwarding a fetched batch fails ("exit" or "log").
    # Unset means the provider's default policy.
    forward_failure_policy: Optional[Literal["exit", "log"]] = Field(default=None)

    # Application Settings
    log_level: str = Field(default="INFO")

    def require_football_data_api_key(self) -> str:
        if not self.football_data_api_key:
            raise RuntimeError(
                "FOOTBALL_DATA_API_KEY is not set. Set it in the environment or .env file."
            )
        return self.football_data_api_key

    def require_nfl_api_key(self) -> str:
        if not self.nfl_api_key:
            raise RuntimeError("NFL_API_KEY is not set. Set it in the environment or .env file.")
        return self.nfl_api_key


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
