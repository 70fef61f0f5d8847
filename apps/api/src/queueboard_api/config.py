"""Configuration for queueboard API."""

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from queueboard_api.domain.enums import EngineVersion
from queueboard_api.domain.models import ConnectionProfile

# Get project root directory (4 levels up from this file)
_PROJECT_ROOT = Path(__file__).parent.parent.parent.parent.parent

# Load .env file into os.environ
load_dotenv(_PROJECT_ROOT / ".env")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        env_prefix="QUEUEBOARD_",
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Redis store shared by every queue
    redis_host: str = Field(default="localhost")
    redis_port: int = Field(default=6379)
    redis_db: int = Field(default=0)
    redis_password: str | None = Field(default=None)
    redis_use_tls: bool = Field(default=False)
    redis_connect_timeout_seconds: float = Field(
        default=5.0, description="Socket connect timeout for every Redis client"
    )

    # Queue engine
    bull_prefix: str = Field(
        default="bull", description="Key namespace prefix that scopes the queue keys"
    )
    bull_version: str = Field(
        default="BULLMQ", description="Queue engine family: 'BULL' (legacy) or 'BULLMQ'"
    )
    scan_count: int = Field(default=1000, description="COUNT hint for key-space SCAN")

    # Control surface
    home_page: str = Field(default="/", description="Base path the dashboard is mounted at")
    proxy_path: str = Field(default="", description="Public URL prefix when behind a proxy")

    # Auth
    auth_enabled: bool = Field(default=False, description="Require HTTP Basic credentials")
    auth_username: str = Field(default="bull")
    auth_password: str = Field(default="board")

    # Bulk reset
    reset_max_concurrency: int = Field(
        default=1, ge=1, description="Queues cleared in parallel by one bulk reset"
    )

    # Dashboard
    counts_max_concurrency: int = Field(
        default=8, ge=1, description="Queues whose job counts are read in parallel per request"
    )

    def engine_version(self) -> EngineVersion:
        """Parse the configured queue engine family."""
        return EngineVersion.parse(self.bull_version)

    def connection_profile(self) -> ConnectionProfile:
        """Build the shared, read-only connection profile."""
        return ConnectionProfile(
            host=self.redis_host,
            port=self.redis_port,
            db=self.redis_db,
            password=self.redis_password or None,
            tls=self.redis_use_tls,
            prefix=self.bull_prefix or None,
            connect_timeout_seconds=self.redis_connect_timeout_seconds,
        )

    @property
    def base_path(self) -> str:
        """Home page without a trailing slash ('' for the root)."""
        return self.home_page.rstrip("/")


settings = Settings()
