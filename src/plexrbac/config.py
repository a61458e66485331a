from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

TraceCaptureMode = Literal["auto", "native", "fallback", "none"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Pydantic Settings reads env vars matching field names (case-insensitive),
    plus a .env file in development.
    """

    app_name: str = "PlexRBAC API"
    app_version: str = "0.0.1"
    environment: str = "development"
    host: str = "127.0.0.1"
    port: int = 9355

    # Format: <dialect>+<driver>://user:password@host:port/database
    # - sqlite+aiosqlite for local development and tests
    # - postgresql+asyncpg for deployments
    database_url: str = "sqlite+aiosqlite:///./plexrbac.db"

    # Connection pool settings
    db_pool_size: int = 5  # Number of persistent connections to keep open
    db_max_overflow: int = 10  # Extra connections allowed beyond pool_size under load
    db_pool_timeout: int = 30  # Seconds to wait for available connection before error
    db_pool_recycle: int = 3600  # Recreate connections older than this (seconds)
    db_pool_pre_ping: bool = True  # Test connection with SELECT 1 before using
    db_echo: bool = False  # Log all SQL statements (True for debugging)
    db_statement_timeout: int = 30  # Max seconds for a query before it's killed

    # How PersistenceError and friends record their stack:
    # auto picks the interpreter's frame facility when present, else the fallback.
    trace_capture: TraceCaptureMode = "auto"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process settings (overridable in tests)."""
    return settings
