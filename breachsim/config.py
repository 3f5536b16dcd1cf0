"""Breachsim settings.

Values come from environment variables or a ``.env`` file through
pydantic-settings; names match case-insensitively and unknown variables are
ignored. ``get_settings()`` hands out one cached instance per process.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings.

    Attributes:
        postgres_host: Inventory database host.
        postgres_port: Inventory database port.
        postgres_db: Inventory database name.
        postgres_user: Inventory database role.
        postgres_password: Password for ``postgres_user``.
        api_host: Address uvicorn binds to.
        api_port: Port uvicorn binds to.
        api_debug: Echo SQL statements.
        api_log_level: Root log level name.
        breach_prune_threshold: A breach branch survives only while its
            cumulative probability stays strictly above this value.
        breach_max_iterations: Maximum queue pops per breach search.
        breach_top_k: How many ranked breach paths a simulation keeps.
        ttp_library_path: YAML catalogue to load instead of the bundled
            enterprise TTP library.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Inventory database
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "breachsim"
    postgres_user: str = "breachsim"
    postgres_password: str = "changeme"

    # HTTP service
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_log_level: str = "info"

    # Breach search
    breach_prune_threshold: float = 0.1
    breach_max_iterations: int = 5000
    breach_top_k: int = 3

    # Campaign builder
    ttp_library_path: Path | None = None

    @property
    def database_url(self) -> str:
        """asyncpg URL for the inventory database."""
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings instance."""
    return Settings()
