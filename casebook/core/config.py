"""
Configuration helpers for the casebook backend.

Settings are read once from environment variables so that routers, services
and scripts never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"
DEFAULT_STORAGE_KEY = "designCases"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_dir: Path
    storage_key: str
    database_url: str
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _str(name: str, default: str) -> str:
        value = (os.getenv(name) or "").strip()
        return value or default

    return Settings(
        app_env=_str("APP_ENV", "dev").lower(),
        data_dir=Path(_str("CASEBOOK_DATA_DIR", str(DEFAULT_DATA_DIR))),
        storage_key=_str("CASEBOOK_STORAGE_KEY", DEFAULT_STORAGE_KEY),
        database_url=_str("DATABASE_URL", ""),
        log_level=_str("LOG_LEVEL", "INFO").upper(),
    )
