import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_DEFAULT_CATALOG_FILES = {
    "cpu": "cpu.json",
    "ram": "ram.json",
    "motherboard": "motherboard.json",
    "storage": "storage.json",
    "caddy": "caddy.json",
    "nic": "nic.json",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Hardware Inventory API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = f"sqlite:///{_BACKEND_DIR / 'data' / 'inventory.db'}"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Catalog documents (relative paths resolve against the backend directory)
    catalog_dir: str = str(_BACKEND_DIR / "data" / "catalogs")
    catalog_files: dict[str, str] = dict(_DEFAULT_CATALOG_FILES)

    # Inventory listing
    default_page_size: int = 50
    max_page_size: int = 1000

    # Opt-in status lifecycle graph; permissive when False
    enforce_status_transitions: bool = False

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine: SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_catalog: str = "INFO"          # catalog loading and resolution

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Fill in catalog file names missing from an override and anchor relative dirs."""
        merged = {**_DEFAULT_CATALOG_FILES, **self.catalog_files}
        object.__setattr__(self, "catalog_files", merged)

        catalog_path = Path(self.catalog_dir)
        if not catalog_path.is_absolute():
            catalog_path = _BACKEND_DIR / catalog_path
            object.__setattr__(self, "catalog_dir", str(catalog_path))
        if not catalog_path.exists():
            _config_logger.debug("Catalog directory %s does not exist yet", self.catalog_dir)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance: reads .env once."""
    return Settings()
