"""Runtime settings, read from the environment.

Every variable is prefixed with ``STOREFRONT_`` and may also be placed in
a ``.env`` file in the working directory, e.g.::

    STOREFRONT_DATA_DIR=/var/lib/storefront
    STOREFRONT_SESSION_ID=alice
    STOREFRONT_LOG_LEVEL=INFO
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):

    data_dir: Path = _PROJECT_ROOT / "data"
    session_id: str = "default"
    log_level: str = "WARNING"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def orders_file(self) -> Path:
        return self.data_dir / "orders.json"

    @property
    def carts_file(self) -> Path:
        return self.data_dir / "carts.json"


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader; the environment is read once per process."""
    return Settings()
