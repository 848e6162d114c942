"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  A ``.env`` file in the working directory is
loaded first (via ``python-dotenv``) so local development does not
require exporting variables by hand.  Defaults are provided for all
fields.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()

# Repository root: product_catalog_api/app/core/config.py -> parents[3]
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Product Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # Runtime mode.  ``NODE_ENV`` is honoured as a fallback so existing
    # deployment manifests keep working.
    environment: str = os.getenv("APP_ENV", os.getenv("NODE_ENV", "production"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Location of the JSON document holding all products.  Relative
    # paths are resolved against the project root by ``data_path``.
    data_file: str = os.getenv("DATA_FILE", os.path.join("data", "db.json"))

    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*"))
    )

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def data_path(self) -> Path:
        """Absolute path of the data file."""
        path = Path(self.data_file)
        if path.is_absolute():
            return path
        return (PROJECT_ROOT / path).resolve()


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
