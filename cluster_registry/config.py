"""Centralised settings for the cluster registry.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

The location of the database file is *not* overridable from the environment:
it always lives under the invoking user's home directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Storage location
    # ------------------------------------------------------------------
    home_dir: Path = field(default_factory=Path.home)

    @property
    def db_dir(self) -> Path:
        """Directory holding the cluster database file."""
        return self.home_dir / ".kube" / ".devtron"

    @property
    def db_path(self) -> Path:
        """Absolute path to the SQLite database file."""
        return self.db_dir / "cluster.db"

    @property
    def schema_path(self) -> Path:
        """Absolute path to the schema SQL file bundled with the package."""
        return Path(__file__).resolve().parent / "db" / "schema.sql"

    # ------------------------------------------------------------------
    # Store behaviour
    # ------------------------------------------------------------------
    cluster_store_backend: str = field(
        default_factory=lambda: os.environ.get("CLUSTER_STORE_BACKEND", "file")
    )
    busy_timeout: float = field(
        default_factory=lambda: float(os.environ.get("CLUSTER_DB_BUSY_TIMEOUT", "5.0"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("CLUSTER_REGISTRY_LOG_LEVEL", "INFO")
    )

    def ensure_db_dir(self) -> None:
        """Create the database directory if it does not exist."""
        self.db_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton, import this everywhere:
#   from cluster_registry.config import settings
settings = Settings()
