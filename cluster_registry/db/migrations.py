"""Schema bootstrap for the cluster store.

``init_db(conn)`` is idempotent: safe to call on every process start.  It
only ever creates the table when it is absent; there are no incremental
migrations.
"""

from __future__ import annotations

import sqlite3

from cluster_registry.config import settings
from cluster_registry.errors import InitializationError
from cluster_registry.log import setup_logger

logger = setup_logger(__name__)

CLUSTER_TABLE = "cluster"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _read_schema() -> str:
    """Load the bundled schema.sql."""
    return settings.schema_path.read_text(encoding="utf-8")


def has_table(conn: sqlite3.Connection, name: str) -> bool:
    """Return ``True`` if a table called *name* exists."""
    row = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?", (name,)
    ).fetchone()
    return row is not None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def init_db(conn: sqlite3.Connection) -> None:
    """Create the ``cluster`` table if it does not exist yet.

    Args:
        conn: An open, configured SQLite connection.

    Raises:
        InitializationError: If the existence check or the DDL fails.
    """
    try:
        if has_table(conn, CLUSTER_TABLE):
            return
        # executescript() issues an implicit COMMIT before execution, which
        # is fine for DDL-only scripts.
        conn.executescript(_read_schema())
    except (sqlite3.Error, OSError) as exc:
        logger.error("error occurred while creating cluster table: %s", exc)
        raise InitializationError("failed to create cluster table") from exc
    logger.info("cluster table created")
