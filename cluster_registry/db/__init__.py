"""Database layer package.

Public re-exports so callers can write::

    from cluster_registry.db import open_store
    from cluster_registry.db import get_connection, init_db
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from cluster_registry.db.connection import ClusterStore, get_connection
from cluster_registry.db.migrations import init_db
from cluster_registry.log import setup_logger

logger = setup_logger(__name__)


def open_store(db_path: Optional[Union[Path, str]] = None) -> ClusterStore:
    """Open the cluster database and make sure its schema exists.

    Call once at process start and inject the returned store into the
    repository.

    Raises:
        InitializationError: If the file cannot be opened or the table
            cannot be created.  The process cannot continue without it.
    """
    store = ClusterStore(db_path)
    try:
        init_db(store.connection())
    except Exception:
        store.close()
        raise
    logger.info("cluster store initialised")
    return store


__all__ = ["ClusterStore", "get_connection", "init_db", "open_store"]
