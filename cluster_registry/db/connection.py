"""SQLite connection factory and the per-thread store handle.

Usage::

    from cluster_registry.db.connection import get_connection

    with get_connection() as conn:
        cursor = conn.execute("SELECT 1")
"""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from typing import Optional, Union

from cluster_registry.config import settings
from cluster_registry.errors import InitializationError
from cluster_registry.log import setup_logger

logger = setup_logger(__name__)


def get_connection(db_path: Optional[Union[Path, str]] = None) -> sqlite3.Connection:
    """Open and configure a SQLite connection.

    Steps performed on every new connection:
    1. Create the parent directory under the user's home if needed.
    2. Apply the configured busy timeout so concurrent writers wait
       instead of failing immediately.
    3. Switch to WAL journal mode for concurrent readers.

    Args:
        db_path: Override the DB path.  Defaults to ``settings.db_path``.

    Returns:
        A configured :class:`sqlite3.Connection` with ``row_factory`` set to
        :class:`sqlite3.Row` so columns can be accessed by name.  It must
        only be *used* from one thread at a time; ``check_same_thread`` is
        off so that :meth:`ClusterStore.close` can close it from any thread.

    Raises:
        InitializationError: If the directory cannot be created or the file
            cannot be opened.
    """
    path = db_path or settings.db_path

    # Create parent directory if needed (no-op for `:memory:`)
    if str(path) != ":memory:":
        try:
            if db_path is None:
                settings.ensure_db_dir()
            else:
                Path(path).parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("error occurred while creating db dir %s: %s", path, exc)
            raise InitializationError("failed to create cluster db directory") from exc

    try:
        conn = sqlite3.connect(
            str(path), timeout=settings.busy_timeout, check_same_thread=False
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode = WAL")
    except sqlite3.Error as exc:
        logger.error("error occurred while opening db connection %s: %s", path, exc)
        raise InitializationError("failed to open cluster db") from exc

    return conn


class ClusterStore:
    """Process-wide handle on the cluster database file.

    Create one at startup (see :func:`cluster_registry.db.open_store`) and
    inject it into the repository.  Each thread gets its own
    :class:`sqlite3.Connection` to the same file on first use, so concurrent
    writers are serialised by SQLite's file locking and the busy timeout
    rather than by sharing one connection's transaction state.

    ``":memory:"`` databases cannot be shared between connections, so for
    them every thread uses the single connection opened up front.
    """

    def __init__(self, db_path: Optional[Union[Path, str]] = None) -> None:
        self.db_path = db_path
        self._local = threading.local()
        self._opened: list[sqlite3.Connection] = []
        self._opened_lock = threading.Lock()
        self._shared: Optional[sqlite3.Connection] = None
        if str(db_path) == ":memory:":
            self._shared = self._open()

    def _open(self) -> sqlite3.Connection:
        conn = get_connection(self.db_path)
        with self._opened_lock:
            self._opened.append(conn)
        return conn

    def connection(self) -> sqlite3.Connection:
        """Return the calling thread's connection, opening it if needed."""
        if self._shared is not None:
            return self._shared
        conn = getattr(self._local, "conn", None)
        if conn is None:
            conn = self._open()
            self._local.conn = conn
        return conn

    def close(self) -> None:
        """Close every connection this store has handed out."""
        with self._opened_lock:
            opened, self._opened = self._opened, []
        for conn in opened:
            conn.close()
        self._shared = None
        self._local = threading.local()
