"""Row operations for the ``cluster`` table.

These helpers speak :class:`~cluster_registry.db.models.ClusterEntity` only.
They know nothing about config encoding or the logical cluster model, and
they let ``sqlite3.Error`` propagate untouched.

Filters are passed as keyword arguments naming a column::

    find_clusters(conn, cluster_name="c1", active=True, limit=1)
    find_clusters(conn, id=[1, 2, 3])     # collection -> IN (...)
    find_clusters(conn, active=None)      # None -> IS NULL
"""

from __future__ import annotations

import sqlite3
from typing import Any, Optional

from cluster_registry.db.models import CLUSTER_COLUMNS, ClusterEntity

_FILTERABLE = {"id", *CLUSTER_COLUMNS}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _to_db(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    return value


def _row_to_entity(row: sqlite3.Row) -> ClusterEntity:
    active = row["active"]
    return ClusterEntity(
        id=row["id"],
        cluster_name=row["cluster_name"],
        server_url=row["server_url"],
        active=None if active is None else bool(active),
        config=row["config"],
        k8s_version=row["k8s_version"],
        error_in_connecting=row["error_in_connecting"],
        created_on=row["created_on"],
        created_by=row["created_by"],
        updated_on=row["updated_on"],
        updated_by=row["updated_by"],
    )


def _where(filters: dict[str, Any]) -> tuple[str, list[Any]]:
    """Build a ``WHERE`` clause (possibly empty) from column filters."""
    clauses: list[str] = []
    params: list[Any] = []
    for column, value in filters.items():
        if column not in _FILTERABLE:
            raise ValueError(f"Cannot filter on column {column!r}")
        if value is None:
            clauses.append(f"{column} IS NULL")
        elif isinstance(value, (list, tuple, set, frozenset)):
            if not value:
                clauses.append("0")
                continue
            placeholders = ", ".join("?" for _ in value)
            clauses.append(f"{column} IN ({placeholders})")
            params.extend(_to_db(v) for v in value)
        else:
            clauses.append(f"{column} = ?")
            params.append(_to_db(value))
    if not clauses:
        return "", params
    return " WHERE " + " AND ".join(clauses), params


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def insert_cluster(conn: sqlite3.Connection, entity: ClusterEntity) -> int:
    """Insert *entity* and return the id assigned by the engine.

    ``entity.id`` is ignored.  Ids come from ``AUTOINCREMENT`` so a value
    freed by a hard delete is never handed out again.
    """
    columns = ", ".join(CLUSTER_COLUMNS)
    placeholders = ", ".join("?" for _ in CLUSTER_COLUMNS)
    values = [_to_db(getattr(entity, col)) for col in CLUSTER_COLUMNS]

    with conn:
        cursor = conn.execute(
            f"INSERT INTO cluster ({columns}) VALUES ({placeholders})",  # noqa: S608
            values,
        )
    return cursor.lastrowid


def update_clusters(
    conn: sqlite3.Connection, values: dict[str, Any], **filters: Any
) -> int:
    """Set *values* on every row matching *filters*.

    Returns:
        The number of rows changed.

    Raises:
        ValueError: If *values* is empty or names an unknown column.
    """
    if not values:
        raise ValueError("No fields provided to update_clusters()")
    for column in values:
        if column not in CLUSTER_COLUMNS:
            raise ValueError(f"Cannot update field {column!r}")

    set_clause = ", ".join(f"{col} = ?" for col in values)
    where, params = _where(filters)

    with conn:
        cursor = conn.execute(
            f"UPDATE cluster SET {set_clause}{where}",  # noqa: S608
            [_to_db(v) for v in values.values()] + params,
        )
    return cursor.rowcount


def find_clusters(
    conn: sqlite3.Connection, limit: Optional[int] = None, **filters: Any
) -> list[ClusterEntity]:
    """Return rows matching *filters*, ordered by id."""
    where, params = _where(filters)
    query = f"SELECT * FROM cluster{where} ORDER BY id"  # noqa: S608
    if limit is not None:
        query += " LIMIT ?"
        params.append(limit)
    rows = conn.execute(query, params).fetchall()
    return [_row_to_entity(r) for r in rows]


def delete_clusters(conn: sqlite3.Connection, **filters: Any) -> int:
    """Delete rows matching *filters* and return how many went away.

    This is a no-op if nothing matches.
    """
    where, params = _where(filters)
    with conn:
        cursor = conn.execute(f"DELETE FROM cluster{where}", params)  # noqa: S608
    return cursor.rowcount


def entity_values(entity: ClusterEntity) -> dict[str, Any]:
    """Every writable column of *entity*, for a full-row overwrite."""
    return {col: getattr(entity, col) for col in CLUSTER_COLUMNS}
