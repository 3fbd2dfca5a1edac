"""Dataclass models representing DB rows.

These are plain Python objects, not ORM models.  The store reads and writes
these types and knows nothing about the logical
:class:`~cluster_registry.models.Cluster`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ClusterEntity:
    """One row of the ``cluster`` table.

    ``config`` holds the encoded config text and the ``*_on`` columns hold
    ISO-8601 text; both are parsed by the repository.  ``active`` is
    nullable: a missing value means the row is inactive.
    """

    id: Optional[int] = None
    cluster_name: str = ""
    server_url: str = ""
    active: Optional[bool] = None
    config: str = ""
    k8s_version: str = ""
    error_in_connecting: str = ""
    created_on: Optional[str] = None
    created_by: Optional[int] = None
    updated_on: Optional[str] = None
    updated_by: Optional[int] = None


# Column order used for INSERT and full-row UPDATE.  ``id`` is excluded; it
# is assigned by the engine.
CLUSTER_COLUMNS: tuple[str, ...] = (
    "cluster_name",
    "server_url",
    "active",
    "config",
    "k8s_version",
    "error_in_connecting",
    "created_on",
    "created_by",
    "updated_on",
    "updated_by",
)
