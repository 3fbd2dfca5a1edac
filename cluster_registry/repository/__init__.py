"""Cluster repositories.

Pick the implementation once, when the process is wired up::

    from cluster_registry.db import open_store
    from cluster_registry.repository import new_cluster_repository

    repo = new_cluster_repository(open_store())
"""

from __future__ import annotations

from typing import Callable, Optional

from cluster_registry.config import settings
from cluster_registry.db.connection import ClusterStore
from cluster_registry.errors import InitializationError
from cluster_registry.repository.base import ClusterRepository
from cluster_registry.repository.file_based import FileBasedClusterRepository

# Backend name -> factory taking the process-wide store.
_BACKENDS: dict[str, Callable[[ClusterStore], ClusterRepository]] = {
    "file": FileBasedClusterRepository,
}


def new_cluster_repository(
    store: ClusterStore, backend: Optional[str] = None
) -> ClusterRepository:
    """Build the repository for *backend* (default ``settings.cluster_store_backend``).

    Raises:
        InitializationError: If no implementation is registered for *backend*.
    """
    name = (backend or settings.cluster_store_backend).lower()
    factory = _BACKENDS.get(name)
    if factory is None:
        raise InitializationError(f"unknown cluster store backend {name!r}")
    return factory(store)


__all__ = ["ClusterRepository", "FileBasedClusterRepository", "new_cluster_repository"]
