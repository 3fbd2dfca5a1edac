"""The cluster repository contract.

Every storage backend implements :class:`ClusterRepository`.  Callers are
handed an instance at construction time and never check which backend it
is.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from cluster_registry.models import Cluster


class ClusterRepository(ABC):
    """Persistence contract for registered clusters."""

    @abstractmethod
    def save(self, cluster: Cluster) -> None:
        """Insert *cluster* and set ``cluster.id`` to the assigned id."""

    @abstractmethod
    def update(self, cluster: Cluster) -> None:
        """Overwrite every field of the row with ``cluster.id``."""

    @abstractmethod
    def find_one(self, cluster_name: str) -> Optional[Cluster]:
        """Alias of :meth:`find_one_active`."""

    @abstractmethod
    def find_one_active(self, cluster_name: str) -> Optional[Cluster]:
        """Return the active cluster called *cluster_name*, or ``None``."""

    @abstractmethod
    def find_all(self) -> list[Cluster]:
        """Alias of :meth:`find_all_active`."""

    @abstractmethod
    def find_all_active(self) -> list[Cluster]:
        """Return every active cluster.  Undecodable rows are skipped."""

    @abstractmethod
    def find_by_id(self, cluster_id: int) -> Optional[Cluster]:
        """Return the active cluster with *cluster_id*, or ``None``."""

    @abstractmethod
    def find_by_ids(self, cluster_ids: Iterable[int]) -> list[Cluster]:
        """Return the active clusters among *cluster_ids*, in no set order."""

    @abstractmethod
    def delete(self, cluster: Cluster) -> None:
        """Physically remove the row.  Irreversible."""

    @abstractmethod
    def mark_cluster_deleted(self, cluster: Cluster) -> None:
        """Soft delete: set ``active`` to ``False`` and update."""

    @abstractmethod
    def update_cluster_connection_status(
        self, cluster_id: int, error_in_connecting: str
    ) -> None:
        """Set only ``error_in_connecting`` on the row with *cluster_id*."""
