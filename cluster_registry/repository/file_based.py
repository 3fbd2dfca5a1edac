"""Cluster repository backed by the local SQLite file.

Used by disconnected / edge installs where there is no central relational
database.  The repository translates between :class:`Cluster` and
:class:`ClusterEntity`, delegates row work to :mod:`cluster_registry.db.clusters`
and turns every engine error into a backend-agnostic
:class:`~cluster_registry.errors.PersistenceError`.
"""

from __future__ import annotations

import sqlite3
from typing import Iterable, Optional

from cluster_registry.db.clusters import (
    delete_clusters,
    entity_values,
    find_clusters,
    insert_cluster,
    update_clusters,
)
from cluster_registry.db.connection import ClusterStore
from cluster_registry.db.models import ClusterEntity
from cluster_registry.encoding import (
    decode_config,
    decode_timestamp,
    encode_config,
    encode_timestamp,
)
from cluster_registry.errors import (
    ClusterRegistryError,
    DataCorruptionError,
    PersistenceError,
)
from cluster_registry.log import setup_logger
from cluster_registry.models import Cluster
from cluster_registry.repository.base import ClusterRepository

logger = setup_logger(__name__)


class FileBasedClusterRepository(ClusterRepository):
    """:class:`ClusterRepository` over the process-wide :class:`ClusterStore`.

    Every call runs on the calling thread's own connection, so the
    repository can be shared by concurrent request handlers.

    Args:
        store: Store returned by :func:`cluster_registry.db.open_store`.
            The schema must already exist.
    """

    def __init__(self, store: ClusterStore) -> None:
        self._store = store
        logger.info("cluster repository file based initialized")

    # ------------------------------------------------------------------
    # Entity <-> model translation
    # ------------------------------------------------------------------
    def _to_entity(self, cluster: Cluster) -> ClusterEntity:
        try:
            config = encode_config(cluster.config)
        except PersistenceError:
            logger.error(
                "error occurred while converting to entity, cluster=%r",
                cluster.cluster_name,
            )
            raise
        return ClusterEntity(
            id=cluster.id,
            cluster_name=cluster.cluster_name,
            server_url=cluster.server_url,
            active=cluster.active,
            config=config,
            k8s_version=cluster.k8s_version,
            error_in_connecting=cluster.error_in_connecting,
            created_on=encode_timestamp(cluster.created_on),
            created_by=cluster.created_by,
            updated_on=encode_timestamp(cluster.updated_on),
            updated_by=cluster.updated_by,
        )

    def _to_model(self, entity: ClusterEntity) -> Cluster:
        try:
            config = decode_config(entity.config)
            created_on = decode_timestamp(entity.created_on)
            updated_on = decode_timestamp(entity.updated_on)
        except DataCorruptionError as exc:
            logger.error(
                "error occurred while converting cluster data, id=%s: %s",
                entity.id,
                exc.__cause__ or exc,
            )
            raise
        return Cluster(
            id=entity.id,
            cluster_name=entity.cluster_name,
            server_url=entity.server_url,
            config=config,
            k8s_version=entity.k8s_version,
            error_in_connecting=entity.error_in_connecting,
            active=bool(entity.active),
            created_on=created_on,
            created_by=entity.created_by,
            updated_on=updated_on,
            updated_by=entity.updated_by,
        )

    def _find_first(self, **filters) -> Optional[Cluster]:
        try:
            entities = find_clusters(
                self._store.connection(), limit=1, active=True, **filters
            )
        except sqlite3.Error as exc:
            logger.error("error occurred while finding cluster data %s: %s", filters, exc)
            raise PersistenceError("failed to fetch cluster") from exc
        if not entities:
            return None
        try:
            return self._to_model(entities[0])
        except DataCorruptionError as exc:
            raise DataCorruptionError("failed to fetch cluster") from exc

    def _find_many(self, **filters) -> list[Cluster]:
        try:
            entities = find_clusters(self._store.connection(), active=True, **filters)
        except sqlite3.Error as exc:
            logger.error("error occurred while finding all cluster data: %s", exc)
            raise PersistenceError("failed to fetch cluster") from exc

        clusters: list[Cluster] = []
        for entity in entities:
            try:
                clusters.append(self._to_model(entity))
            except DataCorruptionError:
                logger.error(
                    "skipping cluster %s: error occurred while converting entity to model",
                    entity.id,
                )
        return clusters

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def save(self, cluster: Cluster) -> None:
        if cluster.id is not None:
            logger.error("refusing to save cluster that already has id %s", cluster.id)
            raise PersistenceError("failed to save cluster")
        entity = self._to_entity(cluster)
        try:
            cluster.id = insert_cluster(self._store.connection(), entity)
        except sqlite3.Error as exc:
            logger.error("error occurred while executing insert statement: %s", exc)
            raise PersistenceError("failed to save cluster") from exc

    def update(self, cluster: Cluster) -> None:
        if cluster.id is None:
            logger.error("cannot update cluster %r without an id", cluster.cluster_name)
            raise PersistenceError("failed to update cluster")
        try:
            entity = self._to_entity(cluster)
        except ClusterRegistryError as exc:
            raise PersistenceError("failed to update cluster") from exc
        try:
            changed = update_clusters(
                self._store.connection(), entity_values(entity), id=cluster.id
            )
        except sqlite3.Error as exc:
            logger.error("error occurred while updating cluster %s: %s", cluster.id, exc)
            raise PersistenceError("failed to update cluster") from exc
        if not changed:
            logger.warning("update matched no cluster with id %s", cluster.id)

    def delete(self, cluster: Cluster) -> None:
        if cluster.id is None:
            logger.error("cannot delete cluster %r without an id", cluster.cluster_name)
            raise PersistenceError("failed to delete cluster")
        try:
            delete_clusters(self._store.connection(), id=cluster.id)
        except sqlite3.Error as exc:
            logger.error("error occurred while deleting cluster %s: %s", cluster.id, exc)
            raise PersistenceError("failed to delete cluster") from exc

    def mark_cluster_deleted(self, cluster: Cluster) -> None:
        cluster.active = False
        self.update(cluster)

    def update_cluster_connection_status(
        self, cluster_id: int, error_in_connecting: str
    ) -> None:
        try:
            update_clusters(
                self._store.connection(),
                {"error_in_connecting": error_in_connecting},
                id=cluster_id,
            )
        except sqlite3.Error as exc:
            logger.error(
                "error occurred while updating cluster connection status %s: %s",
                cluster_id,
                exc,
            )
            raise PersistenceError("failed to update cluster status") from exc

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def find_one(self, cluster_name: str) -> Optional[Cluster]:
        return self.find_one_active(cluster_name)

    def find_one_active(self, cluster_name: str) -> Optional[Cluster]:
        return self._find_first(cluster_name=cluster_name)

    def find_all(self) -> list[Cluster]:
        return self.find_all_active()

    def find_all_active(self) -> list[Cluster]:
        return self._find_many()

    def find_by_id(self, cluster_id: int) -> Optional[Cluster]:
        return self._find_first(id=cluster_id)

    def find_by_ids(self, cluster_ids: Iterable[int]) -> list[Cluster]:
        return self._find_many(id=list(cluster_ids))
