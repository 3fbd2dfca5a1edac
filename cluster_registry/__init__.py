"""Local, file-backed registry of Kubernetes cluster registrations."""

from cluster_registry.errors import (
    ClusterRegistryError,
    DataCorruptionError,
    InitializationError,
    PersistenceError,
)
from cluster_registry.models import Cluster

__all__ = [
    "Cluster",
    "ClusterRegistryError",
    "DataCorruptionError",
    "InitializationError",
    "PersistenceError",
]
