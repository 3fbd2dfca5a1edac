"""Exception hierarchy raised by the cluster registry.

Callers only ever see these types.  Raw ``sqlite3`` errors are logged and
chained (``__cause__``) but their text never ends up in the message, so the
contract stays the same whichever storage backend is in use.

Not-found is deliberately absent: point lookups return ``None`` and batch
lookups return an empty list.
"""

from __future__ import annotations


class ClusterRegistryError(Exception):
    """Base class for every error raised by this package."""


class InitializationError(ClusterRegistryError):
    """The store could not be opened or its schema could not be created."""


class PersistenceError(ClusterRegistryError):
    """An insert, update, delete or find failed."""


class DataCorruptionError(PersistenceError):
    """Stored cluster config could not be decoded."""
