"""Serialise a cluster's free-form config to and from storable text.

The config is a flat ``str -> str`` mapping (bearer tokens, TLS options,
...).  It is stored as a JSON object in a single TEXT column.  Audit
timestamps are stored as ISO-8601 text.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Mapping, Optional

from cluster_registry.errors import DataCorruptionError, PersistenceError


def encode_config(config: Optional[Mapping[str, str]]) -> str:
    """Return the JSON text for *config*.

    ``None`` and ``{}`` both encode to ``"{}"``.

    Raises:
        PersistenceError: If a key or value is not a string.
    """
    if not config:
        return "{}"
    for key, value in config.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise PersistenceError("failed to process cluster data")
    return json.dumps(dict(config), sort_keys=True)


def decode_config(text: Optional[str]) -> dict[str, str]:
    """Parse text produced by :func:`encode_config` back into a dict.

    Empty text and the JSON literal ``null`` decode to ``{}``.

    Raises:
        DataCorruptionError: If *text* is not a JSON object of strings.
    """
    if not text:
        return {}
    try:
        raw = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise DataCorruptionError("failed to process cluster data") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict) or not all(
        isinstance(value, str) for value in raw.values()
    ):
        raise DataCorruptionError("failed to process cluster data")
    return raw


def encode_timestamp(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 text for an audit timestamp (``None`` stays ``None``)."""
    return value.isoformat() if value is not None else None


def decode_timestamp(text: Optional[str]) -> Optional[datetime]:
    """Parse text produced by :func:`encode_timestamp`.

    Raises:
        DataCorruptionError: If *text* is not an ISO-8601 timestamp.
    """
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except (TypeError, ValueError) as exc:
        raise DataCorruptionError("failed to process cluster data") from exc
