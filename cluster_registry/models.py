"""The logical cluster model handed to and returned by repositories."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Cluster:
    """A registered Kubernetes cluster.

    ``id`` stays ``None`` until the first successful save.  The audit fields
    are passed through untouched: the repository never fills them in.
    """

    cluster_name: str = ""
    server_url: str = ""
    config: dict[str, str] = field(default_factory=dict)
    k8s_version: str = ""
    error_in_connecting: str = ""
    active: bool = True
    id: Optional[int] = None
    created_on: Optional[datetime] = None
    created_by: Optional[int] = None
    updated_on: Optional[datetime] = None
    updated_by: Optional[int] = None
