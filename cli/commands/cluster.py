"""Cluster registration commands."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional

import typer

from cluster_registry.db import ClusterStore, open_store
from cluster_registry.errors import ClusterRegistryError, InitializationError
from cluster_registry.models import Cluster
from cluster_registry.repository import ClusterRepository, new_cluster_repository

cluster_app = typer.Typer(help="Manage registered clusters.", no_args_is_help=True)


@contextmanager
def _repository() -> Iterator[ClusterRepository]:
    """Open the store, yield a repository and always close the handle."""
    try:
        store: ClusterStore = open_store()
    except InitializationError as exc:
        typer.echo(f"❌ Cluster store unavailable: {exc}")
        raise typer.Exit(code=1)
    try:
        yield new_cluster_repository(store)
    except ClusterRegistryError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)
    finally:
        store.close()


def _parse_config(pairs: List[str]) -> dict[str, str]:
    config: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            typer.echo(f"❌ Invalid config entry {pair!r}, expected KEY=VALUE.")
            raise typer.Exit(code=1)
        config[key] = value
    return config


def _target(name: Optional[str], cluster_id: Optional[int]) -> str:
    """Describe the requested cluster; exactly one of name or id is required."""
    if (name is None) == (cluster_id is None):
        typer.echo("❌ Pass exactly one of a cluster NAME or --id.")
        raise typer.Exit(code=1)
    return f"id {cluster_id}" if cluster_id is not None else repr(name)


def _lookup(
    repo: ClusterRepository, name: Optional[str], cluster_id: Optional[int]
) -> Optional[Cluster]:
    """Find an active cluster by id when one is given, otherwise by name."""
    if cluster_id is not None:
        return repo.find_by_id(cluster_id)
    return repo.find_one(name)


@cluster_app.command("add")
def cluster_add(
    name: str = typer.Argument(..., help="Cluster name."),
    server_url: str = typer.Option(..., "--server-url", help="Cluster API endpoint."),
    config: List[str] = typer.Option(
        [], "--config", "-c", help="Config entry as KEY=VALUE (repeatable)."
    ),
    k8s_version: str = typer.Option("", "--k8s-version", help="Kubernetes version."),
) -> None:
    """Register a new cluster."""
    cluster = Cluster(
        cluster_name=name,
        server_url=server_url,
        config=_parse_config(config),
        k8s_version=k8s_version,
    )
    with _repository() as repo:
        repo.save(cluster)
    typer.echo(f"✅ Cluster registered: {cluster.cluster_name} ({cluster.id})")


@cluster_app.command("list")
def cluster_list() -> None:
    """List all active clusters."""
    with _repository() as repo:
        clusters = repo.find_all_active()
    if not clusters:
        typer.echo("No clusters found.")
        return
    typer.echo("Clusters:")
    for c in clusters:
        status = c.error_in_connecting or "ok"
        typer.echo(f"  {c.id}\t{c.cluster_name}\t{c.server_url}\t[{status}]")


@cluster_app.command("show")
def cluster_show(
    name: Optional[str] = typer.Argument(None, help="Cluster name."),
    cluster_id: Optional[int] = typer.Option(None, "--id", help="Cluster id."),
) -> None:
    """Show one active cluster.  Config values are masked."""
    target = _target(name, cluster_id)
    with _repository() as repo:
        cluster = _lookup(repo, name, cluster_id)
    if cluster is None:
        typer.echo(f"❌ Cluster {target} not found.")
        raise typer.Exit(code=1)

    typer.echo(f"Id          : {cluster.id}")
    typer.echo(f"Name        : {cluster.cluster_name}")
    typer.echo(f"Server URL  : {cluster.server_url}")
    typer.echo(f"K8s version : {cluster.k8s_version or '(unknown)'}")
    typer.echo(f"Connection  : {cluster.error_in_connecting or 'ok'}")
    typer.echo("Config      :")
    for key in sorted(cluster.config):
        typer.echo(f"  {key} = ****")


@cluster_app.command("set-status")
def cluster_set_status(
    cluster_id: int = typer.Argument(..., help="Cluster id."),
    message: str = typer.Argument("", help="Connection error; empty clears it."),
) -> None:
    """Record the result of the last connection attempt."""
    with _repository() as repo:
        repo.update_cluster_connection_status(cluster_id, message)
    typer.echo(f"✅ Connection status updated for cluster {cluster_id}")


@cluster_app.command("remove")
def cluster_remove(
    name: Optional[str] = typer.Argument(None, help="Cluster name."),
    cluster_id: Optional[int] = typer.Option(None, "--id", help="Cluster id."),
) -> None:
    """Soft-delete a cluster.  The row is kept but hidden from every listing."""
    target = _target(name, cluster_id)
    with _repository() as repo:
        cluster = _lookup(repo, name, cluster_id)
        if cluster is None:
            typer.echo(f"❌ Cluster {target} not found.")
            raise typer.Exit(code=1)
        repo.mark_cluster_deleted(cluster)
    typer.echo(f"🗑️  Cluster removed: {cluster.cluster_name} ({cluster.id})")


@cluster_app.command("purge")
def cluster_purge(
    cluster_id: int = typer.Argument(..., help="Cluster id."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Permanently delete a cluster row, active or not."""
    if not yes:
        typer.confirm(f"Permanently delete cluster {cluster_id}?", abort=True)
    with _repository() as repo:
        repo.delete(Cluster(id=cluster_id))
    typer.echo(f"✅ Cluster {cluster_id} purged")
