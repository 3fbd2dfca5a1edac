"""Cluster registry CLI: operator entry-point for the local cluster store.

Usage:
    python cli/main.py --help

Sub-command groups:
    db       → store location and schema bootstrap
    cluster  → register, inspect, soft-delete and purge clusters
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from cluster_registry.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import typer

from cluster_registry.config import settings
from cluster_registry.db import open_store
from cluster_registry.errors import InitializationError
from cli.commands.cluster import cluster_app

app = typer.Typer(
    name="cluster-registry",
    help="Local cluster registry CLI.",
    no_args_is_help=True,
)

# ---------------------------------------------------------------------------
# DB commands
# ---------------------------------------------------------------------------
db_app = typer.Typer(help="Database operations.", no_args_is_help=True)
app.add_typer(db_app, name="db")


@db_app.command("init")
def db_init() -> None:
    """Initialise the SQLite database (create the table if it does not exist)."""
    try:
        store = open_store()
    except InitializationError as exc:
        typer.echo(f"[db init] Failed: {exc}")
        raise typer.Exit(1)
    store.close()
    typer.echo(f"[db init] Database ready at {settings.db_path}")


@db_app.command("path")
def db_path() -> None:
    """Print the location of the database file."""
    typer.echo(str(settings.db_path))


# ---------------------------------------------------------------------------
# Cluster commands
# ---------------------------------------------------------------------------
app.add_typer(cluster_app, name="cluster")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
