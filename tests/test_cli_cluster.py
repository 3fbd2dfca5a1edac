"""Tests for the 'cluster' and 'db' CLI command groups."""

import pytest
from typer.testing import CliRunner

from cluster_registry.db import open_store
from cluster_registry.db.clusters import find_clusters
from cluster_registry.models import Cluster
from cluster_registry.repository import FileBasedClusterRepository
from cli.commands.cluster import cluster_app
from cli.main import app

runner = CliRunner()


@pytest.fixture
def clean_db(tmp_path, monkeypatch):
    """Provide a fresh home directory (and therefore DB) for each test."""
    monkeypatch.setattr("cluster_registry.config.settings.home_dir", tmp_path)
    return tmp_path / ".kube" / ".devtron" / "cluster.db"


def _seed(*clusters: Cluster) -> None:
    store = open_store()
    repo = FileBasedClusterRepository(store)
    for c in clusters:
        repo.save(c)
    store.close()


def test_db_init(clean_db):
    result = runner.invoke(app, ["db", "init"])
    assert result.exit_code == 0
    assert "Database ready" in result.stdout
    assert clean_db.exists()


def test_db_path(clean_db):
    result = runner.invoke(app, ["db", "path"])
    assert result.exit_code == 0
    assert str(clean_db) in result.stdout


def test_cluster_add(clean_db):
    result = runner.invoke(
        cluster_app,
        ["add", "prod", "--server-url", "https://prod:6443", "-c", "token=abc", "-c", "insecure=true"],
    )
    assert result.exit_code == 0
    assert "✅ Cluster registered: prod" in result.stdout

    store = open_store()
    (row,) = find_clusters(store.connection())
    store.close()
    assert row.cluster_name == "prod"
    assert row.active is True
    assert '"token": "abc"' in row.config


def test_cluster_add_rejects_bad_config(clean_db):
    result = runner.invoke(
        cluster_app, ["add", "prod", "--server-url", "https://prod:6443", "-c", "novalue"]
    )
    assert result.exit_code == 1
    assert "expected KEY=VALUE" in result.stdout


def test_cluster_list(clean_db):
    _seed(Cluster(cluster_name="P1", server_url="https://p1"), Cluster(cluster_name="P2", server_url="https://p2"))

    result = runner.invoke(cluster_app, ["list"])
    assert result.exit_code == 0
    assert "P1" in result.stdout
    assert "P2" in result.stdout


def test_cluster_list_empty(clean_db):
    result = runner.invoke(cluster_app, ["list"])
    assert result.exit_code == 0
    assert "No clusters found." in result.stdout


def test_cluster_show_masks_config(clean_db):
    _seed(Cluster(cluster_name="edge", server_url="https://edge", config={"token": "s3cret"}))

    result = runner.invoke(cluster_app, ["show", "edge"])
    assert result.exit_code == 0
    assert "https://edge" in result.stdout
    assert "token = ****" in result.stdout
    assert "s3cret" not in result.stdout


def test_cluster_show_missing(clean_db):
    result = runner.invoke(cluster_app, ["show", "ghost"])
    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_cluster_set_status(clean_db):
    c = Cluster(cluster_name="edge", server_url="https://edge")
    _seed(c)

    result = runner.invoke(cluster_app, ["set-status", str(c.id), "dial timeout"])
    assert result.exit_code == 0

    show = runner.invoke(cluster_app, ["show", "--id", str(c.id)])
    assert "dial timeout" in show.stdout


def test_cluster_remove_is_soft(clean_db):
    c = Cluster(cluster_name="old", server_url="https://old")
    _seed(c)

    result = runner.invoke(cluster_app, ["remove", "old"])
    assert result.exit_code == 0
    assert "Cluster removed: old" in result.stdout

    listing = runner.invoke(cluster_app, ["list"])
    assert "old" not in listing.stdout

    store = open_store()
    (row,) = find_clusters(store.connection())
    store.close()
    assert row.active is False


def test_cluster_purge(clean_db):
    c = Cluster(cluster_name="gone", server_url="https://gone")
    _seed(c)

    result = runner.invoke(cluster_app, ["purge", str(c.id), "--yes"])
    assert result.exit_code == 0

    store = open_store()
    assert find_clusters(store.connection()) == []
    store.close()


def test_cluster_purge_aborts_without_confirmation(clean_db):
    c = Cluster(cluster_name="keep", server_url="https://keep")
    _seed(c)

    result = runner.invoke(cluster_app, ["purge", str(c.id)], input="n\n")
    assert result.exit_code != 0

    store = open_store()
    assert len(find_clusters(store.connection())) == 1
    store.close()


def test_cluster_show_numeric_name_is_not_taken_for_an_id(clean_db):
    first = Cluster(cluster_name="edge", server_url="https://edge")
    _seed(first)
    numeric = Cluster(cluster_name=str(first.id), server_url="https://numeric")
    _seed(numeric)

    by_name = runner.invoke(cluster_app, ["show", str(first.id)])
    assert by_name.exit_code == 0
    assert "https://numeric" in by_name.stdout

    by_id = runner.invoke(cluster_app, ["show", "--id", str(first.id)])
    assert by_id.exit_code == 0
    assert "https://edge" in by_id.stdout


def test_cluster_show_requires_exactly_one_selector(clean_db):
    _seed(Cluster(cluster_name="edge", server_url="https://edge"))

    neither = runner.invoke(cluster_app, ["show"])
    assert neither.exit_code == 1
    assert "exactly one" in neither.stdout

    both = runner.invoke(cluster_app, ["show", "edge", "--id", "1"])
    assert both.exit_code == 1
    assert "exactly one" in both.stdout


def test_cluster_remove_by_id_leaves_numeric_name_alone(clean_db):
    first = Cluster(cluster_name="edge", server_url="https://edge")
    _seed(first)
    numeric = Cluster(cluster_name=str(first.id), server_url="https://numeric")
    _seed(numeric)

    result = runner.invoke(cluster_app, ["remove", "--id", str(first.id)])
    assert result.exit_code == 0
    assert "Cluster removed: edge" in result.stdout

    listing = runner.invoke(cluster_app, ["list"])
    assert "https://numeric" in listing.stdout
    assert "https://edge" not in listing.stdout
