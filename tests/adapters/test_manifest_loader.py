from __future__ import annotations

import io
from pathlib import Path

import pytest

from kube_scorecard.adapters import ManifestLoader, ManifestLoaderError

DEPLOYMENT = """
apiVersion: apps/v1
kind: Deployment
metadata:
  name: web
  namespace: default
"""

SERVICE = """
apiVersion: v1
kind: Service
metadata:
  name: web
"""


def test_loads_multi_document_yaml(tmp_path: Path) -> None:
    manifest = tmp_path / "app.yaml"
    manifest.write_text(f"{DEPLOYMENT}\n---\n{SERVICE}\n---\n", encoding="utf-8")

    documents = ManifestLoader([manifest]).load_documents()

    assert [document.content["kind"] for document in documents] == ["Deployment", "Service"]
    assert [document.index for document in documents] == [0, 1]
    assert all(document.path == str(manifest) for document in documents)


def test_discovers_manifests_in_directories(tmp_path: Path) -> None:
    nested = tmp_path / "nested"
    nested.mkdir()
    (tmp_path / "b.yml").write_text(SERVICE, encoding="utf-8")
    (nested / "a.json").write_text(
        '{"apiVersion": "v1", "kind": "ConfigMap", "metadata": {"name": "cfg"}}',
        encoding="utf-8",
    )
    (tmp_path / "README.md").write_text("# not a manifest", encoding="utf-8")

    documents = ManifestLoader([tmp_path]).load_documents()

    assert sorted(document.content["kind"] for document in documents) == ["ConfigMap", "Service"]


def test_reads_stdin() -> None:
    loader = ManifestLoader(["-"], stdin=io.StringIO(DEPLOYMENT))

    documents = loader.load_documents()

    assert len(documents) == 1
    assert documents[0].path == "<stdin>"
    assert documents[0].content["metadata"]["name"] == "web"


def test_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(ManifestLoaderError):
        ManifestLoader([tmp_path / "missing.yaml"]).load_documents()


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    manifest = tmp_path / "broken.yaml"
    manifest.write_text("kind: [unterminated", encoding="utf-8")

    with pytest.raises(ManifestLoaderError):
        ManifestLoader([manifest]).load_documents()


def test_non_utf8_file_raises(tmp_path: Path) -> None:
    manifest = tmp_path / "latin1.yaml"
    manifest.write_bytes(b"\xff\xfekind: Service\n")

    with pytest.raises(ManifestLoaderError, match="Failed to read manifest"):
        ManifestLoader([manifest]).load_documents()


def test_undecodable_stdin_raises() -> None:
    stdin = io.TextIOWrapper(io.BytesIO(b"\xff\xfe\xfa"), encoding="utf-8")

    with pytest.raises(ManifestLoaderError, match="stdin"):
        ManifestLoader(["-"], stdin=stdin).load_documents()
