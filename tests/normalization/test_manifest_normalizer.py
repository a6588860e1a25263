from __future__ import annotations

from kube_scorecard.adapters import ManifestDocument
from kube_scorecard.models import ResourceIdentity
from kube_scorecard.normalization import ManifestNormalizer


def _document(content: object, index: int = 0) -> ManifestDocument:
    return ManifestDocument(path="manifests/app.yaml", index=index, content=content)


def test_normalizes_identity_and_metadata() -> None:
    content = {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {
            "name": "web",
            "namespace": "default",
            "annotations": {"kube-score/ignore": "pod-probes"},
        },
        "spec": {"replicas": 2},
    }

    resources = ManifestNormalizer().normalize([_document(content)])

    assert len(resources) == 1
    resource = resources[0]
    assert resource.identity == ResourceIdentity("Deployment", "apps/v1", "default", "web")
    assert resource.metadata["annotations"] == {"kube-score/ignore": "pod-probes"}
    assert resource.body["spec"] == {"replicas": 2}
    assert resource.source_path == "manifests/app.yaml"
    assert resource.kind == "Deployment"


def test_missing_namespace_is_empty() -> None:
    content = {"apiVersion": "v1", "kind": "Namespace", "metadata": {"name": "team-a"}}

    resource = ManifestNormalizer().normalize([_document(content)])[0]

    assert resource.identity.namespace == ""
    assert resource.identity.human_friendly_ref() == "team-a v1/Namespace"


def test_expands_list_items() -> None:
    content = {
        "apiVersion": "v1",
        "kind": "List",
        "items": [
            {"apiVersion": "v1", "kind": "Service", "metadata": {"name": "a"}},
            {"apiVersion": "v1", "kind": "Service", "metadata": {"name": "b"}},
        ],
    }

    resources = ManifestNormalizer().normalize([_document(content)])

    assert [resource.identity.name for resource in resources] == ["a", "b"]


def test_skips_documents_without_kind() -> None:
    documents = [
        _document(["not", "a", "mapping"]),
        _document({"apiVersion": "v1", "metadata": {"name": "orphan"}}, index=1),
        _document("plain string", index=2),
    ]

    assert ManifestNormalizer().normalize(documents) == []


def test_handles_empty_input() -> None:
    assert ManifestNormalizer().normalize([]) == []
