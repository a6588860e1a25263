import json
import textwrap
from pathlib import Path

import pytest

from kube_scorecard.checks import CheckPackError, CheckPackManager

CHECK_MODULE = textwrap.dedent(
    """
    from kube_scorecard.adapters import FunctionCheck
    from kube_scorecard.models import Check, CheckOutcome, Grade

    CHECKS = [
        FunctionCheck(
            Check(id="always-warn", name="Always warns"),
            lambda resource: CheckOutcome(grade=Grade.WARNING),
        ),
    ]
    """
)


def write_file(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_merges_default_and_override_manifests(tmp_path: Path):
    default_manifest = write_file(
        tmp_path,
        "defaults.yaml",
        textwrap.dedent(
            """
            packs:
              - name: workloads
                enabled: true
                module: acme_checks.workloads
                ignore: [container-image-tag]
              - name: networking
                module: acme_checks.networking
                enable_optional: "service-targets, ingress-class"
            """
        ),
    )

    override_manifest = write_file(
        tmp_path,
        "override.json",
        json.dumps(
            {
                "packs": [
                    {"name": "workloads", "enabled": False, "ignore": ["pod-probes"]},
                    {"name": "security", "module": "acme_checks.security"},
                ]
            }
        ),
    )

    manager = CheckPackManager(default_manifests=[default_manifest])
    packs = manager.load([override_manifest])

    packs_by_name = {pack.name: pack for pack in packs}
    assert set(packs_by_name) == {"workloads", "networking", "security"}

    workloads = packs_by_name["workloads"]
    assert workloads.enabled is False
    assert workloads.module == "acme_checks.workloads"
    assert workloads.ignore == ["container-image-tag", "pod-probes"]

    networking = packs_by_name["networking"]
    assert networking.enable_optional == ["service-targets", "ingress-class"]

    enabled = manager.enabled_packs([override_manifest])
    assert [pack.name for pack in enabled] == ["networking", "security"]


def test_no_manifests_means_no_packs():
    assert CheckPackManager().enabled_packs() == []


def test_missing_manifest_raises(tmp_path: Path):
    manager = CheckPackManager()
    with pytest.raises(CheckPackError):
        manager.load([tmp_path / "missing.yaml"])


def test_non_mapping_manifest_raises(tmp_path: Path):
    manifest = write_file(tmp_path, "list.yaml", "- name: workloads\n")

    with pytest.raises(CheckPackError):
        CheckPackManager().load([manifest])


def test_load_checks_imports_pack_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    write_file(tmp_path, "pack_manager_sample_checks.py", CHECK_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    manifest = write_file(
        tmp_path,
        "packs.yaml",
        "packs:\n  - name: sample\n    module: pack_manager_sample_checks\n",
    )

    manager = CheckPackManager()
    checks = manager.load_checks(manager.enabled_packs([manifest]))

    assert [check.check.id for check in checks] == ["always-warn"]


def test_load_checks_reports_missing_module(tmp_path: Path):
    manifest = write_file(
        tmp_path,
        "packs.yaml",
        "packs:\n  - name: ghost\n    module: kube_scorecard_no_such_module\n",
    )

    manager = CheckPackManager()
    with pytest.raises(CheckPackError, match="ghost"):
        manager.load_checks(manager.enabled_packs([manifest]))


def test_load_checks_requires_checks_attribute(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    write_file(tmp_path, "pack_manager_empty_module.py", "VALUE = 1\n")
    monkeypatch.syspath_prepend(str(tmp_path))
    manifest = write_file(
        tmp_path,
        "packs.yaml",
        "packs:\n  - name: empty\n    module: pack_manager_empty_module\n",
    )

    manager = CheckPackManager()
    with pytest.raises(CheckPackError, match="CHECKS"):
        manager.load_checks(manager.enabled_packs([manifest]))


def test_packs_must_be_a_list(tmp_path: Path):
    manifest = write_file(tmp_path, "scalar.yaml", "packs: 5\n")

    with pytest.raises(CheckPackError, match="must be a list"):
        CheckPackManager().load([manifest])


def test_unreadable_manifest_raises(tmp_path: Path):
    manifest = tmp_path / "binary.yaml"
    manifest.write_bytes(b"\xff\xfepacks: []\n")

    with pytest.raises(CheckPackError, match="Failed to read"):
        CheckPackManager().load([manifest])


def test_checks_attribute_must_be_iterable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    write_file(tmp_path, "pack_manager_scalar_checks.py", "CHECKS = 5\n")
    monkeypatch.syspath_prepend(str(tmp_path))
    manifest = write_file(
        tmp_path,
        "packs.yaml",
        "packs:\n  - name: scalar\n    module: pack_manager_scalar_checks\n",
    )

    manager = CheckPackManager()
    with pytest.raises(CheckPackError, match="must be iterable"):
        manager.load_checks(manager.enabled_packs([manifest]))
