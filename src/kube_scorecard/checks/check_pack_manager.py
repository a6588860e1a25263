"""Utilities for loading and merging check pack manifest files."""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, MutableMapping, Sequence

import yaml

from ..adapters.check_runner import ResourceCheck

logger = logging.getLogger(__name__)

CHECKS_ATTRIBUTE = "CHECKS"


class CheckPackError(RuntimeError):
    """Raised when check pack manifests or modules cannot be loaded."""


@dataclass(slots=True)
class CheckPack:
    """Configuration describing a logical group of checks to execute."""

    name: str
    enabled: bool = True
    module: str | None = None
    ignore: List[str] = field(default_factory=list)
    enable_optional: List[str] = field(default_factory=list)


class CheckPackManager:
    """Load check pack manifests and resolve the checks they provide."""

    def __init__(self, default_manifests: Sequence[Path | str] | None = None) -> None:
        self._default_manifests = [Path(path) for path in default_manifests or []]

    # ------------------------------------------------------------------
    def load(self, manifests: Sequence[Path | str] | None = None) -> List[CheckPack]:
        """Return all packs defined by the provided manifests, merged by name."""

        manifest_paths = list(self._default_manifests)
        if manifests:
            manifest_paths.extend(Path(path) for path in manifests)

        packs: MutableMapping[str, CheckPack] = {}
        for manifest_path in manifest_paths:
            data = self._load_manifest(manifest_path)
            pack_configs = data.get("packs") or []
            if not isinstance(pack_configs, list):
                raise CheckPackError(f"'packs' must be a list in check pack manifest {manifest_path}")

            for pack_config in pack_configs:
                if not isinstance(pack_config, Mapping):
                    continue
                name = pack_config.get("name")
                if not name:
                    continue

                pack = packs.get(name, CheckPack(name=name))
                if "enabled" in pack_config:
                    pack.enabled = bool(pack_config["enabled"])
                if pack_config.get("module"):
                    pack.module = str(pack_config["module"])

                pack.ignore.extend(self._string_list(pack_config.get("ignore")))
                pack.enable_optional.extend(self._string_list(pack_config.get("enable_optional")))

                packs[name] = pack

        return list(packs.values())

    # ------------------------------------------------------------------
    def enabled_packs(self, manifests: Sequence[Path | str] | None = None) -> List[CheckPack]:
        """Return only the packs that are enabled after merging manifests."""

        return [pack for pack in self.load(manifests) if pack.enabled]

    # ------------------------------------------------------------------
    def load_checks(self, packs: Iterable[CheckPack]) -> List[ResourceCheck]:
        """Import each pack's module and collect the checks it exposes."""

        checks: List[ResourceCheck] = []
        for pack in packs:
            if not pack.module:
                continue

            try:
                module = importlib.import_module(pack.module)
            except ImportError as exc:
                raise CheckPackError(
                    f"Failed to import check module '{pack.module}' for pack '{pack.name}'"
                ) from exc

            provided = getattr(module, CHECKS_ATTRIBUTE, None)
            if provided is None:
                raise CheckPackError(
                    f"Check module '{pack.module}' does not define {CHECKS_ATTRIBUTE}"
                )

            try:
                pack_checks = list(provided)
            except TypeError as exc:
                raise CheckPackError(
                    f"{CHECKS_ATTRIBUTE} in check module '{pack.module}' must be iterable"
                ) from exc

            for candidate in pack_checks:
                if not isinstance(candidate, ResourceCheck):
                    raise CheckPackError(
                        f"Check module '{pack.module}' exposes a non-check object: {candidate!r}"
                    )

            logger.debug("Loaded %d checks from pack %s", len(pack_checks), pack.name)
            checks.extend(pack_checks)

        return checks

    # ------------------------------------------------------------------
    def _string_list(self, value: Any) -> List[str]:
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple)):
            return []
        return [str(item).strip() for item in value if str(item).strip()]

    def _load_manifest(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise CheckPackError(f"Check pack manifest not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CheckPackError(f"Failed to read check pack manifest {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise CheckPackError(f"Invalid YAML in check pack manifest {path}") from exc

        if not isinstance(data, Mapping):
            raise CheckPackError(f"Check pack manifest must be a mapping: {path}")

        return dict(data)
