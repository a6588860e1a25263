"""Orchestration layer used by the CLI to score Kubernetes manifests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, List, Mapping, Sequence

from .adapters import (
    CheckExecutionError,
    CheckRunner,
    ManifestLoader,
    ManifestLoaderError,
    ResourceCheck,
)
from .checks import CheckPackError, CheckPackManager
from .normalization import ManifestNormalizer
from .scorecard import Scorecard

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScoringResult:
    """Result returned by :class:`ScoringService` runs."""

    scorecard: Scorecard
    metadata: Mapping[str, Any]


ManifestLoaderFactory = Callable[[Sequence[str]], ManifestLoader]


class ScoringService:
    """High level service responsible for manifest ingestion and check execution."""

    def __init__(
        self,
        *,
        loader_factory: ManifestLoaderFactory | None = None,
        normalizer: ManifestNormalizer | None = None,
        pack_manager: CheckPackManager | None = None,
        checks: Sequence[ResourceCheck] | None = None,
    ) -> None:
        self._loader_factory = loader_factory or ManifestLoader
        self._normalizer = normalizer or ManifestNormalizer()
        self._pack_manager = pack_manager or CheckPackManager()
        self._checks = list(checks or [])

    # ------------------------------------------------------------------
    def score(
        self,
        paths: Sequence[str | Path],
        *,
        check_manifests: Sequence[str | Path] | None = None,
        ignored_checks: Iterable[str] | None = None,
        enabled_optional: Iterable[str] | None = None,
        max_workers: int = 1,
    ) -> ScoringResult:
        """Execute a scoring run and return the populated scorecard."""

        loader = self._loader_factory([str(path) for path in paths])
        documents = loader.load_documents()
        resources = self._normalizer.normalize(documents)

        packs = self._pack_manager.enabled_packs(check_manifests)
        checks: List[ResourceCheck] = list(self._checks)
        checks.extend(self._pack_manager.load_checks(packs))

        ignored = list(ignored_checks or [])
        optional = list(enabled_optional or [])
        for pack in packs:
            ignored.extend(pack.ignore)
            optional.extend(pack.enable_optional)

        runner = CheckRunner(
            checks,
            ignored_checks=ignored,
            enabled_optional=optional,
            max_workers=max_workers,
        )
        scorecard = runner.run(resources, Scorecard())

        logger.info(
            "Scored %d resources from %d documents with %d checks",
            len(scorecard),
            len(documents),
            len(runner.checks),
        )

        metadata: dict[str, Any] = {
            "paths": [str(path) for path in paths],
            "document_count": len(documents),
            "resource_count": len(scorecard),
            "check_count": len(runner.checks),
        }

        return ScoringResult(scorecard=scorecard, metadata=metadata)


__all__ = [
    "CheckExecutionError",
    "CheckPackError",
    "ManifestLoaderError",
    "ScoringResult",
    "ScoringService",
]
