"""Conversion helpers that turn decoded manifest documents into scorable resources."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping

from ..models import ResourceIdentity

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from ..adapters.manifest_loader import ManifestDocument

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ManifestResource:
    """A Kubernetes object ready to be registered and checked."""

    identity: ResourceIdentity
    metadata: Dict[str, Any] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)
    source_path: str = ""

    @property
    def kind(self) -> str:
        return self.identity.kind


class ManifestNormalizer:
    """Normalize manifest documents into :class:`ManifestResource` instances."""

    def normalize(self, documents: Iterable[ManifestDocument]) -> List[ManifestResource]:
        """Return resources for every Kubernetes object found in ``documents``."""

        resources: List[ManifestResource] = []
        for document in documents:
            resources.extend(self._normalize_object(document.content, document.path))
        return resources

    # ------------------------------------------------------------------
    def _normalize_object(self, content: Any, source_path: str) -> List[ManifestResource]:
        if not isinstance(content, Mapping):
            logger.debug("Skipping non-mapping document in %s", source_path)
            return []

        kind = content.get("kind")
        if not kind:
            logger.debug("Skipping document without kind in %s", source_path)
            return []

        if kind == "List":
            items = content.get("items") or []
            expanded: List[ManifestResource] = []
            for item in items:
                expanded.extend(self._normalize_object(item, source_path))
            return expanded

        metadata = content.get("metadata")
        if not isinstance(metadata, Mapping):
            metadata = {}

        identity = ResourceIdentity(
            kind=str(kind),
            api_version=str(content.get("apiVersion") or ""),
            namespace=str(metadata.get("namespace") or ""),
            name=str(metadata.get("name") or ""),
        )

        return [
            ManifestResource(
                identity=identity,
                metadata=dict(metadata),
                body=dict(content),
                source_path=source_path,
            )
        ]
