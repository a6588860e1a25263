from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, TextIO

import yaml

logger = logging.getLogger(__name__)

MANIFEST_EXTENSIONS = (".yaml", ".yml", ".json")
STDIN_PATH = "-"


class ManifestLoaderError(RuntimeError):
    """Exception raised when manifest files cannot be read or parsed."""


@dataclass(slots=True)
class ManifestDocument:
    """A single decoded document from a manifest stream."""

    path: str
    index: int
    content: Any


class ManifestLoader:
    """Load Kubernetes manifest documents from files, directories or stdin."""

    def __init__(
        self,
        paths: Iterable[str | os.PathLike[str]],
        *,
        stdin: TextIO | None = None,
    ) -> None:
        self.paths = [str(path) for path in paths]
        self.stdin = stdin

    def load_documents(self) -> List[ManifestDocument]:
        """Return every non-empty document found in the configured paths."""

        documents: List[ManifestDocument] = []
        for file_path in self._resolve_files():
            if file_path == STDIN_PATH:
                stream = self.stdin if self.stdin is not None else sys.stdin
                documents.extend(self._parse_stream(self._read_stream(stream), "<stdin>"))
                continue

            documents.extend(self._parse_stream(self._read_file(Path(file_path)), file_path))

        logger.debug("Loaded %d manifest documents from %d paths", len(documents), len(self.paths))
        return documents

    # Path resolution ------------------------------------------------------------
    def _resolve_files(self) -> List[str]:
        files: List[str] = []
        for raw_path in self.paths:
            if raw_path == STDIN_PATH:
                files.append(raw_path)
                continue

            path = Path(raw_path)
            if path.is_dir():
                files.extend(str(candidate) for candidate in self._discover_manifests(path))
            elif path.exists():
                files.append(str(path))
            else:
                raise ManifestLoaderError(f"Manifest path not found: {path}")
        return files

    def _discover_manifests(self, directory: Path) -> List[Path]:
        discovered = [
            file_path
            for file_path in directory.rglob("*")
            if file_path.is_file() and file_path.suffix.lower() in MANIFEST_EXTENSIONS
        ]
        return sorted(discovered)

    # Parsing --------------------------------------------------------------------
    def _read_file(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestLoaderError(f"Failed to read manifest {path}") from exc

    def _read_stream(self, stream: TextIO) -> str:
        try:
            return stream.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestLoaderError("Failed to read manifest from stdin") from exc

    def _parse_stream(self, content: str, source: str) -> List[ManifestDocument]:
        try:
            decoded = list(yaml.safe_load_all(content))
        except yaml.YAMLError as exc:
            raise ManifestLoaderError(f"Invalid YAML in manifest {source}") from exc

        return [
            ManifestDocument(path=source, index=index, content=document)
            for index, document in enumerate(decoded)
            if document is not None
        ]


__all__ = ["ManifestDocument", "ManifestLoader", "ManifestLoaderError"]
