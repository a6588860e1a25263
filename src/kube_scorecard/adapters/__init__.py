"""Adapter layer package for manifest ingestion and check execution."""

from .check_runner import CheckExecutionError, CheckRunner, FunctionCheck, ResourceCheck
from .manifest_loader import ManifestDocument, ManifestLoader, ManifestLoaderError

__all__ = [
    "CheckExecutionError",
    "CheckRunner",
    "FunctionCheck",
    "ManifestDocument",
    "ManifestLoader",
    "ManifestLoaderError",
    "ResourceCheck",
]
