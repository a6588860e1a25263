"""Normalization of decoded manifests into scorable resources."""

from .manifest_normalizer import ManifestNormalizer, ManifestResource

__all__ = ["ManifestNormalizer", "ManifestResource"]
