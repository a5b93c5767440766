"""Workspace template parsing: identity normalization and manifest loading."""

from .manifest import ManifestParser, load_manifest, parse_manifest
from .names import parse_identity, parse_kind, parse_name, parse_reference

__all__ = [
    "ManifestParser",
    "load_manifest",
    "parse_manifest",
    "parse_identity",
    "parse_kind",
    "parse_name",
    "parse_reference",
]
