"""Core functionality for relnamer.

This package exposes the engine's five pure operations:
- parse_name: filename/directory name -> partial AttributeBag.
- normalize_technical_report: analyzer report -> partial AttributeBag.
- classify_variant: (path, bag, directory analysis) -> Movie/SeasonPack/Episode.
- compose_name: (variant, bag) -> canonical release name.
- resolve_tags: (variant, bag, taxonomy) -> set of tag ids.
"""

from relnamer.core.classifier import UnsupportedMediaError, classify_variant
from relnamer.core.composer import compose_name
from relnamer.core.tag_resolver import resolve_tags
from relnamer.core.technical import normalize_technical_report
from relnamer.core.token_parser import parse_name

# Reason: Only expose the engine API to consumers of the core package.
__all__ = [
    "UnsupportedMediaError",
    "classify_variant",
    "compose_name",
    "normalize_technical_report",
    "parse_name",
    "resolve_tags",
]
