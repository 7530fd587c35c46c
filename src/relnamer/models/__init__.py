"""Domain models for the relnamer application."""

from relnamer.models.core import (
    COMPLETE,
    NO_TAG,
    AttributeBag,
    AudioTrack,
    DirectoryAnalysis,
    merge_attributes,
)
from relnamer.models.report import TechnicalReport
from relnamer.models.taxonomy import Tag, TagCategory, Taxonomy
from relnamer.models.variant import (
    Episode,
    Movie,
    SeasonPack,
    Variant,
    VariantKind,
    derive_is_pack,
    is_series,
)

__all__ = [
    "COMPLETE",
    "NO_TAG",
    "AttributeBag",
    "AudioTrack",
    "DirectoryAnalysis",
    "merge_attributes",
    "TechnicalReport",
    "Tag",
    "TagCategory",
    "Taxonomy",
    "Episode",
    "Movie",
    "SeasonPack",
    "Variant",
    "VariantKind",
    "derive_is_pack",
    "is_series",
]
