"""Core domain models for relnamer.

This module defines the record every component of the engine exchanges: the
Attribute Bag.
- Built fresh per item by the token parser, overlaid by the technical
  normalizer, then read by the name composer and the tag resolver.
- Every field is optional or empty by default so partial bags are valid.
- Serializes verbatim with ``model_dump_json()`` when a workflow needs to keep
  it between steps.

Design:
- AttributeBag is a plain pydantic model; nothing in it is derived state.
- merge_attributes implements the overlay rule (fill-only unless forced).
- DirectoryAnalysis is the shape produced by the directory-scanning
  collaborator and consumed by the classifier.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field

NO_TAG = "NoTag"
"""Sentinel release group used when none was detected."""

COMPLETE = "COMPLETE"
"""Sentinel season designator for full-series packs."""


class AudioTrack(BaseModel):
    """One normalized audio track, kept for presentation output."""

    language: str = "Unknown"
    """Normalized language display name (e.g. 'Anglais', 'VFF')."""

    codec: str = ""
    """Canonical codec, optionally followed by the commercial name in parentheses."""

    channels: str = ""
    """Channel layout token ('7.1', '5.1', '2.0', '1.0') or empty."""

    bitrate: str = ""
    """Human readable bitrate ('640 kb/s') or empty."""


class AttributeBag(BaseModel):
    """Canonical merged record of inferred release attributes for one item.

    Filled incrementally from filename tokens and the technical report. The
    composer and the tag resolver only read it.
    """

    title: Optional[str] = None
    """Title recovered from the name (everything before the first tag)."""

    year: Optional[str] = None
    """Four digit release year."""

    season: Optional[str] = None
    """Season designator: 'S<nn>' or the COMPLETE sentinel."""

    episode: Optional[str] = None
    """Episode designator: 'E<nn>'."""

    resolution: Optional[str] = None
    """'2160p', '1080p', '720p' or '480p'."""

    video_codec: Optional[str] = None
    """Canonical video codec token ('x264', 'x265', 'AV1', ...)."""

    video_bitrate: Optional[str] = None
    """Human readable video bitrate, for presentation only."""

    container: Optional[str] = None
    """Container ('MKV', 'MP4', 'AVI', or an ebook format)."""

    extension: Optional[str] = None
    """Explicit file extension, preferred over the container for tagging."""

    hdr: List[str] = Field(default_factory=list)
    """HDR formats in detection order; the composer applies priority order."""

    audio_codecs: List[str] = Field(default_factory=list)
    """Canonical audio codecs, Atmos/DTS:X folded into the token."""

    audio_channels: Optional[str] = None
    """Channel layout of the primary audio track."""

    audio_languages: List[str] = Field(default_factory=list)
    """Audio languages; order matters for presentation, not for naming."""

    audio_tracks: List[AudioTrack] = Field(default_factory=list)
    """Per-track descriptors from the technical report."""

    subtitle_languages: List[str] = Field(default_factory=list)
    """Subtitle entries such as 'Français (Forcés SRT)'."""

    source: Optional[str] = None
    """Primary source token (REMUX, WEB-DL, WEBRip, BluRay, HDTV, ...)."""

    release_group: Optional[str] = None
    """Release group; see group_or_sentinel for the composed value."""

    info: Optional[str] = None
    """Info flag (REPACK, PROPER, ...)."""

    edition: Optional[str] = None
    """Edition flag (UNRATED, EXTENDED, ...)."""

    language: Optional[str] = None
    """Advisory language ('MULTi', 'FRENCH', or a marker from the name)."""

    language_info: Optional[str] = None
    """Free-text secondary language marker appended after the language slot."""

    is_vostfr: bool = False
    """Original audio with French subtitles."""

    imax: bool = False
    three_d: bool = False
    three_d_type: Optional[str] = None
    platform: Optional[str] = None
    """Streaming platform tag (NF, AMZN, ...)."""

    tags: List[str] = Field(default_factory=list)
    """Free-text markers found in the name (extra source keywords, language markers)."""

    genres: List[str] = Field(default_factory=list)
    """Genre display names, used by the tag resolver only."""

    episode_count: int = 0
    """Number of episode files behind this item, when known."""

    @property
    def group_or_sentinel(self: "AttributeBag") -> str:
        """Release group, or the NoTag sentinel when absent."""
        return self.release_group or NO_TAG


class DirectoryAnalysis(BaseModel):
    """Result of inspecting a directory's video files.

    Produced by the directory-scanning collaborator (see
    relnamer.core.scanner.analyze_video_files) and used by the classifier.
    """

    is_directory: bool = False
    is_series_pack: bool = False
    video_files: List[str] = Field(default_factory=list)
    detected_season: Optional[str] = None
    """Single season token ('S01'), COMPLETE for several seasons, or None."""

    episode_count: int = 0


def _is_set(value: Any) -> bool:  # noqa: ANN401
    return bool(value)


def merge_attributes(
    base: AttributeBag, overlay: AttributeBag, *, force: bool = False
) -> AttributeBag:
    """Overlay *overlay* onto *base* and return a new bag.

    A field already set on *base* is kept unless *force* is True; unset fields
    on *overlay* never erase anything.

    Args:
        base: Bag built so far (typically from the filename).
        overlay: Bag produced by a later pass (typically the technical report).
        force: Overwrite fields that *base* already carries.

    Returns:
        A new AttributeBag; neither input is modified.
    """
    # Reason: model_copy(update=...) inserts values as-is, so the overlay is
    # copied first to keep its lists out of the merged bag.
    fresh = overlay.model_copy(deep=True)
    update: dict[str, Any] = {}
    for name in AttributeBag.model_fields:
        incoming = getattr(fresh, name)
        if not _is_set(incoming):
            continue
        if force or not _is_set(getattr(base, name)):
            update[name] = incoming
    return base.model_copy(update=update, deep=True)
