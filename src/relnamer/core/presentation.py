"""BBCode presentation for tracker upload descriptions.

External metadata (poster, rating, overview) is optional and supplied by the
caller as a plain mapping; nothing here fetches it.
"""

from typing import Any, List, Mapping, Optional

from relnamer.models.core import AttributeBag
from relnamer.models.variant import Episode, Movie, SeasonPack

ACCENT = "#eab308"
NOT_SPECIFIED = "Non spécifié"

_UNITS = ((1024**3, "GiB"), (1024**2, "MiB"), (1024, "KiB"))


def format_size(size: int) -> str:
    """Human readable binary size, two decimals.

    >>> format_size(1536)
    '1.50 KiB'
    """
    for factor, unit in _UNITS:
        if size >= factor:
            return f"{size / factor:.2f} {unit}"
    return f"{size} B"


def _number(designator: Optional[str]) -> str:
    # "S01" -> "1", "E10" -> "10"
    if not designator:
        return "?"
    digits = designator.lstrip("SEse").lstrip("0")
    return digits or "0"


def season_line(variant: Movie | SeasonPack | Episode, bag: AttributeBag) -> str:
    """Season/episode caption for series, empty for movies."""
    if isinstance(variant, SeasonPack):
        line = "Série Complète" if variant.complete else f"Saison {_number(variant.season)}"
        count = variant.episode_count or bag.episode_count
        if count > 0:
            line += f" ({count} épisodes)"
        return line
    if isinstance(variant, Episode) and variant.season and variant.episode:
        return f"Saison {_number(variant.season)} - Épisode {_number(variant.episode)}"
    return ""


def audio_section(bag: AttributeBag) -> str:
    if bag.audio_tracks:
        lines: List[str] = []
        for track in bag.audio_tracks:
            line = track.language
            if track.codec:
                line += f" : {track.codec}"
            if track.channels:
                line += f" {track.channels}"
            if track.bitrate:
                line += f" @ {track.bitrate}"
            lines.append(line)
        return "\n".join(lines)
    if bag.audio_languages:
        return "\n".join(bag.audio_languages)
    return bag.language or NOT_SPECIFIED


def subtitles_section(bag: AttributeBag) -> str:
    return "\n".join(bag.subtitle_languages) if bag.subtitle_languages else "Aucun"


def render_presentation(
    variant: Movie | SeasonPack | Episode,
    bag: AttributeBag,
    details: Optional[Mapping[str, Any]] = None,
    total_size: int = 0,
) -> str:
    """Render the BBCode description of a release.

    Args:
        variant: Movie, SeasonPack or Episode.
        bag: Release attributes.
        details: Optional external metadata with any of ``title``, ``year``,
            ``poster_url``, ``rating``, ``genres``, ``overview``.
        total_size: Size in bytes; 0 prints "Variable".

    Returns:
        BBCode text.
    """
    details = details or {}
    title = details.get("title") or bag.title or "Unknown Title"
    year = details.get("year") or bag.year or ""
    genres = ", ".join(details.get("genres") or bag.genres) or NOT_SPECIFIED
    rating = details.get("rating") or "N/A"
    overview = details.get("overview") or "Aucune description disponible."
    hdr = " / ".join(bag.hdr)
    quality = bag.resolution or NOT_SPECIFIED
    if hdr:
        quality += f" {hdr}"

    lines = ["[center]"]
    if details.get("poster_url"):
        lines += [f"[img]{details['poster_url']}[/img]", ""]
    heading = f"{title} ({year})" if year else title
    lines.append(f"[size=6][color={ACCENT}][b]{heading}[/b][/color][/size]")
    caption = season_line(variant, bag)
    if caption:
        lines.append(f"[size=4][b]{caption}[/b][/size]")
    lines += [
        "",
        f"[b]Note :[/b] {rating}",
        f"[b]Genre :[/b] {genres}",
        "",
        f"[quote]{overview}[/quote]",
        "",
        f"[color={ACCENT}][b]--- DÉTAILS ---[/b][/color]",
        "",
        f"[b]Qualité :[/b] {quality}",
        f"[b]Format :[/b] {bag.container or 'MKV'}",
        f"[b]Codec Vidéo :[/b] {bag.video_codec or NOT_SPECIFIED}",
        "[b]Audio :[/b]",
        audio_section(bag),
        "[b]Sous-titres :[/b]",
        subtitles_section(bag),
        f"[b]Taille :[/b] {format_size(total_size) if total_size else 'Variable'}",
        "[/center]",
    ]
    return "\n".join(lines)
