"""Media variant classifier.

Decides whether an item is a Movie, a SeasonPack or an Episode. Signals are
consulted in a fixed order: explicit override, directory analysis, name
patterns, attributes already parsed, then the Movie default. Ebooks and games
are recognized only to be rejected; they are classified outside this engine.
"""

import logging
import re
from pathlib import PurePath
from typing import Optional

from relnamer.models.core import COMPLETE, AttributeBag, DirectoryAnalysis
from relnamer.models.variant import Episode, Movie, SeasonPack, Variant, VariantKind

logger = logging.getLogger(__name__)

EBOOK_PATTERN = re.compile(r"\.(epub|pdf|mobi|azw3?|cbr|cbz)$", re.IGNORECASE)
GAME_PATTERN = re.compile(
    r"\b(setup|install|crack|keygen|plaza|codex|skidrow|fitgirl|gog|drm.?free)\b",
    re.IGNORECASE,
)

# Reason: checked before episode patterns so "Show.S01.1080p" is a pack even
# though "S01" alone also looks like a season hint of an episode.
SEASON_PACK_PATTERNS = [
    re.compile(r"\bS\d{1,2}\b(?!E)", re.IGNORECASE),
    re.compile(r"\bSaison\s?\d{1,2}\b", re.IGNORECASE),
    re.compile(r"\bSeason\s?\d{1,2}\b", re.IGNORECASE),
    re.compile(r"\bComplete\b", re.IGNORECASE),
    re.compile(r"\bInt[eé]grale\b", re.IGNORECASE),
    re.compile(r"\bS\d{1,2}\.?COMPLETE\b", re.IGNORECASE),
]
EPISODE_PATTERNS = [
    re.compile(r"\bS\d{1,2}E\d{1,3}\b", re.IGNORECASE),
    re.compile(r"\b\d{1,2}x\d{2,3}\b", re.IGNORECASE),
    re.compile(r"\bE\d{1,3}\b", re.IGNORECASE),
    re.compile(r"Episode\s?\d{1,3}", re.IGNORECASE),
]


class UnsupportedMediaError(ValueError):
    """Raised for ebook or game inputs, which this engine does not name."""


def _season_pack(season: Optional[str], episode_count: int = 0) -> SeasonPack:
    complete = bool(season) and season.upper() in (COMPLETE, "INTEGRALE")
    return SeasonPack(
        season=COMPLETE if complete else season,
        complete=complete,
        episode_count=episode_count,
    )


def _episode(bag: AttributeBag) -> Episode:
    return Episode(season=bag.season, episode=bag.episode)


def _forced(kind: VariantKind | str, bag: AttributeBag) -> Variant:
    kind = VariantKind(kind)
    if kind is VariantKind.MOVIE:
        return Movie()
    if kind is VariantKind.SEASON:
        return _season_pack(bag.season, bag.episode_count)
    return _episode(bag)


def classify_variant(
    path: str | PurePath,
    bag: AttributeBag,
    directory_analysis: Optional[DirectoryAnalysis] = None,
    forced: Optional[VariantKind | str] = None,
) -> Variant:
    """Classify an item into a Movie, SeasonPack or Episode.

    Args:
        path: File or directory path (only the last component is matched).
        bag: Attributes parsed so far.
        directory_analysis: Optional result of scanning the item's directory.
        forced: Optional explicit kind chosen by the operator.

    Returns:
        The variant. Same inputs always give the same variant.

    Raises:
        UnsupportedMediaError: If the name looks like an ebook or a game.
        ValueError: If *forced* is not a known kind.
    """
    if forced:
        variant = _forced(forced, bag)
        logger.debug("Forced variant %s", variant.kind)
        return variant

    name = PurePath(str(path)).name

    if directory_analysis is not None:
        if directory_analysis.is_series_pack:
            logger.debug("Directory analysis flags a pack: %s", name)
            return _season_pack(
                directory_analysis.detected_season or bag.season,
                directory_analysis.episode_count,
            )
        if directory_analysis.episode_count == 1 and (bag.season or bag.episode):
            return _episode(bag)

    if EBOOK_PATTERN.search(name):
        raise UnsupportedMediaError(f"Ebook files are not handled: {name}")
    if GAME_PATTERN.search(name):
        raise UnsupportedMediaError(f"Game releases are not handled: {name}")

    if any(pattern.search(name) for pattern in SEASON_PACK_PATTERNS):
        return _season_pack(bag.season, bag.episode_count)
    if any(pattern.search(name) for pattern in EPISODE_PATTERNS):
        return _episode(bag)

    if bag.season and bag.episode:
        return _episode(bag)
    if bag.season:
        return _season_pack(bag.season, bag.episode_count)
    return Movie()
