"""Tag resolver.

Matches attribute values against a taxonomy snapshot and returns the set of
tag identifiers describing a release.

Matching tiers for one value (first hit wins):
    1. exact normalized name, within the hinted category and its variants
    2. alias substring, same scope
    3. raw substring, same scope
    4. exact, then alias, then substring across every category
Genres use exact and alias matching inside genre categories only.

The taxonomy is an argument; this module keeps no cache.
"""

import logging
import re
import unicodedata
from pathlib import PurePath
from typing import Callable, Iterable, List, Optional, Set

from relnamer.core.composer import LanguageSet, source_part
from relnamer.models.core import AttributeBag
from relnamer.models.taxonomy import Tag, TagCategory, Taxonomy
from relnamer.models.variant import Episode, Movie, SeasonPack, is_series
from relnamer.rules.vocabulary import (
    CATEGORY_VARIANTS,
    GENRE_ALIASES,
    TAG_ALIASES,
    TELEFILM_NAMES,
)

logger = logging.getLogger(__name__)

SUBTITLE_SUFFIX = re.compile(r"\s*\(.*\)\s*$")
ATMOS_SUFFIX = re.compile(r"\s+atmos$", re.IGNORECASE)

GENRE_CATEGORY_NAMES = ("genre", "genres")


def normalize(value: str) -> str:
    """Strip diacritics, lower-case and trim."""
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower().strip()


def _aliases(query: str) -> tuple[str, ...]:
    return tuple(normalize(a) for a in TAG_ALIASES.get(query, ()))


def _scoped(taxonomy: Taxonomy, category: Optional[str]) -> List[TagCategory]:
    if not category:
        return list(taxonomy.categories)
    names = {normalize(v) for v in CATEGORY_VARIANTS.get(category, (category,))}
    return [cat for cat in taxonomy.categories if normalize(cat.name) in names]


def _first(
    categories: Iterable[TagCategory], predicate: Callable[[str], bool]
) -> Optional[Tag]:
    for category in categories:
        for tag in category.tags:
            if predicate(normalize(tag.name)):
                return tag
    return None


def _tiers(query: str) -> List[tuple[str, Callable[[str], bool]]]:
    aliases = _aliases(query)
    return [
        ("exact", lambda name: name == query),
        ("alias", lambda name: any(alias in name for alias in aliases)),
        ("substring", lambda name: query in name),
    ]


def find_tag_id_by_name(
    taxonomy: Optional[Taxonomy], value: Optional[str], category: Optional[str] = None
) -> Optional[str]:
    """Resolve *value* to a tag id, or None when nothing matches.

    Args:
        taxonomy: Taxonomy snapshot; None or empty yields None.
        value: Display value to look up; empty yields None.
        category: Optional category hint (variants from CATEGORY_VARIANTS apply).

    Returns:
        The tag id of the first match in tier order.
    """
    if not taxonomy or not taxonomy.categories or not value or not value.strip():
        return None
    query = normalize(value)
    tiers = _tiers(query)

    if category:
        scope = _scoped(taxonomy, category)
        for tier, predicate in tiers:
            tag = _first(scope, predicate)
            if tag:
                logger.debug("%r -> %s (%s in %s)", value, tag.id, tier, category)
                return tag.id

    for tier, predicate in tiers:
        tag = _first(taxonomy.categories, predicate)
        if tag:
            logger.debug("%r -> %s (%s, all categories)", value, tag.id, tier)
            return tag.id
    return None


def _first_of(
    taxonomy: Taxonomy, *values: str, category: Optional[str] = None
) -> Optional[str]:
    for value in values:
        tag_id = find_tag_id_by_name(taxonomy, value, category)
        if tag_id:
            return tag_id
    return None


def find_genre_tag_id(taxonomy: Taxonomy, genre: str) -> Optional[str]:
    """Exact or alias match restricted to genre categories; no substring tier."""
    query = normalize(genre)
    aliases = {normalize(a) for a in GENRE_ALIASES.get(query, ())}
    if query in TELEFILM_NAMES:
        aliases |= {normalize(name) for name in TELEFILM_NAMES}
    scope = [
        cat for cat in taxonomy.categories if normalize(cat.name) in GENRE_CATEGORY_NAMES
    ]
    tag = _first(scope, lambda name: name == query) or _first(
        scope, lambda name: name in aliases
    )
    return tag.id if tag else None


def _genre_tags(taxonomy: Taxonomy, genres: List[str]) -> List[Optional[str]]:
    normalized = [normalize(g) for g in genres]
    if len(normalized) == 1 and normalized[0] in TELEFILM_NAMES:
        return [find_genre_tag_id(taxonomy, genres[0])]
    # A TV-film tag only applies when it is the sole genre.
    return [
        find_genre_tag_id(taxonomy, genre)
        for genre, norm in zip(genres, normalized)
        if norm not in TELEFILM_NAMES
    ]


def _language_tags(taxonomy: Taxonomy, bag: AttributeBag) -> List[Optional[str]]:
    langs = LanguageSet.from_languages(bag.audio_languages)
    markers = {t.upper() for t in bag.tags}
    has_vfq = langs.vfq or "VFQ" in markers
    has_vff = langs.vff or "VFF" in markers

    if bag.is_vostfr:
        return [find_tag_id_by_name(taxonomy, "VOSTFR")]
    if has_vfq:
        return [find_tag_id_by_name(taxonomy, "VFQ")]
    if has_vff:
        return [find_tag_id_by_name(taxonomy, "VFF")]
    if len(bag.audio_languages) > 1:
        tags = [find_tag_id_by_name(taxonomy, "MULTI")]
        if langs.french:
            tags.append(_first_of(taxonomy, "French", "Français"))
        if langs.english:
            tags.append(_first_of(taxonomy, "English", "Anglais"))
        return tags
    if langs.french:
        return [_first_of(taxonomy, "French", "Français")]
    if langs.english:
        return [_first_of(taxonomy, "English", "Anglais")]
    return []


def _extension(bag: AttributeBag, path: Optional[str | PurePath]) -> Optional[str]:
    if bag.extension:
        return bag.extension
    if bag.container:
        return bag.container
    if path:
        suffix = PurePath(str(path)).suffix
        return suffix.lstrip(".") or None
    return None


def resolve_tags(
    variant: Movie | SeasonPack | Episode,
    bag: AttributeBag,
    taxonomy: Optional[Taxonomy],
    *,
    path: Optional[str | PurePath] = None,
) -> Set[str]:
    """Resolve the tag-id set for a release.

    Args:
        variant: Movie, SeasonPack or Episode.
        bag: Attributes to resolve; only read.
        taxonomy: Taxonomy snapshot; an empty one yields an empty set.
        path: Optional item path, used for the extension when the bag has none.

    Returns:
        Deduplicated set of tag ids.
    """
    if not taxonomy or not taxonomy.categories:
        return set()
    found: List[Optional[str]] = []

    if is_series(variant):
        found.append(_first_of(taxonomy, "Série", "Serie", category="Type"))
        if isinstance(variant, SeasonPack):
            found.append(_first_of(taxonomy, "Pack Saison", "Saison"))
    else:
        found.append(find_tag_id_by_name(taxonomy, "Film", "Type"))

    if bag.resolution:
        found.append(find_tag_id_by_name(taxonomy, bag.resolution, "Résolution"))

    for source in filter(None, source_part(bag).split(".")):
        found.append(find_tag_id_by_name(taxonomy, source, "Source"))

    if bag.video_codec:
        found.append(find_tag_id_by_name(taxonomy, bag.video_codec, "Codec vidéo"))

    for hdr in bag.hdr:
        found.append(find_tag_id_by_name(taxonomy, hdr, "HDR"))
    if bag.three_d:
        found.append(find_tag_id_by_name(taxonomy, "3D", "HDR"))
    if bag.imax:
        found.append(find_tag_id_by_name(taxonomy, "IMAX", "HDR"))

    for codec in bag.audio_codecs:
        found.append(
            find_tag_id_by_name(taxonomy, codec, "Codec audio")
            or find_tag_id_by_name(taxonomy, ATMOS_SUFFIX.sub("", codec), "Codec audio")
        )

    for language in bag.audio_languages:
        found.append(find_tag_id_by_name(taxonomy, language, "Langue audio"))

    for subtitle in bag.subtitle_languages:
        found.append(
            find_tag_id_by_name(taxonomy, SUBTITLE_SUFFIX.sub("", subtitle), "Sous-titres")
        )

    found.append(find_tag_id_by_name(taxonomy, _extension(bag, path), "Extension"))
    found.extend(_language_tags(taxonomy, bag))

    if bag.genres:
        found.extend(_genre_tags(taxonomy, bag.genres))

    return {tag_id for tag_id in found if tag_id}
