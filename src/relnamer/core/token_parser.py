"""Token parser for release file and directory names.

Extracts structured hints (year, season/episode, source, release markers,
release group) from a free-form name using ordered pattern matching, and
recovers the title as everything before the first recognized tag.

Resolution and video codec are never taken from the name; the technical report
is the authority for those.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from relnamer.models.core import COMPLETE, AttributeBag
from relnamer.rules.vocabulary import (
    EBOOK_EXTENSIONS,
    EDITION_FLAGS,
    FRENCH_MARKERS,
    INFO_FLAGS,
    PLATFORM_MARKERS,
    RESOLUTION_TOKENS,
    SOURCE_CANONICAL,
    SOURCE_TOKEN_PATTERN,
    VIDEO_EXTENSIONS,
)

logger = logging.getLogger(__name__)


def _ext_pattern(extensions: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(ext.lstrip(".")) for ext in extensions)
    return re.compile(rf"\.({alternatives})$", re.IGNORECASE)


def _word_pattern(words: tuple[str, ...], flags: int = 0) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(w).replace(r"\.", "[. ]") for w in words)
    return re.compile(rf"\b({alternatives})\b", flags)


VIDEO_EXT_PATTERN = _ext_pattern(VIDEO_EXTENSIONS)
EBOOK_EXT_PATTERN = _ext_pattern(EBOOK_EXTENSIONS)
GROUP_PATTERN = re.compile(r"-([A-Za-z0-9\[\]]+)$")
RESOLUTION_PATTERN = re.compile(
    rf"\b({'|'.join(RESOLUTION_TOKENS)})\b", re.IGNORECASE
)
YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")
SEASON_EPISODE_PATTERN = re.compile(r"\bS(\d{1,2})E(\d{1,3})\b", re.IGNORECASE)
SEASON_PATTERN = re.compile(
    r"\b(?:Season|Saison)\s?(\d{1,2})\b|\bS(\d{1,2})\b|\b(Complete|Int[eé]grale)\b",
    re.IGNORECASE,
)
EPISODE_PATTERN = re.compile(
    r"\bEpisode\s?(\d{1,3})\b|\bE(\d{1,3})\b", re.IGNORECASE
)
VOSTFR_PATTERN = re.compile(r"(?:^|[.\s\-_])VOSTFR(?:[.\s\-_]|$)", re.IGNORECASE)
INFO_PATTERN = _word_pattern(INFO_FLAGS)
EDITION_PATTERN = _word_pattern(EDITION_FLAGS)
LANGUAGE_MARKER_PATTERN = re.compile(
    rf"\b({'|'.join(FRENCH_MARKERS)}|MULTi)\b"
)
PLATFORM_PATTERN = _word_pattern(PLATFORM_MARKERS)
IMAX_PATTERN = re.compile(r"\bIMAX\b", re.IGNORECASE)
THREE_D_PATTERN = re.compile(r"\b3D\b")


@dataclass
class Span:
    """Extent of one recognized tag inside the cleaned name."""

    kind: str
    start: int
    end: int
    text: str


@dataclass
class ParsedName:
    """Partial attribute bag plus the spans that produced it."""

    attributes: AttributeBag
    spans: List[Span] = field(default_factory=list)
    cleaned: str = ""
    """Name the spans index into (last path component, extension stripped)."""

    @property
    def first_tag_index(self) -> int:
        """Start of the earliest title-bounding span, or len(cleaned)."""
        starts = [s.start for s in self.spans if s.kind != "release_group"]
        return min(starts, default=len(self.cleaned))


def _pad(prefix: str, number: str) -> str:
    return f"{prefix}{int(number):02d}"


def _last_component(raw: str) -> str:
    return re.split(r"[/\\]", raw.strip().rstrip("/\\"))[-1].strip()


def _pick_year(matches: List[re.Match[str]]) -> Optional[re.Match[str]]:
    # A year at the very start is part of the title when another year follows.
    if not matches:
        return None
    if matches[0].start() == 0 and len(matches) > 1:
        return matches[1]
    return matches[0]


def _inside_source(text: str, group: re.Match[str]) -> bool:
    # "WEB-DL" or "Blu-Ray" at the end of a name is not a release group.
    return any(
        m.start() < group.start() and m.end() >= group.end(1)
        for m in SOURCE_TOKEN_PATTERN.finditer(text)
    )


def _clean_title(text: str) -> str:
    title = text.replace(".", " ").replace("_", " ").strip()
    title = title.rstrip("-() ").strip()
    return re.sub(r"\s{2,}", " ", title)


def tokenize_name(raw: str) -> ParsedName:
    """Tokenize *raw* into a partial AttributeBag and matched spans.

    Args:
        raw: File or directory name (a full path is accepted; only the last
            component is parsed).

    Returns:
        ParsedName with the partial bag, the spans and the cleaned name.
    """
    name = _last_component(raw)
    bag = AttributeBag()
    spans: List[Span] = []

    name = VIDEO_EXT_PATTERN.sub("", name)
    ebook = EBOOK_EXT_PATTERN.search(name)
    if ebook:
        bag.container = ebook.group(1).upper()
        name = name[: ebook.start()]

    # Word boundaries do not split on "_"; match against a same-length copy.
    text = name.replace("_", " ")

    group = GROUP_PATTERN.search(text)
    if (
        group
        and not RESOLUTION_PATTERN.fullmatch(group.group(1))
        and not _inside_source(text, group)
    ):
        bag.release_group = group.group(1)
        spans.append(Span("release_group", group.start(1), group.end(1), group.group(1)))

    year = _pick_year(list(YEAR_PATTERN.finditer(text)))
    if year:
        bag.year = year.group(0)
        spans.append(Span("year", year.start(), year.end(), year.group(0)))

    sxe = SEASON_EPISODE_PATTERN.search(text)
    if sxe:
        bag.season = _pad("S", sxe.group(1))
        bag.episode = _pad("E", sxe.group(2))
        spans.append(Span("season_episode", sxe.start(), sxe.end(), sxe.group(0)))
    else:
        season = SEASON_PATTERN.search(text)
        if season:
            if season.group(3):
                bag.season = COMPLETE
            else:
                bag.season = _pad("S", season.group(1) or season.group(2))
            spans.append(Span("season", season.start(), season.end(), season.group(0)))
        episode = EPISODE_PATTERN.search(text)
        if episode:
            bag.episode = _pad("E", episode.group(1) or episode.group(2))
            spans.append(Span("episode", episode.start(), episode.end(), episode.group(0)))

    for match in SOURCE_TOKEN_PATTERN.finditer(text):
        token = match.group(1)
        canonical = SOURCE_CANONICAL.get(token.lower(), token)
        if bag.source is None:
            bag.source = canonical
        if canonical not in bag.tags:
            bag.tags.append(canonical)
        spans.append(Span("source", match.start(), match.end(), token))

    resolution = RESOLUTION_PATTERN.search(text)
    if resolution:
        # Boundary only: the technical report decides the resolution.
        spans.append(Span("resolution", resolution.start(), resolution.end(), resolution.group(0)))

    info = INFO_PATTERN.search(text)
    if info:
        bag.info = info.group(1)
        spans.append(Span("info", info.start(), info.end(), info.group(0)))

    edition = EDITION_PATTERN.search(text)
    if edition:
        bag.edition = edition.group(1).replace(" ", ".")
        spans.append(Span("edition", edition.start(), edition.end(), edition.group(0)))

    for match in LANGUAGE_MARKER_PATTERN.finditer(text):
        marker = match.group(1)
        canonical = "MULTi" if marker.upper() == "MULTI" else marker
        if bag.language is None:
            bag.language = canonical
        if canonical not in bag.tags:
            bag.tags.append(canonical)
        spans.append(Span("language", match.start(), match.end(), marker))

    platform = PLATFORM_PATTERN.search(text)
    if platform:
        bag.platform = platform.group(1)
        spans.append(Span("platform", platform.start(), platform.end(), platform.group(0)))

    imax = IMAX_PATTERN.search(text)
    if imax:
        bag.imax = True
        spans.append(Span("imax", imax.start(), imax.end(), imax.group(0)))

    three_d = THREE_D_PATTERN.search(text)
    if three_d:
        bag.three_d = True
        spans.append(Span("three_d", three_d.start(), three_d.end(), three_d.group(0)))

    vostfr = VOSTFR_PATTERN.search(text)
    if vostfr:
        bag.is_vostfr = True
        spans.append(Span("vostfr", vostfr.start(), vostfr.end(), vostfr.group(0)))

    parsed = ParsedName(attributes=bag, spans=spans, cleaned=name)
    title = _clean_title(name[: parsed.first_tag_index])
    if title:
        bag.title = title

    logger.debug("Parsed %r -> %s", raw, bag.model_dump(exclude_defaults=True))
    return parsed


def parse_name(raw: str) -> AttributeBag:
    """Parse a free-form name into a partial AttributeBag."""
    return tokenize_name(raw).attributes
