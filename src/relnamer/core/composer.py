"""Release-name composer.

Serializes a (variant, AttributeBag) pair into the tracker's canonical release
name: an ordered list of slots, empty slots skipped, joined with ".", followed
by "-<group>".

Slot order:
    Movie:  title, 3D, year, info, edition, IMAX, language, secondary
            language, HDR, resolution, platform, source, audio codecs,
            channels, audio specs, video codec.
    Series: title, 3D, year, season/episode designator, then the same slots
            as a movie from info onwards.

Every helper below is pure; compose_name is idempotent for equal inputs.
"""

import logging
import re
import unicodedata
from dataclasses import dataclass, field
from typing import List, Optional

from relnamer.models.core import COMPLETE, NO_TAG, AttributeBag
from relnamer.models.variant import Episode, Movie, SeasonPack
from relnamer.rules.base import NamingPolicy
from relnamer.rules.vocabulary import (
    ENGLISH_NAMES,
    FRENCH_NAMES,
    HDR_PRIORITY,
    SOURCE_CANONICAL,
    SOURCE_PATTERNS,
    VIDEO_CODEC_CANONICAL,
)

logger = logging.getLogger(__name__)

FORBIDDEN_TITLE_CHARS = re.compile(r"[,;}{\[\]:]")
APOSTROPHES = re.compile(r"['’‘`]")
REPEATED_DOTS = re.compile(r"\.{2,}")
DOLBY_VISION = re.compile(r"DOLBY VISION")
WHITESPACE = re.compile(r"\s+")


def _strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _capitalize_word(word: str) -> str:
    # Acronyms (fully upper-case, at most four characters) are kept as-is.
    if word == word.upper() and len(word) <= 4:
        return word
    return word[:1].upper() + word[1:].lower()


def normalize_title(title: Optional[str]) -> str:
    """Normalize a title for use in a release name.

    Strips diacritics, turns apostrophes and hyphens into dots, removes
    ``, ; } { [ ] :`` and capitalizes every word except short acronyms.

    >>> normalize_title("L'Été dernier")
    'L.Ete.Dernier'
    """
    if not title:
        return ""
    normalized = _strip_diacritics(title)
    normalized = normalized.replace("ç", "c").replace("Ç", "C")
    normalized = APOSTROPHES.sub(".", normalized)
    normalized = FORBIDDEN_TITLE_CHARS.sub("", normalized)
    normalized = normalized.replace("-", ".")
    words = [w for w in re.split(r"[\s.]+", normalized) if w]
    normalized = ".".join(_capitalize_word(w) for w in words)
    normalized = REPEATED_DOTS.sub(".", normalized)
    return normalized.strip(".")


def detect_french_variant(
    release_group: Optional[str],
    tags: Optional[List[str]],
    policy: Optional[NamingPolicy] = None,
) -> str:
    """Guess VFF or VFQ from release-group and tag text."""
    policy = policy or NamingPolicy()
    text = " ".join([release_group or "", *(tags or [])])
    return policy.french_variant(text)


@dataclass
class LanguageSet:
    """Audio languages bucketed for the language-slot decision."""

    english: bool = False
    vff: bool = False
    vfq: bool = False
    french: bool = False
    others: List[str] = field(default_factory=list)
    """Languages outside {VFF, VFQ, French, English}, input spelling kept."""

    @classmethod
    def from_languages(cls, languages: List[str]) -> "LanguageSet":
        buckets = cls()
        for lang in languages:
            low = lang.strip().lower()
            if low in ENGLISH_NAMES:
                buckets.english = True
            elif low == "vff":
                buckets.vff = True
            elif low == "vfq":
                buckets.vfq = True
            elif _is_french(low):
                buckets.french = True
            elif low and low != "unknown" and lang not in buckets.others:
                buckets.others.append(lang)
        return buckets


def _is_french(lowered: str) -> bool:
    return any(name in lowered for name in FRENCH_NAMES)


def language_parts(bag: AttributeBag, policy: Optional[NamingPolicy] = None) -> List[str]:
    """Compute the language slot: at most one token.

    The token is a total function of the VOSTFR flag and the set of audio
    languages; ``bag.language`` is only used when no audio language is known
    or when no branch applies.
    """
    if bag.is_vostfr:
        return ["VOSTFR"]

    token: Optional[str] = None
    if bag.audio_languages:
        s = LanguageSet.from_languages(bag.audio_languages)
        tagged_french = s.vff or s.vfq
        # English counts as another language next to generic French.
        non_french = s.english or bool(s.others)

        if s.english and not (tagged_french or s.french or s.others):
            token = "VOSTFR"
        elif s.english and tagged_french and not s.others:
            token = "MULTI"
        elif s.vff and s.vfq and not (s.french or non_french):
            token = "MULTI"
        elif s.vff and not (s.vfq or s.french or non_french):
            token = "VFF"
        elif s.vfq and not (s.vff or s.french or non_french):
            token = "VFQ"
        elif s.french and not tagged_french and non_french:
            token = "MULTI"
        elif s.french and not tagged_french:
            token = detect_french_variant(bag.release_group, bag.tags, policy)
        elif len(s.others) > 1:
            token = "MULTI"
        elif len(s.others) == 1:
            token = s.others[0].upper()

    if token is None and bag.language:
        upper = bag.language.upper()
        token = "MULTi" if upper == "MULTI" else upper
    return [token] if token else []


def language_info_parts(bag: AttributeBag) -> List[str]:
    """Secondary-language slot: TrueFrench/VFQ next to other audio, plus free text."""
    parts: List[str] = []
    s = LanguageSet.from_languages(bag.audio_languages)
    if (s.vff or s.vfq) and (s.english or s.others):
        parts.append("VFQ" if s.vfq else "TrueFrench")
    if bag.language_info:
        parts.append(bag.language_info.upper())
    return parts


def source_part(bag: AttributeBag) -> str:
    """Union of every known source keyword in source, group and tags."""
    text = " ".join([bag.source or "", bag.release_group or "", *bag.tags])
    detected: List[str] = [
        name for name, pattern in SOURCE_PATTERNS.items() if pattern.search(text)
    ]
    if bag.source:
        canonical = SOURCE_CANONICAL.get(bag.source.lower(), bag.source)
        if canonical not in detected:
            detected.append(canonical)
    return ".".join(detected)


def hdr_parts(hdr: List[str]) -> List[str]:
    """Canonical HDR labels, deduplicated, in priority order.

    Labels outside the priority list sort last and keep their input order.
    """
    labels: List[str] = []
    for entry in hdr:
        label = DOLBY_VISION.sub("DV", entry.strip().upper())
        if label and label not in labels:
            labels.append(label)
    rank = {label: index for index, label in enumerate(HDR_PRIORITY)}
    return sorted(labels, key=lambda label: rank.get(label, len(HDR_PRIORITY)))


def _audio_codec_token(codec: str) -> str:
    upper = codec.upper()
    if "TRUEHD" in upper:
        return "TrueHD"
    if "E-AC3" in upper or "EAC3" in upper:
        return "EAC3"
    if "DTS" in upper:
        return "DTS"
    return re.sub(r"\s+ATMOS", "", upper)


def audio_parts(bag: AttributeBag) -> List[str]:
    """Audio codecs, channel layout, then audio specs (Atmos, DTS:X)."""
    parts: List[str] = []
    codecs: List[str] = []
    for codec in bag.audio_codecs:
        token = _audio_codec_token(codec)
        if token and token not in codecs:
            codecs.append(token)
    if codecs:
        parts.append(".".join(codecs))
    if bag.audio_channels:
        parts.append(bag.audio_channels)

    specs: List[str] = []
    for codec in bag.audio_codecs:
        lower = codec.lower()
        if "atmos" in lower and "Atmos" not in specs:
            specs.append("Atmos")
        if ("dts:x" in lower or "dtsx" in lower) and "DTS:X" not in specs:
            specs.append("DTS:X")
    if specs:
        parts.append(".".join(specs))
    return parts


def codec_part(codec: Optional[str]) -> str:
    if not codec:
        return ""
    upper = codec.upper()
    return VIDEO_CODEC_CANONICAL.get(upper, upper)


def resolution_part(resolution: Optional[str]) -> str:
    if not resolution:
        return ""
    res = resolution.lower()
    return res if res.endswith("p") else f"{res}p"


def format_season(season: Optional[str], complete: bool = False) -> str:
    """Designator for a season pack: COMPLETE or S<nn>."""
    if complete or (season and season.upper() in (COMPLETE, "INTEGRALE")):
        return COMPLETE
    return season.upper() if season else ""


def format_episode(season: Optional[str], episode: Optional[str]) -> str:
    """Designator for an episode: S<nn>E<nn>, E<nn> or S<nn>."""
    if season and episode:
        return f"{season.upper()}{episode.upper()}"
    if episode:
        return episode.upper()
    return season.upper() if season else ""


def _lead_parts(bag: AttributeBag) -> List[str]:
    parts = [normalize_title(bag.title)]
    if bag.three_d:
        parts.append("3D")
    if bag.three_d_type:
        parts.append(bag.three_d_type)
    parts.append(bag.year or "")
    return parts


def _tail_parts(bag: AttributeBag, policy: Optional[NamingPolicy]) -> List[str]:
    parts = [
        bag.info.upper() if bag.info else "",
        bag.edition or "",
        "iMAX" if bag.imax else "",
        *language_parts(bag, policy),
        *language_info_parts(bag),
        *hdr_parts(bag.hdr),
        resolution_part(bag.resolution),
        bag.platform.upper() if bag.platform else "",
        source_part(bag),
        *audio_parts(bag),
        codec_part(bag.video_codec),
    ]
    return parts


def _join(parts: List[str], group: str) -> str:
    cleaned = (WHITESPACE.sub(".", p.strip()).strip(".") for p in parts if p)
    base = ".".join(p for p in cleaned if p)
    base = REPEATED_DOTS.sub(".", base)
    return f"{base}-{group}"


def compose_name(
    variant: Movie | SeasonPack | Episode,
    bag: AttributeBag,
    policy: Optional[NamingPolicy] = None,
) -> str:
    """Compose the canonical release name for *variant* and *bag*.

    Args:
        variant: Movie, SeasonPack or Episode.
        bag: Attributes to serialize; only read.
        policy: Naming policy; defaults apply when omitted.

    Returns:
        The release name, always ending with ``-<group>``.
    """
    policy = policy or NamingPolicy()
    parts = _lead_parts(bag)
    if isinstance(variant, SeasonPack):
        parts.append(format_season(variant.season or bag.season, variant.complete))
    elif isinstance(variant, Episode):
        parts.append(
            format_episode(variant.season or bag.season, variant.episode or bag.episode)
        )
    parts.extend(_tail_parts(bag, policy))

    name = _join(parts, bag.release_group or policy.default_group or NO_TAG)
    logger.debug("Composed %s name: %s", variant.kind, name)
    return name
