"""Technical-metadata normalizer.

Maps an analyzer report (general/video/audio/text tracks) onto the attribute
vocabulary used by the token parser: container, resolution, video codec, HDR,
audio codecs/channels/languages and subtitle descriptors.

Unparseable numeric fields are skipped; a malformed report never aborts the
pass.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from relnamer.models.core import AttributeBag, AudioTrack
from relnamer.models.report import AUDIO, GENERAL, TEXT, VIDEO, TechnicalReport
from relnamer.rules.vocabulary import FRANCE_REGIONS, LANGUAGE_MAP, QUEBEC_REGIONS

logger = logging.getLogger(__name__)

VOSTFR_LANGUAGE_PATTERN = re.compile(r"VOSTFR|VO[\s-]*STF?R?", re.IGNORECASE)
VF_LANGUAGE_PATTERN = re.compile(r"VF[FQ]", re.IGNORECASE)
LEADING_WORD_PATTERN = re.compile(r"^([\w\-]+)")
LEADING_INT_PATTERN = re.compile(r"^\s*(\d+)")

FRENCH_FAMILY = ("français", "vff", "vfq")

# (width, height, label): the first row where either dimension reaches its
# threshold wins.
RESOLUTION_THRESHOLDS = (
    (3840, 2100, "2160p"),
    (1920, 1000, "1080p"),
    (1280, 700, "720p"),
)


def parse_int(value: Any) -> Optional[int]:  # noqa: ANN401
    """Parse leading digits of *value*; None when there are none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if value is None:
        return None
    match = LEADING_INT_PATTERN.match(str(value))
    return int(match.group(1)) if match else None


def normalize_language(value: Optional[str]) -> str:
    """Normalize an analyzer language field to the tracker's display name.

    Examples:
        ``"en"`` -> ``"Anglais"``, ``"fr-CA"`` -> ``"VFQ"``,
        ``"French (VFF)"`` -> ``"VFF"``, ``""`` -> ``"Unknown"``.
    """
    if not value or not value.strip():
        return "Unknown"
    lang = value.strip()

    if VOSTFR_LANGUAGE_PATTERN.search(lang):
        return "VOSTFR"
    vf = VF_LANGUAGE_PATTERN.search(lang)
    if vf:
        return vf.group(0).upper()

    match = LEADING_WORD_PATTERN.match(lang)
    if not match:
        return lang
    base = match.group(1).lower()
    primary, _, region = base.partition("-")
    if primary in ("fr", "fre", "fra", "french", "français") and region:
        if region in QUEBEC_REGIONS:
            return "VFQ"
        if region in FRANCE_REGIONS:
            return "VFF"
    if base in LANGUAGE_MAP:
        return LANGUAGE_MAP[base]
    return LANGUAGE_MAP.get(primary, lang)


def is_french_family(language: str) -> bool:
    lower = language.lower()
    return any(marker in lower for marker in FRENCH_FAMILY)


def _container(general: Optional[Dict[str, Any]]) -> Optional[str]:
    if not general or not general.get("Format"):
        return None
    fmt = str(general["Format"])
    if "Matroska" in fmt:
        return "MKV"
    if "MPEG-4" in fmt:
        return "MP4"
    if "AVI" in fmt:
        return "AVI"
    return fmt


def _resolution(width: int, height: int) -> Optional[str]:
    for min_width, min_height, label in RESOLUTION_THRESHOLDS:
        if width >= min_width or height >= min_height:
            return label
    if width > 0 or height > 0:
        return "480p"
    return None


def _video_codec(video: Dict[str, Any]) -> Optional[str]:
    fmt = str(video.get("Format") or "")
    library = str(video.get("Encoded_Library") or video.get("Encoded_Library_Name") or "")
    if "x265" in library or fmt in ("HEVC", "H.265"):
        return "x265"
    if "x264" in library or fmt in ("AVC", "H.264"):
        return "x264"
    if fmt == "AV1":
        return "AV1"
    return fmt or None


def _bitrate(value: Any, precision: int = 1) -> Optional[str]:  # noqa: ANN401
    rate = parse_int(value)
    if rate is None:
        return None
    if rate >= 1_000_000:
        return f"{rate / 1_000_000:.{precision}f} Mb/s"
    if rate >= 1000:
        return f"{rate / 1000:.0f} kb/s"
    return None


def _hdr(video: Dict[str, Any]) -> List[str]:
    hdr: List[str] = []
    hdr_format = str(video.get("HDR_Format") or "")
    compatibility = str(video.get("HDR_Format_Compatibility") or "")
    if hdr_format:
        if "HDR10+" in hdr_format:
            hdr.append("HDR10+")
        elif "HDR10" in hdr_format:
            hdr.append("HDR10")
        elif "HDR" in hdr_format:
            hdr.append("HDR")
        if "Dolby Vision" in hdr_format or "HDR10" in compatibility:
            hdr.append("DV")
    if "HLG" in str(video.get("transfer_characteristics") or ""):
        hdr.append("HLG")
    return hdr


def _audio_codec(track: Dict[str, Any]) -> str:
    fmt = str(track.get("Format") or "")
    commercial = str(track.get("Format_Commercial_IfAny") or track.get("Format_Commercial") or "")
    features = str(track.get("Format_AdditionalFeatures") or "")

    if "E-AC-3" in fmt or "EAC3" in fmt:
        codec = "EAC3"
    elif "AC-3" in fmt or fmt == "AC3":
        codec = "AC3"
    elif "DTS" in fmt:
        if "DTS:X" in commercial or "XLL X" in features:
            codec = "DTS:X"
        elif "DTS-HD MA" in fmt or "Master Audio" in commercial or "XLL" in features:
            codec = "DTS-HD MA"
        elif "DTS-HD" in fmt or "DTS-HD" in commercial:
            codec = "DTS-HD"
        else:
            codec = "DTS"
    elif "MLP" in fmt or "TrueHD" in fmt:
        codec = "TrueHD"
    elif "AAC" in fmt:
        codec = "AAC"
    elif "FLAC" in fmt:
        codec = "FLAC"
    elif "Opus" in fmt:
        codec = "Opus"
    else:
        codec = fmt

    if "Atmos" in commercial or "Atmos" in features or "JOC" in features:
        codec = f"{codec} Atmos"
    return codec


def _channels(value: Any) -> str:  # noqa: ANN401
    count = parse_int(value) or 0
    if count >= 8:
        return "7.1"
    if count >= 6:
        return "5.1"
    if count >= 2:
        return "2.0"
    if count == 1:
        return "1.0"
    return ""


def _subtitle(track: Dict[str, Any]) -> str:
    language = normalize_language(track.get("Language"))
    title = str(track.get("Title") or "").lower()
    fmt = str(track.get("Format") or "")

    if "forced" in title or track.get("Forced") == "Yes":
        kind = "Forcés"
    elif "sdh" in title:
        kind = "SDH"
    elif "full" in title:
        kind = "Complet"
    else:
        kind = ""

    if any(marker in fmt for marker in ("UTF-8", "SubRip", "ASS", "SSA")):
        fmt_class = "SRT"
    elif "PGS" in fmt or "HDMV" in fmt:
        fmt_class = "PGS"
    else:
        fmt_class = ""

    suffix = " ".join(part for part in (kind, fmt_class) if part)
    return f"{language} ({suffix})" if suffix else language


def normalize_technical_report(report: TechnicalReport | dict | list) -> AttributeBag:
    """Normalize an analyzer report into a partial AttributeBag.

    Args:
        report: TechnicalReport, or raw analyzer output accepted by
            TechnicalReport.from_mediainfo.

    Returns:
        AttributeBag carrying only the technical fields that could be derived.
    """
    report = TechnicalReport.from_mediainfo(report)
    bag = AttributeBag()

    video = report.first_of(VIDEO)
    if video:
        bag.container = _container(report.first_of(GENERAL))
        bag.resolution = _resolution(
            parse_int(video.get("Width")) or 0, parse_int(video.get("Height")) or 0
        )
        bag.video_codec = _video_codec(video)
        bag.video_bitrate = _bitrate(video.get("BitRate"))
        bag.hdr = _hdr(video)

    audio_tracks = report.tracks_of(AUDIO)
    for track in audio_tracks:
        language = normalize_language(track.get("Language") or track.get("Title"))
        codec = _audio_codec(track)
        channels = _channels(track.get("Channels"))
        commercial = str(track.get("Format_Commercial_IfAny") or track.get("Format_Commercial") or "")

        bag.audio_languages.append(language)
        if codec and codec not in bag.audio_codecs:
            bag.audio_codecs.append(codec)
        if channels and not bag.audio_channels:
            bag.audio_channels = channels
        bag.audio_tracks.append(
            AudioTrack(
                language=language,
                codec=f"{codec} ({commercial})" if commercial and commercial not in codec else codec,
                channels=channels,
                bitrate=_bitrate(track.get("BitRate"), precision=0) or "",
            )
        )

    if bag.audio_languages:
        has_french = any(is_french_family(lang) for lang in bag.audio_languages)
        has_other = any(not is_french_family(lang) for lang in bag.audio_languages)
        if has_french and has_other:
            bag.language = "MULTi"
        elif has_french:
            bag.language = "FRENCH"

    bag.subtitle_languages = [_subtitle(track) for track in report.tracks_of(TEXT)]

    logger.debug(
        "Normalized report: %d tracks -> %s",
        len(report.tracks),
        bag.model_dump(exclude_defaults=True, exclude={"audio_tracks"}),
    )
    return bag
