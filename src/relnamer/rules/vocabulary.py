"""Fixed vocabularies shared by the parser, the composer and the tag resolver.

The tracker's naming convention and taxonomy are French; display names below
are the ones the tracker uses (e.g. 'Anglais', 'Résolution').

Tables:
- LANGUAGE_MAP: ISO 639-1/639-2 codes and English/native names -> display name.
- SOURCE_PATTERNS / SOURCE_CANONICAL: source keyword detection and spelling.
- HDR_PRIORITY: serialization order of HDR formats.
- TAG_ALIASES / CATEGORY_VARIANTS / GENRE_ALIASES: taxonomy matching tables.
"""

import re

# Reason: the parser strips these from names and the scanner counts only these
# towards the episode tally; sidecars and samples in other formats are ignored.
VIDEO_EXTENSIONS = (".mkv", ".mp4", ".avi", ".m4v", ".wmv", ".iso")
EBOOK_EXTENSIONS = (".epub", ".pdf", ".mobi", ".azw", ".azw3", ".cbr", ".cbz")

RESOLUTION_TOKENS = ("4320p", "2160p", "1080p", "720p", "576p", "480p")

# Reason: display names are the ones used by the tracker's taxonomy, so a
# normalized language resolves to a "Langue audio" tag by exact match.
LANGUAGE_MAP: dict[str, str] = {
    "french": "Français",
    "français": "Français",
    "francais": "Français",
    "fr": "Français",
    "fre": "Français",
    "fra": "Français",
    "english": "Anglais",
    "en": "Anglais",
    "eng": "Anglais",
    "spanish": "Espagnol",
    "español": "Espagnol",
    "es": "Espagnol",
    "spa": "Espagnol",
    "german": "Allemand",
    "deutsch": "Allemand",
    "de": "Allemand",
    "ger": "Allemand",
    "deu": "Allemand",
    "italian": "Italien",
    "italiano": "Italien",
    "it": "Italien",
    "ita": "Italien",
    "portuguese": "Portugais",
    "português": "Portugais",
    "pt": "Portugais",
    "por": "Portugais",
    "japanese": "Japonais",
    "ja": "Japonais",
    "jpn": "Japonais",
    "korean": "Coréen",
    "ko": "Coréen",
    "kor": "Coréen",
    "chinese": "Chinois",
    "zh": "Chinois",
    "chi": "Chinois",
    "zho": "Chinois",
    "russian": "Russe",
    "ru": "Russe",
    "rus": "Russe",
    "arabic": "Arabe",
    "ar": "Arabe",
    "ara": "Arabe",
}

# Regional French subtags; anything else under "fr" falls through to LANGUAGE_MAP.
QUEBEC_REGIONS = frozenset({"ca", "qc"})
FRANCE_REGIONS = frozenset({"fr", "be", "ch"})

# Markers the language-slot algorithm treats as French-family or English.
ENGLISH_NAMES = frozenset({"anglais", "english", "en"})
FRENCH_NAMES = ("français", "francais", "french")

# Reason: alternation order matters; at a given position the longer WEB-DL and
# WEBRip spellings must win over the bare WEB keyword.
SOURCE_TOKEN_PATTERN = re.compile(
    r"\b(REMUX|Blu-?Ray|BDRip|BRRip|WEB-?DL|WEB-?Rip|WEB|HDTV|DVD-?Rip|HDLight|4KLight)\b",
    re.IGNORECASE,
)

# Union patterns used when aggregating sources from free text. WEB only
# counts as a whole token so that WEB-DL/WEBRip do not also yield WEB.
SOURCE_PATTERNS: dict[str, re.Pattern[str]] = {
    "REMUX": re.compile(r"REMUX", re.IGNORECASE),
    "WEB-DL": re.compile(r"WEB-?DL", re.IGNORECASE),
    "WEB": re.compile(r"(?:^|[\s.\[(])WEB(?=$|[\s.\])])", re.IGNORECASE),
    "WEBRip": re.compile(r"WEB.?RIP", re.IGNORECASE),
    "HDTV": re.compile(r"HDTV", re.IGNORECASE),
    "HDLight": re.compile(r"HDLIGHT", re.IGNORECASE),
    "4KLight": re.compile(r"4KLIGHT", re.IGNORECASE),
    "BluRay": re.compile(r"BLU-?RAY|BDRIP|BRRIP", re.IGNORECASE),
    "DVDRip": re.compile(r"DVD-?RIP", re.IGNORECASE),
}

SOURCE_CANONICAL: dict[str, str] = {
    "web-dl": "WEB-DL",
    "webdl": "WEB-DL",
    "webrip": "WEBRip",
    "web-rip": "WEBRip",
    "web": "WEB",
    "bluray": "BluRay",
    "blu-ray": "BluRay",
    "bdrip": "BluRay",
    "brrip": "BluRay",
    "remux": "REMUX",
    "hdlight": "HDLight",
    "4klight": "4KLight",
    "dvdrip": "DVDRip",
    "dvd-rip": "DVDRip",
    "hdtv": "HDTV",
}

INFO_FLAGS = ("REPACK", "PROPER", "REAL", "RERIP")
EDITION_FLAGS = (
    "UNRATED",
    "EXTENDED",
    "REMASTERED",
    "UNCUT",
    "DIRECTORS.CUT",
    "THEATRICAL",
)
# Scene spellings, matched case-sensitively so title words like "French" survive.
FRENCH_MARKERS = ("TRUEFRENCH", "FRENCH", "MULTI", "VFF", "VFQ", "VF2")
PLATFORM_MARKERS = ("AMZN", "NF", "DSNP", "ATVP", "HMAX", "PCOK", "HULU", "CR")

HDR_PRIORITY = ("HDR10+", "HDR10", "HDR", "DV", "HLG", "SDR")

VIDEO_CODEC_CANONICAL: dict[str, str] = {
    "H264": "x264",
    "H.264": "x264",
    "AVC": "x264",
    "X264": "x264",
    "H265": "x265",
    "H.265": "x265",
    "HEVC": "x265",
    "X265": "x265",
}

# Reason: aliases are matched as substrings of the normalized tag name, so
# "x264" finds a tag called "AVC/H264/x264" in any snapshot.
TAG_ALIASES: dict[str, tuple[str, ...]] = {
    "x264": ("avc/h264/x264", "avc", "h264"),
    "x265": ("hevc/h265/x265", "hevc", "h265"),
    "ac3": ("ac3", "dolby digital"),
    "francais": ("french", "français", "fr"),
    "french": ("francais", "français", "fr"),
    "anglais": ("english", "en"),
    "english": ("anglais", "en"),
    "web-dl": ("web-dl", "webdl"),
    "vff": ("vff",),
    "vfq": ("vfq",),
    "multi": ("multi",),
    "1080p": ("1080p (full hd)", "1080p"),
    "2160p": ("2160p (4k)", "2160p", "4k"),
    "720p": ("720p (hd)", "720p"),
    "sd": ("sd",),
    "remux": ("remux",),
    "bluray": ("bluray", "blu-ray"),
    "mkv": ("mkv",),
    "mp4": ("mp4",),
    "avi": ("avi",),
    "iso": ("iso",),
    "autres": ("autres", "autres extensions", "autres sous-titres", "autres audio"),
}

# Reason: taxonomy snapshots label the same category differently; a hint
# matches any of its variants.
CATEGORY_VARIANTS: dict[str, tuple[str, ...]] = {
    "Source": ("Source", "Source / Type"),
    "Source / Type": ("Source", "Source / Type"),
    "Langue audio": ("Langue audio", "Langues audio"),
    "Langues audio": ("Langue audio", "Langues audio"),
    "Codec vidéo": ("Codec vidéo",),
    "Codec audio": ("Codec audio",),
    "Extension": ("Extension", "Extensions"),
    "Sous-titres": ("Sous-titres", "Sous titres"),
    "Résolution": ("Résolution", "Qualité / Résolution"),
    "Qualité / Résolution": ("Résolution", "Qualité / Résolution"),
    "Genre": ("Genre", "Genres"),
    "HDR": ("HDR", "Caractéristiques vidéo"),
    "Caractéristiques vidéo": ("HDR", "Caractéristiques vidéo"),
    "Type": ("Type",),
}

# Genre aliases are matched exactly, never as substrings.
GENRE_ALIASES: dict[str, tuple[str, ...]] = {
    "sf": ("science-fiction", "sci-fi"),
    "comedy": ("comédie", "comedy"),
}
TELEFILM_NAMES = frozenset({"telefilm", "téléfilm"})
