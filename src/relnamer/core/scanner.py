"""Directory scanner for release folders.

This module lists the video files of a release folder and derives the
directory analysis the variant classifier consumes.
- collect_video_files: walks a directory (bounded depth) and returns the video
  file names, sorted.
- analyze_video_files: pure analysis over a list of file names.
- analyze_directory: convenience wrapper doing both for a filesystem path.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from relnamer.models.core import COMPLETE, DirectoryAnalysis
from relnamer.rules.vocabulary import VIDEO_EXTENSIONS

# Logger for this module
logger = logging.getLogger(__name__)

# EPISODE_PATTERN is deliberately loose: any S/E designator or "Episode"/"Ep"
# marker makes a file episode-like.
EPISODE_PATTERN = re.compile(r"[SE]\d{1,2}|Episode|Ep\d", re.IGNORECASE)
SEASON_PATTERN = re.compile(r"S(\d{1,2})", re.IGNORECASE)

# More than this many videos in one folder makes it a pack even without
# episode markers.
PACK_VIDEO_THRESHOLD = 3


@dataclass
class ScanOptions:
    """Options for the scan process."""

    max_depth: int = 3
    include_hidden: bool = False


def collect_video_files(root: Path, max_depth: int = 3) -> List[str]:
    """Collect video file names under *root*, recursing at most *max_depth* levels.

    Unreadable subdirectories are skipped with a debug trace.

    Args:
        root: Directory to walk.
        max_depth: Maximum recursion depth below *root*.

    Returns:
        Sorted list of file names (not paths).
    """
    options = ScanOptions(max_depth=max_depth)
    names: List[str] = []
    _walk(root, 0, options, names)
    return sorted(names)


def _walk(path: Path, depth: int, options: ScanOptions, names: List[str]) -> None:
    if depth > options.max_depth:
        return
    try:
        entries = list(path.iterdir())
    except (PermissionError, FileNotFoundError, OSError) as e:
        logger.debug("Skipping unreadable directory %s: %s", path, e)
        return
    for entry in entries:
        if entry.name.startswith(".") and not options.include_hidden:
            continue
        if entry.is_dir():
            _walk(entry, depth + 1, options, names)
        elif entry.suffix.lower() in VIDEO_EXTENSIONS:
            names.append(entry.name)


def analyze_video_files(
    names: Iterable[str], is_directory: bool = True
) -> DirectoryAnalysis:
    """Derive pack/season signals from a list of video file names.

    A folder is a series pack when more than one file looks like an episode or
    when it holds more than three videos. One distinct season token yields that
    season; several yield COMPLETE.

    Args:
        names: Video file names.
        is_directory: Whether the names come from a directory listing.

    Returns:
        DirectoryAnalysis for the classifier.
    """
    video_files = sorted(names)
    seasons: set[str] = set()
    episode_count = 0
    for name in video_files:
        if EPISODE_PATTERN.search(name):
            episode_count += 1
        match = SEASON_PATTERN.search(name)
        if match:
            seasons.add(f"S{int(match.group(1)):02d}")

    detected_season = None
    if len(seasons) == 1:
        detected_season = next(iter(seasons))
    elif len(seasons) > 1:
        detected_season = COMPLETE

    analysis = DirectoryAnalysis(
        is_directory=is_directory,
        is_series_pack=episode_count > 1 or len(video_files) > PACK_VIDEO_THRESHOLD,
        video_files=video_files,
        detected_season=detected_season,
        episode_count=episode_count,
    )
    logger.debug(
        "Directory analysis: %d videos, %d episodes, season=%s, pack=%s",
        len(video_files),
        episode_count,
        detected_season,
        analysis.is_series_pack,
    )
    return analysis


def analyze_directory(path: Path, max_depth: int = 3) -> DirectoryAnalysis:
    """Analyze *path*; a plain file yields an empty non-directory analysis."""
    if not path.is_dir():
        return DirectoryAnalysis(is_directory=False)
    return analyze_video_files(collect_video_files(path, max_depth=max_depth))
