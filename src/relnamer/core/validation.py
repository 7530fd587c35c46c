"""Required-field checks run before composing a name.

The composer always produces a best-effort name; whether missing fields block
an upload is the caller's decision.
"""

from typing import List

from relnamer.models.core import AttributeBag
from relnamer.models.variant import Episode, Movie, SeasonPack


def missing_fields(variant: Movie | SeasonPack | Episode, bag: AttributeBag) -> List[str]:
    """Return the names of required fields that are empty, in display order."""
    missing: List[str] = []
    if not bag.title:
        missing.append("title")
    if not bag.resolution:
        missing.append("resolution")
    if isinstance(variant, Movie):
        if not bag.year:
            missing.append("year")
        return missing
    season = variant.season or bag.season
    if not season:
        missing.append("season")
    if isinstance(variant, Episode) and not (variant.episode or bag.episode):
        missing.append("episode")
    return missing


def is_complete(variant: Movie | SeasonPack | Episode, bag: AttributeBag) -> bool:
    return not missing_fields(variant, bag)
