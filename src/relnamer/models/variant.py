"""Media variants: Movie, SeasonPack, Episode.

A variant decides which slot template the composer applies and which type tags
the resolver selects. Variants are a tagged union discriminated on ``kind``;
the composer and resolver are free functions that dispatch on it.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class VariantKind(str, Enum):
    """Kind of release. Values match the ``kind`` tag of each variant model."""

    MOVIE = "movie"
    SEASON = "season"
    EPISODE = "episode"


class Movie(BaseModel):
    """A single film."""

    kind: Literal["movie"] = "movie"


class SeasonPack(BaseModel):
    """A season (or complete series) pack. Never carries an episode designator."""

    kind: Literal["season"] = "season"
    season: Optional[str] = None
    complete: bool = False
    """Full-series pack; composes as COMPLETE."""

    episode_count: int = 0


class Episode(BaseModel):
    """A single episode. At most one season and one episode designator."""

    kind: Literal["episode"] = "episode"
    season: Optional[str] = None
    episode: Optional[str] = None


Variant = Annotated[Union[Movie, SeasonPack, Episode], Field(discriminator="kind")]


def is_series(variant: Movie | SeasonPack | Episode) -> bool:
    """Return True for SeasonPack and Episode."""
    return variant.kind != VariantKind.MOVIE.value


def derive_is_pack(episode: Optional[str], episode_count: int) -> bool:
    """Compute whether series material is a pack.

    An explicit episode designator always means a single episode; otherwise
    more than one episode file means a pack.
    """
    if episode and str(episode).strip():
        return False
    return episode_count > 1
