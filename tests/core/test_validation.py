"""Tests for required-field validation."""

from relnamer.core.validation import is_complete, missing_fields
from relnamer.models.core import AttributeBag
from relnamer.models.variant import Episode, Movie, SeasonPack


def test_movie_requires_title_resolution_and_year() -> None:
    assert missing_fields(Movie(), AttributeBag()) == ["title", "resolution", "year"]
    bag = AttributeBag(title="Movie", resolution="1080p", year="2019")
    assert is_complete(Movie(), bag)


def test_season_pack_requires_season() -> None:
    bag = AttributeBag(title="Show", resolution="1080p")
    assert missing_fields(SeasonPack(), bag) == ["season"]
    assert missing_fields(SeasonPack(season="S01"), bag) == []


def test_episode_requires_episode() -> None:
    bag = AttributeBag(title="Show", resolution="720p", season="S01")
    assert missing_fields(Episode(season="S01"), bag) == ["episode"]
    assert is_complete(Episode(season="S01", episode="E02"), bag)


def test_year_is_optional_for_series() -> None:
    bag = AttributeBag(title="Show", resolution="720p", season="S01", episode="E02")
    assert is_complete(Episode(), bag)
