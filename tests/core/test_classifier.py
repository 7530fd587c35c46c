"""Tests for the media variant classifier.

This test suite covers:
- Name-pattern classification (packs before episodes, movie default)
- Directory analysis taking precedence over name patterns
- Forced overrides and rejected inputs (ebooks, games)
"""

from pathlib import Path

import pytest

from relnamer.core.classifier import UnsupportedMediaError, classify_variant
from relnamer.core.composer import compose_name
from relnamer.core.scanner import analyze_directory
from relnamer.core.token_parser import parse_name
from relnamer.models.core import COMPLETE, AttributeBag, DirectoryAnalysis
from relnamer.models.variant import Episode, Movie, SeasonPack, VariantKind


def _classify(name: str, **kwargs):  # noqa: ANN202
    return classify_variant(name, parse_name(name), **kwargs)


class TestNamePatterns:
    """Classification from the item name alone."""

    def test_movie_default(self) -> None:
        assert _classify("Example.Movie.2019.1080p.BluRay.x264-GROUP") == Movie()

    def test_episode(self) -> None:
        assert _classify("Show.S01E05.1080p.WEB-DL-GRP.mkv") == Episode(
            season="S01", episode="E05"
        )

    def test_season_pack(self) -> None:
        variant = _classify("Show.S02.1080p.WEB-DL-GRP")
        assert isinstance(variant, SeasonPack)
        assert variant.season == "S02"
        assert variant.complete is False

    def test_complete_series(self) -> None:
        variant = _classify("Show.Complete.Series.1080p")
        assert isinstance(variant, SeasonPack)
        assert variant.complete is True
        assert variant.season == COMPLETE

    def test_episode_only_bag_is_a_movie(self) -> None:
        """Scenario: an episode designator without a season and no name pattern.

        - Only season+episode or season alone decide from the bag.
        - Anything else falls through to Movie.
        """
        bag = AttributeBag(title="Show", episode="E03")
        assert classify_variant("whatever", bag) == Movie()
        assert classify_variant("Some.Title", AttributeBag(episode="E05")).kind == "movie"

    def test_season_only_bag(self) -> None:
        bag = AttributeBag(title="Show", season="S04")
        variant = classify_variant("whatever", bag)
        assert isinstance(variant, SeasonPack)
        assert variant.season == "S04"

    def test_idempotent(self) -> None:
        name = "Show.S01E05.1080p.WEB-DL-GRP"
        bag = parse_name(name)
        assert classify_variant(name, bag) == classify_variant(name, bag)


class TestUnsupported:
    @pytest.mark.parametrize(
        "name", ["Some.Author.Some.Book.epub", "Some.Game.v1.2-CODEX", "Game.Setup.2020"]
    )
    def test_rejected(self, name: str) -> None:
        with pytest.raises(UnsupportedMediaError):
            _classify(name)

    def test_word_boundaries(self) -> None:
        """Scenario: 'gog' inside a title word does not flag a game."""
        assert _classify("Gogol.2017.1080p") == Movie()


class TestForced:
    def test_forced_movie_wins(self) -> None:
        assert _classify("Show.S01E05.1080p", forced="movie") == Movie()

    def test_forced_season_drops_episode(self) -> None:
        variant = _classify("Show.S01E05.1080p", forced=VariantKind.SEASON)
        assert variant == SeasonPack(season="S01")

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            _classify("Show.S01E05.1080p", forced="music")


class TestDirectoryAnalysis:
    """Directory signals take precedence over the name."""

    def test_pack_flag_overrides_episode_name(self) -> None:
        analysis = DirectoryAnalysis(
            is_directory=True, is_series_pack=True, detected_season="S03", episode_count=8
        )
        variant = _classify("Show.S03E01.1080p", directory_analysis=analysis)
        assert variant == SeasonPack(season="S03", episode_count=8)

    def test_single_episode_directory(self) -> None:
        analysis = DirectoryAnalysis(is_directory=True, episode_count=1)
        variant = _classify("Show.S01E02", directory_analysis=analysis)
        assert variant == Episode(season="S01", episode="E02")

    def test_pack_directory_never_composes_an_episode(self, tmp_path: Path) -> None:
        """Scenario: a season folder whose name carries an episode designator.

        - Two episode files make the folder a pack.
        - The composed name must not contain the episode slot.
        """
        folder = tmp_path / "Show.S01E01.1080p.WEB-DL-GRP"
        folder.mkdir()
        (folder / "Show.S01E01.mkv").touch()
        (folder / "Show.S01E02.mkv").touch()

        bag = parse_name(str(folder))
        variant = classify_variant(folder, bag, analyze_directory(folder))

        assert isinstance(variant, SeasonPack)
        assert variant.season == "S01"
        name = compose_name(variant, bag)
        assert name == "Show.S01.WEB-DL-GRP"
        assert "E01" not in name
