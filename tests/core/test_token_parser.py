"""Tests for the release-name token parser.

This test suite covers:
- Title recovery as everything before the first recognized tag
- Year, season/episode, source, release-group and marker extraction
- Names that must not produce spurious tags (years in titles, trailing sources)
"""

from relnamer.core.token_parser import parse_name, tokenize_name
from relnamer.models.core import COMPLETE


class TestMovieNames:
    """Tests for movie-style names."""

    def test_reference_movie_name(self) -> None:
        """Test the canonical movie name.

        Scenario:
        - Title, year, source and group come from the name.
        - Resolution and codec are left for the technical report.
        """
        bag = parse_name("Example.Movie.2019.1080p.BluRay.x264-GROUP")
        assert bag.title == "Example Movie"
        assert bag.year == "2019"
        assert bag.source == "BluRay"
        assert bag.release_group == "GROUP"
        assert bag.resolution is None
        assert bag.video_codec is None

    def test_extension_and_directories_are_stripped(self) -> None:
        """Test that a full path with a video extension parses like the bare name."""
        bag = parse_name("/data/Movies/Example.Movie.2019.1080p.BluRay.x264-GROUP.mkv")
        assert bag.title == "Example Movie"
        assert bag.release_group == "GROUP"

    def test_year_inside_title(self) -> None:
        """Test that a leading year is part of the title when another year follows."""
        bag = parse_name("1917.2019.1080p.BluRay")
        assert bag.year == "2019"
        assert bag.title == "1917"

    def test_underscores_separate_words(self) -> None:
        bag = parse_name("Movie_Name_2018_1080p_BluRay")
        assert bag.title == "Movie Name"
        assert bag.year == "2018"

    def test_trailing_source_is_not_a_group(self) -> None:
        """Test that 'WEB-DL' at the end of a name is a source, not a group '-DL'."""
        bag = parse_name("Movie.2020.WEB-DL")
        assert bag.release_group is None
        assert bag.source == "WEB-DL"

    def test_trailing_resolution_is_not_a_group(self) -> None:
        bag = parse_name("Movie.2020.x264-1080p")
        assert bag.release_group is None

    def test_info_and_edition_flags(self) -> None:
        bag = parse_name("Movie.2019.EXTENDED.REPACK.1080p.BluRay-GRP")
        assert bag.edition == "EXTENDED"
        assert bag.info == "REPACK"
        assert bag.title == "Movie"

    def test_multi_marker_is_canonicalized(self) -> None:
        """Test that both MULTI and MULTi spellings yield 'MULTi'."""
        for raw in ("Movie.2019.MULTI.1080p", "Movie.2019.MULTi.1080p"):
            bag = parse_name(raw)
            assert bag.language == "MULTi"
            assert "MULTi" in bag.tags

    def test_lowercase_french_word_in_title_is_kept(self) -> None:
        """Test that language markers are case-sensitive so title words survive."""
        bag = parse_name("The.French.Dispatch.2021.MULTi.1080p")
        assert bag.title == "The French Dispatch"
        assert bag.language == "MULTi"

    def test_imax_three_d_and_vostfr(self) -> None:
        bag = parse_name("Avatar.2009.3D.IMAX.VOSTFR.1080p")
        assert bag.three_d is True
        assert bag.imax is True
        assert bag.is_vostfr is True
        assert bag.title == "Avatar"

    def test_every_source_token_is_kept(self) -> None:
        """Test that the first source is primary and every source lands in tags."""
        bag = parse_name("Movie.2019.REMUX.BluRay.1080p")
        assert bag.source == "REMUX"
        assert bag.tags[:2] == ["REMUX", "BluRay"]

    def test_ebook_extension_sets_container(self) -> None:
        bag = parse_name("Some.Author.Some.Book.epub")
        assert bag.container == "EPUB"


class TestSeriesNames:
    """Tests for season and episode designators."""

    def test_season_episode(self) -> None:
        bag = parse_name("Show.Name.S01E05.720p.WEB-DL.x264-GRP.mkv")
        assert bag.title == "Show Name"
        assert bag.season == "S01"
        assert bag.episode == "E05"
        assert bag.source == "WEB-DL"
        assert bag.release_group == "GRP"

    def test_season_words_are_zero_padded(self) -> None:
        bag = parse_name("Show Name Saison 2")
        assert bag.season == "S02"
        assert bag.episode is None
        assert bag.title == "Show Name"

    def test_complete_series(self) -> None:
        bag = parse_name("Show.Name.Integrale.FRENCH.1080p")
        assert bag.season == COMPLETE
        assert bag.language == "FRENCH"
        assert bag.title == "Show Name"

    def test_platform_marker(self) -> None:
        bag = parse_name("Show.S01E01.1080p.NF.WEB-DL-GRP")
        assert bag.platform == "NF"

    def test_possessive_is_not_a_season(self) -> None:
        bag = parse_name("Ocean's 11 2001")
        assert bag.season is None
        assert bag.year == "2001"


class TestSpans:
    """Tests for the span bookkeeping behind title recovery."""

    def test_group_does_not_bound_the_title(self) -> None:
        """Scenario: a name with nothing but a group keeps its full title."""
        parsed = tokenize_name("Some.Title-GRP")
        assert parsed.attributes.release_group == "GRP"
        assert parsed.first_tag_index == len(parsed.cleaned)

    def test_first_tag_index(self) -> None:
        parsed = tokenize_name("Show.S01E02-GRP")
        assert parsed.cleaned == "Show.S01E02-GRP"
        assert parsed.first_tag_index == 5
        assert {span.kind for span in parsed.spans} == {"release_group", "season_episode"}
