"""Tests for the release-name composer.

This test suite covers:
- Slot order for movies, season packs and episodes
- Title normalization and the no-empty-segment guarantees
- The language slot decision table and the secondary-language slot
- HDR priority order and audio slot composition
"""

import pytest

from relnamer.core.composer import (
    LanguageSet,
    compose_name,
    hdr_parts,
    language_info_parts,
    language_parts,
    normalize_title,
    source_part,
)
from relnamer.core.technical import normalize_technical_report
from relnamer.core.token_parser import parse_name
from relnamer.models.core import AttributeBag, merge_attributes
from relnamer.models.variant import Episode, Movie, SeasonPack
from relnamer.rules.base import NamingPolicy


class TestNormalizeTitle:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Example Movie", "Example.Movie"),
            ("L'Été dernier", "L.Ete.Dernier"),
            ("Star Wars: Episode IV", "Star.Wars.Episode.IV"),
            ("spider-man", "Spider.Man"),
            ("  [Weird] {Title}  ", "Weird.Title"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalization(self, raw: str, expected: str) -> None:
        assert normalize_title(raw) == expected

    @pytest.mark.parametrize(
        "raw", ["L'Été dernier", "The Lord of the Rings", "C.S.I. Miami", "x..y"]
    )
    def test_idempotent(self, raw: str) -> None:
        once = normalize_title(raw)
        assert normalize_title(once) == once


class TestMovieNames:
    def test_reference_scenario(self) -> None:
        """Scenario: filename tokens plus resolution and codec from the report."""
        bag = parse_name("Example.Movie.2019.1080p.BluRay.x264-GROUP")
        bag = bag.model_copy(update={"resolution": "1080p", "video_codec": "x264"})
        assert compose_name(Movie(), bag) == "Example.Movie.2019.1080p.BluRay.x264-GROUP"

    def test_full_pipeline_with_report(self) -> None:
        """Scenario: a UHD dual-audio release through parser, normalizer and composer."""
        report = {
            "media": {
                "track": [
                    {"@type": "General", "Format": "Matroska"},
                    {
                        "@type": "Video",
                        "Format": "HEVC",
                        "Width": "3840",
                        "Height": "2160",
                        "HDR_Format": "Dolby Vision, HDR10 compatible",
                    },
                    {
                        "@type": "Audio",
                        "Format": "E-AC-3",
                        "Format_AdditionalFeatures": "JOC",
                        "Channels": "6",
                        "Language": "fr-FR",
                    },
                    {"@type": "Audio", "Format": "AC-3", "Channels": "6", "Language": "en"},
                ]
            }
        }
        bag = merge_attributes(
            parse_name("Example.Movie.2019.MULTi.2160p.WEB-DL-GRP"),
            normalize_technical_report(report),
        )
        assert compose_name(Movie(), bag) == (
            "Example.Movie.2019.MULTI.TrueFrench.HDR10.DV.2160p.WEB-DL."
            "EAC3.AC3.5.1.Atmos.x265-GRP"
        )

    def test_missing_group_uses_sentinel(self) -> None:
        bag = AttributeBag(title="Movie", year="2019")
        assert compose_name(Movie(), bag) == "Movie.2019-NoTag"

    def test_policy_default_group(self) -> None:
        bag = AttributeBag(title="Movie", year="2019")
        policy = NamingPolicy(default_group="HOUSE")
        assert compose_name(Movie(), bag, policy) == "Movie.2019-HOUSE"

    def test_empty_default_group_keeps_sentinel(self) -> None:
        """Scenario: naming.default_group set to "" never leaves a bare hyphen."""
        bag = AttributeBag(title="X", year="2020")
        assert compose_name(Movie(), bag, NamingPolicy(default_group="")) == "X.2020-NoTag"

    def test_markers_and_flags(self) -> None:
        bag = AttributeBag(
            title="Avatar",
            year="2009",
            three_d=True,
            info="repack",
            edition="EXTENDED",
            imax=True,
            resolution="1080",
            platform="amzn",
            video_codec="H.264",
            release_group="GRP",
        )
        assert compose_name(Movie(), bag) == (
            "Avatar.3D.2009.REPACK.EXTENDED.iMAX.1080p.AMZN.x264-GRP"
        )

    def test_no_empty_segments(self) -> None:
        """Scenario: stray dots and spaces never produce '..' or edge dots."""
        bag = AttributeBag(
            title=". Odd  Title .",
            year="2001",
            edition=" Directors Cut ",
            source="WEB",
            release_group="GRP",
        )
        name = compose_name(Movie(), bag)
        base = name.rsplit("-", 1)[0]
        assert ".." not in name
        assert not base.startswith(".")
        assert not base.endswith(".")
        assert name == "Odd.Title.2001.Directors.Cut.WEB-GRP"

    def test_idempotent_and_pure(self) -> None:
        bag = parse_name("Example.Movie.2019.1080p.BluRay.x264-GROUP")
        before = bag.model_copy(deep=True)
        assert compose_name(Movie(), bag) == compose_name(Movie(), bag)
        assert bag == before


class TestSeriesNames:
    def test_episode(self) -> None:
        bag = AttributeBag(
            title="Show", season="S01", episode="E05", resolution="720p", release_group="GRP"
        )
        variant = Episode(season="S01", episode="E05")
        assert compose_name(variant, bag) == "Show.S01E05.720p-GRP"

    def test_season_pack_never_has_episode(self) -> None:
        bag = AttributeBag(title="Show", season="S01", episode="E05", resolution="720p")
        name = compose_name(SeasonPack(season="S01"), bag)
        assert name == "Show.S01.720p-NoTag"
        assert "E05" not in name

    def test_complete_pack(self) -> None:
        bag = AttributeBag(title="Show", resolution="1080p")
        name = compose_name(SeasonPack(season="COMPLETE", complete=True), bag)
        assert name == "Show.COMPLETE.1080p-NoTag"


class TestHdr:
    def test_priority_order(self) -> None:
        assert hdr_parts(["DV", "HDR10"]) == ["HDR10", "DV"]

    def test_dolby_vision_spelling_and_duplicates(self) -> None:
        assert hdr_parts(["Dolby Vision", "HDR10+", "dv"]) == ["HDR10+", "DV"]

    def test_unknown_labels_sort_last(self) -> None:
        assert hdr_parts(["FOO", "HLG", "BAR"]) == ["HLG", "FOO", "BAR"]

    def test_composed_hdr_slot(self) -> None:
        bag = AttributeBag(title="Movie", year="2020", hdr=["DV", "HDR10"], resolution="2160p")
        assert compose_name(Movie(), bag) == "Movie.2020.HDR10.DV.2160p-NoTag"


class TestLanguageSlot:
    """Every branch of the language-slot decision table."""

    @pytest.mark.parametrize(
        ("languages", "expected"),
        [
            (["English"], ["VOSTFR"]),
            (["English", "VFF"], ["MULTI"]),
            (["Anglais", "VFQ"], ["MULTI"]),
            (["VFF", "VFQ"], ["MULTI"]),
            (["VFF"], ["VFF"]),
            (["VFQ"], ["VFQ"]),
            (["VFF", "Japonais"], ["JAPONAIS"]),
            (["VFQ", "Coréen"], ["CORÉEN"]),
            (["VFF", "Japonais", "Coréen"], ["MULTI"]),
            (["VFF", "Français"], []),
            (["VFQ", "Français", "English"], ["MULTI"]),
            (["Français", "English"], ["MULTI"]),
            (["Français", "Japonais"], ["MULTI"]),
            (["Français"], ["VFF"]),
            (["Japonais", "Coréen"], ["MULTI"]),
            (["Japanese"], ["JAPANESE"]),
            (["Unknown"], []),
        ],
    )
    def test_table(self, languages: list[str], expected: list[str]) -> None:
        assert language_parts(AttributeBag(audio_languages=languages)) == expected

    def test_vostfr_flag_wins(self) -> None:
        bag = AttributeBag(is_vostfr=True, audio_languages=["VFF"])
        assert language_parts(bag) == ["VOSTFR"]

    def test_generic_french_uses_region_markers(self) -> None:
        bag = AttributeBag(audio_languages=["Français"], release_group="QUEBEC")
        assert language_parts(bag) == ["VFQ"]

    def test_region_default_is_policy(self) -> None:
        bag = AttributeBag(audio_languages=["Français"])
        policy = NamingPolicy(default_french_variant="VFQ")
        assert language_parts(bag, policy) == ["VFQ"]

    def test_falls_back_to_language_field(self) -> None:
        assert language_parts(AttributeBag(language="MULTI")) == ["MULTi"]
        assert language_parts(AttributeBag(language="french")) == ["FRENCH"]
        assert language_parts(AttributeBag()) == []

    def test_advisory_and_slot_agree(self) -> None:
        """Scenario: French + English audio gives advisory MULTi and slot MULTI."""
        report = [
            {"@type": "Audio", "Format": "AAC", "Language": "fr"},
            {"@type": "Audio", "Format": "AAC", "Language": "en"},
        ]
        bag = normalize_technical_report(report)
        assert bag.language == "MULTi"
        assert language_parts(bag) == ["MULTI"]


class TestSecondaryLanguage:
    def test_truefrench_next_to_english(self) -> None:
        bag = AttributeBag(audio_languages=["VFF", "Anglais"])
        assert language_info_parts(bag) == ["TrueFrench"]

    def test_vfq_next_to_other_language(self) -> None:
        bag = AttributeBag(audio_languages=["VFQ", "Japonais"], language_info="ad")
        assert language_info_parts(bag) == ["VFQ", "AD"]

    def test_french_only_has_no_secondary(self) -> None:
        assert language_info_parts(AttributeBag(audio_languages=["VFF"])) == []


class TestAudioAndSource:
    def test_audio_slots(self) -> None:
        bag = AttributeBag(
            title="Movie",
            year="2021",
            audio_codecs=["DTS:X", "TrueHD Atmos"],
            audio_channels="7.1",
        )
        assert compose_name(Movie(), bag) == "Movie.2021.DTS.TrueHD.7.1.DTS:X.Atmos-NoTag"

    def test_source_union(self) -> None:
        bag = AttributeBag(source="REMUX", tags=["BluRay"])
        assert source_part(bag) == "REMUX.BluRay"

    def test_web_is_not_doubled_by_web_dl(self) -> None:
        assert source_part(AttributeBag(source="WEB-DL")) == "WEB-DL"


def test_language_set_buckets() -> None:
    buckets = LanguageSet.from_languages(["English", "VFF", "Français", "Japonais", "Unknown"])
    assert buckets.english and buckets.vff and buckets.french
    assert not buckets.vfq
    assert buckets.others == ["Japonais"]
