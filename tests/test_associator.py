"""Tests for flactagger.associator — per-file tag association."""

from flactagger.associator import associate
from flactagger.associator import values_to_tags
from flactagger.errors import CountMismatchError
from flactagger.tags import Tag

import pytest


FILES = ["a.flac", "b.flac", "c.flac"]


class TestAssociate:
    """Test zipping derived values with files."""

    def test_all_lists(self):
        result = associate(
            FILES,
            dates=["2001-01-01"] * 3,
            track_numbers=["01", "02", "03"],
            titles=["One", "Two", "Three"],
        )
        assert result["b.flac"] == [
            Tag("DATE", "2001-01-01"),
            Tag("TITLE", "Two"),
            Tag("TRACKNUMBER", "02"),
        ]

    def test_keeps_file_order(self):
        result = associate(["z.flac", "a.flac"], titles=["Z", "A"])
        assert list(result) == ["z.flac", "a.flac"]
        assert result["z.flac"] == [Tag("TITLE", "Z")]

    def test_empty_lists_skipped(self):
        result = associate(FILES, titles=["One", "Two", "Three"])
        assert result["a.flac"] == [Tag("TITLE", "One")]

    def test_nothing_requested(self):
        assert associate(FILES) == {f: [] for f in FILES}

    def test_dates_mismatch(self):
        with pytest.raises(CountMismatchError) as exc_info:
            associate(FILES, dates=["2001-01-01", "2001-01-02"])
        err = exc_info.value
        assert err.category == "dates"
        assert err.expected == 3
        assert err.actual == 2
        assert "dates" in str(err)
        assert "-1" in str(err)

    def test_titles_mismatch_named(self):
        with pytest.raises(CountMismatchError, match="titles"):
            associate(FILES, titles=["1", "2", "3", "4"])

    def test_track_numbers_mismatch_named(self):
        with pytest.raises(CountMismatchError, match="track numbers"):
            associate(FILES, dates=["d"] * 3, track_numbers=["01"])

    def test_extra_tags_appended_and_sorted(self):
        extra = {
            "a.flac": [
                Tag("REPLAYGAIN_TRACK_GAIN", "-3.1 dB"),
                Tag("REPLAYGAIN_ALBUM_GAIN", "-2.0 dB"),
            ],
        }
        result = associate(FILES, titles=["One", "Two", "Three"], extra=extra)
        assert [t.field for t in result["a.flac"]] == [
            "REPLAYGAIN_ALBUM_GAIN",
            "REPLAYGAIN_TRACK_GAIN",
            "TITLE",
        ]
        assert result["b.flac"] == [Tag("TITLE", "Two")]

    def test_sort_is_stable_for_equal_fields(self):
        extra = {"a.flac": [Tag("LOCATION", "Second"), Tag("ARTIST", "X"), Tag("LOCATION", "First")]}
        result = associate(["a.flac"], extra=extra)
        assert result["a.flac"] == [
            Tag("ARTIST", "X"),
            Tag("LOCATION", "Second"),
            Tag("LOCATION", "First"),
        ]


class TestValuesToTags:
    def test_wraps_values(self):
        assert values_to_tags(["1", "2"], "TRACKNUMBER") == [
            Tag("TRACKNUMBER", "1"),
            Tag("TRACKNUMBER", "2"),
        ]
