"""Tests for flactagger.tagset — merging global and per-file tags."""

from flactagger.tags import Tag
from flactagger.tagset import build_tag_sets
from flactagger.tagset import TagSets


GLOBAL = [Tag("ARTIST", "Band"), Tag("LOCATION", "Club")]


class TestBuildTagSets:
    """Test the final per-file tag sets."""

    def test_global_tags_come_first(self):
        sets = build_tag_sets(GLOBAL, {"a.flac": [Tag("TITLE", "One")]})
        assert sets.get("a.flac") == [
            Tag("ARTIST", "Band"),
            Tag("LOCATION", "Club"),
            Tag("TITLE", "One"),
        ]

    def test_iterates_in_filename_order(self):
        file_tags = {
            "c.flac": [Tag("TITLE", "C")],
            "a.flac": [Tag("TITLE", "A")],
            "b.flac": [Tag("TITLE", "B")],
        }
        sets = build_tag_sets([], file_tags)
        assert [f for f, _ in sets.items()] == ["a.flac", "b.flac", "c.flac"]

    def test_files_without_own_tags_get_globals(self):
        sets = build_tag_sets(GLOBAL, {}, files=["x.flac"])
        assert sets.get("x.flac") == GLOBAL

    def test_files_without_any_tags_left_out(self):
        sets = build_tag_sets([], {"x.flac": []}, files=["x.flac", "y.flac"])
        assert len(sets) == 0
        assert sets.get("x.flac") == []

    def test_does_not_deduplicate(self):
        sets = build_tag_sets([Tag("COMMENT", "one")], {"a.flac": [Tag("COMMENT", "two")]})
        assert sets.get("a.flac") == [Tag("COMMENT", "one"), Tag("COMMENT", "two")]


class TestTagSets:
    """Test the accumulator directly."""

    def test_add_and_add_global(self):
        sets = TagSets()
        sets.add_global(Tag("ARTIST", "Band"), ["a.flac", "b.flac"])
        sets.add("a.flac", Tag("TITLE", "One"))
        assert sets.get("a.flac") == [Tag("ARTIST", "Band"), Tag("TITLE", "One")]
        assert sets.get("b.flac") == [Tag("ARTIST", "Band")]

    def test_get_returns_copy(self):
        sets = TagSets()
        sets.add("a.flac", Tag("TITLE", "One"))
        sets.get("a.flac").append(Tag("TITLE", "Two"))
        assert sets.get("a.flac") == [Tag("TITLE", "One")]

    def test_get_unknown(self):
        assert TagSets().get("nope.flac") == []
