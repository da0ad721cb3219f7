"""Final per-file tag sets: global tags merged with per-file tags."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator
from flactagger.tags import FileTagSet
from flactagger.tags import Tag


class TagSets:
    """Accumulator of filename -> tags.

    Iteration is always in lexicographic filename order, which fixes the
    order of every external call made per file.
    """

    def __init__(self) -> None:
        self._tags: FileTagSet = {}

    def add(self, filename: str, tag: Tag) -> None:
        self._tags.setdefault(filename, []).append(tag)

    def extend(self, filename: str, tags: Iterable[Tag]) -> None:
        for tag in tags:
            self.add(filename, tag)

    def add_global(self, tag: Tag, files: Iterable[str]) -> None:
        """Add *tag* to every file in *files*."""
        for filename in files:
            self.add(filename, tag)

    def get(self, filename: str) -> list[Tag]:
        return list(self._tags.get(filename, []))

    def items(self) -> Iterator[tuple[str, list[Tag]]]:
        for filename in sorted(self._tags):
            yield filename, list(self._tags[filename])

    def __len__(self) -> int:
        return len(self._tags)


def build_tag_sets(
    global_tags: list[Tag],
    file_tags: FileTagSet,
    files: Iterable[str] = (),
) -> TagSets:
    """Prefix every file's tags with the global tags.

    Files listed in *files* without an entry in *file_tags* get the global
    tags only. A file that ends up with no tags at all is left out, so it
    is never touched by the tag writer.
    """
    sets = TagSets()
    for filename in sorted(set(files) | set(file_tags)):
        sets.extend(filename, global_tags)
        sets.extend(filename, file_tags.get(filename, []))
    return sets
