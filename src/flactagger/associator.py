"""Association of derived per-file values with the file list."""

from __future__ import annotations

from collections.abc import Sequence
from flactagger.errors import CountMismatchError
from flactagger.tags import FileTagSet
from flactagger.tags import sort_tags
from flactagger.tags import Tag

import logging


logger = logging.getLogger(__name__)


def values_to_tags(values: Sequence[str], field: str) -> list[Tag]:
    """Wrap each value in a Tag with the given field name."""
    return [Tag(field, v) for v in values]


def _check_count(category: str, values: Sequence[object], file_count: int) -> None:
    if values and len(values) != file_count:
        raise CountMismatchError(category, file_count, len(values))


def associate(
    files: Sequence[str],
    *,
    dates: Sequence[str] = (),
    track_numbers: Sequence[str] = (),
    titles: Sequence[str] = (),
    extra: dict[str, list[Tag]] | None = None,
) -> FileTagSet:
    """Build the per-file tag lists.

    Each non-empty value list must have exactly one entry per file. The tags
    of a file are DATE, TRACKNUMBER and TITLE (for the lists given) followed
    by its *extra* tags, stably sorted by field name.
    """
    file_count = len(files)
    _check_count("dates", dates, file_count)
    _check_count("track numbers", track_numbers, file_count)
    _check_count("titles", titles, file_count)

    columns = [
        column for column in (
            values_to_tags(dates, "DATE"),
            values_to_tags(track_numbers, "TRACKNUMBER"),
            values_to_tags(titles, "TITLE"),
        )
        if column
    ]

    extra = extra or {}
    result: FileTagSet = {}
    for i, filename in enumerate(files):
        tags = [column[i] for column in columns]
        tags.extend(extra.get(filename, []))
        result[filename] = sort_tags(tags)

    logger.debug(f"associated tags with {file_count} file(s)")
    return result
