"""Info file parsing: header block, track titles and header-to-field mapping."""

from __future__ import annotations

from flactagger.errors import ParseError
from flactagger.tags import Tag
from flactagger.tags import validate_fields

import logging
import pathlib
import re


logger = logging.getLogger(__name__)

DEFAULT_TITLE_PATTERN = re.compile(r"\d\d\. (.*)$")


class InfoFileParser:
    """Parse the free-text info file that accompanies a recording.

    The header block is every line from the top of the file until the first
    blank line. Titles are searched for line by line in the whole text.
    """

    def __init__(self, text: str) -> None:
        self.text = text.replace("\r\n", "\n").replace("\r", "\n")

    @classmethod
    def from_path(cls, path: pathlib.Path) -> InfoFileParser:
        """Read an info file from disk."""
        if not path.is_file():
            raise ParseError(f"{path} does not exist")
        logger.debug(f"reading info file {path}")
        return cls(path.read_text(encoding="utf-8", errors="replace"))

    def headers(self) -> list[str]:
        """Return the lines preceding the first blank line."""
        block = self.text.split("\n\n", 1)[0]
        if not block:
            return []
        return block.rstrip("\n").split("\n")

    def titles(self, pattern: re.Pattern[str] | None = None) -> list[str]:
        """Return track titles in order of appearance.

        A line that does not match *pattern* continues the previous title if
        it is indented at least up to the first space of the matched line::

            01. A long title
               that goes on

        The indent is dropped and the rest is appended as is.
        """
        if pattern is None:
            pattern = DEFAULT_TITLE_PATTERN

        titles: list[str] = []
        indent: str | None = None

        for line in self.text.split("\n"):
            m = pattern.search(line)
            if m:
                titles.append(m.group(1) if pattern.groups else m.group(0))
                space = line.find(" ")
                indent = " " * space if space >= 0 else None
            elif indent is not None and line.startswith(indent):
                titles[-1] += line[len(indent):]
            else:
                indent = None

        logger.debug(f"found {len(titles)} title(s) in info file")
        return titles

    def map_headers_to_fields(self, fields: list[str]) -> list[Tag]:
        """Map header lines positionally onto *fields*."""
        fields = validate_fields(fields)
        headers = self.headers()
        if len(headers) < len(fields):
            raise ParseError(
                f"Info file has {len(headers)} header line(s), "
                f"but {len(fields)} field(s) were given"
            )
        return [Tag(field, value) for field, value in zip(fields, headers)]
