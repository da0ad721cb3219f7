"""Human-editable review file: formatting, parsing and the editor round trip.

Format::

    # comment
    GLOBAL FIELD=Value
    /path/filename1.flac:
      FIELD1=Value1
      FIELD2=Value2

Blank lines and lines starting with '#' are ignored. GLOBAL tags apply to
every input file and come before the file's own tags once parsed back, so
the two kinds cannot be told apart afterwards.
"""

from __future__ import annotations

from collections.abc import Iterable
from flactagger.errors import ExternalToolError
from flactagger.errors import ParseError
from flactagger.tags import FileTagSet
from flactagger.tags import parse_tag
from flactagger.tags import Tag
from flactagger.tagset import TagSets

import logging
import os
import pathlib
import shlex
import subprocess


logger = logging.getLogger(__name__)

_HEADER = """\
# Format:
# GLOBAL FIELD=Value
# GLOBAL FIELD2=Value2
# filename1.flac:
#   FIELD1=Value1
#   FIELD2=Value2
# /path/filename2.flac:
#   FIELD1=Value1
#   FIELD2=Value2
#
# The two spaces before FIELD/Value pairs are important!
# Blank lines or lines starting with # are ignored
#

"""


def format_section(filename: str, tags: Iterable[Tag]) -> str:
    """Format one file section ('filename:' followed by indented tags)."""
    lines = [f"{filename}:"]
    lines.extend(f"  {tag.field}={tag.value}" for tag in tags)
    return "\n".join(lines) + "\n"


def format_review(global_tags: list[Tag], file_tags: FileTagSet) -> str:
    """Serialize global and per-file tags. Sections are in filename order."""
    parts = [_HEADER]
    if global_tags:
        parts.extend(f"GLOBAL {tag.field}={tag.value}\n" for tag in global_tags)
        parts.append("\n")
    if file_tags:
        parts.extend(format_section(f, file_tags[f]) for f in sorted(file_tags))
        parts.append("\n")
    return "".join(parts)


def parse_review(text: str, files: Iterable[str]) -> TagSets:
    """Parse review file text back into tag sets.

    GLOBAL tags are added to every file in *files*.
    """
    files = list(files)
    sets = TagSets()
    current: str | None = None

    for lineno, line in enumerate(text.replace("\r\n", "\n").split("\n"), 1):
        if not line.strip() or line.startswith("#"):
            continue
        if line.startswith("GLOBAL "):
            sets.add_global(_parse_tag_line(line[len("GLOBAL "):], lineno), files)
        elif line.startswith("  "):
            if current is None:
                raise ParseError(f"line {lineno}: tag outside of a file section")
            sets.add(current, _parse_tag_line(line, lineno))
        elif line.rstrip().endswith(":"):
            current = line.rstrip()[:-1].strip()
        else:
            raise ParseError(f"line {lineno}: cannot parse {line!r}")

    return sets


def _parse_tag_line(text: str, lineno: int) -> Tag:
    try:
        return parse_tag(text)
    except ParseError as e:
        raise ParseError(f"line {lineno}: {e}") from None


def _editor_command() -> list[str]:
    editor = os.environ.get("EDITOR") or os.environ.get("VISUAL")
    if not editor:
        raise ExternalToolError(
            [], None, "Neither of the environment variables VISUAL or EDITOR are set. Needed with -e."
        )
    return shlex.split(editor)


def edit_tags(
    global_tags: list[Tag],
    file_tags: FileTagSet,
    files: Iterable[str],
    path: pathlib.Path = pathlib.Path(".tags"),
) -> TagSets:
    """Let the user edit the tags in $EDITOR and return what was saved."""
    cmd = [*_editor_command(), str(path)]
    path.write_text(format_review(global_tags, file_tags), encoding="utf-8")
    try:
        logger.debug(f"running editor: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd)
        except OSError as e:
            raise ExternalToolError(cmd, None, str(e)) from e
        if result.returncode != 0:
            raise ExternalToolError(cmd, result.returncode)
        return parse_review(path.read_text(encoding="utf-8"), files)
    finally:
        path.unlink(missing_ok=True)
