"""Tag writing and ReplayGain tag collection via metaflac."""

from __future__ import annotations

from collections.abc import Iterable
from flactagger.errors import ExternalToolError
from flactagger.tags import sort_tags
from flactagger.tags import Tag

import logging
import os
import pathlib
import subprocess
import tempfile


logger = logging.getLogger(__name__)

METAFLAC = "metaflac"
REPLAYGAIN_MARKER = "REPLAYGAIN"


def _run_metaflac(cmd: list[str]) -> None:
    """Run a metaflac command, raising ExternalToolError on failure."""
    logger.debug(f"running {' '.join(cmd)}")
    try:
        subprocess.run(cmd, capture_output=True, text=True, check=True)
    except FileNotFoundError as e:
        raise ExternalToolError(cmd, None, f"{cmd[0]} not found") from e
    except subprocess.CalledProcessError as e:
        raise ExternalToolError(cmd, e.returncode, (e.stderr or "").strip()) from e


def build_write_args(tags: Iterable[Tag]) -> list[str]:
    """Arguments that replace all tags of a file with *tags*, in field order."""
    args = ["--remove-all-tags", "--no-utf8-convert"]
    args.extend(f"--set-tag={tag.field}={tag.value}" for tag in sort_tags(list(tags)))
    return args


def write_tags(filename: str, tags: Iterable[Tag], metaflac: str = METAFLAC) -> None:
    """Replace the tags of a single file."""
    _run_metaflac([metaflac, *build_write_args(tags), filename])


def parse_exported_tags(text: str) -> list[Tag]:
    """Return the ReplayGain tags from a metaflac tag export."""
    tags: list[Tag] = []
    for line in text.splitlines():
        field, sep, value = line.strip().partition("=")
        if sep and REPLAYGAIN_MARKER in field:
            tags.append(Tag(field, value))
    return tags


def export_replaygain(filename: str, metaflac: str = METAFLAC) -> list[Tag]:
    """Export a file's tags to a temporary file and keep the ReplayGain ones."""
    fd, tmp = tempfile.mkstemp(prefix="flactagger-", suffix=".tags")
    os.close(fd)
    tagsfile = pathlib.Path(tmp)
    try:
        _run_metaflac([metaflac, f"--export-tags-to={tagsfile}", filename])
        return parse_exported_tags(tagsfile.read_text(encoding="utf-8", errors="replace"))
    finally:
        tagsfile.unlink(missing_ok=True)


def collect_replaygain(filenames: Iterable[str], metaflac: str = METAFLAC) -> dict[str, list[Tag]]:
    """Collect existing ReplayGain tags, one metaflac call per file in sorted order.

    Files without ReplayGain tags are left out of the result.
    """
    rgain: dict[str, list[Tag]] = {}
    for filename in sorted(filenames):
        tags = export_replaygain(filename, metaflac)
        if tags:
            rgain[filename] = tags
    logger.debug(f"collected ReplayGain tags for {len(rgain)} file(s)")
    return rgain
