"""Header layouts ("modes") and their mapping onto tags."""

from __future__ import annotations

from flactagger.errors import ParseError
from flactagger.infofile import InfoFileParser
from flactagger.tags import Tag

import enum
import logging
import re


logger = logging.getLogger(__name__)

_ISO_DATE_RE = re.compile(r"\d{4}-\d\d-\d\d")


class Mode(enum.Enum):
    """How header lines map to ARTIST, DATE and LOCATION.

    A: ARTIST, LOCATION..., DATE (last line)
    B: ARTIST, DATE, LOCATION... (all remaining lines)
    AUTO: detect A or B from where the date is
    """

    A = "a"
    B = "b"
    AUTO = "auto"


def _check_headers(headers: list[str]) -> None:
    if len(headers) < 2:
        raise ParseError(
            f"Info file header needs at least an artist and a date line, got {len(headers)} line(s)"
        )


def resolve_mode(headers: list[str], mode: Mode = Mode.AUTO) -> Mode:
    """Resolve AUTO to a concrete mode. A and B are returned unchanged."""
    if mode is not Mode.AUTO:
        return mode
    _check_headers(headers)
    if _ISO_DATE_RE.search(headers[1]):
        resolved = Mode.B
    elif _ISO_DATE_RE.search(headers[-1]):
        resolved = Mode.A
    else:
        raise ParseError("Unable to automatically detect mode")
    logger.debug(f"detected header mode {resolved.value}")
    return resolved


def apply_mode(
    headers: list[str],
    mode: Mode,
    use_album: bool = False,
    combined_album: bool = False,
) -> list[Tag]:
    """Map header lines onto tags according to a concrete mode."""
    if mode is Mode.AUTO:
        raise ValueError("resolve Mode.AUTO with resolve_mode() first")
    _check_headers(headers)

    artist = headers[0]
    if mode is Mode.A:
        date = headers[-1]
        locations = headers[1:-1]
    else:
        date = headers[1]
        locations = headers[2:]

    location_field = "ALBUM" if use_album else "LOCATION"
    tags = [Tag("ARTIST", artist), Tag("DATE", date)]
    tags.extend(Tag(location_field, loc) for loc in locations)

    if combined_album:
        if not locations:
            raise ParseError("Combined album needs at least one location line in the header")
        tags.append(Tag("ALBUM", f"{locations[-1]}. {date}"))

    return tags


def header_tags(
    parser: InfoFileParser,
    mode: Mode | None = None,
    fields: list[str] | None = None,
    use_album: bool = False,
    combined_album: bool = False,
) -> list[Tag]:
    """Derive global tags from the info file header.

    A mode takes precedence over an explicit field list. With neither, the
    header contributes no tags.
    """
    if mode is not None:
        headers = parser.headers()
        return apply_mode(headers, resolve_mode(headers, mode), use_album, combined_album)
    if fields:
        return parser.map_headers_to_fields(fields)
    return []
