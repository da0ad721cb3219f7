"""Tag data model, field vocabulary and stable tag ordering."""

from __future__ import annotations

from dataclasses import dataclass
from flactagger.errors import ParseError


# Vorbis comment field names accepted in a header field list
FIELD_VOCABULARY: tuple[str, ...] = (
    "ALBUM",
    "ALBUMARTIST",
    "ARTIST",
    "COMMENT",
    "COMPOSER",
    "CONTACT",
    "COPYRIGHT",
    "DATE",
    "DESCRIPTION",
    "DISCNUMBER",
    "GENRE",
    "ISRC",
    "LICENSE",
    "LOCATION",
    "ORGANIZATION",
    "PERFORMER",
    "SOURCE",
    "TITLE",
    "TRACKNUMBER",
    "TRACKTOTAL",
    "VERSION",
)


@dataclass(frozen=True)
class Tag:
    """A single field/value pair destined for a file's metadata."""

    field: str
    value: str

    def __str__(self) -> str:
        return f"{self.field}={self.value}"


FileTagSet = dict[str, list[Tag]]


def sort_tags(tags: list[Tag]) -> list[Tag]:
    """Sort tags by field name. Equal fields keep their relative order."""
    return sorted(tags, key=lambda t: t.field)


def parse_tag(text: str) -> Tag:
    """Parse 'FIELD=Value' into a Tag. The first '=' separates field and value."""
    field, sep, value = text.partition("=")
    field = field.strip()
    if not sep or not field:
        raise ParseError(f"Invalid tag {text!r}, expected FIELD=Value")
    return Tag(field, value.strip())


def validate_fields(fields: list[str]) -> list[str]:
    """Check field identifiers against the vocabulary.

    Names are case-sensitive; only surrounding whitespace is dropped.
    """
    result: list[str] = []
    for name in fields:
        normalized = name.strip()
        if normalized not in FIELD_VOCABULARY:
            raise ParseError(
                f"Unknown field {name!r} (known fields: {', '.join(FIELD_VOCABULARY)})"
            )
        result.append(normalized)
    return result
