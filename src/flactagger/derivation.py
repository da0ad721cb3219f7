"""Date and track number derivation from filenames."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from dataclasses import dataclass
from flactagger.errors import ExtractionError

import enum
import logging
import re


logger = logging.getLogger(__name__)

DEFAULT_DATE_PATTERN = re.compile(r"(\d{4}-\d\d-\d\d)")

# Scheme A: "-...d1t02" (kept verbatim) or "-...t02." (digits only)
_DISC_TRACK_MARKER_RE = re.compile(r"-.*(d\d+t\d+)")
_TRACK_BEFORE_EXT_RE = re.compile(r"-.*t(\d+)\.")
# Scheme B: "d1t02" -> "102"
_DISC_TRACK_RE = re.compile(r"d(\d+)t(\d+)")


class TrackNumberScheme(enum.Enum):
    """Track number heuristics.

    A: dNtNN from the filename, or just NN from tNN if there is no disc
    B: disc and track digits joined (d1t02 becomes 102)
    C: sequential numbers from 01, ignoring the filename
    """

    A = "a"
    B = "b"
    C = "c"


@dataclass(frozen=True)
class Extracted:
    value: str


@dataclass(frozen=True)
class NoMatch:
    filename: str
    reason: str


Result = Extracted | NoMatch


def _first_group(m: re.Match[str]) -> str:
    return m.group(1) if m.re.groups else m.group(0)


def date_from_filename(filename: str, pattern: re.Pattern[str] | None = None) -> Result:
    """Extract a date, trying *pattern* first and the ISO date pattern second."""
    for candidate in (pattern, DEFAULT_DATE_PATTERN):
        if candidate is None:
            continue
        m = candidate.search(filename)
        if m:
            return Extracted(_first_group(m))
    return NoMatch(filename, "date")


def _track_scheme_a(filename: str) -> Result:
    m = _DISC_TRACK_MARKER_RE.search(filename)
    if m:
        return Extracted(m.group(1))
    m = _TRACK_BEFORE_EXT_RE.search(filename)
    if m:
        return Extracted(m.group(1))
    return NoMatch(filename, "track number (scheme a)")


def _track_scheme_b(filename: str) -> Result:
    m = _DISC_TRACK_RE.search(filename)
    if m:
        return Extracted(m.group(1) + m.group(2))
    return NoMatch(filename, "track number (scheme b)")


_FILENAME_STRATEGIES: dict[TrackNumberScheme, Callable[[str], Result]] = {
    TrackNumberScheme.A: _track_scheme_a,
    TrackNumberScheme.B: _track_scheme_b,
}


def sequential_track_numbers(count: int) -> list[str]:
    """Return '01'..'N', zero padded to at least two digits."""
    width = max(2, len(str(count)))
    return [str(i).zfill(width) for i in range(1, count + 1)]


def track_number_from_filename(filename: str, scheme: TrackNumberScheme) -> Result:
    """Apply a filename based scheme (A or B) to a single filename."""
    try:
        strategy = _FILENAME_STRATEGIES[scheme]
    except KeyError:
        raise ValueError(f"Scheme {scheme.value} does not read filenames") from None
    return strategy(filename)


def _unwrap(results: Iterable[Result]) -> list[str]:
    values: list[str] = []
    for result in results:
        if isinstance(result, NoMatch):
            raise ExtractionError(result.filename, result.reason)
        values.append(result.value)
    return values


def extract_dates(filenames: list[str], pattern: re.Pattern[str] | None = None) -> list[str]:
    """Extract one date per filename. The first filename without a date aborts."""
    dates = _unwrap(date_from_filename(f, pattern) for f in filenames)
    logger.debug(f"extracted {len(dates)} date(s) from filenames")
    return dates


def extract_track_numbers(filenames: list[str], scheme: TrackNumberScheme) -> list[str]:
    """Derive one track number per filename according to *scheme*."""
    if scheme is TrackNumberScheme.C:
        numbers = sequential_track_numbers(len(filenames))
    else:
        numbers = _unwrap(track_number_from_filename(f, scheme) for f in filenames)
    logger.debug(f"derived {len(numbers)} track number(s) with scheme {scheme.value}")
    return numbers
