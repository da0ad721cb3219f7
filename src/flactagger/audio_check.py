"""FLAC stream validation via mutagen."""

from __future__ import annotations

from collections.abc import Iterable
from flactagger.errors import ParseError
from mutagen.flac import FLAC
from mutagen.flac import FLACNoHeaderError

import logging
import mutagen


logger = logging.getLogger(__name__)


def check_flac(filename: str) -> None:
    """Raise ParseError unless *filename* is a readable FLAC stream."""
    try:
        FLAC(filename)
    except FLACNoHeaderError:
        raise ParseError(f"{filename} is not a FLAC file") from None
    except (mutagen.MutagenError, OSError) as e:
        raise ParseError(f"Unable to read {filename}: {e}") from e


def check_flac_files(filenames: Iterable[str]) -> None:
    """Validate every input before anything is written."""
    count = 0
    for filename in sorted(filenames):
        check_flac(filename)
        count += 1
    logger.debug(f"{count} FLAC file(s) verified")
