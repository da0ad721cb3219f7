"""Error taxonomy. Every error is fatal to the run."""

from __future__ import annotations


class FlacTaggerError(Exception):
    """Base class for all flactagger errors."""


class ParseError(FlacTaggerError):
    """Info file, header, field list, tag or review file could not be parsed."""


class ExtractionError(FlacTaggerError):
    """A filename heuristic found no match."""

    def __init__(self, filename: str, what: str) -> None:
        self.filename = filename
        self.what = what
        super().__init__(f"Unable to extract {what} from: {filename}")


class CountMismatchError(FlacTaggerError):
    """A derived value list does not line up with the file list."""

    def __init__(self, category: str, expected: int, actual: int) -> None:
        self.category = category
        self.expected = expected
        self.actual = actual
        diff = actual - expected
        super().__init__(
            f"Number of files ({expected}) is not equal to the number of {category} "
            f"({actual}, {diff:+d})"
        )


class ExternalToolError(FlacTaggerError):
    """An external process (metaflac, editor) failed."""

    def __init__(self, command: list[str], returncode: int | None, detail: str = "") -> None:
        self.command = command
        self.returncode = returncode
        msg = f"{command[0] if command else 'external tool'} failed"
        if returncode is not None:
            msg += f" with exit status {returncode}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
