"""CLI argument parsing and the tagging pipeline."""

from __future__ import annotations

from flactagger.associator import associate
from flactagger.audio_check import check_flac_files
from flactagger.config import load_config
from flactagger.config import merge_config_into_args
from flactagger.derivation import extract_dates
from flactagger.derivation import extract_track_numbers
from flactagger.derivation import TrackNumberScheme
from flactagger.errors import FlacTaggerError
from flactagger.errors import ParseError
from flactagger.infofile import InfoFileParser
from flactagger.logging import configure_logging
from flactagger.logging import progress_logging
from flactagger.metaflac import collect_replaygain
from flactagger.metaflac import write_tags
from flactagger.modes import header_tags
from flactagger.modes import Mode
from flactagger.review import edit_tags
from flactagger.review import format_section
from flactagger.tags import parse_tag
from flactagger.tags import sort_tags
from flactagger.tags import Tag
from flactagger.tagset import build_tag_sets
from flactagger.tagset import TagSets
from tqdm import tqdm

import argparse
import logging
import pathlib
import re
import sys


logger = logging.getLogger(__name__)

VERSION = "3.1.1"


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="flactagger",
        description="Tag FLAC files from an info file and from their filenames.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "header modes:\n"
            "  a     ARTIST, LOCATION (multiple lines), DATE (last line)\n"
            "  b     ARTIST, DATE, LOCATION (all remaining lines)\n"
            "  auto  detect mode 'a' or 'b' or fail\n"
            "\n"
            "track number schemes:\n"
            "  a     use dNtNN from the filename, or just NN from tNN if there is no 'd'\n"
            "  b     same as a but without 'd' and 't' (d1t02 becomes 102)\n"
            "  c     generate track numbers from 01\n"
        ),
    )
    parser.add_argument("files", nargs="+", help="FLAC files to tag")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Show debug output")
    verbosity.add_argument("--quiet", action="store_true", help="Only show warnings and errors")
    parser.add_argument("--version", action="version", version=VERSION)

    parser.add_argument(
        "-A", dest="album", action="store_true", default=None,
        help="Use the ALBUM field rather than the default LOCATION field",
    )
    parser.add_argument(
        "-B", dest="combined_album", action="store_true", default=None,
        help="Create an ALBUM field combining the last LOCATION and the DATE, e.g. 'City, Country. YYYY-MM-DD'",
    )
    parser.add_argument(
        "-d", dest="dates", action="store_true",
        help="Extract dates from filenames (default pattern: (\\d{4}-\\d\\d-\\d\\d))",
    )
    parser.add_argument(
        "--date-regexp", metavar="REGEXP", default=None,
        help="Pattern tried first when extracting dates; its first group is the date. Implies -d",
    )
    parser.add_argument(
        "-e", dest="edit", action="store_true",
        help="Edit tags in $EDITOR (or $VISUAL) before tagging",
    )

    header = parser.add_mutually_exclusive_group()
    header.add_argument(
        "-f", dest="fields", metavar="FIELDLIST", type=lambda s: [f for f in s.split(",") if f],
        default=None,
        help="Upper-case fields corresponding to lines from the top of the info file (comma separated)",
    )
    header.add_argument(
        "-m", dest="mode", choices=["a", "b", "auto"], default=None,
        help="Header parsing mode (see below)",
    )

    parser.add_argument("-i", dest="infofile", metavar="INFOFILE", type=pathlib.Path, help="Info file")
    parser.add_argument("-n", dest="dry_run", action="store_true", help="Dry run, show the tags only")
    parser.add_argument(
        "-p", dest="print", action="store_true", default=None, help="Print file names while tagging",
    )
    parser.add_argument("-r", dest="titles", action="store_true", help="Read titles from the info file")
    parser.add_argument(
        "--title-regexp", metavar="REGEXP", default=None,
        help="Pattern for title lines; its first group is the title (default: \\d\\d\\. (.*)$). Implies -r",
    )
    parser.add_argument(
        "-t", dest="tags", metavar="FIELD=Value", action="append", default=None,
        help="Add a tag to every file. Repeatable.",
    )
    parser.add_argument(
        "-T", dest="track_scheme", choices=["a", "b", "c"], default=None,
        help="Track number scheme (see below)",
    )
    parser.add_argument(
        "--no-replaygain", dest="replaygain", action="store_false", default=None,
        help="Do not carry over existing REPLAYGAIN tags",
    )
    return parser


def _compile(pattern: str | None, what: str) -> re.Pattern[str] | None:
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ParseError(f"Invalid {what} regexp {pattern!r}: {e}") from e


def _check_files(files: list[str]) -> None:
    for f in files:
        if not pathlib.Path(f).is_file():
            raise ParseError(f"No such file: {f}")
    check_flac_files(files)


def collect_tags(args: argparse.Namespace) -> TagSets:
    """Derive the final tag sets without writing anything."""
    files: list[str] = list(args.files)
    _check_files(files)

    title_re = _compile(args.title_regexp, "title")
    date_re = _compile(args.date_regexp, "date")
    want_titles = args.titles or title_re is not None
    want_dates = args.dates or date_re is not None

    global_tags: list[Tag] = []
    titles: list[str] = []
    if args.infofile is not None:
        info = InfoFileParser.from_path(args.infofile)
        mode = Mode(args.mode) if args.mode and not args.fields else None
        global_tags.extend(
            header_tags(info, mode, args.fields, args.album, args.combined_album)
        )
        if want_titles:
            titles = info.titles(title_re)
    elif want_titles or args.fields:
        raise ParseError("Reading the header or titles needs an info file (-i)")

    dates = extract_dates(files, date_re) if want_dates else []
    track_numbers = (
        extract_track_numbers(files, TrackNumberScheme(args.track_scheme))
        if args.track_scheme else []
    )

    global_tags.extend(parse_tag(t) for t in args.tags)

    replaygain = collect_replaygain(files, args.metaflac) if args.replaygain else {}

    file_tags = associate(
        files,
        dates=dates,
        track_numbers=track_numbers,
        titles=titles,
        extra=replaygain,
    )

    if args.edit:
        return edit_tags(global_tags, file_tags, files, args.review_file)
    return build_tag_sets(global_tags, file_tags, files)


def write_all(sets: TagSets, args: argparse.Namespace) -> None:
    """Write (or with -n, show) every file's tags in filename order."""
    quiet_bar = args.dry_run or args.print
    with progress_logging():
        for filename, tags in tqdm(sets.items(), total=len(sets), desc="Tagging", disable=quiet_bar):
            if args.print:
                logger.info(filename)
            if args.dry_run:
                logger.info(format_section(filename, sort_tags(tags)).rstrip("\n"))
                continue
            write_tags(filename, tags, args.metaflac)

    if not args.dry_run:
        logger.info(f"Tagged {len(sets)} file(s).")


def _check_header_options(args: argparse.Namespace) -> None:
    """Reject header options given on the command line without an info file.

    Must run before the config merge: a mode or album flag from the config
    file is only a default and is fine without -i.
    """
    if args.infofile is not None:
        return
    given = [
        flag for flag, value in (("-m", args.mode), ("-A", args.album), ("-B", args.combined_album))
        if value
    ]
    if given:
        raise ParseError(f"Header options {', '.join(given)} given without an info file (-i)")


def run(args: argparse.Namespace) -> None:
    """Run the whole pipeline. Raises FlacTaggerError on the first failure."""
    sets = collect_tags(args)
    if not len(sets):
        logger.info("Nothing to tag.")
        return
    write_all(sets, args)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        _check_header_options(args)
        merge_config_into_args(args, load_config())
        run(args)
    except FlacTaggerError as e:
        logger.error(f"error: {e}")
        sys.exit(1)
