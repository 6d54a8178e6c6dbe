"""Command-line anagram finder."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from models import SearchOptions
from solver import AnagramFinder, PreconditionError
from utils import (
    DEFAULT_DICTIONARY,
    export_report,
    format_result_line,
    load_config,
    resolve_dictionary_path,
    save_config,
    setup_logging,
)

__version__ = "0.8.5"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agram",
        description="Find the anagrams of words in a dictionary file, or check two words against each other.",
    )
    parser.add_argument(
        "-s", "--search",
        nargs="+",
        default=[],
        metavar="WORD",
        help="Words to search for anagrams of.",
    )
    parser.add_argument(
        "-c", "--compare",
        nargs=2,
        metavar=("WORD_A", "WORD_B"),
        help="Two words to check against each other. Takes precedence over -s.",
    )
    parser.add_argument("-o", "--one", action="store_true", help="Find only the first anagram of each word.")
    parser.add_argument(
        "-b", "--base",
        action="store_true",
        help="Match on base letters only, ignoring length and letter count.",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Don't print status messages, useful for feeding to other programs.",
    )
    parser.add_argument(
        "-d", "--dict",
        help=f"Dictionary file. Defaults to the configured dictionary or {DEFAULT_DICTIONARY}.",
    )
    parser.add_argument(
        "-e", "--export",
        metavar="FILE.json",
        help="Also save search results as JSON, with a CSV alongside.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()

    if not args.search and not args.compare:
        parser.print_help()
        return 2

    if args.export and Path(args.export).suffix.lower() == ".csv":
        parser.error("--export takes the JSON file name; the CSV is written alongside it")

    options = SearchOptions(only_find_one=args.one, use_base_letters=args.base, quiet=args.quiet)
    finder = AnagramFinder(options, status_callback=print)

    if args.compare:
        print("yes" if finder.compare(*args.compare) else "no")
        return 0

    config = load_config()
    dictionary_path = resolve_dictionary_path(args.dict, config)

    try:
        report = finder.search(args.search, dictionary_path)
    except (PreconditionError, OSError) as exc:
        logger.error("Search failed: %s", exc)
        print(f"agram: {exc}", file=sys.stderr)
        return 1

    for result in report.results:
        print(format_result_line(result))

    config["last_dictionary_path"] = str(Path(dictionary_path).resolve())
    save_config(config)

    if args.export:
        json_path = Path(args.export)
        csv_path = json_path.with_suffix(".csv")
        try:
            export_report(json_path=json_path, csv_path=csv_path, report=report, options=options)
        except OSError as exc:
            logger.exception("Export failed")
            print(f"agram: could not save results: {exc}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
