from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import io as io_mod
from .lookup import translate
from .reference import ParseFailure, ReferenceStats, parse_delimited_text

SAMPLE_REFERENCE = """A1,B1_ASIN
A2,B2_ASIN
A1,B1_ASIN_UPDATED
SPC001,ASIN001
SPC002,ASIN002"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="spcmap",
        description="Translate a list of codes through a two-column reference table",
    )
    p.add_argument(
        "reference",
        nargs="?",
        help="Reference CSV/TSV/XLSX/XLS file ('-' to paste text on stdin)",
    )
    p.add_argument(
        "--query",
        help="File with one code per line to translate ('-' for stdin)",
    )
    p.add_argument("--output", help="Write translated lines to this file instead of stdout")
    p.add_argument(
        "--save",
        action="store_true",
        help="Write translated lines next to the query file as <name>.translated.txt",
    )
    p.add_argument("--sheet", help="XLSX/XLS sheet name (first sheet by default)")
    p.add_argument("--sample", action="store_true", help="Use the built-in sample reference data")
    p.add_argument(
        "--stats",
        action="store_true",
        help="Print the loaded reference size and load time",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.sample and args.reference:
        raise SystemExit("Give either a reference file or --sample, not both.")
    if not args.sample and not args.reference:
        raise SystemExit("A reference file (or --sample) is required.")
    if args.reference == "-" and args.query == "-":
        raise SystemExit("Reference and query cannot both be read from stdin.")
    if args.save and (not args.query or args.query == "-"):
        raise SystemExit("--save needs --query pointing at a file.")

    if args.sample:
        table = parse_delimited_text(SAMPLE_REFERENCE)
    else:
        try:
            table = io_mod.load_reference(args.reference, sheet=args.sheet)
        except ParseFailure as exc:
            print(exc)
            print("Please ensure it is a valid workbook and that the sheet exists.")
            return 1

    if args.stats:
        stats = ReferenceStats.from_table(table)
        print(
            f"Ready: {stats.unique_keys} codes (loaded {stats.last_updated:%Y-%m-%d %H:%M:%S})",
            file=sys.stderr,
        )

    if not args.query:
        return 0

    result = translate(io_mod.read_text(args.query), table)

    out_path: Optional[Path] = None
    if args.output:
        out_path = Path(args.output)
    elif args.save:
        out_path = io_mod.default_output_path(Path(args.query))

    if out_path is not None:
        written = io_mod.write_result(result.output, out_path)
        print(f"Wrote: {written}")
    else:
        sys.stdout.write(result.output + "\n")

    print(f"Matched: {result.found}, missing: {result.missing}", file=sys.stderr)
    return 0
