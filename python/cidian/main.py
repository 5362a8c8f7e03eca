"""cidian CLI - CC-CEDICT toolkit.

Usage:
    python -m cidian.main varref check
    python -m cidian.main varref map --dict cedict_ts.u8
    python -m cidian.main record 1234
    python -m cidian.main variants
    python -m cidian.main taiwan major
    python -m cidian.main dictkey
    python -m cidian.main transcribe 1234 --backend epitran
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from . import config as cfg
from .builder.dictkey import DictKeyBuilder
from .builder.xref import ReferenceResolver
from .exceptions import CidianError
from .ingest.cedict import CedictParser
from .phonetics import get_transcriber, list_transcribers
from .reports import (
    format_record,
    scan_taiwan_major,
    scan_taiwan_special,
    scan_unmatched_variants,
)

logger = logging.getLogger("cidian")


def _positive_int(value: str) -> int:
    if not value.isdigit() or int(value) < 1:
        raise argparse.ArgumentTypeError(f"Invalid line number: {value}")
    return int(value)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="cidian - CC-CEDICT parsing and cross-reference toolkit"
    )
    parser.add_argument(
        "--dict",
        "-d",
        type=Path,
        help="Path to the decompressed CC-CEDICT file (default: from config)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=cfg.get_default("verbose", False),
        help="Log pass progress to stderr",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        default=cfg.get_default("quiet", False),
        help="Only log errors",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    varref = sub.add_parser("varref", help="Resolve variant references")
    varref.add_argument(
        "mode",
        nargs="?",
        choices=["check", "map"],
        default=cfg.default_mode(),
        help=f"Report exceptions or print the map (default: {cfg.default_mode()})",
    )

    record = sub.add_parser("record", help="Show the record at a line number")
    record.add_argument("line", type=_positive_int)
    record.add_argument("--json", action="store_true", help="Print as JSON")

    sub.add_parser("variants", help="List variant glosses with no reference")

    taiwan = sub.add_parser("taiwan", help="Scan Taiwan pronunciations")
    taiwan.add_argument("mode", choices=["special", "major"])

    sub.add_parser("dictkey", help="Print the headword/Pinyin key index")

    transcribe = sub.add_parser("transcribe", help="Transcribe a record's Pinyin")
    transcribe.add_argument("line", type=_positive_int)
    transcribe.add_argument(
        "--backend",
        "-b",
        choices=list_transcribers(),
        default=cfg.default_transcriber(),
        help=f"Transcription backend (default: {cfg.default_transcriber()})",
    )

    return parser


def _seek_record(parser: CedictParser, line: int):
    parser.seek(line)
    entry = parser.advance()
    if entry is None:
        raise CidianError(f"Line {line}: beyond end of file")
    if entry.line_number != line:
        raise CidianError(f"Line {line}: no record at given line number")
    return entry


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command, writing results to stdout."""
    dict_path = args.dict or cfg.dictionary_path()

    with CedictParser(dict_path) as parser:
        if args.command == "varref":
            result = ReferenceResolver(parser).run()
            lines = result.format_map() if args.mode == "map" else result.format_exceptions()

        elif args.command == "record":
            entry = _seek_record(parser, args.line)
            if args.json:
                lines = [json.dumps(entry.to_dict(), ensure_ascii=False, indent=2)]
            else:
                lines = format_record(entry)

        elif args.command == "variants":
            lines = [str(n) for n in scan_unmatched_variants(parser)]

        elif args.command == "taiwan":
            if args.mode == "special":
                lines = scan_taiwan_special(parser)
            else:
                lines = [r.format() for r in scan_taiwan_major(parser)]

        elif args.command == "dictkey":
            builder = DictKeyBuilder()
            builder.add_entries(parser)
            lines = DictKeyBuilder.format(builder.build())

        elif args.command == "transcribe":
            entry = _seek_record(parser, args.line)
            text = get_transcriber(args.backend).transcribe(entry.pronunciation)
            if text is None:
                raise CidianError(
                    f"Line {args.line}: transcription failed ({args.backend})"
                )
            lines = [text]

        else:
            raise CidianError(f"Unknown command: {args.command}")

    for line in lines:
        print(line)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        return run(args)
    except (CidianError, FileNotFoundError) as e:
        print(f"cidian: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
