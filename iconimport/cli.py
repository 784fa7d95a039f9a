"""Command line entry point.

    iconimport icons/app.json --target main --target round --out main=app/src/generated/res

Prints every written file. Exit status is 0 on success and 1 when the import
fails; usage errors exit with 2.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from iconimport.config import Settings
from iconimport.errors import IconImportError
from iconimport.importer import run_import
from iconimport.models.requests import IconImportRequest

logger = logging.getLogger("iconimport")


def _destination(value: str) -> tuple[str, Path]:
    name, sep, directory = value.partition("=")
    if not sep or not name or not directory:
        raise argparse.ArgumentTypeError(f"expected NAME=DIR, got {value!r}")
    return name, Path(directory)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iconimport",
        description="Generate platform icon resources from an SVG icon and its metadata file.",
    )
    parser.add_argument("metadata", type=Path, help="icon metadata JSON file")
    parser.add_argument(
        "-t", "--target", dest="targets", action="append", required=True,
        help="target to generate (repeatable)",
    )
    parser.add_argument("--output-root", type=Path, help="root for per-target output directories")
    parser.add_argument(
        "--out", dest="destinations", action="append", type=_destination, default=[],
        metavar="NAME=DIR", help="output directory for one target (repeatable)",
    )
    parser.add_argument(
        "--ignore-unknown-types", action="store_true", default=None,
        help="tolerate targets of types this tool does not handle",
    )
    parser.add_argument("--log-level", help="logging level (default from ICONIMPORT_LOG_LEVEL)")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.output_root is not None:
        overrides["output_root"] = args.output_root
    if args.ignore_unknown_types is not None:
        overrides["ignore_unknown_target_types"] = True
    if args.log_level:
        overrides["log_level"] = args.log_level
    settings = Settings(**overrides)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    request = IconImportRequest(
        metadata_file=args.metadata,
        targets=frozenset(args.targets),
        destinations=dict(args.destinations),
    )

    try:
        result = run_import(request, settings=settings)
    except IconImportError as e:
        logger.debug("Icon import failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for path in result.files:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
