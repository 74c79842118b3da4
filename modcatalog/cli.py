"""
Command-Line Interface for the module catalog.

COMMANDS:
---------
modules          List every module in the catalog
majors           List every major and the catalog modules it contains
graph [CODE]     Print the prerequisite graph, or the modules that require CODE
fetch CODE...    Fetch modules from NUSMods (add --save to write them to the catalog)

Run as:
    python -m modcatalog modules
    modcatalog --data-dir ./data graph CS1010
"""

import argparse
import logging
import sys

from .catalog import Catalog
from .config import DATA_DIR, DEFAULT_ACAD_YEAR, DEFAULT_MODULE_TYPE

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def configure_logging(verbose: bool = False):
    """Send package logs to stderr; idempotent across repeated main() calls."""
    logger = logging.getLogger("modcatalog")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modcatalog",
        description="Browse the module catalog and its prerequisite graph.",
    )
    parser.add_argument("--data-dir", default=str(DATA_DIR),
                        help="Directory holding modules.txt and majors.txt")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("modules", help="List every module in the catalog.")
    sub.add_parser("majors", help="List every major with its modules.")

    graph = sub.add_parser("graph", help="Print the prerequisite dependency graph.")
    graph.add_argument("code", nargs="?", help="Only show the modules that require this code.")

    fetch = sub.add_parser("fetch", help="Fetch modules from NUSMods.")
    fetch.add_argument("codes", nargs="+", help="Module codes, e.g. CS2113 CS2040C")
    fetch.add_argument("--year", default=DEFAULT_ACAD_YEAR, help="Academic year, e.g. 2025-2026")
    fetch.add_argument("--type", dest="module_type", default=DEFAULT_MODULE_TYPE,
                       help="Category tag given to fetched modules")
    fetch.add_argument("--save", action="store_true", help="Add fetched modules to the catalog file.")

    return parser


def main(argv=None) -> int:
    """Entry point; returns a process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    acad_year = getattr(args, "year", DEFAULT_ACAD_YEAR)
    catalog = Catalog(data_dir=args.data_dir, acad_year=acad_year)
    catalog.load()

    if args.command == "modules":
        catalog.show_modules()
    elif args.command == "majors":
        catalog.show_majors()
    elif args.command == "graph":
        catalog.show_graph(args.code)
    elif args.command == "fetch":
        fetched = catalog.fetch_and_add(args.codes, args.module_type, save=args.save)
        if not fetched:
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
