"""Command-line interface for STAC catalog client."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from stac_catalog_client.constants import __version__
from stac_catalog_client.cli_commands import (
    cmd_catalog,
    cmd_collection,
    cmd_collections,
    cmd_config,
    cmd_download,
    cmd_item,
    cmd_items,
    cmd_search,
)
from stac_catalog_client.cli_helpers import key_value


def setup_logging(verbosity: int = 0, quiet: bool = False) -> None:
    """Configure logging based on CLI flags.

    Log levels:
        --quiet: ERROR (only failures)
        default: WARNING
        -v:      INFO (requests and download progress)
        -vv:     DEBUG (show debug output)
    """
    if quiet:
        level = logging.ERROR
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Clean format for CLI output (just the message, like print())
    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stderr,
    )


def non_empty_string(value: str) -> str:
    """Argparse type that rejects empty strings."""
    if not value or not value.strip():
        raise argparse.ArgumentTypeError("cannot be empty")
    return value


def _add_paging(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page", type=int, default=0, help="Page number (1-based)")
    parser.add_argument("--limit", type=int, default=0, help="Page size")
    parser.add_argument("--json", action="store_true", help="Print the full item collection as JSON")


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="stac",
        description="Browse, search and download from a STAC web service",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"stac-catalog-client {__version__}",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Configuration file path",
    )
    parser.add_argument(
        "-u",
        "--url",
        help="Catalog URL (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv); use --quiet to suppress",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- catalog subcommand ---
    catalog_parser = subparsers.add_parser(
        "catalog",
        help="Show the catalog description",
    )
    catalog_parser.set_defaults(func=cmd_catalog)

    # --- collections subcommand ---
    collections_parser = subparsers.add_parser(
        "collections",
        help="List collections",
    )
    collections_parser.add_argument("--json", action="store_true", help="Print full JSON")
    collections_parser.set_defaults(func=cmd_collections)

    # --- collection subcommand ---
    collection_parser = subparsers.add_parser(
        "collection",
        help="Show a collection description",
    )
    collection_parser.add_argument("collection", type=non_empty_string, help="Collection name")
    collection_parser.set_defaults(func=cmd_collection)

    # --- items subcommand ---
    items_parser = subparsers.add_parser(
        "items",
        help="List items of a collection",
        description="List item ids of a collection (first page unless --page and --limit are given).",
    )
    items_parser.add_argument("collection", type=non_empty_string, help="Collection name")
    _add_paging(items_parser)
    items_parser.set_defaults(func=cmd_items)

    # --- item subcommand ---
    item_parser = subparsers.add_parser(
        "item",
        help="Show an item",
    )
    item_parser.add_argument("collection", type=non_empty_string, help="Collection name")
    item_parser.add_argument("item_id", type=non_empty_string, help="Item identifier")
    item_parser.set_defaults(func=cmd_item)

    # --- search subcommand ---
    search_parser = subparsers.add_parser(
        "search",
        help="Search items of a collection",
        description="Search items through the catalog's search endpoint.",
        epilog="Example: stac search sentinel-2-l2a -p datetime=2020-01-01 -p bbox=10,45,11,46",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    search_parser.add_argument("collection", type=non_empty_string, help="Collection name")
    search_parser.add_argument(
        "-p",
        "--param",
        type=key_value,
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Search parameter (repeatable, sent verbatim in the given order)",
    )
    _add_paging(search_parser)
    search_parser.set_defaults(func=cmd_search)

    # --- download subcommand ---
    download_parser = subparsers.add_parser(
        "download",
        help="Download the assets of an item",
        description="Download all assets of an item (or a single one with --asset) "
        "into <out-dir>/<item id>/.",
    )
    download_parser.add_argument("collection", type=non_empty_string, help="Collection name")
    download_parser.add_argument("item_id", type=non_empty_string, help="Item identifier")
    download_parser.add_argument("--asset", "-a", help="Asset key (default: all assets)")
    download_parser.add_argument(
        "--out-dir", "-o", type=Path, help="Output directory (default: data_dir from config)"
    )
    download_parser.set_defaults(func=cmd_download)

    # --- config subcommand ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show loaded configuration",
        description="Show the currently loaded configuration including all paths and settings.",
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()

    # Parse and execute
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose >= 2:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
