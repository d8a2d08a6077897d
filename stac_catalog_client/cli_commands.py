"""CLI command handlers for STAC catalog client."""

import argparse
import sys
from pathlib import Path

from stac_catalog_client.cli_helpers import (
    get_client,
    get_config,
    print_json,
    search_parameters,
)
from stac_catalog_client.models import ItemCollection


def _print_items(items: ItemCollection, as_json: bool) -> None:
    if as_json:
        print_json(items.to_dict())
        return
    for item in items:
        print(item.id)
    if items.numberMatched is not None:
        print(f"{len(items)} of {items.numberMatched} item(s)", file=sys.stderr)


# --- Command handlers ---


def cmd_catalog(args: argparse.Namespace) -> int:
    """Handle 'catalog' command."""
    with get_client(args) as client:
        print_json(client.get_catalog().to_dict())
    return 0


def cmd_collections(args: argparse.Namespace) -> int:
    """Handle 'collections' command."""
    with get_client(args) as client:
        collections = client.list_collections()

    if args.json:
        print_json(collections.to_dict())
        return 0

    for collection in collections:
        if collection.title:
            print(f"{collection.id}\t{collection.title}")
        else:
            print(collection.id)
    return 0


def cmd_collection(args: argparse.Namespace) -> int:
    """Handle 'collection' command."""
    with get_client(args) as client:
        print_json(client.get_collection(args.collection).to_dict())
    return 0


def cmd_items(args: argparse.Namespace) -> int:
    """Handle 'items' command."""
    with get_client(args) as client:
        items = client.list_items(args.collection, args.page, args.limit)
    _print_items(items, args.json)
    return 0


def cmd_item(args: argparse.Namespace) -> int:
    """Handle 'item' command."""
    with get_client(args) as client:
        print_json(client.get_item(args.collection, args.item_id).to_dict())
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    """
    Handle 'search' command.

    Without any -p option this is a plain item listing of the collection.
    """
    params = search_parameters(args.param) or None
    with get_client(args) as client:
        items = client.search(args.collection, params, args.page, args.limit)
    _print_items(items, args.json)
    return 0


def cmd_download(args: argparse.Namespace) -> int:
    """Handle 'download' command (a whole item, or one asset with --asset)."""
    config = get_config(args)
    if args.out_dir:
        out_dir = args.out_dir
    else:
        config.ensure_directories()
        out_dir = config.data_dir

    with get_client(args) as client:
        item = client.get_item(args.collection, args.item_id)

        if args.asset:
            asset = item.assets.get(args.asset)
            if asset is None:
                available = ", ".join(item.assets) or "none"
                print(
                    f"Error: item {item.id} has no asset {args.asset!r} (available: {available})",
                    file=sys.stderr,
                )
                return 1
            path = client.download(asset, Path(out_dir) / item.id)
            print(path)
            return 0

        paths = client.download(item, Path(out_dir))

    for path in paths.values():
        print(path)
    print(f"Downloaded {len(paths)} asset(s)", file=sys.stderr)
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Handle 'config' command."""
    config = get_config(args)

    print(f"Catalog URL:      {config.catalog_url or '(not set)'}")
    print(f"Data dir:         {config.data_dir}")
    print(f"Credentials file: {config.credentials_file}")
    print(f"Auth type:        {config.auth_type}")
    if config.login_url:
        print(f"Login URL:        {config.login_url}")
    print(f"Auth header:      {config.auth_header}")
    print(f"Timeout:          {config.timeout}s")
    print(f"Chunk size:       {config.chunk_size} bytes")
    return 0
