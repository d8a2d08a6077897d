"""CLI helper functions for STAC catalog client.

This module contains CLI-specific utilities for argument parsing and output.
Business logic lives in the StacClient facade.
"""

import argparse
import json
from typing import Any

from stac_catalog_client import StacClient, StacConfig


def get_config(args: argparse.Namespace) -> StacConfig:
    """Load configuration and apply CLI overrides."""
    config = StacConfig.load(args.config) if args.config else StacConfig.load()

    if getattr(args, "url", None):
        config.catalog_url = args.url

    return config


def get_client(args: argparse.Namespace) -> StacClient:
    """Create StacClient from parsed arguments."""
    return StacClient.from_config(get_config(args))


def key_value(value: str) -> tuple[str, str]:
    """Argparse type for 'key=value' search parameters."""
    if "=" not in value:
        raise argparse.ArgumentTypeError(f"expected key=value, got {value!r}")
    key, val = value.split("=", 1)
    if not key.strip():
        raise argparse.ArgumentTypeError("parameter name cannot be empty")
    return key.strip(), val


def search_parameters(pairs: list[tuple[str, str]]) -> dict[str, str]:
    """Turn repeated -p key=value options into an ordered mapping (last one wins)."""
    params: dict[str, str] = {}
    for key, value in pairs:
        params[key] = value
    return params


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))
