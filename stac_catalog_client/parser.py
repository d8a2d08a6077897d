"""Parse STAC API response bodies into domain objects."""

import json
import logging
from typing import IO, Any

from stac_catalog_client.exceptions import StacApiError, StacFormatError
from stac_catalog_client.models import (
    Catalog,
    Collection,
    CollectionList,
    Item,
    ItemCollection,
)

logger = logging.getLogger(__name__)


class StacParser:
    """
    Turns a binary response stream into a STAC object.

    Every entry point consumes the stream (it is not closed here) and either
    returns the expected object or raises StacFormatError.
    """

    def parse_catalog(self, stream: IO[bytes]) -> Catalog:
        data = self._load(stream)
        self._require(data, "id", str, "Catalog")
        return self._build(Catalog, data)

    def parse_collections(self, stream: IO[bytes]) -> CollectionList:
        data = self._load(stream)
        self._require(data, "collections", list, "CollectionList")
        for entry in data["collections"]:
            self._require(entry, "id", str, "Collection")
        return self._build(CollectionList, data)

    def parse_collection(self, stream: IO[bytes]) -> Collection:
        data = self._load(stream)
        self._require(data, "id", str, "Collection")
        return self._build(Collection, data)

    def parse_item_collection(self, stream: IO[bytes]) -> ItemCollection:
        data = self._load(stream)
        self._require(data, "features", list, "ItemCollection")
        for entry in data["features"]:
            self._require(entry, "id", str, "Item")
        return self._build(ItemCollection, data)

    def parse_item(self, stream: IO[bytes]) -> Item:
        data = self._load(stream)
        self._require(data, "id", str, "Item")
        return self._build(Item, data)

    @staticmethod
    def _load(stream: IO[bytes]) -> dict[str, Any]:
        """Decode the JSON document and reject STAC API error bodies."""
        try:
            data = json.load(stream)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StacFormatError(f"Response is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise StacFormatError(f"Expected a JSON object, got {type(data).__name__}")

        # STAC API error documents: {"code": "...", "description": "..."}
        if "code" in data and "description" in data and "type" not in data:
            logger.debug(f"Server returned error document: {data}")
            raise StacApiError(str(data["code"]), str(data["description"]))

        return data

    @staticmethod
    def _require(data: Any, key: str, kind: type, what: str) -> None:
        if not isinstance(data, dict):
            raise StacFormatError(f"{what} must be a JSON object")
        if not isinstance(data.get(key), kind):
            raise StacFormatError(f"{what} is missing required member '{key}'")

    @staticmethod
    def _build(model: type, data: dict[str, Any]) -> Any:
        try:
            return model.from_dict(data)
        except (TypeError, ValueError) as e:
            raise StacFormatError(f"Malformed {model.__name__}: {e}") from e
