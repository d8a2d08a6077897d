"""StacClient facade for browsing, searching and downloading from a STAC service."""

import logging
from contextlib import closing
from pathlib import Path
from typing import IO, Any, Callable, Mapping, Optional, TypeVar, Union

from stac_catalog_client.auth import Authentication
from stac_catalog_client.config import StacConfig
from stac_catalog_client.constants import DEFAULT_CHUNK_SIZE, DEFAULT_TIMEOUT
from stac_catalog_client.download import DownloadManager
from stac_catalog_client.exceptions import InvalidUrlError
from stac_catalog_client.models import (
    Asset,
    Catalog,
    Collection,
    CollectionList,
    Item,
    ItemCollection,
)
from stac_catalog_client.parser import StacParser
from stac_catalog_client.search import find_search_link
from stac_catalog_client.transport import HttpTransport
from stac_catalog_client import urls

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StacClient:
    """
    High-level client for a STAC web service.

    Provides a unified interface for:
    - Browsing the catalog, its collections and their items
    - Searching items of a collection by attribute
    - Downloading individual assets or whole items

    Every call fetches fresh data; nothing is cached between calls. The
    client only holds the base URL and its collaborators, so it can be shared
    between threads as far as the underlying requests session allows.
    """

    def __init__(
        self,
        base_url: str,
        authentication: Optional[Authentication] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        transport: Optional[HttpTransport] = None,
        parser: Optional[StacParser] = None,
    ):
        """
        Initialize STAC client.

        Args:
            base_url: URL of the STAC web service (landing page)
            authentication: Authentication scheme (none if not provided)
            timeout: Request timeout in seconds
            chunk_size: Download buffer size in bytes
            transport: Optional transport (built from authentication if not provided)
            parser: Optional response parser

        Raises:
            InvalidUrlError: If base_url is not an absolute http(s) URL
        """
        self._base_url = urls.validate_url(base_url).rstrip("/")
        self._transport = transport or HttpTransport(authentication, timeout=timeout)
        self._parser = parser or StacParser()
        self._downloader = DownloadManager(self._transport, chunk_size=chunk_size)

    @classmethod
    def from_config(cls, config: Optional[StacConfig] = None) -> "StacClient":
        """Create a client from configuration (defaults/file/env if not provided)."""
        config = config or StacConfig.load()
        if not config.catalog_url:
            raise InvalidUrlError("", "no catalog URL configured")
        return cls(
            config.catalog_url,
            config.authentication(),
            timeout=config.timeout,
            chunk_size=config.chunk_size,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def downloader(self) -> DownloadManager:
        return self._downloader

    def _fetch(self, url: str, parse: Callable[[IO[bytes]], T]) -> T:
        """GET a URL and parse its body, always releasing the response."""
        logger.info(f"Fetching {url}")
        with closing(self._transport.get(url)) as response:
            return parse(response.raw)

    # === BROWSING ===

    def get_catalog(self) -> Catalog:
        """Retrieve the catalog description (landing page)."""
        return self._fetch(self._base_url, self._parser.parse_catalog)

    def list_collections(self) -> CollectionList:
        """Retrieve the descriptions of all collections."""
        return self._fetch(urls.collections_url(self._base_url), self._parser.parse_collections)

    def get_collection(self, collection: str) -> Collection:
        """Retrieve a single collection description."""
        return self._fetch(
            urls.collection_url(self._base_url, collection), self._parser.parse_collection
        )

    def list_items(
        self,
        collection: str,
        page_number: int = 0,
        page_size: int = 0,
    ) -> ItemCollection:
        """
        Retrieve a page of items from a collection.

        Without page_number and page_size (or with either not positive) the
        server's default first page is returned.

        Args:
            collection: Collection name
            page_number: Page number (1-based)
            page_size: Page size
        """
        page = urls.PageSpec(page_number, page_size)
        return self._fetch(
            urls.items_url(self._base_url, collection, page),
            self._parser.parse_item_collection,
        )

    def get_item(self, collection: str, item_id: str) -> Item:
        """Retrieve a single item of a collection."""
        return self._fetch(
            urls.item_url(self._base_url, collection, item_id), self._parser.parse_item
        )

    # === SEARCH ===

    def search(
        self,
        collection: str,
        parameters: Optional[Mapping[str, Any]],
        page_number: int = 0,
        page_size: int = 0,
    ) -> ItemCollection:
        """
        Search items of a collection.

        The search endpoint is discovered from the catalog's 'search' link on
        every call. With ``parameters=None`` this is a plain item listing.

        Args:
            collection: Collection name
            parameters: Search criteria, sent in mapping order
            page_number: Page number (1-based)
            page_size: Page size

        Raises:
            SearchNotSupportedError: If the catalog has no search link
        """
        if parameters is None:
            return self.list_items(collection)

        catalog = self.get_catalog()
        search_link = find_search_link(catalog)
        url = urls.search_url(
            search_link, parameters, collection, urls.PageSpec(page_number, page_size)
        )
        return self._fetch(url, self._parser.parse_item_collection)

    # === DOWNLOAD ===

    def download(
        self,
        target: Union[Item, Asset, str],
        destination: Union[Path, str, IO[bytes], None] = None,
    ) -> Union[dict[str, Path], Path, int, IO[bytes]]:
        """
        Download an item, an asset or an asset URL.

        Args:
            target: Item (all its assets), Asset, or asset URL
            destination: Folder, writable binary stream, or None

        Returns:
            - Item + folder: mapping of asset key to file path, files placed
              in ``folder/<item.id>``
            - Asset/URL + folder: path of the downloaded file
            - Asset/URL + writable stream: number of bytes written
            - Asset/URL + None: readable stream the caller must close
        """
        if isinstance(target, Item):
            if destination is None or hasattr(destination, "write"):
                raise TypeError("Downloading an item requires a destination folder")
            return self._downloader.transfer_item(target, Path(destination))

        href = target.href if isinstance(target, Asset) else target

        if destination is None:
            return self._downloader.open_stream(href)
        if hasattr(destination, "write"):
            return self._downloader.transfer_to_stream(href, destination)
        return self._downloader.transfer_to_file(href, Path(destination))

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self._transport.close()

    def __enter__(self) -> "StacClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
