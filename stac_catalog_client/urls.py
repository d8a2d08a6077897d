"""Request URL construction for STAC API endpoints.

Query strings are assembled verbatim: keys and values are inserted with
``str()`` and no percent-encoding, and path segments (collection names,
item ids) are not escaped. Callers pass already-valid segments.

Pagination note: when a page is requested, the page *size* is sent as both
``page`` and ``limit`` (``page=<size>&limit=<size>``); the page number itself
is never transmitted. Servers relying on this client expect that shape.
"""

from typing import Any, Mapping, NamedTuple, Optional
from urllib.parse import urlparse

from stac_catalog_client.exceptions import InvalidUrlError
from stac_catalog_client.models import Link


class PageSpec(NamedTuple):
    """Requested page; (0, 0) means the server's default first page."""

    page_number: int = 0
    page_size: int = 0

    @property
    def is_paginated(self) -> bool:
        return self.page_number > 0 and self.page_size > 0


UNPAGINATED = PageSpec(0, 0)


def validate_url(url: str) -> str:
    """
    Check that a URL is absolute http(s) with a host.

    Returns:
        The URL unchanged

    Raises:
        InvalidUrlError: If the URL is relative, empty or has another scheme
    """
    if not isinstance(url, str) or not url:
        raise InvalidUrlError(str(url), "empty URL")
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidUrlError(url, str(e)) from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidUrlError(url)
    return url


def _page_query(page: PageSpec) -> str:
    return f"page={page.page_size}&limit={page.page_size}"


def collections_url(base: str) -> str:
    return validate_url(f"{base}/collections")


def collection_url(base: str, name: str) -> str:
    return validate_url(f"{base}/collections/{name}")


def items_url(base: str, collection: str, page: PageSpec = UNPAGINATED) -> str:
    """URL of a collection's items, with a page query only when paginated."""
    href = f"{base}/collections/{collection}/items"
    if page.is_paginated:
        href += "?" + _page_query(page)
    return validate_url(href)


def item_url(base: str, collection: str, item_id: str) -> str:
    return validate_url(f"{base}/collections/{collection}/items/{item_id}")


def search_url(
    search_link: Link,
    params: Mapping[str, Any],
    collection: str,
    page: Optional[PageSpec] = None,
) -> str:
    """
    Build an item search URL from the catalog's search link.

    Query order: every search parameter in mapping order, then
    ``collections``, then the page query when paginated.

    Example:
        >>> search_url(Link("search", "https://x/search"), {"datetime": "2020-01-01"}, "sentinel2")
        'https://x/search?datetime=2020-01-01&collections=sentinel2'
    """
    page = page or UNPAGINATED
    href = search_link.href + "?"
    for key, value in params.items():
        href += f"{key}={value}&"
    href += f"collections={collection}&"
    if page.is_paginated:
        href += _page_query(page)
    if href.endswith("&"):
        href = href[:-1]
    return validate_url(href)
