"""Discovery of the item search endpoint from catalog links."""

import logging

from stac_catalog_client.constants import SEARCH_REL
from stac_catalog_client.exceptions import SearchNotSupportedError
from stac_catalog_client.models import Catalog, Link

logger = logging.getLogger(__name__)


def find_search_link(catalog: Catalog) -> Link:
    """
    Return the first link of the catalog whose relation is 'search'.

    Links are scanned in document order, so when a catalog advertises
    several search links the earliest one is used.

    Raises:
        SearchNotSupportedError: If the catalog has no search link
    """
    for link in catalog.links:
        if link.rel == SEARCH_REL:
            logger.debug(f"Search endpoint for catalog {catalog.id}: {link.href}")
            return link
    raise SearchNotSupportedError(catalog.id)
