"""STAC catalog client - browse, search and download from STAC web services."""

import logging

# Library-friendly logging: prevents "No handler found" warnings when used as a library
logging.getLogger("stac_catalog_client").addHandler(logging.NullHandler())

from stac_catalog_client.auth import Authentication, AuthenticationType
from stac_catalog_client.client import StacClient
from stac_catalog_client.config import StacConfig
from stac_catalog_client.constants import __version__
from stac_catalog_client.exceptions import (
    AuthenticationError,
    CredentialsError,
    InvalidUrlError,
    SearchNotSupportedError,
    StacApiError,
    StacError,
    StacFormatError,
)
from stac_catalog_client.extensions import Extension, ExtensionType
from stac_catalog_client.models import (
    Asset,
    Catalog,
    Collection,
    CollectionList,
    Extent,
    GeometryType,
    Item,
    ItemCollection,
    Link,
)
from stac_catalog_client.urls import PageSpec

__all__ = [
    # Version
    "__version__",
    # Main client
    "StacClient",
    "StacConfig",
    "Authentication",
    "AuthenticationType",
    "PageSpec",
    # Domain objects
    "Catalog",
    "Collection",
    "CollectionList",
    "Item",
    "ItemCollection",
    "Asset",
    "Link",
    "Extent",
    "GeometryType",
    "Extension",
    "ExtensionType",
    # Exceptions
    "StacError",
    "InvalidUrlError",
    "StacFormatError",
    "StacApiError",
    "SearchNotSupportedError",
    "AuthenticationError",
    "CredentialsError",
]
