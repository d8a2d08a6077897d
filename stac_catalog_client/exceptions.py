"""Custom exceptions for STAC catalog client.

Transport failures (``requests.RequestException`` and subclasses) and local
filesystem failures (``OSError``) are not wrapped and reach the caller as-is.
"""


class StacError(Exception):
    """Base exception for STAC catalog client."""

    pass


class InvalidUrlError(StacError, ValueError):
    """A base URL or derived href is not a well-formed absolute URL."""

    def __init__(self, url: str, message: str = "malformed URL"):
        self.url = url
        super().__init__(f"{message}: {url!r}")


class StacFormatError(StacError):
    """Response body does not match the expected STAC JSON shape."""

    pass


class StacApiError(StacFormatError):
    """Service answered with a STAC API error document instead of a resource."""

    def __init__(self, code: str, description: str):
        self.code = code
        self.description = description
        super().__init__(f"{code}: {description}")


class SearchNotSupportedError(StacError):
    """Catalog does not advertise a link with relation 'search'."""

    def __init__(self, catalog_id: str):
        self.catalog_id = catalog_id
        super().__init__(f"Search not supported on catalog {catalog_id}")


class AuthenticationError(StacError):
    """Failed to obtain an access token from the login endpoint."""

    pass


class CredentialsError(StacError):
    """Missing or invalid credentials."""

    pass
