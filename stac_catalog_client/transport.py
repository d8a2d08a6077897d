"""Authenticated HTTP GET transport for STAC requests and asset downloads."""

import logging
from typing import Optional

import requests

from stac_catalog_client.auth import (
    Authentication,
    AuthenticationType,
    TokenManager,
    get_auth_headers,
)
from stac_catalog_client.constants import DEFAULT_TIMEOUT, __version__
from stac_catalog_client.urls import validate_url

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Performs authenticated GET requests.

    The authentication scheme is fixed at construction and applied to every
    request. Responses are streamed: the caller reads ``response.raw`` and is
    responsible for closing the response.
    """

    def __init__(
        self,
        authentication: Optional[Authentication] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._auth = authentication or Authentication()
        self._auth.validate()
        self._timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = f"stac-catalog-client/{__version__}"
        self._session = session
        self._token_manager: Optional[TokenManager] = None

        if self._auth.type is AuthenticationType.BASIC:
            self._session.auth = (self._auth.user, self._auth.password)
        elif self._auth.type is AuthenticationType.TOKEN:
            self._token_manager = TokenManager(self._auth, timeout=timeout)

    @property
    def authentication(self) -> Authentication:
        return self._auth

    def _headers(self) -> dict:
        if self._token_manager is None:
            return {}
        return get_auth_headers(self._token_manager, self._auth.auth_header)

    def get(self, url: str) -> requests.Response:
        """
        Issue a streaming GET.

        Raises:
            InvalidUrlError: Before any network call, if the URL is malformed
            requests.HTTPError: On a non-success status
            requests.RequestException: On connection failures and timeouts
        """
        validate_url(url)
        logger.debug(f"GET {url}")

        response = self._session.get(
            url, headers=self._headers(), stream=True, timeout=self._timeout
        )
        try:
            response.raise_for_status()
        except requests.HTTPError:
            response.close()
            raise

        # Let raw reads undo gzip/deflate transfer encodings
        response.raw.decode_content = True
        return response

    def close(self) -> None:
        self._session.close()
