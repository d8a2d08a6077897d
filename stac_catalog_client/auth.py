"""Authentication schemes for STAC services (none, HTTP basic, login token)."""

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import requests

from stac_catalog_client.constants import (
    DEFAULT_AUTH_HEADER,
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_TIMEOUT,
    DEFAULT_TOKEN_LIFETIME,
)
from stac_catalog_client.exceptions import AuthenticationError, CredentialsError


class AuthenticationType(enum.Enum):
    NONE = "none"
    BASIC = "basic"
    TOKEN = "token"

    @classmethod
    def parse(cls, value: str) -> "AuthenticationType":
        """Case-insensitive lookup by name or value."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise CredentialsError(
                f"Unknown authentication type {value!r} (expected one of: none, basic, token)"
            )


@dataclass
class Authentication:
    """
    Authentication scheme of a STAC web service.

    Attributes:
        type: NONE, BASIC or TOKEN
        user: User name (BASIC and TOKEN)
        password: Password (BASIC and TOKEN)
        login_url: Endpoint exchanging user/password for a token (TOKEN only)
        auth_header: Header carrying the token (TOKEN only)
    """

    type: AuthenticationType = AuthenticationType.NONE
    user: Optional[str] = None
    password: Optional[str] = None
    login_url: Optional[str] = None
    auth_header: str = DEFAULT_AUTH_HEADER

    def validate(self) -> None:
        """Raise CredentialsError if the scheme lacks a required setting."""
        if self.type is AuthenticationType.NONE:
            return
        missing = []
        if not self.user:
            missing.append("user")
        if not self.password:
            missing.append("password")
        if self.type is AuthenticationType.TOKEN and not self.login_url:
            missing.append("login_url")
        if missing:
            raise CredentialsError(
                f"Missing credentials for {self.type.value} authentication: {', '.join(missing)}"
            )


@dataclass
class Credentials:
    """User credentials container."""

    user: str
    password: str
    login_url: Optional[str] = None
    auth_header: Optional[str] = None


def load_credentials(credentials_file: Optional[Path] = None) -> Credentials:
    """
    Load credentials from file.

    File format (one key=value per line):
        USER=...
        PASSWORD=...
        LOGIN_URL=...    (optional, token authentication)
        AUTH_HEADER=...  (optional, token authentication)
    """
    if credentials_file is None:
        credentials_file = Path(DEFAULT_CREDENTIALS_FILE).expanduser()

    if not credentials_file.exists():
        raise CredentialsError(f"Credentials file not found: {credentials_file}")

    creds = {}
    with open(credentials_file, "r") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            creds[key.strip().upper()] = value.strip()

    user = creds.get("USER")
    password = creds.get("PASSWORD")

    if not user or not password:
        missing = [key for key in ("USER", "PASSWORD") if not creds.get(key)]
        raise CredentialsError(f"Missing credentials: {', '.join(missing)}")

    return Credentials(
        user=user,
        password=password,
        login_url=creds.get("LOGIN_URL"),
        auth_header=creds.get("AUTH_HEADER"),
    )


class TokenManager:
    """Obtains and caches the access token used by TOKEN authentication."""

    def __init__(
        self,
        authentication: Authentication,
        token_lifetime_buffer: int = 60,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize token manager.

        Args:
            authentication: TOKEN scheme with user, password and login_url
            token_lifetime_buffer: Seconds before expiry to refresh token
            timeout: Login request timeout in seconds
        """
        self._auth = authentication
        self._buffer = token_lifetime_buffer
        self._timeout = timeout
        self._access_token: Optional[str] = None
        self._expires_at: Optional[datetime] = None

    def get_token(self) -> str:
        """Get a valid access token, logging in again if necessary."""
        if self._is_token_valid():
            return self._access_token
        return self._login()

    def _is_token_valid(self) -> bool:
        """Check if current token is still valid (with buffer)."""
        if self._access_token is None or self._expires_at is None:
            return False
        return datetime.now(timezone.utc) < (self._expires_at - timedelta(seconds=self._buffer))

    def _login(self) -> str:
        """Exchange user/password for a new access token."""
        data = {
            "username": self._auth.user,
            "password": self._auth.password,
        }

        try:
            response = requests.post(self._auth.login_url, data=data, timeout=self._timeout)
            response.raise_for_status()
            response_json = response.json()
        except requests.RequestException as e:
            raise AuthenticationError(f"Login failed at {self._auth.login_url}: {e}")
        except ValueError:
            raise AuthenticationError(f"Login reply from {self._auth.login_url} is not JSON")

        access_token = response_json.get("access_token") or response_json.get("token")
        expires_in = response_json.get("expires_in", DEFAULT_TOKEN_LIFETIME)

        if not access_token:
            raise AuthenticationError("No access_token in login response")

        self._access_token = access_token
        self._expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)

        return self._access_token


def get_auth_headers(token_manager: TokenManager, header: str = DEFAULT_AUTH_HEADER) -> dict:
    """Get the token header for authenticated requests.

    The standard Authorization header carries a bearer token; any custom
    header carries the raw token.
    """
    token = token_manager.get_token()
    if header.lower() == DEFAULT_AUTH_HEADER.lower():
        return {header: f"Bearer {token}"}
    return {header: token}
