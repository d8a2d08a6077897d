"""Configuration management for STAC catalog client."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os

from stac_catalog_client.auth import (
    Authentication,
    AuthenticationType,
    load_credentials,
)
from stac_catalog_client.constants import (
    DEFAULT_AUTH_HEADER,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONFIG_FILE,
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_DATA_DIR,
    DEFAULT_TIMEOUT,
)

# Environment variable -> (attribute, converter)
ENV_VARS = {
    "STAC_CATALOG_URL": ("catalog_url", str),
    "STAC_DATA_DIR": ("data_dir", lambda v: Path(v).expanduser()),
    "STAC_CREDENTIALS_FILE": ("credentials_file", lambda v: Path(v).expanduser()),
    "STAC_AUTH_TYPE": ("auth_type", str),
    "STAC_USER": ("user", str),
    "STAC_PASSWORD": ("password", str),
    "STAC_LOGIN_URL": ("login_url", str),
    "STAC_AUTH_HEADER": ("auth_header", str),
    "STAC_TIMEOUT": ("timeout", float),
}


@dataclass
class StacConfig:
    """Central configuration for STAC catalog client."""

    # API endpoint
    catalog_url: Optional[str] = None

    # Directories
    data_dir: Path = field(default_factory=lambda: Path(DEFAULT_DATA_DIR).expanduser())

    # Credentials
    credentials_file: Path = field(
        default_factory=lambda: Path(DEFAULT_CREDENTIALS_FILE).expanduser()
    )
    auth_type: str = AuthenticationType.NONE.value
    user: Optional[str] = None
    password: Optional[str] = None
    login_url: Optional[str] = None
    auth_header: str = DEFAULT_AUTH_HEADER

    # Transfer settings
    timeout: float = DEFAULT_TIMEOUT
    chunk_size: int = DEFAULT_CHUNK_SIZE

    @classmethod
    def from_env(cls) -> "StacConfig":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    def _apply_env(self) -> None:
        for name, (attr, convert) in ENV_VARS.items():
            if value := os.environ.get(name):
                setattr(self, attr, convert(value))

    @classmethod
    def from_file(cls, config_path: Path) -> "StacConfig":
        """Load configuration from TOML file."""
        try:
            import tomllib
        except ImportError:
            import tomli as tomllib

        config = cls()

        if not config_path.exists():
            return config

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        # Parse api section
        if api := data.get("api"):
            if catalog_url := api.get("catalog_url"):
                config.catalog_url = catalog_url
            if timeout := api.get("timeout"):
                config.timeout = float(timeout)

        # Parse auth section
        if auth := data.get("auth"):
            if auth_type := auth.get("type"):
                config.auth_type = auth_type
            if user := auth.get("user"):
                config.user = user
            if password := auth.get("password"):
                config.password = password
            if login_url := auth.get("login_url"):
                config.login_url = login_url
            if auth_header := auth.get("auth_header"):
                config.auth_header = auth_header

        # Parse paths section
        if paths := data.get("paths"):
            if data_dir := paths.get("data_dir"):
                config.data_dir = Path(data_dir).expanduser()
            if creds := paths.get("credentials_file"):
                config.credentials_file = Path(creds).expanduser()

        # Parse download section
        if download := data.get("download"):
            if chunk_size := download.get("chunk_size"):
                config.chunk_size = int(chunk_size)

        return config

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "StacConfig":
        """
        Load configuration with priority:
        1. Environment variables
        2. Config file (if provided or default exists)
        3. Defaults
        """
        config = cls()

        if config_path is None:
            config_path = Path(DEFAULT_CONFIG_FILE).expanduser()

        if config_path.exists():
            config = cls.from_file(config_path)

        config._apply_env()
        return config

    def authentication(self) -> Authentication:
        """
        Build the authentication scheme for this configuration.

        For BASIC and TOKEN schemes without a user/password in config or
        environment, credentials are read from ``credentials_file``.
        """
        auth_type = AuthenticationType.parse(self.auth_type)
        auth = Authentication(
            type=auth_type,
            user=self.user,
            password=self.password,
            login_url=self.login_url,
            auth_header=self.auth_header,
        )
        if auth_type is AuthenticationType.NONE:
            return auth

        if not (auth.user and auth.password):
            credentials = load_credentials(self.credentials_file)
            auth.user = credentials.user
            auth.password = credentials.password
            auth.login_url = auth.login_url or credentials.login_url
            if credentials.auth_header:
                auth.auth_header = credentials.auth_header

        auth.validate()
        return auth

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
