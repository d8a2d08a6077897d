"""Tests for configuration loading."""

from pathlib import Path

import pytest

from stac_catalog_client.auth import AuthenticationType
from stac_catalog_client.config import StacConfig
from stac_catalog_client.exceptions import CredentialsError

CONFIG_TOML = """
[api]
catalog_url = "https://stac.example.com/api"
timeout = 10

[auth]
type = "token"
login_url = "https://auth.example.com/login"
auth_header = "X-Auth-Token"

[paths]
data_dir = "/tmp/stac-data"

[download]
chunk_size = 4096
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in (
        "STAC_CATALOG_URL", "STAC_DATA_DIR", "STAC_CREDENTIALS_FILE", "STAC_AUTH_TYPE",
        "STAC_USER", "STAC_PASSWORD", "STAC_LOGIN_URL", "STAC_AUTH_HEADER", "STAC_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = StacConfig()

    assert config.catalog_url is None
    assert config.chunk_size == 65536
    assert config.auth_type == "none"
    assert config.data_dir == Path("~/.stac/data").expanduser()


def test_from_file(tmp_path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML)

    config = StacConfig.from_file(path)

    assert config.catalog_url == "https://stac.example.com/api"
    assert config.timeout == 10.0
    assert config.auth_type == "token"
    assert config.auth_header == "X-Auth-Token"
    assert config.data_dir == Path("/tmp/stac-data")
    assert config.chunk_size == 4096


def test_from_missing_file(tmp_path) -> None:
    assert StacConfig.from_file(tmp_path / "absent.toml") == StacConfig()


def test_env_overrides_file(tmp_path, monkeypatch) -> None:
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML)
    monkeypatch.setenv("STAC_CATALOG_URL", "https://other.example.com/stac")
    monkeypatch.setenv("STAC_TIMEOUT", "5")

    config = StacConfig.load(path)

    assert config.catalog_url == "https://other.example.com/stac"
    assert config.timeout == 5.0
    assert config.chunk_size == 4096


def test_authentication_none() -> None:
    auth = StacConfig().authentication()

    assert auth.type is AuthenticationType.NONE


def test_authentication_from_env(monkeypatch) -> None:
    monkeypatch.setenv("STAC_AUTH_TYPE", "basic")
    monkeypatch.setenv("STAC_USER", "alice")
    monkeypatch.setenv("STAC_PASSWORD", "secret")

    auth = StacConfig.from_env().authentication()

    assert auth.type is AuthenticationType.BASIC
    assert (auth.user, auth.password) == ("alice", "secret")


def test_authentication_from_credentials_file(tmp_path) -> None:
    creds = tmp_path / "credentials.txt"
    creds.write_text("USER=bob\nPASSWORD=pw\nLOGIN_URL=https://auth.example.com/login\n")
    config = StacConfig(auth_type="token", credentials_file=creds)

    auth = config.authentication()

    assert auth.user == "bob"
    assert auth.login_url == "https://auth.example.com/login"
    assert auth.auth_header == "Authorization"


def test_authentication_without_credentials(tmp_path) -> None:
    config = StacConfig(auth_type="basic", credentials_file=tmp_path / "none.txt")

    with pytest.raises(CredentialsError):
        config.authentication()


def test_ensure_directories(tmp_path) -> None:
    config = StacConfig(data_dir=tmp_path / "a" / "b")

    config.ensure_directories()

    assert (tmp_path / "a" / "b").is_dir()
