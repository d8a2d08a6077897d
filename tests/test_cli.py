"""Tests for the command-line interface."""

import json

import pytest
import responses

from conftest import BASE_URL, SEARCH_URL
from stac_catalog_client.cli import build_parser, main


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in ("STAC_CATALOG_URL", "STAC_AUTH_TYPE", "STAC_USER", "STAC_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


def test_search_params_are_ordered() -> None:
    args = build_parser().parse_args(
        ["search", "sentinel2", "-p", "datetime=2020-01-01", "-p", "bbox=1,2,3,4"]
    )

    assert args.param == [("datetime", "2020-01-01"), ("bbox", "1,2,3,4")]


def test_bad_search_param() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["search", "sentinel2", "-p", "noequals"])


@responses.activate
def test_collections(capsys, collections_dict) -> None:
    responses.add(responses.GET, f"{BASE_URL}/collections", json=collections_dict)

    assert main(["-u", BASE_URL, "collections"]) == 0

    assert capsys.readouterr().out.strip() == "sentinel2\tSentinel-2 L2A"


@responses.activate
def test_item_json(capsys, item_dict) -> None:
    responses.add(responses.GET, f"{BASE_URL}/collections/sentinel2/items/S2A_20200101", json=item_dict)

    assert main(["-u", BASE_URL, "item", "sentinel2", "S2A_20200101"]) == 0

    assert json.loads(capsys.readouterr().out)["id"] == "S2A_20200101"


@responses.activate
def test_items_paginated(capsys, item_collection_dict) -> None:
    responses.add(responses.GET, f"{BASE_URL}/collections/sentinel2/items", json=item_collection_dict)

    assert main(["-u", BASE_URL, "items", "sentinel2", "--page", "2", "--limit", "5"]) == 0

    assert responses.calls[0].request.url.endswith("/items?page=5&limit=5")
    assert capsys.readouterr().out.strip() == "S2A_20200101"


@responses.activate
def test_search(capsys, catalog_dict, item_collection_dict) -> None:
    responses.add(responses.GET, BASE_URL, json=catalog_dict)
    responses.add(responses.GET, SEARCH_URL, json=item_collection_dict)

    assert main(["-u", BASE_URL, "search", "sentinel2", "-p", "datetime=2020-01-01"]) == 0

    assert responses.calls[1].request.url == f"{SEARCH_URL}?datetime=2020-01-01&collections=sentinel2"


@responses.activate
def test_download_item(capsys, tmp_path, item_dict) -> None:
    responses.add(responses.GET, f"{BASE_URL}/collections/sentinel2/items/S2A_20200101", json=item_dict)
    responses.add(responses.GET, "https://data.example.com/S2A_20200101/B04.tif", body=b"band")
    responses.add(responses.GET, "https://data.example.com/S2A_20200101/thumb.png", body=b"png")

    code = main(["-u", BASE_URL, "download", "sentinel2", "S2A_20200101", "-o", str(tmp_path)])

    assert code == 0
    assert (tmp_path / "S2A_20200101" / "B04.tif").read_bytes() == b"band"
    assert (tmp_path / "S2A_20200101" / "thumb.png").read_bytes() == b"png"


@responses.activate
def test_download_to_default_data_dir(capsys, tmp_path, monkeypatch, item_dict) -> None:
    monkeypatch.delenv("STAC_DATA_DIR", raising=False)
    responses.add(responses.GET, f"{BASE_URL}/collections/sentinel2/items/S2A_20200101", json=item_dict)
    responses.add(responses.GET, "https://data.example.com/S2A_20200101/B04.tif", body=b"band")
    responses.add(responses.GET, "https://data.example.com/S2A_20200101/thumb.png", body=b"png")

    code = main(["-u", BASE_URL, "download", "sentinel2", "S2A_20200101"])

    assert code == 0
    folder = tmp_path / ".stac" / "data" / "S2A_20200101"
    assert (folder / "B04.tif").read_bytes() == b"band"
    assert (folder / "thumb.png").read_bytes() == b"png"


@responses.activate
def test_download_creates_default_data_dir(capsys, tmp_path, monkeypatch, item_dict) -> None:
    monkeypatch.delenv("STAC_DATA_DIR", raising=False)
    item_dict["assets"] = {}
    responses.add(responses.GET, f"{BASE_URL}/collections/sentinel2/items/S2A_20200101", json=item_dict)

    code = main(["-u", BASE_URL, "download", "sentinel2", "S2A_20200101"])

    assert code == 0
    assert (tmp_path / ".stac" / "data").is_dir()


@responses.activate
def test_download_unknown_asset(capsys, tmp_path, item_dict) -> None:
    responses.add(responses.GET, f"{BASE_URL}/collections/sentinel2/items/S2A_20200101", json=item_dict)

    code = main(["-u", BASE_URL, "download", "sentinel2", "S2A_20200101", "-a", "B99", "-o", str(tmp_path)])

    assert code == 1
    assert "B04, thumbnail" in capsys.readouterr().err


def test_missing_catalog_url(capsys) -> None:
    assert main(["catalog"]) == 1

    assert "no catalog URL configured" in capsys.readouterr().err


@responses.activate
def test_http_failure_exit_code(capsys) -> None:
    responses.add(responses.GET, BASE_URL, status=503)

    assert main(["-u", BASE_URL, "catalog"]) == 1

    assert "503" in capsys.readouterr().err
