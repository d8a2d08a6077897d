"""Shared fixtures for STAC catalog client tests."""

import io
from typing import Optional, Union

import pytest
import requests

BASE_URL = "https://stac.example.com/api"
SEARCH_URL = "https://stac.example.com/api/search"


@pytest.fixture
def catalog_dict() -> dict:
    return {
        "type": "Catalog",
        "id": "example-catalog",
        "stac_version": "1.0.0",
        "description": "Example STAC API",
        "conformsTo": ["https://api.stacspec.org/v1.0.0/core"],
        "links": [
            {"rel": "self", "href": BASE_URL, "type": "application/json"},
            {"rel": "data", "href": f"{BASE_URL}/collections"},
            {"rel": "search", "href": SEARCH_URL, "type": "application/geo+json"},
        ],
    }


@pytest.fixture
def collection_dict() -> dict:
    return {
        "type": "Collection",
        "id": "sentinel2",
        "stac_version": "1.0.0",
        "stac_extensions": ["https://stac-extensions.github.io/eo/v1.0.0/schema.json"],
        "title": "Sentinel-2 L2A",
        "description": "Sentinel-2 surface reflectance",
        "license": "proprietary",
        "extent": {
            "spatial": {"bbox": [[-180.0, -90.0, 180.0, 90.0]]},
            "temporal": {"interval": [["2015-06-27T10:25:31Z", None]]},
        },
        "summaries": {"eo:cloud_cover": {"minimum": 0, "maximum": 100}},
        "links": [{"rel": "items", "href": f"{BASE_URL}/collections/sentinel2/items"}],
    }


@pytest.fixture
def item_dict() -> dict:
    return {
        "type": "Feature",
        "stac_version": "1.0.0",
        "stac_extensions": [
            "https://stac-extensions.github.io/eo/v1.0.0/schema.json",
            "https://stac-extensions.github.io/projection/v1.0.0/schema.json",
            "https://example.com/unknown/v1.0.0/schema.json",
        ],
        "id": "S2A_20200101",
        "collection": "sentinel2",
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[10, 45], [11, 45], [11, 46], [10, 46], [10, 45]]],
        },
        "bbox": [10, 45, 11, 46],
        "properties": {
            "datetime": "2020-01-01T10:30:00Z",
            "eo:cloud_cover": 12.5,
            "proj:epsg": 32632,
        },
        "links": [{"rel": "self", "href": f"{BASE_URL}/collections/sentinel2/items/S2A_20200101"}],
        "assets": {
            "B04": {
                "href": "https://data.example.com/S2A_20200101/B04.tif",
                "type": "image/tiff",
                "roles": ["data"],
                "eo:bands": [{"name": "B04"}],
            },
            "thumbnail": {
                "href": "https://data.example.com/S2A_20200101/thumb.png",
                "type": "image/png",
                "roles": ["thumbnail"],
            },
        },
    }


@pytest.fixture
def item_collection_dict(item_dict) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [item_dict],
        "numberMatched": 42,
        "numberReturned": 1,
        "links": [{"rel": "next", "href": f"{BASE_URL}/collections/sentinel2/items?page=2"}],
    }


@pytest.fixture
def collections_dict(collection_dict) -> dict:
    return {
        "collections": [collection_dict],
        "links": [{"rel": "self", "href": f"{BASE_URL}/collections"}],
    }


class FakeResponse:
    """Stand-in for requests.Response exposing a raw byte stream."""

    def __init__(self, data: bytes):
        self.raw = io.BytesIO(data)
        self.headers = {"content-length": str(len(data))}
        self.closed = False

    def close(self) -> None:
        self.closed = True
        self.raw.close()


class FakeTransport:
    """Transport serving canned payloads; an exception payload is raised on get()."""

    def __init__(self, payloads: Optional[dict[str, Union[bytes, Exception]]] = None):
        self.payloads = payloads or {}
        self.requested: list[str] = []
        self.responses: list[FakeResponse] = []

    def get(self, url: str) -> FakeResponse:
        self.requested.append(url)
        payload = self.payloads[url]
        if isinstance(payload, Exception):
            raise payload
        response = FakeResponse(payload)
        self.responses.append(response)
        return response

    def close(self) -> None:
        pass


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


def http_error(url: str, status: int = 500) -> requests.HTTPError:
    response = requests.Response()
    response.status_code = status
    response.url = url
    return requests.HTTPError(f"{status} Server Error for url: {url}", response=response)
