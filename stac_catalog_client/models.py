"""STAC domain objects: catalog, collections, items, assets and links."""

from __future__ import annotations

import enum
import types
from datetime import datetime
from typing import TYPE_CHECKING, Any, Iterator, Optional, Union, get_args, get_origin, get_type_hints

from stac_catalog_client.utils import name_from_href, parse_datetime, to_zulu

if TYPE_CHECKING:
    from stac_catalog_client.extensions import Extension, ExtensionType


class StacObject:
    """
    Base class for all STAC objects with automatic serialization.

    Provides a foundation for STAC data structures with:
    - Automatic JSON serialization/deserialization via to_dict()/from_dict()
    - Type-aware conversion (datetime, nested StacObject instances, etc.)
    - Members not declared by a subclass are kept as plain attributes and
      written back by to_dict(), so foreign fields survive a round trip

    Class Attributes:
        SORT_KEYS: If True, dictionary keys are sorted alphabetically in
            to_dict() output. Default: False (document order is meaningful
            for links and assets).
    """

    SORT_KEYS: bool = False

    def __init__(self, **kwargs: Any):
        """
        Initialize object from keyword arguments.

        Args:
            **kwargs: Field values stored as direct attributes.
        """
        for key, value in kwargs.items():
            self.__dict__[key] = value

    def to_dict(self, *, sort_keys: bool | None = None) -> dict[str, Any]:
        """
        Convert object to dictionary for JSON serialization.

        Recursively converts:
        - StacObject subclasses → their to_dict() result
        - datetime → ISO 8601 Zulu format string
        - Enum → its value
        - dict → recursively converted values
        - list → recursively converted elements

        Private attributes (starting with _) and None values are excluded.
        """
        sort_keys = self.SORT_KEYS if sort_keys is None else sort_keys

        def convert_value(value: Any) -> Any:
            if isinstance(value, StacObject):
                return value.to_dict(sort_keys=sort_keys)
            if isinstance(value, datetime):
                return to_zulu(value)
            if isinstance(value, enum.Enum):
                return value.value
            if isinstance(value, dict):
                items = value.items()
                if sort_keys:
                    items = sorted(items, key=lambda kv: kv[0])
                return {k: convert_value(v) for k, v in items}
            if isinstance(value, list):
                return [convert_value(v) for v in value]
            return value

        result: dict[str, Any] = {}

        attrs_items = self.__dict__.items()
        if sort_keys:
            attrs_items = sorted(attrs_items, key=lambda kv: kv[0])

        for key, val in attrs_items:
            if key.startswith("_") or val is None:
                continue
            result[key] = convert_value(val)

        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StacObject:
        """
        Create instance from dictionary with automatic type conversion.

        Uses __init__ type hints to determine target types:
        - str → datetime (if hint is datetime)
        - dict → StacObject subclass (if hint is a StacObject subclass)
        - dict[str, T] → recursively convert values to T
        - list[T] → recursively convert elements to T
        - Optional[T] → unwraps to T for conversion
        """
        hints = get_type_hints(cls.__init__)

        def strip_optional(hint: Any) -> Any:
            """Handle Optional[T] and T | None."""
            origin = get_origin(hint)
            if origin is Union or origin is getattr(types, "UnionType", None):
                args = [arg for arg in get_args(hint) if arg is not type(None)]
                return args[0] if len(args) == 1 else hint
            return hint

        def convert_value(value: Any, hint: Any) -> Any:
            if value is None:
                return None

            hint = strip_optional(hint)
            origin = get_origin(hint)

            if hint == datetime and isinstance(value, str):
                return parse_datetime(value)
            if isinstance(hint, type) and issubclass(hint, StacObject) and isinstance(value, dict):
                return hint.from_dict(value)
            if origin == dict and isinstance(value, dict):
                args = get_args(hint)
                if len(args) == 2:
                    return {k: convert_value(v, args[1]) for k, v in value.items()}
                return value
            if origin == list and isinstance(value, list):
                args = get_args(hint)
                if args:
                    return [convert_value(item, args[0]) for item in value]
                return value
            return value

        converted: dict[str, Any] = {}
        for key, value in data.items():
            if key in hints:
                converted[key] = convert_value(value, hints[key])
            else:
                converted[key] = value

        return cls(**converted)

    def __repr__(self) -> str:
        attrs = ", ".join(
            f"{k}={v!r}" for k, v in self.__dict__.items() if not k.startswith("_")
        )
        return f"{self.__class__.__name__}({attrs})"


class GeometryType(enum.Enum):
    """GeoJSON geometry types an item footprint may use."""

    POINT = "Point"
    MULTI_POINT = "MultiPoint"
    LINE_STRING = "LineString"
    MULTI_LINE_STRING = "MultiLineString"
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"
    GEOMETRY_COLLECTION = "GeometryCollection"


class Link(StacObject):
    """Hypermedia reference tagged with a relation type."""

    def __init__(
        self,
        rel: str = "",
        href: str = "",
        type: Optional[str] = None,
        title: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.rel = rel
        self.href = href
        self.type = type
        self.title = title


class Asset(StacObject):
    """Downloadable file attached to an item."""

    def __init__(
        self,
        href: str = "",
        type: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        roles: Optional[list[str]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.href = href
        self.type = type
        self.title = title
        self.description = description
        self.roles = roles

    @property
    def name(self) -> str:
        """File name the asset is saved under (last path segment of href)."""
        return name_from_href(self.href)


class _Linked(StacObject):
    """Mixin behaviour for objects carrying a links list."""

    links: list[Link]

    def links_by_rel(self, rel: str) -> list[Link]:
        """Return links with the given relation, in document order."""
        return [link for link in self.links if link.rel == rel]

    def get_link(self, rel: str) -> Optional[Link]:
        """Return the first link with the given relation, or None."""
        for link in self.links:
            if link.rel == rel:
                return link
        return None


class _Extensible(StacObject):
    """Mixin behaviour for objects declaring stac_extensions."""

    stac_extensions: list[str]

    def extension_fields(self) -> dict[str, Any]:
        """Return the mapping holding namespaced extension fields."""
        return self.__dict__

    @property
    def extensions(self) -> list[Extension]:
        """Known extensions declared by this object, in declaration order."""
        from stac_catalog_client.extensions import ExtensionType, create_extension

        result = []
        for uri in self.stac_extensions:
            ext_type = ExtensionType.from_uri(uri)
            if ext_type is not None:
                result.append(create_extension(self, ext_type))
        return result

    def get_extension(self, ext_type: ExtensionType) -> Optional[Extension]:
        """Return the extension of the given type if this object declares it."""
        for ext in self.extensions:
            if ext.type is ext_type:
                return ext
        return None


class SpatialExtent(StacObject):
    def __init__(self, bbox: Optional[list[list[float]]] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.bbox = bbox or []


class TemporalExtent(StacObject):
    """Time intervals; an open end is represented by None."""

    def __init__(
        self,
        interval: Optional[list[list[Optional[datetime]]]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.interval = interval or []


class Extent(StacObject):
    def __init__(
        self,
        spatial: Optional[SpatialExtent] = None,
        temporal: Optional[TemporalExtent] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.spatial = spatial or SpatialExtent()
        self.temporal = temporal or TemporalExtent()


class Catalog(_Linked):
    """Root description of a STAC service."""

    def __init__(
        self,
        id: str = "",
        type: Optional[str] = "Catalog",
        stac_version: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        conformsTo: Optional[list[str]] = None,
        links: Optional[list[Link]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id
        self.type = type
        self.stac_version = stac_version
        self.title = title
        self.description = description
        self.conformsTo = conformsTo
        self.links = links or []


class Collection(_Linked, _Extensible):
    """Named grouping of items within a catalog."""

    def __init__(
        self,
        id: str = "",
        type: Optional[str] = "Collection",
        stac_version: Optional[str] = None,
        stac_extensions: Optional[list[str]] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        keywords: Optional[list[str]] = None,
        license: Optional[str] = None,
        extent: Optional[Extent] = None,
        summaries: Optional[dict[str, Any]] = None,
        links: Optional[list[Link]] = None,
        assets: Optional[dict[str, Asset]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id
        self.type = type
        self.stac_version = stac_version
        self.stac_extensions = stac_extensions or []
        self.title = title
        self.description = description
        self.keywords = keywords
        self.license = license
        self.extent = extent
        self.summaries = summaries
        self.links = links or []
        self.assets = assets

    def extension_fields(self) -> dict[str, Any]:
        return self.summaries or {}


class CollectionList(_Linked):
    """Response of the /collections endpoint."""

    def __init__(
        self,
        collections: Optional[list[Collection]] = None,
        links: Optional[list[Link]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.collections = collections or []
        self.links = links or []

    def __iter__(self) -> Iterator[Collection]:
        return iter(self.collections)

    def __len__(self) -> int:
        return len(self.collections)


class Item(_Linked, _Extensible):
    """Single geospatial record with metadata and named assets."""

    def __init__(
        self,
        id: str = "",
        type: Optional[str] = "Feature",
        stac_version: Optional[str] = None,
        stac_extensions: Optional[list[str]] = None,
        geometry: Optional[dict[str, Any]] = None,
        bbox: Optional[list[float]] = None,
        properties: Optional[dict[str, Any]] = None,
        links: Optional[list[Link]] = None,
        assets: Optional[dict[str, Asset]] = None,
        collection: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id
        self.type = type
        self.stac_version = stac_version
        self.stac_extensions = stac_extensions or []
        self.geometry = geometry
        self.bbox = bbox
        self.properties = properties or {}
        self.links = links or []
        self.assets = assets or {}
        self.collection = collection

    def extension_fields(self) -> dict[str, Any]:
        return self.properties

    @property
    def datetime(self) -> Optional[datetime]:
        """Nominal acquisition time from properties, if set."""
        value = self.properties.get("datetime")
        return parse_datetime(value) if value else None

    @property
    def geometry_type(self) -> Optional[GeometryType]:
        if not self.geometry or "type" not in self.geometry:
            return None
        return GeometryType(self.geometry["type"])


class ItemCollection(_Linked):
    """A page of items (GeoJSON FeatureCollection)."""

    def __init__(
        self,
        type: Optional[str] = "FeatureCollection",
        features: Optional[list[Item]] = None,
        links: Optional[list[Link]] = None,
        numberMatched: Optional[int] = None,
        numberReturned: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.type = type
        self.features = features or []
        self.links = links or []
        self.numberMatched = numberMatched
        self.numberReturned = numberReturned

    @property
    def next_link(self) -> Optional[Link]:
        """Link to the following page, as advertised by the server."""
        return self.get_link("next")

    def __iter__(self) -> Iterator[Item]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)
