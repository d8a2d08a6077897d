"""STAC extensions: namespaced field groups attached to items and collections."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from stac_catalog_client.models import StacObject


class ExtensionType(enum.Enum):
    """Supported extensions, keyed by field prefix and schema URI."""

    EO = ("eo", "https://stac-extensions.github.io/eo/v1.0.0/schema.json")
    PROJ = ("proj", "https://stac-extensions.github.io/projection/v1.0.0/schema.json")
    VIEW = ("view", "https://stac-extensions.github.io/view/v1.0.0/schema.json")

    def __init__(self, prefix: str, schema_uri: str):
        self.prefix = prefix
        self.schema_uri = schema_uri

    @classmethod
    def from_uri(cls, uri: str) -> Optional[ExtensionType]:
        """Return the extension type declared by a schema URI, or None if unknown."""
        for ext_type in cls:
            if ext_type.schema_uri == uri:
                return ext_type
        return None


@dataclass
class Extension:
    """
    Fields of one extension, with the namespace prefix stripped.

    ``ext["cloud_cover"]`` reads the parent's ``eo:cloud_cover`` member.
    """

    type: ExtensionType
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def prefix(self) -> str:
        return self.type.prefix

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


def create_extension(parent: StacObject, ext_type: ExtensionType) -> Extension:
    """
    Build the extension view of a parent object.

    Args:
        parent: Item or collection exposing ``extension_fields()``
        ext_type: Extension to extract

    Returns:
        Extension holding every ``<prefix>:<name>`` member of the parent
    """
    namespace = f"{ext_type.prefix}:"
    fields = {
        key[len(namespace):]: value
        for key, value in parent.extension_fields().items()
        if key.startswith(namespace)
    }
    return Extension(type=ext_type, fields=fields)
