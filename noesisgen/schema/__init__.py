"""Schema model, registry and loader for Noesis structure files."""

from .loader import (
    PropertyDeclarationError,
    SchemaError,
    SchemaLoadError,
    SchemaSource,
    classify_property,
    load_schema,
    load_schema_dir,
    read_schema_sources,
)
from .models import BuiltInDef, ClassDef, EnumDef, PropertyKind
from .registry import InsertResult, Registry, RegistryBuilder, UnknownStructureError

__all__ = [
    "BuiltInDef",
    "ClassDef",
    "EnumDef",
    "InsertResult",
    "PropertyDeclarationError",
    "PropertyKind",
    "Registry",
    "RegistryBuilder",
    "SchemaError",
    "SchemaLoadError",
    "SchemaSource",
    "UnknownStructureError",
    "classify_property",
    "load_schema",
    "load_schema_dir",
    "read_schema_sources",
]
