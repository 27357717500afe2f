"""Schema loader: structure files → :class:`~noesisgen.schema.registry.Registry`.

Each structure file holds exactly one ``<Class>`` or ``<Enum>`` root:

.. code-block:: xml

    <Class Name="Card">
      <Property Name="Title" Type="String" StringMaxWordCount="4"/>
      <Property Name="Art" Type="Object" SubType="ImageSource"/>
      <Property Name="Tags" Type="Collection" SubType="Noesis.String"/>
    </Class>

    <Enum Name="Rarity">
      <Item Name="Common" Value="0"/>
      <Item Name="Rare" Value="1"/>
    </Enum>

Failures are contained as narrowly as possible: a bad property drops only that
property, a bad file drops only that file. Only an unreadable structures
directory is fatal.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, NamedTuple, Optional

from pydantic import BaseModel, ValidationError

from ..utils.logging import get_logger, log_registry_summary
from ..xmltree import Node, XmlTreeError, coerce_scalar, read_xml_file
from .models import (
    BooleanKind,
    BrushKind,
    ClassDef,
    CollectionKind,
    CommandKind,
    EnumDef,
    EnumKind,
    FontKind,
    ImageKind,
    NumberKind,
    ObjectKind,
    PropertyKind,
    StringKind,
    final_segment,
)
from .registry import InsertResult, Registry, RegistryBuilder, seed_builtins

__all__ = [
    "SchemaError",
    "PropertyDeclarationError",
    "SchemaLoadError",
    "SchemaSource",
    "classify_property",
    "load_class",
    "load_enum",
    "load_schema",
    "load_schema_dir",
    "read_schema_sources",
]

logger = get_logger(__name__)


class SchemaError(Exception):
    """Base class for schema loading errors."""


class PropertyDeclarationError(SchemaError):
    """A ``<Property>`` declaration could not be classified."""


class SchemaLoadError(SchemaError):
    """The structures directory itself could not be read."""


class SchemaSource(NamedTuple):
    name: str
    root_tag: str
    node: Node


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _first(node: Node, key: str) -> Optional[Any]:
    """First value stored under *key*, or ``None``; empty strings count as absent."""
    if not isinstance(node, dict):
        return None
    values = node.get(key)
    if not values or values[0] == "":
        return None
    return values[0]


def _children(node: Node, key: str) -> list[Any]:
    if not isinstance(node, dict):
        return []
    return list(node.get(key, []))


def _build(kind_cls: type[BaseModel], **fields: Any) -> PropertyKind:
    try:
        return kind_cls(**fields)
    except ValidationError as exc:
        errors = "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors())
        raise PropertyDeclarationError(f"Invalid {kind_cls.__name__} attributes: {errors}") from exc


def _build_constrained(kind_cls: type[BaseModel], prop_name: Any, **constraints: Any) -> PropertyKind:
    """Build a String/Number kind, discarding constraint values that fail validation.

    The constraints are advisory metadata: a bad value is logged and cleared,
    the property itself is always kept.
    """
    try:
        return kind_cls(**constraints)
    except ValidationError as exc:
        invalid = {str(e["loc"][0]) for e in exc.errors() if e["loc"]}
    for field in sorted(invalid):
        logger.warning(
            f"Ignoring invalid {field} value {constraints.get(field)!r} of property {prop_name}"
        )
    cleaned = {k: (None if k in invalid else v) for k, v in constraints.items()}
    return _build(kind_cls, **cleaned)


def _required_sub_type(decl: Node, property_type: str) -> str:
    raw = _first(decl, "SubType")
    if raw is None:
        raise PropertyDeclarationError(f"{property_type} property declares no SubType")
    return final_segment(str(raw))


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify_property(decl: Node) -> PropertyKind:
    """Map one ``<Property>`` declaration onto a :data:`PropertyKind`.

    Raises
    ------
    PropertyDeclarationError
        Unknown ``Type`` or missing ``SubType`` where one is needed. Invalid
        String/Number constraints are cleared with a warning instead.
    """
    property_type = _first(decl, "Type")

    if property_type == "Object":
        sub_type = _required_sub_type(decl, "Object")
        if sub_type == "Brush":
            return BrushKind()
        if sub_type == "ImageSource":
            source_path = _first(decl, "ImageSourcePath")
            return _build(ImageKind, source_path=None if source_path is None else str(source_path))
        if sub_type == "FontFamily":
            return FontKind()
        return _build(ObjectKind, sub_type=sub_type)
    if property_type == "Enum":
        return _build(EnumKind, sub_type=_required_sub_type(decl, "Enum"))
    if property_type == "Collection":
        return _build(CollectionKind, sub_type=_required_sub_type(decl, "Collection"))
    if property_type == "String":
        return _build_constrained(
            StringKind,
            _first(decl, "Name"),
            min_words=_first(decl, "StringMinWordCount"),
            max_words=_first(decl, "StringMaxWordCount"),
        )
    if property_type == "Number":
        return _build_constrained(
            NumberKind,
            _first(decl, "Name"),
            min_value=_first(decl, "NumberMinValue"),
            max_value=_first(decl, "NumberMaxValue"),
            decimal_count=_first(decl, "NumberDecimalCount"),
        )
    if property_type == "Boolean":
        return BooleanKind()
    if property_type == "Command":
        return CommandKind()
    raise PropertyDeclarationError(f"Unknown property type: {property_type}")


# ---------------------------------------------------------------------------
# Structures
# ---------------------------------------------------------------------------


def load_class(node: Node) -> ClassDef:
    """Build a :class:`ClassDef`; unclassifiable properties are logged and dropped."""
    class_name = _first(node, "Name")
    if class_name is None:
        raise SchemaError("Class declares no Name")
    class_name = str(class_name)

    properties: dict[str, PropertyKind] = {}
    for decl in _children(node, "Property"):
        prop_name = _first(decl, "Name")
        try:
            if prop_name is None:
                raise PropertyDeclarationError("Property declares no Name")
            properties[str(prop_name)] = classify_property(decl)
        except PropertyDeclarationError as exc:
            logger.error(f"Error processing property {prop_name} of class {class_name}: {exc}")

    return ClassDef(name=class_name, properties=properties)


def _ordinal(value: Any) -> Optional[int]:
    value = coerce_scalar(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def load_enum(node: Node) -> EnumDef:
    """Build an :class:`EnumDef`; items keep declaration order."""
    enum_name = _first(node, "Name")
    if enum_name is None:
        raise SchemaError("Enum declares no Name")
    enum_name = str(enum_name)

    items: dict[str, int] = {}
    for item in _children(node, "Item"):
        item_name = _first(item, "Name")
        ordinal = _ordinal(_first(item, "Value"))
        if item_name is None or ordinal is None:
            logger.error(
                f"Error processing item {item_name} of enum {enum_name}: "
                "items need a Name and an integer Value"
            )
            continue
        items[str(item_name)] = ordinal

    return EnumDef(name=enum_name, items=items)


def load_schema(sources: Iterable[SchemaSource]) -> Registry:
    """Seed the built-ins, load every source in order and freeze the result."""
    builder = RegistryBuilder()
    seed_builtins(builder)

    for source in sources:
        try:
            if source.root_tag == "Class":
                structure = load_class(source.node)
            elif source.root_tag == "Enum":
                structure = load_enum(source.node)
            else:
                logger.error(f"Unknown structure type in file: {source.name}")
                continue
        except SchemaError as exc:
            logger.error(f"Error processing structure file {source.name}: {exc}")
            continue

        if builder.add(structure) is InsertResult.REPLACED:
            logger.warning(f"Structure {structure.name} from {source.name} replaces an earlier definition")
        else:
            logger.debug(f"- {source.name}: {structure.kind} {structure.name}")

    registry = builder.freeze()
    log_registry_summary(logger, registry)
    return registry


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------


def read_schema_sources(structures_dir: str | Path) -> list[SchemaSource]:
    """Parse every ``*.xml`` file in *structures_dir*, in file-name order.

    Malformed files are logged and skipped.
    """
    structures_dir = Path(structures_dir)
    if not structures_dir.is_dir():
        raise SchemaLoadError(f"Structures directory not found: {structures_dir}")

    logger.info(f"Reading structures from: {structures_dir}")
    try:
        files = sorted(p for p in structures_dir.iterdir() if p.is_file() and p.suffix == ".xml")
    except OSError as exc:
        raise SchemaLoadError(f"Cannot read structures directory {structures_dir}: {exc}") from exc

    sources: list[SchemaSource] = []
    for path in files:
        try:
            root_tag, node = read_xml_file(path)
        except (XmlTreeError, OSError, UnicodeDecodeError) as exc:
            logger.error(f"Error reading structure file {path.name}: {exc}")
            continue
        sources.append(SchemaSource(name=path.name, root_tag=root_tag, node=node))
    return sources


def load_schema_dir(structures_dir: str | Path) -> Registry:
    return load_schema(read_schema_sources(structures_dir))
