"""Schema descriptors: property kinds and registry entries.

A :data:`PropertyKind` is a closed, pydantic-discriminated union over the
``kind`` field. Code that dispatches over kinds registers one handler per
member and checks coverage with :func:`require_all_kinds` at import time, so
adding a kind without handling it fails as soon as the module is imported.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Annotated, Any, Callable, Literal, Mapping, Optional, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "BooleanKind",
    "CommandKind",
    "BrushKind",
    "FontKind",
    "StringKind",
    "NumberKind",
    "ObjectKind",
    "ImageKind",
    "EnumKind",
    "CollectionKind",
    "PropertyKind",
    "PROPERTY_KINDS",
    "ClassDef",
    "EnumDef",
    "BuiltInDef",
    "Structure",
    "BUILTIN_ENUMS",
    "BUILTIN_TYPES",
    "COMMAND_TS_TYPE",
    "IMAGE_TS_TYPE",
    "BRUSH_TS_TYPE",
    "final_segment",
    "data_tag_for",
    "ts_type_for",
    "has_ts_alias",
    "require_all_kinds",
]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Property kinds
# ---------------------------------------------------------------------------


class BooleanKind(_Frozen):
    kind: Literal["Boolean"] = "Boolean"


class CommandKind(_Frozen):
    kind: Literal["Command"] = "Command"


class BrushKind(_Frozen):
    kind: Literal["Brush"] = "Brush"


class FontKind(_Frozen):
    kind: Literal["Font"] = "Font"


class StringKind(_Frozen):
    kind: Literal["String"] = "String"
    min_words: Optional[int] = None
    max_words: Optional[int] = None


class NumberKind(_Frozen):
    kind: Literal["Number"] = "Number"
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    decimal_count: Optional[int] = None


class ObjectKind(_Frozen):
    kind: Literal["Object"] = "Object"
    sub_type: str


class ImageKind(_Frozen):
    kind: Literal["Image"] = "Image"
    source_path: Optional[str] = None


class EnumKind(_Frozen):
    kind: Literal["Enum"] = "Enum"
    sub_type: str


class CollectionKind(_Frozen):
    kind: Literal["Collection"] = "Collection"
    sub_type: str


PropertyKind = Annotated[
    Union[
        BooleanKind,
        CommandKind,
        BrushKind,
        FontKind,
        StringKind,
        NumberKind,
        ObjectKind,
        ImageKind,
        EnumKind,
        CollectionKind,
    ],
    Field(discriminator="kind"),
]

PROPERTY_KINDS: tuple[type[BaseModel], ...] = get_args(get_args(PropertyKind)[0])


def require_all_kinds(handlers: Mapping[type, Callable], owner: str) -> None:
    """Raise ``TypeError`` unless *handlers* covers every property kind."""
    missing = [k.__name__ for k in PROPERTY_KINDS if k not in handlers]
    if missing:
        raise TypeError(f"{owner} does not handle property kinds: {', '.join(missing)}")


# ---------------------------------------------------------------------------
# Registry entries
# ---------------------------------------------------------------------------


def _read_only(value: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(value))


class ClassDef(_Frozen):
    """A class structure: ordered property name → kind."""

    kind: Literal["Class"] = "Class"
    name: str
    properties: Mapping[str, PropertyKind] = Field(default_factory=dict, validate_default=True)

    @field_validator("properties")
    @classmethod
    def freeze_properties(cls, value: Mapping[str, PropertyKind]) -> Mapping[str, PropertyKind]:
        return _read_only(value)


class EnumDef(_Frozen):
    """An enum structure: ordered member name → ordinal."""

    kind: Literal["Enum"] = "Enum"
    name: str
    items: Mapping[str, int] = Field(default_factory=dict, validate_default=True)

    @field_validator("items")
    @classmethod
    def freeze_items(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        return _read_only(value)


class BuiltInDef(_Frozen):
    """Marker for a type the transformer encodes without a definition."""

    kind: Literal["BuiltIn"] = "BuiltIn"
    name: str


Structure = Annotated[Union[ClassDef, EnumDef, BuiltInDef], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Built-in tables
# ---------------------------------------------------------------------------

# Ordinals are list positions.
BUILTIN_ENUMS: dict[str, tuple[str, ...]] = {
    "Visibility": ("Collapsed", "Visible", "Hidden"),
    "Orientation": ("Horizontal", "Vertical"),
    "HorizontalAlignment": ("Left", "Center", "Right", "Stretch"),
    "VerticalAlignment": ("Top", "Center", "Bottom", "Stretch"),
    "TextAlignment": ("Left", "Center", "Right", "Justify"),
    "TextWrapping": ("NoWrap", "Wrap", "WrapWithOverflow"),
    "TextTrimming": ("None", "CharacterEllipsis", "WordEllipsis"),
    "FlowDirection": ("LeftToRight", "RightToLeft"),
    "FontFamily": ("Anton", "Bangers", "Oswald", "Roboto", "Roboto-Mono"),
}

BUILTIN_TYPES: tuple[str, ...] = (
    "Single",
    "Boolean",
    "String",
    "Color",
    "BitmapImage",
    "SolidColorBrush",
    "MessageCommand",
)

COMMAND_TS_TYPE = "(parameter?: unknown) => unknown"
IMAGE_TS_TYPE = "string | ImageSource"
BRUSH_TS_TYPE = "string | Brush"

# Schema-level sub-type names → TypeScript types. Built-in names are listed
# too so that every reference in the emitted file resolves.
_SUBTYPE_TS_ALIASES: dict[str, str] = {
    "Single": "number",
    "String": "string",
    "Bool": "boolean",
    "Boolean": "boolean",
    "Color": "string",
    "ImageSource": IMAGE_TS_TYPE,
    "BitmapImage": IMAGE_TS_TYPE,
    "Brush": BRUSH_TS_TYPE,
    "SolidColorBrush": BRUSH_TS_TYPE,
    "BaseCommand": COMMAND_TS_TYPE,
    "MessageCommand": COMMAND_TS_TYPE,
}

# Schema-level sub-type names → element tag used in data files.
_SUBTYPE_DATA_TAGS: dict[str, str] = {
    "Bool": "Boolean",
    "ImageSource": "BitmapImage",
    "Brush": "SolidColorBrush",
    "BaseCommand": "MessageCommand",
}


def final_segment(type_name: str) -> str:
    """``Outer.Inner`` → ``Inner``; qualification is informational only."""
    return type_name.split(".")[-1]


def data_tag_for(sub_type: str) -> str:
    return _SUBTYPE_DATA_TAGS.get(sub_type, sub_type)


def ts_type_for(sub_type: str) -> str:
    return _SUBTYPE_TS_ALIASES.get(sub_type, sub_type)


def has_ts_alias(sub_type: str) -> bool:
    """True when *sub_type* maps onto a TypeScript primitive or preamble type."""
    return sub_type in _SUBTYPE_TS_ALIASES
