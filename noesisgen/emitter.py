"""TypeScript declarations for every Class and Enum in a registry.

Output layout (``NoesisTypes.ts``)::

    // Auto-generated TypeScript definitions for Noesis structures

    import { ImageSource } from "horizon/ui";

    // Complex brushes not yet supported
    export type Brush = never;

    // Definition for structure Card
    export type Card = {
      Title: string;
      Rarity: Rarity;
    }

    // Definition for enum Rarity
    export enum Rarity {
      "Common" = "Common",
    }

Built-ins are never declared; properties keep registry order. A property
whose sub-type names nothing in the registry is declared as ``unknown`` and
logged, so the file never references an undeclared type.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from .schema.models import (
    BRUSH_TS_TYPE,
    COMMAND_TS_TYPE,
    IMAGE_TS_TYPE,
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
    has_ts_alias,
    require_all_kinds,
    ts_type_for,
)
from .schema.registry import Registry
from .utils.logging import get_logger

__all__ = [
    "DEFAULT_TYPES_MODULE",
    "DEFAULT_IMAGE_MODULE",
    "FONT_ENUM_NAME",
    "UNRESOLVED_TS_TYPE",
    "resolved_ts_type",
    "ts_property_type",
    "emit_types",
    "write_types_file",
]

logger = get_logger(__name__)

DEFAULT_TYPES_MODULE = "NoesisTypes"
DEFAULT_IMAGE_MODULE = "horizon/ui"
FONT_ENUM_NAME = "FontFamily"
UNRESOLVED_TS_TYPE = "unknown"

_TS_TYPES: dict[type, Callable[..., str]] = {
    StringKind: lambda kind: "string",
    NumberKind: lambda kind: "number",
    BooleanKind: lambda kind: "boolean",
    CommandKind: lambda kind: COMMAND_TS_TYPE,
    ObjectKind: lambda kind: ts_type_for(kind.sub_type),
    # Data may hold a project-relative path or a resolved handle
    ImageKind: lambda kind: IMAGE_TS_TYPE,
    BrushKind: lambda kind: BRUSH_TS_TYPE,
    FontKind: lambda kind: FONT_ENUM_NAME,
    EnumKind: lambda kind: ts_type_for(kind.sub_type),
    CollectionKind: lambda kind: f"Array<{ts_type_for(kind.sub_type)}>",
}
require_all_kinds(_TS_TYPES, "emitter")

# Kinds whose TypeScript type names another structure
_REFERENCE_KINDS = (ObjectKind, EnumKind, CollectionKind)


def ts_property_type(kind: PropertyKind) -> str:
    """TypeScript type for a property of the given kind."""
    return _TS_TYPES[type(kind)](kind)


def resolved_ts_type(registry: Registry, sub_type: str) -> Optional[str]:
    """TypeScript name for *sub_type*, or ``None`` if nothing in the output declares it."""
    if has_ts_alias(sub_type) or isinstance(registry.get(sub_type), (ClassDef, EnumDef)):
        return ts_type_for(sub_type)
    return None


def _checked_property_type(registry: Registry, structure: ClassDef, prop_name: str, kind: PropertyKind) -> str:
    if not isinstance(kind, _REFERENCE_KINDS) or resolved_ts_type(registry, kind.sub_type):
        return ts_property_type(kind)
    logger.warning(
        f"Unresolved type {kind.sub_type} for property {prop_name} of structure "
        f"{structure.name}; declared as {UNRESOLVED_TS_TYPE}"
    )
    if isinstance(kind, CollectionKind):
        return f"Array<{UNRESOLVED_TS_TYPE}>"
    return UNRESOLVED_TS_TYPE


def _class_lines(registry: Registry, structure: ClassDef, indent: str) -> list[str]:
    lines = [f"// Definition for structure {structure.name}", f"export type {structure.name} = {{"]
    for prop_name, kind in structure.properties.items():
        lines.append(f"{indent}{prop_name}: {_checked_property_type(registry, structure, prop_name, kind)};")
    lines.append("}")
    lines.append("")
    return lines


def _enum_lines(structure: EnumDef, indent: str) -> list[str]:
    lines = [f"// Definition for enum {structure.name}", f"export enum {structure.name} {{"]
    for item_name in structure.items:
        lines.append(f'{indent}"{item_name}" = "{item_name}",')
    lines.append("}")
    lines.append("")
    return lines


def emit_types(
    registry: Registry,
    indent_level: int = 2,
    image_module: str = DEFAULT_IMAGE_MODULE,
) -> str:
    """Render the declarations module for *registry*."""
    indent = " " * indent_level
    lines = [
        "// Auto-generated TypeScript definitions for Noesis structures",
        "",
        f'import {{ ImageSource }} from "{image_module}";',
        "",
        "// Complex brushes not yet supported",
        "export type Brush = never;",
        "",
    ]
    for structure in registry.declarations():
        logger.debug(f"- {structure.name}")
        if isinstance(structure, ClassDef):
            lines.extend(_class_lines(registry, structure, indent))
        else:
            lines.extend(_enum_lines(structure, indent))
    return "\n".join(lines) + "\n"


def write_types_file(
    registry: Registry,
    output_dir: str | Path,
    *,
    module_name: str = DEFAULT_TYPES_MODULE,
    indent_level: int = 2,
    image_module: str = DEFAULT_IMAGE_MODULE,
) -> Path:
    """Write ``<output_dir>/<module_name>.ts`` and return its path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / f"{module_name}.ts"
    logger.info(
        f"Writing TypeScript definitions for {len(registry)} Noesis structures to {out_path}"
    )
    out_path.write_text(
        emit_types(registry, indent_level=indent_level, image_module=image_module),
        encoding="utf-8",
    )
    return out_path
