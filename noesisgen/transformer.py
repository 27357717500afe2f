"""Data-set transformer: normalised XAML data tree → TypeScript literal.

:class:`DataTransformer` walks a data tree against the registry, one
structure at a time:

- **Class**: every declared property is written, in declaration order. Scalar
  properties are read from same-named attributes; structured ones from the
  ``<Class.Property>`` wrapper element. Missing data falls back to the kind's
  default (``""``, ``0``, ``false``, ``[]``, an ``undefined as any as T``
  placeholder, ...), so no property is ever omitted.
- **Enum**: ``Enum.Member``.
- **BuiltIn**: fixed per-name encodings (``String``, ``SolidColorBrush``, ...).

Resolution failures below the root degrade to placeholders and are logged;
an unresolvable root type raises :class:`UnknownStructureError`.
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple, Optional

from .emitter import DEFAULT_TYPES_MODULE, FONT_ENUM_NAME, UNRESOLVED_TS_TYPE, resolved_ts_type
from .schema.models import (
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
    data_tag_for,
    require_all_kinds,
    ts_type_for,
)
from .schema.registry import Registry, UnknownStructureError
from .utils.logging import get_logger
from .xmltree import coerce_scalar

__all__ = [
    "DataTransformer",
    "encode",
    "emit_data_module",
    "escape_string",
    "literal_text",
    "member_ref",
    "image_path",
]

logger = get_logger(__name__)

DEFAULT_FONT = "Bangers"
DEFAULT_DATA_CONTEXT_NAME = "dataContext"
IMAGE_PATH_PREFIX = "component/"

COMMAND_NOT_DEFINED = "() => { console.warn('Command not defined'); }"
COMMAND_NOT_RECOGNIZED = "() => { console.warn('Command type not recognized'); }"


# ---------------------------------------------------------------------------
# Literal helpers
# ---------------------------------------------------------------------------


def escape_string(text: str) -> str:
    """Backslash-escape double quotes; nothing else is escaped."""
    return text.replace('"', '\\"')


def literal_text(value: Any) -> str:
    """Render a parsed scalar the way it appears in TypeScript source."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _quote(value: Any) -> str:
    return f'"{escape_string(literal_text(value))}"'


def member_ref(enum_name: str, member: str) -> str:
    """``Enum.Member``, or ``Enum["Member"]`` when the member is not an identifier."""
    if member.isidentifier():
        return f"{enum_name}.{member}"
    return f'{enum_name}["{escape_string(member)}"]'


def image_path(source: Any) -> Optional[str]:
    """``pack://app;component/images/x.png`` → ``images/x.png``; ``None`` if unresolvable."""
    parts = literal_text(source).split(";", 1)
    if len(parts) < 2:
        return None
    return parts[1].replace(IMAGE_PATH_PREFIX, "", 1) or None


def _first(values: Optional[list[Any]]) -> Any:
    return values[0] if values else None


def _child(node: Any, key: str) -> Optional[list[Any]]:
    if isinstance(node, dict):
        return node.get(key)
    return None


class _Slot(NamedTuple):
    """One property of one class instance, as found in the data tree."""

    structure_name: str
    prop_name: str
    kind: PropertyKind
    values: Optional[list[Any]]  # same-named attribute/element
    wrapper: Optional[list[Any]]  # <Structure.Property> element
    indent: str


# ---------------------------------------------------------------------------
# Transformer
# ---------------------------------------------------------------------------


class DataTransformer:
    """Encode data trees against a frozen :class:`Registry`."""

    def __init__(
        self,
        registry: Registry,
        indent_level: int = 2,
        default_font: str = DEFAULT_FONT,
    ) -> None:
        self.registry = registry
        self.unit = " " * indent_level
        self.default_font = default_font

    def _placeholder(self, sub_type: str) -> str:
        # TODO: decide whether absent objects/enums should become optional fields instead
        ts_type = resolved_ts_type(self.registry, sub_type) or UNRESOLVED_TS_TYPE
        return f"undefined as any as {ts_type}"

    def encode(self, type_name: str, node: Any) -> str:
        """Encode *node* as *type_name*; raises if the type is unknown."""
        return self._encode_value(type_name, node, "")

    # -- dispatch on structure -------------------------------------------

    def _encode_value(self, type_name: str, node: Any, indent: str) -> str:
        structure = self.registry.resolve(type_name)
        if isinstance(structure, ClassDef):
            return self._encode_class(structure, node, indent)
        if isinstance(structure, EnumDef):
            return member_ref(structure.name, literal_text(node))
        return self._encode_builtin(structure.name, node, indent)

    def _encode_class(self, structure: ClassDef, node: Any, indent: str) -> str:
        fields = node if isinstance(node, dict) else {}
        sub_indent = indent + self.unit
        lines = ["{"]
        for prop_name, kind in structure.properties.items():
            slot = _Slot(
                structure_name=structure.name,
                prop_name=prop_name,
                kind=kind,
                values=fields.get(prop_name),
                wrapper=fields.get(f"{structure.name}.{prop_name}"),
                indent=sub_indent,
            )
            value = self._PROPERTY_ENCODERS[type(kind)](self, slot)
            lines.append(f"{sub_indent}{prop_name}: {value},")
        lines.append(f"{indent}}}")
        return "\n".join(lines)

    # -- property kinds --------------------------------------------------

    def _string(self, slot: _Slot) -> str:
        return _quote(slot.values[0]) if slot.values else '""'

    def _number(self, slot: _Slot) -> str:
        if not slot.values:
            return "0"
        value = coerce_scalar(slot.values[0])
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning(
                f"Value {value!r} of property {slot.prop_name} of structure "
                f"{slot.structure_name} is not a number"
            )
            return "0"
        return literal_text(value)

    def _boolean(self, slot: _Slot) -> str:
        if not slot.values:
            return "false"
        value = coerce_scalar(slot.values[0])
        if not isinstance(value, bool):
            logger.warning(
                f"Value {value!r} of property {slot.prop_name} of structure "
                f"{slot.structure_name} is not a boolean"
            )
            return "false"
        return literal_text(value)

    def _enum(self, slot: _Slot) -> str:
        if not slot.values:
            return self._placeholder(slot.kind.sub_type)
        member = literal_text(slot.values[0])
        enum_def = self.registry.get(slot.kind.sub_type)
        if enum_def is None:
            logger.error(
                f"Unknown structure type: {slot.kind.sub_type} "
                f"(property {slot.prop_name} of structure {slot.structure_name})"
            )
            return self._placeholder(slot.kind.sub_type)
        if isinstance(enum_def, EnumDef) and member not in enum_def.items:
            logger.warning(
                f"Value {member} of property {slot.prop_name} of structure "
                f"{slot.structure_name} is not a member of {slot.kind.sub_type}"
            )
        return member_ref(slot.kind.sub_type, member)

    def _font(self, slot: _Slot) -> str:
        if slot.values:
            return member_ref(FONT_ENUM_NAME, literal_text(slot.values[0]))
        return member_ref(FONT_ENUM_NAME, self.default_font)

    def _object(self, slot: _Slot) -> str:
        if not slot.wrapper:
            return self._placeholder(slot.kind.sub_type)
        tag = data_tag_for(slot.kind.sub_type)
        inner = _first(_child(slot.wrapper[0], tag))
        if inner is None:
            logger.warning(
                f"Expected {tag} element for object property {slot.prop_name} "
                f"of structure {slot.structure_name}"
            )
            return self._placeholder(slot.kind.sub_type)
        try:
            return self._encode_value(tag, inner, slot.indent)
        except UnknownStructureError as exc:
            logger.error(f"{exc} (property {slot.prop_name} of structure {slot.structure_name})")
            return self._placeholder(slot.kind.sub_type)

    def _image(self, slot: _Slot) -> str:
        if slot.values:
            source = slot.values[0]
            path = image_path(source)
            if path is None:
                logger.warning(
                    f"Image path not found for property {slot.prop_name} "
                    f"of structure {slot.structure_name}: {source}"
                )
                return '""'
            return _quote(path)
        bitmap = _first(_child(_first(slot.wrapper), "BitmapImage"))
        if bitmap is not None:
            return self._encode_builtin("BitmapImage", bitmap, slot.indent)
        return '""'

    def _brush(self, slot: _Slot) -> str:
        if slot.values:
            return _quote(slot.values[0])
        brush = _first(_child(_first(slot.wrapper), "SolidColorBrush"))
        if brush is not None:
            return self._encode_builtin("SolidColorBrush", brush, slot.indent)
        return '""'

    def _collection(self, slot: _Slot) -> str:
        if not slot.wrapper:
            return "[]"
        tag = data_tag_for(slot.kind.sub_type)
        items = _child(slot.wrapper[0], tag)
        if not isinstance(items, list) or not items:
            logger.warning(
                f"Expected array for collection property {slot.prop_name} type {tag} "
                f"of structure {slot.structure_name}"
            )
            return "[]"

        item_indent = slot.indent + self.unit
        lines = ["["]
        for item in items:
            try:
                lines.append(f"{item_indent}{self._encode_value(tag, item, item_indent)},")
            except UnknownStructureError as exc:
                logger.error(f"{exc} (property {slot.prop_name} of structure {slot.structure_name})")
                return "[]"
        lines.append(f"{slot.indent}]")
        return "\n".join(lines)

    def _command(self, slot: _Slot) -> str:
        if not slot.wrapper:
            return COMMAND_NOT_DEFINED
        command = _first(_child(slot.wrapper[0], "MessageCommand"))
        if command is None:
            logger.warning(
                f"Unknown command type for property {slot.prop_name} "
                f"of structure {slot.structure_name}: {slot.wrapper[0]!r}"
            )
            return COMMAND_NOT_RECOGNIZED
        return self._command_literal(command, slot.indent)

    _PROPERTY_ENCODERS: dict[type, Callable[["DataTransformer", _Slot], str]] = {
        StringKind: _string,
        NumberKind: _number,
        BooleanKind: _boolean,
        EnumKind: _enum,
        FontKind: _font,
        ObjectKind: _object,
        ImageKind: _image,
        BrushKind: _brush,
        CollectionKind: _collection,
        CommandKind: _command,
    }
    require_all_kinds(_PROPERTY_ENCODERS, "DataTransformer")

    # -- built-ins -------------------------------------------------------

    def _command_literal(self, command: Any, indent: str) -> str:
        inner = indent + self.unit
        message = _first(_child(command, "Message"))
        message_text = "" if message is None else literal_text(message)
        return (
            "(parameter?: unknown) => {\n"
            f'{inner}console.log("{escape_string(message_text)}", parameter ? parameter : "");\n'
            f"{indent}}}"
        )

    def _encode_builtin(self, name: str, node: Any, indent: str) -> str:
        if name in ("Single", "Boolean"):
            return literal_text(coerce_scalar(node))
        if name == "Color":
            return literal_text(node)
        if name == "String":
            return _quote(node)
        if name == "BitmapImage":
            source = _first(_child(node, "UriSource"))
            path = image_path(source) if source is not None else None
            if path is None:
                logger.warning(f"Image path not found for built-in structure BitmapImage: {source}")
                return '""'
            return _quote(path)
        if name == "SolidColorBrush":
            color = _first(_child(node, "Color"))
            if color is None:
                logger.warning("SolidColorBrush without a Color")
                return '""'
            return _quote(color)
        if name == "MessageCommand":
            return self._command_literal(node, indent)
        logger.error(f"Unknown built-in: {name}")
        return ""


# ---------------------------------------------------------------------------
# Module-level API
# ---------------------------------------------------------------------------


def encode(
    registry: Registry,
    root_type: str,
    tree: Any,
    indent_level: int = 2,
    default_font: str = DEFAULT_FONT,
) -> str:
    """Encode *tree* as a literal of *root_type*."""
    return DataTransformer(registry, indent_level, default_font).encode(root_type, tree)


def emit_data_module(
    registry: Registry,
    root_type: str,
    tree: Any,
    *,
    source_name: str,
    indent_level: int = 2,
    types_module: str = DEFAULT_TYPES_MODULE,
    data_context_name: str = DEFAULT_DATA_CONTEXT_NAME,
    default_font: str = DEFAULT_FONT,
) -> str:
    """Render the TypeScript module for one data set.

    Raises
    ------
    UnknownStructureError
        If *root_type* is not registered.
    """
    root = registry.resolve(root_type)
    literal = encode(registry, root_type, tree, indent_level, default_font)
    imports = ", ".join(s.name for s in registry.declarations())
    return (
        f"// Auto-generated data context from Noesis data set: {source_name}\n\n"
        f'import {{ {imports} }} from "./{types_module}";\n\n'
        f"export const {data_context_name}: {ts_type_for(root.name)} = {literal};\n"
    )
