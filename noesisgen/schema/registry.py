"""Structure registry: name → Class / Enum / BuiltIn definition.

The registry is built once per run with :class:`RegistryBuilder` and then
frozen into an immutable :class:`Registry` that the emitter and transformer
read from.

Merge policy: a name is registered at most once. Adding a structure whose
name is already present replaces the earlier entry (last file wins) while
keeping its original position; :meth:`RegistryBuilder.add` reports which of
the two happened.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterator, Optional, Union

from .models import (
    BUILTIN_ENUMS,
    BUILTIN_TYPES,
    BuiltInDef,
    ClassDef,
    EnumDef,
    final_segment,
)

__all__ = [
    "InsertResult",
    "Registry",
    "RegistryBuilder",
    "UnknownStructureError",
    "seed_builtins",
]

StructureDef = Union[ClassDef, EnumDef, BuiltInDef]


class UnknownStructureError(LookupError):
    """Raised when a type name does not resolve to any registered structure."""

    def __init__(self, name: str):
        super().__init__(f"Unknown structure type: {name}")
        self.name = name


class InsertResult(str, Enum):
    INSERTED = "inserted"
    REPLACED = "replaced"


class Registry:
    """Read-only view over the loaded structures, in registration order."""

    def __init__(self, entries: dict[str, StructureDef]):
        self._entries = MappingProxyType(dict(entries))

    def get(self, type_name: str) -> Optional[StructureDef]:
        """Look up *type_name* by its final segment; ``None`` if absent."""
        return self._entries.get(final_segment(type_name))

    def resolve(self, type_name: str) -> StructureDef:
        structure = self.get(type_name)
        if structure is None:
            raise UnknownStructureError(final_segment(type_name))
        return structure

    def names(self) -> list[str]:
        return list(self._entries)

    def declarations(self) -> list[Union[ClassDef, EnumDef]]:
        """Every Class and Enum, skipping built-ins."""
        return [s for s in self._entries.values() if not isinstance(s, BuiltInDef)]

    def __contains__(self, type_name: object) -> bool:
        return isinstance(type_name, str) and self.get(type_name) is not None

    def __iter__(self) -> Iterator[StructureDef]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Registry({len(self)} structures)"


class RegistryBuilder:
    """Mutable staging area used while schema files are being loaded."""

    def __init__(self) -> None:
        self._entries: dict[str, StructureDef] = {}

    def add(self, structure: StructureDef) -> InsertResult:
        result = InsertResult.REPLACED if structure.name in self._entries else InsertResult.INSERTED
        self._entries[structure.name] = structure
        return result

    def __len__(self) -> int:
        return len(self._entries)

    def freeze(self) -> Registry:
        return Registry(self._entries)


def seed_builtins(builder: RegistryBuilder) -> None:
    """Register the built-in types, then the built-in enums."""
    for type_name in BUILTIN_TYPES:
        builder.add(BuiltInDef(name=type_name))
    for enum_name, members in BUILTIN_ENUMS.items():
        builder.add(
            EnumDef(name=enum_name, items={member: index for index, member in enumerate(members)})
        )
