"""
noesisgen - Noesis structures & data sets to TypeScript

Reads a Noesis project's ``.noesis/data`` folder and produces:

    - NoesisTypes.ts: one type per structure class, one enum per structure enum
    - <set>.ts: one typed ``dataContext`` constant per data set

Main Components:
    - noesisgen.schema: structure models, registry and loader
    - noesisgen.emitter: TypeScript declarations
    - noesisgen.transformer: data-set literals
    - noesisgen.cli: ``noesisgen`` command line
"""

__version__ = "0.1.0"

from .emitter import emit_types, write_types_file
from .schema import Registry, load_schema, load_schema_dir
from .transformer import DataTransformer, emit_data_module, encode

__all__ = [
    "DataTransformer",
    "Registry",
    "emit_data_module",
    "emit_types",
    "encode",
    "load_schema",
    "load_schema_dir",
    "write_types_file",
]
