"""XML → attribute-merged tree, plus the normalisation pass.

Schema (``structures/*.xml``) and data (``sets/*.xaml``) files are both read
through :func:`parse_xml`:

- attributes are merged into their element's dict under their own name,
- namespace prefixes are stripped from element tags (``sys:String`` →
  ``String``) but kept on attributes, so ``x:Name`` never shadows ``Name``,
- ``xmlns`` declarations are dropped,
- text is kept verbatim. Consumers that expect a number or a boolean run it
  through :func:`coerce_scalar` once they know the declared kind, so a
  String property keeps ``"007"`` as written.

:func:`normalize` then makes every child value a list, so downstream code
never has to care whether an element appeared once or many times.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Union
from xml.parsers.expat import ExpatError

import xmltodict

__all__ = [
    "XmlTreeError",
    "Node",
    "coerce_scalar",
    "normalize",
    "parse_xml",
    "read_xml_file",
]

Scalar = Union[str, int, float, bool]
Node = Union[dict[str, list[Any]], Scalar]

# Attribute keys carry this marker until the postprocessor has seen them
_ATTR_MARKER = "@"


class XmlTreeError(ValueError):
    """Raised when a file cannot be parsed as XML."""


def coerce_scalar(text: Any) -> Any:
    """Coerce boolean and numeric tokens; leave everything else untouched."""
    if not isinstance(text, str):
        return text
    stripped = text.strip()
    lowered = stripped.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if "_" in stripped:
        return text
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        number = float(stripped)
    except ValueError:
        return text
    if math.isnan(number) or math.isinf(number):
        return text
    return number


def _local_name(name: str) -> str:
    return name.rsplit(":", 1)[-1]


def _postprocess(path: Any, key: str, value: Any) -> tuple[str, Any] | None:
    if key.startswith(_ATTR_MARKER):
        name = key[len(_ATTR_MARKER):]
        if name == "xmlns" or name.startswith("xmlns:"):
            return None
        return name, value
    return _local_name(key), value


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else [value]


def normalize(value: Any) -> Any:
    """Return *value* with every element child wrapped in a list.

    Empty elements (``None`` from the parser) become ``""``.
    """
    if isinstance(value, dict):
        return {key: [normalize(item) for item in _as_list(child)] for key, child in value.items()}
    if value is None:
        return ""
    return value


def parse_xml(text: str) -> tuple[str, Node]:
    """Parse XML text and return ``(root_tag, normalised_root_node)``."""
    try:
        document = xmltodict.parse(
            text,
            attr_prefix=_ATTR_MARKER,
            cdata_key="#text",
            strip_whitespace=True,
            postprocessor=_postprocess,
        )
    except ExpatError as exc:
        raise XmlTreeError(f"Malformed XML: {exc}") from exc

    if not document:
        raise XmlTreeError("XML document has no root element")
    root_tag, root_value = next(iter(document.items()))
    return root_tag, normalize(root_value)


def read_xml_file(path: str | Path) -> tuple[str, Node]:
    """Read a UTF-8 XML file and parse it with :func:`parse_xml`."""
    path = Path(path)
    try:
        return parse_xml(path.read_text(encoding="utf-8"))
    except XmlTreeError as exc:
        raise XmlTreeError(f"{path.name}: {exc}") from exc
