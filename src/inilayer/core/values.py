"""Configuration values.

Every value read from an INI file is text. A value is either a single
:class:`Scalar` or an ordered :class:`ListValue` (``key[] = ...`` lines).
Typed access goes through the ``as_*`` helpers; native Python values are
turned into config values with :func:`to_value`.
"""
from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

_TRUE = {"1", "true", "on", "yes"}
_FALSE = {"", "0", "false", "off", "no", "none"}

_NUMERIC = re.compile(r"[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")

# Characters that would end a key or section name in the INI grammar.
_RESERVED_NAME_CHARS = re.compile(r"[=\[\];\r\n]")


def is_numeric(text: str) -> bool:
    """True for integer/decimal/exponent literals, which are written unquoted."""
    return _NUMERIC.fullmatch(text) is not None


def _as_bool(text: str) -> bool:
    low = text.strip().lower()
    if low in _TRUE:
        return True
    if low in _FALSE:
        return False
    raise ValueError(f"Not a boolean config value: {text!r}")


@dataclass(frozen=True)
class Scalar:
    text: str

    def __str__(self) -> str:
        return self.text

    def as_str(self) -> str:
        return self.text

    def as_int(self) -> int:
        return int(self.text.strip())

    def as_float(self) -> float:
        return float(self.text.strip())

    def as_bool(self) -> bool:
        return _as_bool(self.text)

    def as_list(self) -> List[str]:
        return [self.text]

    def to_python(self) -> str:
        return self.text


@dataclass(frozen=True)
class ListValue:
    items: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return ",".join(self.items)

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def as_str(self) -> str:
        return str(self)

    def as_int(self) -> int:
        raise ValueError("A list config value cannot be read as an int")

    def as_float(self) -> float:
        raise ValueError("A list config value cannot be read as a float")

    def as_bool(self) -> bool:
        return bool(self.items)

    def as_list(self) -> List[str]:
        return list(self.items)

    def to_python(self) -> List[str]:
        return list(self.items)


Value = Union[Scalar, ListValue]
Section = Dict[str, Value]
Document = Dict[str, Section]


def _scalar_text(raw: Any) -> str:
    if isinstance(raw, bool):
        return "1" if raw else "0"
    if raw is None:
        return ""
    return str(raw)


def check_name(name: str, kind: str = "key") -> str:
    """Return ``name`` if it can be written as a section or key name.

    Raises:
        ValueError: If ``name`` is empty or holds ``=``, ``[``, ``]``, ``;``
            or a line break.
    """
    if not name or _RESERVED_NAME_CHARS.search(name):
        raise ValueError(f"Invalid config {kind} name: {name!r}")
    return name


def to_value(raw: Any) -> Value:
    """Convert a native value into a config value.

    Lists and tuples become :class:`ListValue`; ``True``/``False`` become
    ``"1"``/``"0"``; ``None`` becomes the empty string. Empty lists are
    rejected with ``ValueError``: the file format has no way to write one.
    """
    if isinstance(raw, ListValue):
        if not raw.items:
            raise ValueError("An empty list cannot be stored as a config value")
        return raw
    if isinstance(raw, Scalar):
        return raw
    if isinstance(raw, (list, tuple)):
        if not raw:
            raise ValueError("An empty list cannot be stored as a config value")
        return ListValue(tuple(_scalar_text(item) for item in raw))
    if isinstance(raw, Mapping):
        raise TypeError("Nested sections are not supported; values must be scalars or lists")
    return Scalar(_scalar_text(raw))


def to_section(raw: Mapping[str, Any]) -> Section:
    """Normalize a mapping of native values into a section (a new dict)."""
    if not isinstance(raw, Mapping):
        raise TypeError(f"A section must be a mapping, got {type(raw).__name__}")
    return {check_name(str(key)): to_value(value) for key, value in raw.items()}


def section_to_python(section: Mapping[str, Value]) -> Dict[str, Any]:
    return {key: value.to_python() for key, value in section.items()}


# Values are stored HTML-entity encoded on disk so quotes and line breaks
# never clash with the INI grammar; they are decoded once when a section is
# merged into the cache.

_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;"}


def encode_text(text: str) -> str:
    text = html.escape(text, quote=False)
    for char, entity in _ENTITIES.items():
        text = text.replace(char, entity)
    return text


def decode_text(text: str) -> str:
    return html.unescape(text)


def _map_text(value: Value, fn) -> Value:
    if isinstance(value, ListValue):
        return ListValue(tuple(fn(item) for item in value.items))
    return Scalar(fn(value.text))


def encode_section(section: Mapping[str, Value]) -> Section:
    return {key: _map_text(value, encode_text) for key, value in section.items()}


def decode_section(section: Optional[Mapping[str, Value]]) -> Section:
    return {key: _map_text(value, decode_text) for key, value in (section or {}).items()}


__all__ = [
    "Scalar",
    "ListValue",
    "Value",
    "Section",
    "Document",
    "is_numeric",
    "check_name",
    "to_value",
    "to_section",
    "section_to_python",
    "encode_text",
    "decode_text",
    "encode_section",
    "decode_section",
]
