"""INI text codec.

Grammar (one construct per line, surrounding whitespace ignored):

    ; comment
    [section]
    key = value
    key = "quoted value"
    key[] = "list entry"

Parsing never fails on content: keys outside a section and unrecognised
lines are skipped with a warning. Missing or unreadable files parse to an
empty document; callers decide whether that is fatal.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from inilayer.core.utils.io import read_text
from inilayer.core.values import Document, ListValue, Scalar, Section, is_numeric

logger = logging.getLogger(__name__)

HEADER = (
    "; <?php exit; ?> DO NOT REMOVE THIS LINE",
    "; file automatically generated or modified by inilayer; you can manually "
    "override the default values in global.ini.php by redefining them in this file.",
)


def _unquote(raw: str) -> str:
    raw = raw.strip()
    if raw[:1] in ('"', "'"):
        quote = raw[0]
        end = raw.find(quote, 1)
        if end != -1:
            return raw[1:end]
        # Unterminated quote: keep everything after the opening quote.
        return raw[1:]
    comment = raw.find(";")
    if comment != -1:
        raw = raw[:comment]
    return raw.strip()


def parse_string(text: str, *, source: str = "<string>") -> Document:
    """Parse INI text into a document of sections."""
    document: Document = {}
    lists: Dict[tuple, List[str]] = {}
    current: Optional[Section] = None
    current_name = ""

    # Only \n and \r\n end a line; other Unicode line separators may appear in values.
    for lineno, line in enumerate(text.split("\n"), start=1):
        line = line.strip()
        if not line or line.startswith(";"):
            continue

        if line.startswith("["):
            end = line.find("]")
            if end == -1:
                logger.warning("%s:%d: unterminated section header %r", source, lineno, line)
                continue
            current_name = line[1:end].strip()
            current = document.setdefault(current_name, {})
            continue

        if "=" not in line:
            logger.warning("%s:%d: ignoring unrecognised line %r", source, lineno, line)
            continue

        key, raw = line.split("=", 1)
        key = key.strip()
        if current is None:
            logger.warning("%s:%d: ignoring key %r outside of any section", source, lineno, key)
            continue

        value = _unquote(raw)
        if key.endswith("[]"):
            key = key[:-2].strip()
            items = lists.get((current_name, key))
            if items is None or not isinstance(current.get(key), ListValue):
                items = lists[(current_name, key)] = []
            items.append(value)
            current[key] = ListValue(tuple(items))
        else:
            lists.pop((current_name, key), None)
            current[key] = Scalar(value)

    return document


def parse(path: Union[str, Path]) -> Document:
    """Parse an INI file; a missing or unreadable file yields ``{}``."""
    try:
        text = read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not read config file %s: %s", path, exc)
        return {}
    return parse_string(text, source=str(path))


def _format_scalar(text: str) -> str:
    if is_numeric(text):
        return text
    return f'"{text}"'


def serialize(document: Document) -> str:
    """Render a document as INI text, omitting sections with no content.

    Empty lists have no written form and are left out.
    """
    lines: List[str] = list(HEADER)
    for name, section in document.items():
        body: List[str] = []
        for key, value in section.items():
            if isinstance(value, ListValue):
                body.extend(f'{key}[] = "{item}"' for item in value.items)
            else:
                body.append(f"{key} = {_format_scalar(value.text)}")
        if not body:
            continue
        lines.append(f"[{name}]")
        lines.extend(body)
        lines.append("")
    return "\n".join(lines) + "\n"


__all__ = ["HEADER", "parse", "parse_string", "serialize"]
