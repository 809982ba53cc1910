"""Section diffing.

``array_unmerge`` answers "what must be written locally so that merging it
over the defaults gives back ``modified``":

    merge(original, array_unmerge(original, modified)) == modified
    (for every key that ``modified`` defines)
"""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from inilayer.core.values import ListValue, Scalar, Section, Value


def _is_array(element: Any) -> bool:
    return isinstance(element, (ListValue, Mapping, list, tuple))


def _plain(element: Any) -> Any:
    if isinstance(element, Mapping):
        return {str(k): _plain(v) for k, v in element.items()}
    if isinstance(element, ListValue):
        return list(element.items)
    if isinstance(element, (list, tuple)):
        return [_plain(v) for v in element]
    if isinstance(element, Scalar):
        return element.text
    return str(element)


def canonical(element: Any) -> str:
    """Canonical text form of a list or section; section keys are sorted."""
    return json.dumps(_plain(element), sort_keys=True, ensure_ascii=False, separators=(",", ":"))


def compare_elements(elem1: Any, elem2: Any) -> int:
    """Three-way comparison used for equality checks only.

    Arrays (lists or whole sections) are equal when their canonical forms
    match and rank above any scalar; scalars compare by their text.
    """
    if _is_array(elem1):
        if _is_array(elem2):
            a, b = canonical(elem1), canonical(elem2)
            return (a > b) - (a < b)
        return 1

    if _is_array(elem2):
        return -1

    a, b = str(elem1), str(elem2)
    if a == b:
        return 0
    return 1 if a > b else -1


def array_unmerge(original: Optional[Mapping[str, Value]], modified: Optional[Mapping[str, Value]]) -> Section:
    """Return the pairs of ``modified`` that are new or differ from ``original``.

    Keys present only in ``original`` are ignored.
    """
    original = original or {}
    return {
        key: value
        for key, value in (modified or {}).items()
        if key not in original or compare_elements(value, original[key]) != 0
    }


__all__ = ["canonical", "compare_elements", "array_unmerge"]
