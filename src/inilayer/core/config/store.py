"""Three-layer section store.

Layers (lowest to highest priority on read):
1. global: shipped defaults, never written
2. local: site overrides as last loaded from disk
3. cache: sections already resolved, plus sections replaced with ``set``

Sections handed out by :meth:`MergeStore.get` are copies. Changing one has
no effect until it is passed back to :meth:`MergeStore.set`.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Mapping, Optional

from inilayer.core.exceptions import UndefinedSectionError
from inilayer.core.values import (
    Document,
    Section,
    check_name,
    decode_section,
    to_section,
    to_value,
)

logger = logging.getLogger(__name__)


class MergeStore(ABC):
    """Section-level read/write access over global, local and cache layers.

    Subclasses provide :meth:`load`, which must populate the global and
    local layers through :meth:`_set_layers`, and may hook :meth:`_on_clear`.
    """

    def __init__(self) -> None:
        self._global: Document = {}
        self._local: Document = {}
        self._cache: Document = {}
        self._initialized = False

    @abstractmethod
    def load(self) -> None:
        """Read the global and local layers into memory."""
        ...

    def _set_layers(self, global_doc: Document, local_doc: Document) -> None:
        self._global = global_doc
        self._local = local_doc
        self._initialized = True

    def _on_clear(self) -> None:
        """Called at the end of :meth:`clear`."""

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _ensure_loaded(self) -> None:
        if not self._initialized:
            self.load()

    def clear(self) -> None:
        """Drop every layer so the next read reloads from disk."""
        self._global = {}
        self._local = {}
        self._cache = {}
        self._initialized = False
        self._on_clear()

    def _resolve(self, name: str) -> Section:
        self._ensure_loaded()

        cached = self._cache.get(name)
        if cached is not None:
            return cached

        section: Optional[Section] = self.get_from_default(name)
        if name in self._local:
            # Local settings override the global defaults.
            section = {**section, **self._local[name]} if section else dict(self._local[name])

        if section is None:
            raise UndefinedSectionError(name)

        self._cache[name] = decode_section(section)
        logger.debug("Resolved config section %s (%d keys)", name, len(section))
        return self._cache[name]

    def get(self, name: str) -> Section:
        """Return the effective section ``name`` (a copy).

        Raises:
            UndefinedSectionError: If neither the global nor the local
                layer defines ``name``.
        """
        return dict(self._resolve(name))

    def set(self, name: str, section: Mapping[str, Any]) -> None:
        """Replace the whole section ``name``; persisted by the next save.

        Raises:
            ValueError: If a section or key name cannot be written to an INI
                file, or a value is an empty list.
        """
        self._cache[check_name(name, "section")] = to_section(section)

    def get_option(self, name: str, key: str, default: Any = None) -> Any:
        """Return one value of section ``name``, or ``default`` if the key is unset."""
        return self._resolve(name).get(key, default)

    def set_option(self, name: str, key: str, value: Any) -> None:
        """Set one key of section ``name``; the section must already exist."""
        section = self.get(name)
        section[check_name(key)] = to_value(value)
        self._cache[name] = section

    def get_from_default(self, name: str) -> Optional[Section]:
        """Return the shipped default section ``name``, if any."""
        section = self._global.get(name)
        return dict(section) if section is not None else None

    def sections(self) -> List[str]:
        """Names of all known sections: defaults first, then local and cached ones."""
        self._ensure_loaded()
        names = dict.fromkeys(self._global)
        names.update(dict.fromkeys(self._local))
        names.update(dict.fromkeys(self._cache))
        return list(names)

    def __getitem__(self, name: str) -> Section:
        return self.get(name)

    def __setitem__(self, name: str, section: Mapping[str, Any]) -> None:
        self.set(name, section)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        self._ensure_loaded()
        return name in self._cache or name in self._global or name in self._local

    def __iter__(self) -> Iterator[str]:
        return iter(self.sections())


__all__ = ["MergeStore"]
