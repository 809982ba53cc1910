"""I/O utilities for inilayer.

This package provides safe file operations:
- Core: atomic writes, readability checks, text I/O
- YAML: tolerant reads used by the settings loader and schema lookup
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_parent_dir,
    is_readable,
    read_text,
    write_text,
)
from .yaml import read_yaml

__all__ = [
    # core
    "PathLike",
    "ensure_parent_dir",
    "atomic_write",
    "is_readable",
    "read_text",
    "write_text",
    # yaml
    "read_yaml",
]
