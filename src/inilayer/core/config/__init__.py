"""inilayer configuration system.

Usage:
    from inilayer.core.config import Config

    config = Config()                      # settings from defaults/env
    general = config.get("General")        # merged global + local section
    config.set_option("General", "timeout", 10)
    config.save()                          # writes only non-default values
"""
from __future__ import annotations

from .codec import HEADER, parse, parse_string, serialize
from .diff import array_unmerge, compare_elements
from .hostname import HostnameConfigInfo, is_valid_filename
from .manager import Config, HostnameProvider
from .store import MergeStore

__all__ = [
    "Config",
    "HostnameProvider",
    "MergeStore",
    "HostnameConfigInfo",
    "is_valid_filename",
    "HEADER",
    "parse",
    "parse_string",
    "serialize",
    "array_unmerge",
    "compare_elements",
]
