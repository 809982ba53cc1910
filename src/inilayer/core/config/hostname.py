"""Per-hostname local config files.

A deployment serving several virtual hosts can keep one override file per
host, named ``<hostname><suffix>`` (``example.org.config.ini.php``), next
to the default local file.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_VALID_FILENAME = re.compile(r"[a-zA-Z0-9]+[a-zA-Z0-9_.-]*")


def is_valid_filename(filename: str) -> bool:
    """True if ``filename`` is safe to join onto a directory.

    Only letters, digits, ``_``, ``.`` and ``-`` are allowed, and the name
    must start with a letter or digit, so path separators, ``..`` prefixes
    and null bytes are rejected.
    """
    return bool(filename) and _VALID_FILENAME.fullmatch(filename) is not None


@dataclass(frozen=True)
class HostnameConfigInfo:
    file: str
    path: Path


def local_config_info_for_hostname(config_dir: Path, hostname: str, suffix: str) -> HostnameConfigInfo:
    filename = f"{hostname}{suffix}"
    return HostnameConfigInfo(file=filename, path=Path(config_dir) / filename)


def by_domain_config_path(config_dir: Path, hostname: Optional[str], suffix: str) -> Optional[Path]:
    """Return the per-hostname config path if that file exists and is safe."""
    if not hostname:
        return None
    info = local_config_info_for_hostname(config_dir, hostname, suffix)
    if is_valid_filename(info.file) and info.path.exists():
        return info.path
    return None


__all__ = [
    "HostnameConfigInfo",
    "is_valid_filename",
    "local_config_info_for_hostname",
    "by_domain_config_path",
]
