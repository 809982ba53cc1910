"""
Config file persistence: loading the global and local INI files, and
writing back only the values that differ from the shipped defaults.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from inilayer.core.exceptions import (
    ConfigFileNotFoundError,
    ConfigFileNotWritableError,
    InvalidHostnameError,
)
from inilayer.core.settings import Settings, load_settings
from inilayer.core.utils.io import is_readable, write_text
from inilayer.core.values import Document, decode_section, encode_section

from .codec import parse, serialize
from .diff import array_unmerge, compare_elements
from .hostname import (
    by_domain_config_path,
    is_valid_filename,
    local_config_info_for_hostname,
)
from .store import MergeStore

logger = logging.getLogger(__name__)

HostnameProvider = Callable[[], Optional[str]]


class Config(MergeStore):
    """Read & write access to the INI configuration.

    Reads resolve against ``<config>/config.ini.php`` (the local file) and
    fall back to ``<config>/global.ini.php`` (the shipped defaults). Saving
    writes the local file with only the values that differ from the defaults.

    Create one instance when the process starts and pass it to whatever
    needs configuration.

    Getting a value::

        config = Config()
        min_memory = config.get("General")["minimum_memory_limit"].as_int()

    Setting a value::

        config.set_option("General", "minimum_memory_limit", 256)
        config.save()

    Setting an entire section::

        config.set("MySection", {"myoption": 1})
        config.save()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        hostname_provider: Optional[HostnameProvider] = None,
        strict: Optional[bool] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or load_settings()
        self.strict = self.settings.strict if strict is None else strict
        self._hostname_provider = hostname_provider
        self._is_test = False
        self.path_global, self.path_local = self._derive_paths()

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _hostname(self) -> Optional[str]:
        if self._hostname_provider is not None:
            return self._hostname_provider()
        return self.settings.hostname

    def _by_domain_config_path(self) -> Optional[Path]:
        return by_domain_config_path(
            self.settings.config_path, self._hostname(), self.settings.hostname_suffix
        )

    def _derive_paths(self) -> Tuple[Path, Path]:
        local = self._by_domain_config_path() or self.settings.default_local_path
        return self.settings.global_path, local

    def _on_clear(self) -> None:
        self.path_global, self.path_local = self._derive_paths()

    def config_hostname_if_set(self) -> Optional[str]:
        """Return the hostname whose local file is in use, if any."""
        if self._by_domain_config_path() is None:
            return None
        return self._hostname()

    def force_usage_of_local_hostname_config(self, hostname: str) -> Path:
        """Use the local file of ``hostname`` whether or not it exists yet.

        Useful to create a new per-hostname file::

            config.force_usage_of_local_hostname_config("stats.example.com")
            config.save()

        The global layer and the cache are kept, so pending changes are
        saved into the new file.

        Raises:
            InvalidHostnameError: If the hostname does not make a safe filename.
        """
        info = local_config_info_for_hostname(
            self.settings.config_path, hostname, self.settings.hostname_suffix
        )
        if not is_valid_filename(info.file):
            raise InvalidHostnameError(hostname)

        self.path_local = info.path
        self._local = {}
        self._initialized = False
        logger.info("Using hostname config %s", self.path_local)
        return self.path_local

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def set_test_environment(
        self,
        path_local: Union[str, Path, None] = None,
        path_global: Union[str, Path, None] = None,
    ) -> None:
        """Load from the given files and never write back.

        Intended for test suites that must not touch the deployment's files.
        """
        self._is_test = True
        self.clear()
        if path_local:
            self.path_local = Path(path_local)
        if path_global:
            self.path_global = Path(path_global)
        self.load()

    def check_local_config_found(self) -> None:
        """Raise ``ConfigFileNotFoundError`` unless the local file is readable."""
        if not is_readable(self.path_local):
            raise ConfigFileNotFoundError(self.path_local)

    def _read_layer(self, path: Path, strict: bool) -> Document:
        if strict and not is_readable(path):
            raise ConfigFileNotFoundError(path)
        document = parse(path)
        if not document and strict:
            raise ConfigFileNotFoundError(path, reason="could not be parsed or is empty")
        return document

    def load(self) -> None:
        """Read the global and local files into memory.

        In strict mode a missing, unreadable or empty file raises
        ``ConfigFileNotFoundError``; otherwise it reads as an empty document.
        """
        self._load(self.strict)

    def _load(self, strict: bool) -> None:
        global_doc = self._read_layer(self.path_global, strict)
        if strict:
            self.check_local_config_found()
        local_doc = self._read_layer(self.path_local, strict)
        self._set_layers(global_doc, local_doc)
        logger.debug(
            "Loaded config: %d global sections from %s, %d local sections from %s",
            len(global_doc), self.path_global, len(local_doc), self.path_local,
        )

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def dump_config(
        self, config_local: Document, config_global: Document, config_cache: Document
    ) -> Optional[str]:
        """Render the local file for ``config_cache``.

        Returns ``None`` when nothing needs writing: the cache is empty, or
        no section differs from what the local file already holds.
        """
        if not config_cache:
            return None

        # Keep local sections that were never read.
        cache = dict(config_cache)
        for name, section in config_local.items():
            if name not in cache:
                cache[name] = decode_section(section)

        dirty = False
        output: Document = {}
        for name in dict.fromkeys([*config_global, *cache]):
            if name not in cache:
                continue

            local = decode_section(config_local.get(name))
            config = cache[name]

            # Default values never go to the local file.
            if name in config_global:
                defaults = decode_section(config_global[name])
                config = array_unmerge(defaults, config)
                local = array_unmerge(defaults, local)

            if bool(local) != bool(config) or (
                local and config and compare_elements(config, local) != 0
            ):
                dirty = True

            if not config:
                continue
            output[name] = encode_section(config)

        if dirty:
            return serialize(output)
        return None

    def save(self) -> None:
        """Write the local file with every value that differs from the defaults.

        Nothing is written when no section changed. The in-memory layers are
        cleared afterwards so the next read reloads from disk.

        Raises:
            ConfigFileNotWritableError: If the local file cannot be written.
        """
        if self._is_test:
            logger.debug("Test environment: not writing %s", self.path_local)
            return

        if not self._initialized:
            # A local file that does not exist yet is the normal case here.
            self._load(strict=False)
        output = self.dump_config(self._local, self._global, self._cache)
        if output is not None:
            try:
                write_text(self.path_local, output)
            except OSError as exc:
                logger.error("Could not write config file %s: %s", self.path_local, exc)
                raise self.config_not_writable_error() from exc
            logger.info("Wrote config file %s", self.path_local)
        else:
            logger.debug("Config unchanged; not writing %s", self.path_local)

        self.clear()

    def is_file_writable(self) -> bool:
        """True if the local file can be written (or created)."""
        path = Path(self.path_local)
        if path.exists():
            return os.access(path, os.W_OK)
        return os.access(path.parent, os.W_OK)

    def config_not_writable_error(self) -> ConfigFileNotWritableError:
        return ConfigFileNotWritableError(f"{self.settings.config_dir}/{Path(self.path_local).name}")


__all__ = ["Config", "HostnameProvider"]
