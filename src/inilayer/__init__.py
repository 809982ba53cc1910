"""
inilayer - layered INI configuration store

Merges a shipped default configuration file with a site-local override
file, exposes section-level read/write access, and writes back only the
values that differ from the defaults.
"""

__version__ = "0.1.0"

from .core.config import Config, HostnameConfigInfo, is_valid_filename
from .core.exceptions import (
    ConfigFileNotFoundError,
    ConfigFileNotWritableError,
    InilayerError,
    InvalidHostnameError,
    SettingsError,
    UndefinedSectionError,
)
from .core.settings import Settings, load_settings
from .core.values import ListValue, Scalar, to_value

__all__ = [
    "__version__",
    "Config",
    "HostnameConfigInfo",
    "is_valid_filename",
    "Settings",
    "load_settings",
    "Scalar",
    "ListValue",
    "to_value",
    "InilayerError",
    "ConfigFileNotFoundError",
    "ConfigFileNotWritableError",
    "UndefinedSectionError",
    "InvalidHostnameError",
    "SettingsError",
]
