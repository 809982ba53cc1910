from __future__ import annotations

from typing import Any, Dict, Mapping


class InilayerError(Exception):
    """Base exception for inilayer."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigFileNotFoundError(InilayerError, FileNotFoundError):
    """Raised in strict mode when a config file is missing or unreadable."""

    def __init__(
        self,
        path: Any,
        *,
        reason: str = "not found",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx["path"] = str(path)
        ctx["reason"] = reason
        message = f"Configuration file {path} {reason}"
        InilayerError.__init__(self, message, context=ctx)
        FileNotFoundError.__init__(self, message)
        self.path = str(path)


class ConfigFileNotWritableError(InilayerError, PermissionError):
    """Raised when the local config file cannot be written.

    ``path`` is relative to the installation (``config/<file>``) so it can be
    shown to administrators as-is.
    """

    def __init__(self, path: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx["path"] = path
        message = (
            f"The configuration file ({path}) could not be written. "
            "Check that the web server user has write permission on it."
        )
        InilayerError.__init__(self, message, context=ctx)
        PermissionError.__init__(self, message)
        self.path = path


class UndefinedSectionError(InilayerError, LookupError):
    """Raised when a section is defined in neither the global nor the local file."""

    def __init__(self, section: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx["section"] = section
        message = (
            f"Error while trying to read the config section '{section}' from your "
            "configuration files. If you just upgraded, check that the global "
            "configuration file was replaced by the latest version."
        )
        InilayerError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)
        self.section = section


class InvalidHostnameError(InilayerError, ValueError):
    """Raised when a hostname does not make a safe config filename."""

    def __init__(self, hostname: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx["hostname"] = hostname
        InilayerError.__init__(self, "Hostname is not valid", context=ctx)
        ValueError.__init__(self, "Hostname is not valid")
        self.hostname = hostname


class SettingsError(InilayerError, ValueError):
    """Raised when runtime settings cannot be loaded or fail validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        InilayerError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "InilayerError",
    "ConfigFileNotFoundError",
    "ConfigFileNotWritableError",
    "UndefinedSectionError",
    "InvalidHostnameError",
    "SettingsError",
]
