"""Runtime settings: where the config files live and how strictly to read them.

Sources (highest to lowest priority):
1. Environment variables: INILAYER_<section>__<key> (e.g. INILAYER_paths__configDir)
2. Settings file: explicit ``path`` argument, else INILAYER_SETTINGS_FILE
3. Bundled defaults: inilayer.data/config/defaults.yaml

The merged result is validated against ``settings.schema.yaml``.
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import yaml

from inilayer.core.exceptions import SettingsError
from inilayer.core.schemas import validate_payload
from inilayer.core.utils.io import read_yaml
from inilayer.core.utils.merge import deep_merge
from inilayer.data import read_yaml as read_data_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "INILAYER_"
SETTINGS_FILE_ENV = "INILAYER_SETTINGS_FILE"


@dataclass(frozen=True)
class Settings:
    user_path: Path
    config_dir: str = "config"
    global_file: str = "global.ini.php"
    local_file: str = "config.ini.php"
    hostname_suffix: str = ".config.ini.php"
    hostname: Optional[str] = None
    strict: bool = False
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @property
    def config_path(self) -> Path:
        return self.user_path / self.config_dir

    @property
    def global_path(self) -> Path:
        return self.config_path / self.global_file

    @property
    def default_local_path(self) -> Path:
        return self.config_path / self.local_file

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        paths = data.get("paths") or {}
        log = data.get("logging") or {}
        user_path = paths.get("userPath")
        log_file = log.get("file")
        return cls(
            user_path=Path(user_path).expanduser() if user_path else Path.cwd(),
            config_dir=paths.get("configDir", "config"),
            global_file=paths.get("globalFile", "global.ini.php"),
            local_file=paths.get("localFile", "config.ini.php"),
            hostname_suffix=paths.get("hostnameSuffix", ".config.ini.php"),
            hostname=data.get("hostname") or None,
            strict=bool(data.get("strict", False)),
            log_level=str(log.get("level", "WARNING")),
            log_file=Path(log_file).expanduser() if log_file else None,
        )


# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------

def _as_bool(v: str) -> Optional[bool]:
    low = v.strip().lower()
    if low in {"true", "false"}:
        return low == "true"
    return None


def _as_int(v: str) -> Optional[int]:
    if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
        return int(v)
    return None


def _as_float(v: str) -> Optional[float]:
    s = v.strip()
    if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
        return float(s)
    return None


def _as_json(v: str) -> Optional[Any]:
    s = v.strip()
    if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
        try:
            return json.loads(s)
        except ValueError:
            return None
    return None


def coerce_type(value: str) -> Any:
    """Best-effort typing of an environment string."""
    if value.strip().lower() == "null":
        return None
    for caster in (_as_bool, _as_int, _as_float, _as_json):
        result = caster(value)
        if result is not None:
            return result
    return value.strip()


def _parse_env_key(raw: str) -> List[str]:
    segs = raw.split("__")
    if any(seg == "" for seg in segs):
        raise SettingsError(
            f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
            context={"key": ENV_PREFIX + raw},
        )
    return segs


def _iter_env_overrides(environ: Mapping[str, str]) -> Iterator[Tuple[List[str], Any]]:
    for key in sorted(environ.keys()):
        if not key.startswith(ENV_PREFIX) or key == SETTINGS_FILE_ENV:
            continue
        raw = key[len(ENV_PREFIX):]
        if not raw:
            raise SettingsError(f"Malformed {ENV_PREFIX}* key", context={"key": key})
        yield _parse_env_key(raw), coerce_type(environ[key])


def _set_nested(root: Dict[str, Any], path: List[str], value: Any) -> None:
    cur = root
    for i, part in enumerate(path):
        # Environment variable names are often upper-cased; match keys case-insensitively.
        key_candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        use_key = key_candidates.get(part.lower(), part)
        if i == len(path) - 1:
            cur[use_key] = value
            return
        nxt = cur.get(use_key)
        if not isinstance(nxt, dict):
            if nxt is not None:
                raise SettingsError(
                    f"Cannot override '{'.'.join(path)}': '{use_key}' is not a mapping",
                    context={"path": path},
                )
            nxt = cur[use_key] = {}
        cur = nxt


def apply_env_overrides(data: Dict[str, Any], environ: Mapping[str, str]) -> None:
    for path, value in _iter_env_overrides(environ):
        _set_nested(data, path, value)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_settings_dict(
    path: Union[str, Path, None] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Merge defaults, settings file and environment into a validated dict."""
    env = os.environ if environ is None else environ
    data: Dict[str, Any] = copy.deepcopy(read_data_yaml("config", "defaults.yaml"))

    settings_file = path or env.get(SETTINGS_FILE_ENV)
    if settings_file:
        try:
            overlay = read_yaml(Path(settings_file), default={}, raise_on_error=True)
        except (OSError, yaml.YAMLError) as exc:
            raise SettingsError(
                f"Could not read settings file {settings_file}: {exc}",
                context={"path": str(settings_file)},
            ) from exc
        if not isinstance(overlay, dict):
            raise SettingsError(
                f"Settings file {settings_file} must contain a mapping",
                context={"path": str(settings_file)},
            )
        data = deep_merge(data, overlay)
        logger.debug("Loaded settings overlay from %s", settings_file)

    apply_env_overrides(data, env)

    log = data.get("logging")
    if isinstance(log, dict) and isinstance(log.get("level"), str):
        log["level"] = log["level"].upper()

    validate_payload(data, "settings.schema")
    return data


def load_settings(
    path: Union[str, Path, None] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Load runtime settings.

    Raises:
        SettingsError: If a source is unreadable, an environment key is
            malformed, or the merged settings fail schema validation.
    """
    return Settings.from_dict(load_settings_dict(path, environ=environ))


__all__ = [
    "Settings",
    "ENV_PREFIX",
    "SETTINGS_FILE_ENV",
    "coerce_type",
    "apply_env_overrides",
    "load_settings_dict",
    "load_settings",
]
