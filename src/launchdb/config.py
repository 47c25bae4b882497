from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from launchdb.errors import ConfigError

DEFAULT_PROBE_PATH = "/usr"
DEFAULT_ATTRIBUTE_NAME = "can-open"

ENV_DATABASE = "LAUNCHDB_DATABASE"
ENV_PROBE_PATH = "LAUNCHDB_PROBE_PATH"
ENV_CACHE_CAPABILITIES = "LAUNCHDB_CACHE_CAPABILITIES"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def default_database_path() -> Path:
    data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(data_home) / "launch" / "launch.db"


@dataclass(frozen=True)
class LaunchConfig:
    database_path: Path
    probe_path: str = DEFAULT_PROBE_PATH
    cache_capabilities: bool = True
    attribute_name: str = DEFAULT_ATTRIBUTE_NAME


def _parse_bool(key: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        low = raw.strip().lower()
        if low in _TRUE:
            return True
        if low in _FALSE:
            return False
    raise ConfigError(f"invalid_bool:{key}:{raw!r}")


def _require_str(key: str, raw: Any) -> str:
    if not isinstance(raw, str) or not raw:
        raise ConfigError(f"invalid_str:{key}")
    return raw


def _from_mapping(base: LaunchConfig, data: Dict[str, Any]) -> LaunchConfig:
    known = {"database_path", "probe_path", "cache_capabilities", "attribute_name"}
    unknown = set(data.keys()) - known
    if unknown:
        raise ConfigError(f"unknown_keys:{sorted(unknown)}")

    cfg = base
    if "database_path" in data:
        raw = _require_str("database_path", data["database_path"])
        cfg = replace(cfg, database_path=Path(raw).expanduser())
    if "probe_path" in data:
        cfg = replace(cfg, probe_path=_require_str("probe_path", data["probe_path"]))
    if "cache_capabilities" in data:
        cfg = replace(cfg, cache_capabilities=_parse_bool("cache_capabilities", data["cache_capabilities"]))
    if "attribute_name" in data:
        cfg = replace(cfg, attribute_name=_require_str("attribute_name", data["attribute_name"]))
    return cfg


def _apply_env(cfg: LaunchConfig) -> LaunchConfig:
    db = os.environ.get(ENV_DATABASE)
    if db:
        cfg = replace(cfg, database_path=Path(db).expanduser())
    probe = os.environ.get(ENV_PROBE_PATH)
    if probe:
        cfg = replace(cfg, probe_path=probe)
    cache = os.environ.get(ENV_CACHE_CAPABILITIES)
    if cache is not None and cache != "":
        cfg = replace(cfg, cache_capabilities=_parse_bool(ENV_CACHE_CAPABILITIES, cache))
    return cfg


def load_config(path: Optional[str] = None) -> LaunchConfig:
    """
    Build the effective configuration.

    Precedence (lowest first): built-in defaults, YAML file at `path`,
    LAUNCHDB_* environment variables. A missing file is not an error.
    """
    cfg = LaunchConfig(database_path=default_database_path())

    if path is not None:
        p = Path(path)
        if p.exists():
            try:
                data = yaml.safe_load(p.read_text(encoding="utf-8"))
            except yaml.YAMLError as e:
                raise ConfigError(f"invalid_yaml:{e}") from e
            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise ConfigError("config must be a mapping")
            cfg = _from_mapping(cfg, data)

    return _apply_env(cfg)
