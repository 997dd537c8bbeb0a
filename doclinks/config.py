"""Configuration loading for doclinks (.doclinks.yml / doclinks.config.json)."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import yaml

CONFIG_FILENAMES = (
    ".doclinks.yml",
    ".doclinks.yaml",
    "doclinks.config.json",
    ".doclinksrc.json",
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

# List options whose overrides extend the base value instead of replacing it.
_APPENDING_FIELDS = ("ignore_patterns", "ignore_domains")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed or is invalid."""


@dataclass(frozen=True)
class LinkCheckConfig:
    """Settings for one link check run; treated as read-only once built."""

    include: Tuple[str, ...] = ("./**/*.mdx", "./**/*.md")
    exclude: Tuple[str, ...] = ("**/node_modules/**", "**/dist/**", "**/.git/**")
    ignore_patterns: Tuple[str, ...] = ("localhost:*", "127.0.0.1:*", "*.local")
    ignore_domains: Tuple[str, ...] = ()
    timeout: int = 10000
    retries: int = 2
    concurrency: int = 10
    internal_only: bool = False
    external_only: bool = False
    custom_components: Tuple[str, ...] = ("Link", "A")
    route_prefixes: Tuple[str, ...] = ()
    redirects_file: Optional[str] = None
    fail_on_redirects: bool = False

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ConfigError("timeout must be a positive number of milliseconds")
        if self.retries < 0:
            raise ConfigError("retries must not be negative")
        if self.concurrency < 1:
            raise ConfigError("concurrency must be at least 1")
        if self.internal_only and self.external_only:
            raise ConfigError("internal_only and external_only are mutually exclusive")


DEFAULT_CONFIG = LinkCheckConfig()


def load_config(
    config_path: Path | str | None = None, *, cwd: Path | None = None
) -> LinkCheckConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    base = (cwd or Path.cwd()).expanduser()
    if config_path is not None:
        candidate = Path(config_path).expanduser()
        if not candidate.is_absolute():
            candidate = base / candidate
        if not candidate.exists():
            raise ConfigError(f"Config file not found: {candidate}")
        return merge_config(DEFAULT_CONFIG, _read_config(candidate))

    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return merge_config(DEFAULT_CONFIG, _read_config(candidate))
    return DEFAULT_CONFIG


def merge_config(base: LinkCheckConfig, overrides: Mapping[str, Any]) -> LinkCheckConfig:
    """Return ``base`` updated with ``overrides``.

    Ignore patterns and ignore domains are appended to the base lists; every
    other option replaces the base value. ``None`` values are ignored.
    """
    known = {item.name: item for item in fields(LinkCheckConfig)}
    changes: Dict[str, Any] = {}
    for raw_key, value in overrides.items():
        key = _normalize_key(raw_key)
        if key not in known:
            raise ConfigError(f"Unknown configuration option: {raw_key}")
        if value is None:
            continue
        default = getattr(DEFAULT_CONFIG, key)
        if isinstance(default, tuple):
            items = _as_str_tuple(value, key)
            if key in _APPENDING_FIELDS:
                items = tuple(getattr(base, key)) + items
            changes[key] = items
        elif isinstance(default, bool):
            changes[key] = _as_bool(value, key)
        elif isinstance(default, int):
            changes[key] = _as_int(value, key)
        else:
            changes[key] = str(value)
    return replace(base, **changes)


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        if path.suffix.lower() == ".json":
            loaded = json.loads(text)
        else:
            loaded = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _normalize_key(key: object) -> str:
    text = str(key).strip().replace("-", "_")
    return _CAMEL_BOUNDARY.sub("_", text).lower()


def _as_str_tuple(value: Any, key: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Sequence):
        return tuple(str(item) for item in value if isinstance(item, (str, int, float)))
    raise ConfigError(f"{key} must be a list of strings")


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"{key} must be an integer")


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    raise ConfigError(f"{key} must be a boolean")


__all__ = [
    "CONFIG_FILENAMES",
    "ConfigError",
    "DEFAULT_CONFIG",
    "LinkCheckConfig",
    "load_config",
    "merge_config",
]
