"""Load PathgateConfig from pathgate.yaml / pathgate.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from pathgate._errors import ConfigError
from pathgate.config import PathgateConfig

CONFIG_FILES: tuple[str, ...] = ("pathgate.yaml", "pathgate.yml", "pathgate.toml")

_KNOWN_KEYS: frozenset[str] = frozenset({
    "routes_dir",
    "manifest",
    "login_groups",
    "page_pattern",
    "max_events",
})


def load_config(root: Path, **overrides: object) -> PathgateConfig:
    """Load PathgateConfig from root, optionally merging a config file.

    Looks for pathgate.yaml, pathgate.yml, or pathgate.toml in root. If found,
    loads and merges with overrides. Overrides take precedence; overrides
    whose value is None are ignored so CLI defaults don't mask the file.

    Raises:
        ConfigError: If a config file exists but cannot be parsed or does
            not hold a mapping.

    """
    file_config = _read_pathgate_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    if "login_groups" in merged:
        groups = merged["login_groups"]
        if isinstance(groups, str):
            groups = (groups,)
        merged["login_groups"] = tuple(groups)  # type: ignore[arg-type]
    return PathgateConfig(root=root, **merged)  # type: ignore[arg-type]


def find_config_file(root: Path) -> Path | None:
    """Return the first config file present in *root*, if any."""
    for name in CONFIG_FILES:
        path = root / name
        if path.is_file():
            return path
    return None


def _read_pathgate_config(root: Path) -> dict[str, object]:
    """Read pathgate config from yaml/toml if present. Returns empty dict otherwise."""
    path = find_config_file(root)
    if path is None:
        return {}
    if path.suffix == ".toml":
        return _parse_toml(path)
    return _parse_yaml(path)


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read config file {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_pathgate_section(data, path)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot read config file {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_pathgate_section(data, path)


def _flatten_pathgate_section(data: object, path: Path) -> dict[str, object]:
    """Extract pathgate.* keys into top-level config, dropping unknown keys."""
    if not isinstance(data, dict):
        msg = f"Config file {path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)

    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("pathgate")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    _check_types(result, path)
    return result


def _check_types(values: dict[str, object], path: Path) -> None:
    """Reject config values of the wrong type before they reach PathgateConfig."""
    for key, value in values.items():
        if key == "login_groups":
            ok = isinstance(value, str) or (
                isinstance(value, list) and all(isinstance(g, str) for g in value)
            )
            expected = "a string or a list of strings"
        elif key == "max_events":
            ok = isinstance(value, int) and not isinstance(value, bool) and value > 0
            expected = "a positive integer"
        else:
            ok = isinstance(value, str) or (key == "manifest" and value is None)
            expected = "a string"
        if not ok:
            msg = f"Config file {path}: {key} must be {expected}, got {value!r}"
            raise ConfigError(msg)
