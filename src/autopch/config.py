from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

DEFAULT_CONFIG_NAME = "autopch.toml"
CONFIG_SECTION = "autopch"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def generation_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get(CONFIG_SECTION, {})
    return section if isinstance(section, dict) else {}


def _normalize_pattern_list(value: TomlValue) -> list[str]:
    items: list[str] = []
    if value is None:
        return items
    if isinstance(value, str):
        # A bare string is one regex; commas are regex syntax.
        items = [value.strip()]
    elif isinstance(value, (list, tuple)):
        items = [item.strip() for item in value if isinstance(item, str)]
    return [item for item in items if item]


def _as_bool(value: TomlValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False


def _as_optional_int(value: TomlValue) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def config_patterns(section: TomlTable | None) -> list[str]:
    if not isinstance(section, dict):
        return []
    return _normalize_pattern_list(section.get("patterns"))


def config_pattern_file(
    section: TomlTable | None, base: Path | None = None
) -> Path | None:
    """Pattern file named by the config, relative to the config file's directory."""
    if not isinstance(section, dict):
        return None
    value = section.get("pattern_file")
    if isinstance(value, str) and value.strip():
        path = Path(value.strip())
        if base is not None and not path.is_absolute():
            path = base / path
        return path
    return None


def config_strict(section: TomlTable | None) -> bool:
    if not isinstance(section, dict):
        return False
    return _as_bool(section.get("strict"))


def config_max_depth(section: TomlTable | None) -> int | None:
    if not isinstance(section, dict):
        return None
    value = _as_optional_int(section.get("max_depth"))
    if value is None or value <= 0:
        return None
    return value


def config_text(section: TomlTable | None, key: str) -> str | None:
    if not isinstance(section, dict):
        return None
    value = section.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged
