from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, field_validator

ENV_PREFIX = "QUERYBIND_"


class QueryBindSettings(BaseModel):
    queries_path: Path | None = None
    database: str = ":memory:"
    default_strategy: Literal["format", "params"] = "format"
    strict: bool = False
    log_level: str = "INFO"

    model_config = ConfigDict(extra="ignore")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


def _deep_update(target: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_update(target[key], value)  # type: ignore[index]
        else:
            target[key] = value
    return target


def _load_toml(path: Path | None) -> Dict[str, Any]:
    if path is None or not path.exists():
        return {}
    with path.open("rb") as f:
        data = tomllib.load(f)
    # accept both a bare file and a [querybind] table
    section = data.get("querybind")
    if isinstance(section, dict):
        data = section
    queries_path = data.get("queries_path")
    if isinstance(queries_path, str) and not Path(queries_path).is_absolute():
        # relative to the config file, not the working directory
        data["queries_path"] = str(path.parent / queries_path)
    return data


def _extract_prefixed(source: Dict[str, str], *, prefix: str = ENV_PREFIX, delimiter: str = "__") -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for key, value in source.items():
        if not key.startswith(prefix):
            continue
        path = key.removeprefix(prefix).split(delimiter)
        target = data
        for part in path[:-1]:
            target = target.setdefault(part.lower(), {})
        target[path[-1].lower()] = value
    return data


def load_settings(
    *,
    config_path: Path | None = None,
    overrides: Dict[str, Any] | None = None,
) -> QueryBindSettings:
    """TOML file, then ``QUERYBIND_*`` environment variables, then ``overrides``."""
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    merged: Dict[str, Any] = {}
    _deep_update(merged, _load_toml(config_path))
    _deep_update(merged, _extract_prefixed(dict(os.environ)))
    if overrides:
        _deep_update(merged, overrides)

    return QueryBindSettings(**merged)


__all__ = ["QueryBindSettings", "load_settings"]
