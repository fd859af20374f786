"""Configuration loading for codingrules (.codingrules.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILE_NAME = ".codingrules.yml"
DEFAULT_DISTRIBUTION_URL = (
    "https://raw.githubusercontent.com/atc-net/atc-coding-rules/main/distribution/dotnet"
)
PROJECT_AREAS = ("src", "test", "sample")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class FetchConfig:
    """Remote download settings."""

    timeout: Optional[float] = None


@dataclass
class MappingsConfig:
    """Project directories per area, relative to the project root. Nothing is mapped by default."""

    src: List[str] = field(default_factory=list)
    test: List[str] = field(default_factory=list)
    sample: List[str] = field(default_factory=list)

    def paths_for(self, area: str) -> List[str]:
        return list(getattr(self, area))


@dataclass
class CodingRulesConfig:
    """Represents the settings defined in .codingrules.yml."""

    root: Path
    distribution_url: str = DEFAULT_DISTRIBUTION_URL
    fetch: FetchConfig = field(default_factory=FetchConfig)
    mappings: MappingsConfig = field(default_factory=MappingsConfig)
    log_file: Optional[Path] = None


def load_config(config_path: Path) -> CodingRulesConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CodingRulesConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a mapping at the root")

    distribution_url = _as_str(data.get("distribution_url")) or DEFAULT_DISTRIBUTION_URL

    fetch_data = _as_dict(data.get("fetch"))
    fetch = FetchConfig(timeout=_as_float(fetch_data.get("timeout")) if fetch_data else None)

    mappings = MappingsConfig()
    mapping_data = _as_dict(data.get("mappings"))
    for area, value in mapping_data.items():
        if area not in PROJECT_AREAS:
            raise ConfigError(
                f"Unknown mapping area '{area}' (expected one of: {', '.join(PROJECT_AREAS)})"
            )
        setattr(mappings, area, _as_str_list(value))

    log_file_str = _as_str(data.get("log_file"))
    log_file = root / log_file_str if log_file_str else None

    return CodingRulesConfig(
        root=root,
        distribution_url=distribution_url.rstrip("/"),
        fetch=fetch,
        mappings=mappings,
        log_file=log_file,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    if config_path.name != CONFIG_FILE_NAME:
        return (config_path.parent / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_DISTRIBUTION_URL",
    "PROJECT_AREAS",
    "CodingRulesConfig",
    "ConfigError",
    "FetchConfig",
    "MappingsConfig",
    "load_config",
]
