"""Configuration loading for sensorgate (.sensorgate.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from .models import ConfigError, SensorDescriptor
from .rules import ActiveRules
from .settings import Settings

CONFIG_FILENAME = ".sensorgate.yml"


@dataclass
class SensorGateConfig:
    """Represents the project settings defined in .sensorgate.yml."""

    root: Path
    exclude_paths: List[str] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)
    active_rules: ActiveRules = field(default_factory=ActiveRules)
    sensors: List[SensorDescriptor] = field(default_factory=list)
    enabled_sensors: List[str] = field(default_factory=list)

    def settings(self) -> Settings:
        return Settings(self.properties)


def load_config(config_path: Path) -> SensorGateConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SensorGateConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    properties_data = data.get("properties")
    if properties_data is not None and not isinstance(properties_data, dict):
        raise ConfigError("'properties' must be a mapping of keys to values")
    properties = {str(key): value for key, value in (properties_data or {}).items()}

    rules_data = _as_dict(data.get("rules"))
    active_rules = ActiveRules.from_config(rules_data.get("active"))

    sensors_data = data.get("sensors") or []
    if not isinstance(sensors_data, list):
        raise ConfigError("'sensors' must be a list of sensor declarations")
    sensors: List[SensorDescriptor] = []
    seen: set[str] = set()
    for entry in sensors_data:
        if not isinstance(entry, dict):
            raise ConfigError("Each sensor declaration must be a mapping")
        descriptor = SensorDescriptor.from_mapping(entry)
        if descriptor.name.lower() in seen:
            raise ConfigError(f"Sensor '{descriptor.name}' is declared more than once")
        seen.add(descriptor.name.lower())
        sensors.append(descriptor)

    return SensorGateConfig(
        root=root,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        properties=properties,
        active_rules=active_rules,
        sensors=sensors,
        enabled_sensors=_as_str_list(data.get("enabled_sensors")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
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


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "SensorGateConfig", "load_config"]
