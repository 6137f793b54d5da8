"""Configuration properties visible to sensors."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from .models import ConfigError


class Settings:
    """Read-only view of analysis properties; ``None`` values count as unset."""

    def __init__(self, properties: Optional[Mapping[str, Any]] = None) -> None:
        self._properties: Dict[str, Any] = {}
        for key, value in (properties or {}).items():
            if value is not None:
                self._properties[str(key)] = value

    def has_key(self, key: str) -> bool:
        return key in self._properties

    def keys(self) -> list[str]:
        return sorted(self._properties)

    def with_overrides(self, overrides: Mapping[str, Any]) -> "Settings":
        """Return a new store where ``overrides`` win over existing values."""
        merged: Dict[str, Any] = dict(self._properties)
        merged.update(overrides)
        return Settings(merged)


def parse_property_overrides(values: Iterable[str]) -> Dict[str, str]:
    """Parse ``key=value`` command-line definitions."""
    overrides: Dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigError(f"Invalid property definition '{raw}', expected key=value")
        overrides[key] = value
    return overrides


__all__ = ["Settings", "parse_property_overrides"]
