"""Sensor plugin implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence, Set

from ..models import ConfigError, SensorDescriptor
from .base import DeclaredSensor, Sensor, SensorContext
from .builtin import LanguageDistributionSensor, UnitTestFilesSensor

_ENTRY_POINT_GROUP = "sensorgate.sensors"

_BUILTIN_FACTORIES: tuple[Callable[[], Sensor], ...] = (
    LanguageDistributionSensor,
    UnitTestFilesSensor,
)


def discover_sensors(
    declared: Sequence[SensorDescriptor] = (),
    enabled: Sequence[str] | None = None,
) -> List[Sensor]:
    """Return built-in, declared and plugin sensors, honoring optional enabled names.

    Every sensor is addressed by its descriptor name, the same name reports
    show. Matching is case-insensitive and two sensors may not share a name.
    """

    enabled_set: Set[str] | None = None
    if enabled:
        enabled_set = {name.lower() for name in enabled}

    sensors: List[Sensor] = []
    seen: Set[str] = set()

    def _add(origin: str, factory: Callable[[], Sensor]) -> None:
        instance = factory()
        if not isinstance(instance, Sensor):
            raise TypeError(f"Sensor factory for '{origin}' did not return a Sensor instance")
        name = instance.describe().name
        key = name.lower()
        if key in seen:
            raise ConfigError(f"Sensor name '{name}' from {origin} is already in use")
        seen.add(key)
        if enabled_set is not None and key not in enabled_set:
            return
        sensors.append(instance)

    for factory in _BUILTIN_FACTORIES:
        _add("built-in sensors", factory)

    for descriptor in declared:
        _add("configuration", lambda descriptor=descriptor: DeclaredSensor(descriptor))

    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load sensor entry point '{entry.name}': {exc}") from exc

        def _factory(obj: object = loaded) -> Sensor:
            return _coerce_sensor(obj)

        _add(f"entry point '{entry.name}'", _factory)

    if enabled_set is not None:
        missing = enabled_set - seen
        if missing:
            raise ValueError(f"Unknown sensors requested: {', '.join(sorted(missing))}")

    return sensors


def _coerce_sensor(obj: object) -> Sensor:
    if isinstance(obj, Sensor):
        return obj
    if isinstance(obj, type) and issubclass(obj, Sensor):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, Sensor):
            return instance
    raise TypeError("Sensor entry point must be a Sensor subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "DeclaredSensor",
    "LanguageDistributionSensor",
    "Sensor",
    "SensorContext",
    "UnitTestFilesSensor",
    "discover_sensors",
]
