"""Core data models shared across sensorgate components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional

MAIN = "main"
TEST = "test"
FILE_TYPES = (MAIN, TEST)


class ConfigError(RuntimeError):
    """Raised when project configuration cannot be parsed or is inconsistent."""


@dataclass
class FileMeta:
    """Metadata for an individual project file."""

    path: str
    size: int
    language: Optional[str]
    role: str
    type: str = MAIN


@dataclass
class RepoManifest:
    """Normalized view of the project files visible to sensors."""

    root: str
    files: List[FileMeta] = field(default_factory=list)


@dataclass(frozen=True)
class SensorDescriptor:
    """Declared interests of one sensor.

    Empty collections and a missing ``file_type`` mean "no restriction".
    """

    name: str
    languages: FrozenSet[str] = frozenset()
    file_type: Optional[str] = None
    rule_repositories: FrozenSet[str] = frozenset()
    required_properties: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        # Accept any iterable of strings while keeping the descriptor hashable.
        object.__setattr__(self, "languages", frozenset(self.languages))
        object.__setattr__(self, "rule_repositories", frozenset(self.rule_repositories))
        object.__setattr__(self, "required_properties", frozenset(self.required_properties))
        if self.file_type is not None and self.file_type not in FILE_TYPES:
            raise ConfigError(
                f"Sensor '{self.name}' declares unknown file type '{self.file_type}'"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SensorDescriptor":
        """Build a descriptor from a ``sensors:`` entry of the configuration file."""
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ConfigError("Sensor declarations require a non-empty 'name'")
        file_type = data.get("type")
        if file_type is not None:
            file_type = str(file_type).lower()
        return cls(
            name=name.strip(),
            languages=_as_keys(data.get("languages")),
            file_type=file_type,
            rule_repositories=_as_keys(data.get("rule_repositories"), lower=False),
            required_properties=_as_keys(data.get("required_properties"), lower=False),
        )


class SkipReason(Enum):
    """Applicability condition that prevented a sensor from running."""

    NO_RELATED_FILE = "there is no related file in current project"
    NO_ACTIVE_RULE = "there is no related rule activated in the quality profile"
    MISSING_PROPERTY = "one of the required properties is missing"

    @property
    def message(self) -> str:
        return self.value


@dataclass
class Measure:
    """Value computed by a sensor during execution."""

    name: str
    value: Any
    sensor: str


@dataclass
class SensorOutcome:
    """Result of offering one sensor to the executor."""

    name: str
    executed: bool
    reason: Optional[SkipReason] = None
    measures: List[Measure] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "executed": self.executed,
            "reason": self.reason.name.lower() if self.reason else None,
            "measures": {measure.name: measure.value for measure in self.measures},
        }


def _as_keys(value: Any, *, lower: bool = True) -> FrozenSet[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        items: Iterable[Any] = [value]
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        raise ConfigError(f"Expected a string or list of strings, got {type(value).__name__}")
    keys = set()
    for item in items:
        text = str(item).strip()
        if text:
            keys.add(text.lower() if lower else text)
    return frozenset(keys)


__all__ = [
    "ConfigError",
    "FILE_TYPES",
    "FileMeta",
    "MAIN",
    "Measure",
    "RepoManifest",
    "SensorDescriptor",
    "SensorOutcome",
    "SkipReason",
    "TEST",
]
