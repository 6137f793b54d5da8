"""Base classes for sensor plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from ..filesystem import ManifestFileSystem
from ..models import Measure, RepoManifest, SensorDescriptor
from ..rules import ActiveRules
from ..settings import Settings


@dataclass
class SensorContext:
    """Project state handed to sensors when they execute."""

    manifest: RepoManifest
    fs: ManifestFileSystem
    active_rules: ActiveRules
    settings: Settings


class Sensor(ABC):
    """Contract for analysis units gated by their declared interests."""

    @abstractmethod
    def describe(self) -> SensorDescriptor:
        """Return the languages, file type, rule repositories and properties of interest."""

    @abstractmethod
    def execute(self, context: SensorContext) -> Iterable[Measure]:
        """Run the sensor against the project and return what it measured."""


class DeclaredSensor(Sensor):
    """Sensor declared in .sensorgate.yml; it only records that it would run."""

    def __init__(self, descriptor: SensorDescriptor) -> None:
        self.descriptor = descriptor

    def describe(self) -> SensorDescriptor:
        return self.descriptor

    def execute(self, context: SensorContext) -> Iterable[Measure]:
        return []
