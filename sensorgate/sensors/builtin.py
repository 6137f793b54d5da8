"""Sensors shipped with sensorgate."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List

from ..models import TEST, Measure, SensorDescriptor
from .base import Sensor, SensorContext


class LanguageDistributionSensor(Sensor):
    """Counts indexed files per language."""

    def describe(self) -> SensorDescriptor:
        return SensorDescriptor(name="Language distribution")

    def execute(self, context: SensorContext) -> Iterable[Measure]:
        counts = Counter(
            file.language for file in context.manifest.files if file.language is not None
        )
        return [
            Measure(name=f"files.{language}", value=count, sensor="language")
            for language, count in sorted(counts.items())
        ]


class UnitTestFilesSensor(Sensor):
    """Counts test files and the languages they are written in."""

    def describe(self) -> SensorDescriptor:
        return SensorDescriptor(name="Test files", file_type=TEST)

    def execute(self, context: SensorContext) -> Iterable[Measure]:
        predicates = context.fs.predicates()
        tests = list(context.fs.files(predicates.has_type(TEST)))
        measures: List[Measure] = [Measure(name="tests.files", value=len(tests), sensor="tests")]
        languages = sorted({file.language for file in tests if file.language is not None})
        if languages:
            measures.append(Measure(name="tests.languages", value=languages, sensor="tests"))
        return measures
