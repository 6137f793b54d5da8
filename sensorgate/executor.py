"""Runs the sensors that the optimizer deems applicable."""

from __future__ import annotations

from typing import Iterable, List

from .logging import get_logger
from .models import SensorOutcome
from .optimizer import SensorOptimizer
from .sensors import Sensor, SensorContext


class SensorsExecutor:
    """Offers each sensor to the optimizer and executes the applicable ones."""

    def __init__(self, optimizer: SensorOptimizer) -> None:
        self.optimizer = optimizer
        self.logger = get_logger("executor")

    def execute(self, sensors: Iterable[Sensor], context: SensorContext) -> List[SensorOutcome]:
        outcomes: List[SensorOutcome] = []
        for sensor in sensors:
            descriptor = sensor.describe()
            reason = self.optimizer.check(descriptor)
            if reason is not None:
                outcomes.append(SensorOutcome(name=descriptor.name, executed=False, reason=reason))
                continue
            self.logger.info("Execute sensor: %s", descriptor.name)
            measures = list(sensor.execute(context))
            outcomes.append(SensorOutcome(name=descriptor.name, executed=True, measures=measures))
        return outcomes


__all__ = ["SensorsExecutor"]
