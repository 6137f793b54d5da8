"""Pipeline orchestration for the check command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from .config import SensorGateConfig, load_config
from .executor import SensorsExecutor
from .filesystem import ManifestFileSystem
from .logging import get_logger
from .models import RepoManifest, SensorOutcome
from .optimizer import SensorOptimizer
from .repo_scanner import RepoScanner
from .sensors import Sensor, SensorContext, discover_sensors


@dataclass
class CheckResult:
    """Outcome of a check run over one repository."""

    manifest: RepoManifest
    outcomes: List[SensorOutcome]
    context: SensorContext

    @property
    def executed(self) -> List[str]:
        return [outcome.name for outcome in self.outcomes if outcome.executed]

    @property
    def skipped(self) -> List[str]:
        return [outcome.name for outcome in self.outcomes if not outcome.executed]


class Orchestrator:
    """Wires scanner, configuration, optimizer and executor for one analysis pass."""

    def __init__(
        self,
        scanner: RepoScanner | None = None,
        sensors: Optional[Sequence[Sensor]] = None,
    ) -> None:
        self.scanner = scanner or RepoScanner()
        self._sensor_overrides = list(sensors) if sensors is not None else None
        self.logger = get_logger("orchestrator")

    def run_check(
        self,
        path: str,
        *,
        config_path: Path | None = None,
        properties: Mapping[str, str] | None = None,
    ) -> CheckResult:
        """Scan ``path`` and report which sensors apply to it."""
        repo_path = Path(path).expanduser().resolve()
        self.logger.info("Starting check run for %s", repo_path)

        config = load_config(config_path or repo_path)
        manifest = self.scanner.scan(str(repo_path), exclude_paths=config.exclude_paths)
        self.logger.debug("Scanner discovered %d files", len(manifest.files))

        settings = config.settings()
        if properties:
            settings = settings.with_overrides(properties)

        fs = ManifestFileSystem(manifest)
        optimizer = SensorOptimizer(fs, config.active_rules, settings)
        context = SensorContext(
            manifest=manifest,
            fs=fs,
            active_rules=config.active_rules,
            settings=settings,
        )

        sensors = self._select_sensors(config)
        self.logger.debug("Selected %d sensors", len(sensors))
        outcomes = SensorsExecutor(optimizer).execute(sensors, context)
        return CheckResult(manifest=manifest, outcomes=outcomes, context=context)

    def _select_sensors(self, config: SensorGateConfig) -> List[Sensor]:
        if self._sensor_overrides is not None:
            return list(self._sensor_overrides)
        return discover_sensors(config.sensors, config.enabled_sensors or None)


__all__ = ["CheckResult", "Orchestrator"]
