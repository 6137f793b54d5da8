"""Decides whether a sensor is worth running for the current analysis."""

from __future__ import annotations

from typing import Optional, Protocol

from .logging import get_logger
from .models import SensorDescriptor, SkipReason
from .predicates import FilePredicate, FilePredicates


class FileIndex(Protocol):
    """Answers existence queries over the project files."""

    def predicates(self) -> FilePredicates:
        ...

    def has_files(self, predicate: FilePredicate) -> bool:
        ...


class ActiveRuleIndex(Protocol):
    """Knows whether a rule repository has at least one active rule."""

    def has_active_rule(self, repository: str) -> bool:
        ...


class ConfigurationStore(Protocol):
    """Knows whether a configuration key currently has a value."""

    def has_key(self, key: str) -> bool:
        ...


class SensorOptimizer:
    """Checks file, active-rule and settings conditions declared by a sensor.

    Conditions are evaluated in that order and evaluation stops at the first
    one that fails.
    """

    def __init__(
        self,
        fs: FileIndex,
        active_rules: ActiveRuleIndex,
        settings: ConfigurationStore,
    ) -> None:
        self.fs = fs
        self.active_rules = active_rules
        self.settings = settings
        self.logger = get_logger("optimizer")

    def should_execute(self, descriptor: SensorDescriptor) -> bool:
        """Decide if the sensor described by ``descriptor`` should be executed."""
        return self.check(descriptor) is None

    def check(self, descriptor: SensorDescriptor) -> Optional[SkipReason]:
        """Return the first failing condition, or None when the sensor applies.

        A failing condition is also reported at debug level.
        """
        reason = self._first_failure(descriptor)
        if reason is not None:
            self.logger.debug("'%s' skipped because %s", descriptor.name, reason.message)
        return reason

    def _first_failure(self, descriptor: SensorDescriptor) -> Optional[SkipReason]:
        if not self._fs_condition(descriptor):
            return SkipReason.NO_RELATED_FILE
        if not self._active_rules_condition(descriptor):
            return SkipReason.NO_ACTIVE_RULE
        if not self._settings_condition(descriptor):
            return SkipReason.MISSING_PROPERTY
        return None

    def _fs_condition(self, descriptor: SensorDescriptor) -> bool:
        if not descriptor.languages and descriptor.file_type is None:
            return True
        predicates = self.fs.predicates()
        if descriptor.languages:
            language_predicate = predicates.has_languages(descriptor.languages)
        else:
            language_predicate = predicates.all()
        if descriptor.file_type is not None:
            type_predicate = predicates.has_type(descriptor.file_type)
        else:
            type_predicate = predicates.all()
        return self.fs.has_files(predicates.and_(language_predicate, type_predicate))

    def _active_rules_condition(self, descriptor: SensorDescriptor) -> bool:
        if not descriptor.rule_repositories:
            return True
        # One active repository is enough.
        for repository in sorted(descriptor.rule_repositories):
            if self.active_rules.has_active_rule(repository):
                return True
        return False

    def _settings_condition(self, descriptor: SensorDescriptor) -> bool:
        if not descriptor.required_properties:
            return True
        # Every required key must be set.
        for key in sorted(descriptor.required_properties):
            if not self.settings.has_key(key):
                return False
        return True


__all__ = [
    "ActiveRuleIndex",
    "ConfigurationStore",
    "FileIndex",
    "SensorOptimizer",
]
