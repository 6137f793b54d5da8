"""Active rules of the quality profile governing an analysis."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from .models import ConfigError


@dataclass(frozen=True)
class RuleKey:
    """Identifies a rule as ``repository:rule``."""

    repository: str
    rule: str

    @classmethod
    def parse(cls, value: str) -> "RuleKey":
        repository, sep, rule = value.strip().partition(":")
        if not sep or not repository or not rule:
            raise ConfigError(f"Invalid rule key '{value}', expected 'repository:rule'")
        return cls(repository=repository, rule=rule)

    def __str__(self) -> str:
        return f"{self.repository}:{self.rule}"


class ActiveRules:
    """Index of active rules grouped by rule repository."""

    def __init__(self, rules: Iterable[RuleKey] = ()) -> None:
        self._by_repository: Dict[str, List[RuleKey]] = defaultdict(list)
        for key in rules:
            if key not in self._by_repository[key.repository]:
                self._by_repository[key.repository].append(key)

    @classmethod
    def from_keys(cls, keys: Iterable[str]) -> "ActiveRules":
        return cls(RuleKey.parse(key) for key in keys)

    @classmethod
    def from_config(cls, value: Any) -> "ActiveRules":
        """Build the index from the ``rules.active`` configuration value.

        Accepts either a list of ``repository:rule`` strings or a mapping of
        repository names to lists of rule names.
        """
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            keys: List[RuleKey] = []
            for repository, rules in value.items():
                if isinstance(rules, str):
                    rules = [rules]
                if not isinstance(rules, (list, tuple)):
                    raise ConfigError(f"Active rules for '{repository}' must be a list")
                keys.extend(RuleKey(repository=str(repository), rule=str(rule)) for rule in rules)
            return cls(keys)
        if isinstance(value, (list, tuple)):
            return cls.from_keys(str(item) for item in value)
        raise ConfigError("'rules.active' must be a list or a mapping")

    def find_by_repository(self, repository: str) -> List[RuleKey]:
        return list(self._by_repository.get(repository, []))

    def has_active_rule(self, repository: str) -> bool:
        return bool(self._by_repository.get(repository))

    def repositories(self) -> List[str]:
        return sorted(repo for repo, keys in self._by_repository.items() if keys)

    def __len__(self) -> int:
        return sum(len(keys) for keys in self._by_repository.values())


__all__ = ["ActiveRules", "RuleKey"]
