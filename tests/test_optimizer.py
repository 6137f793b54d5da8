"""Tests for sensorgate.optimizer."""

from __future__ import annotations

import logging

import pytest

from sensorgate.filesystem import ManifestFileSystem
from sensorgate.models import MAIN, TEST, FileMeta, RepoManifest, SensorDescriptor, SkipReason
from sensorgate.optimizer import SensorOptimizer
from sensorgate.predicates import FilePredicate, FilePredicates
from sensorgate.rules import ActiveRules
from sensorgate.settings import Settings


class RecordingFileIndex:
    """File index double that delegates to a manifest and counts queries."""

    def __init__(self, files: list[FileMeta] | None = None) -> None:
        self._fs = ManifestFileSystem(RepoManifest(root="/repo", files=files or []))
        self.queries: list[FilePredicate] = []

    def predicates(self) -> FilePredicates:
        return self._fs.predicates()

    def has_files(self, predicate: FilePredicate) -> bool:
        self.queries.append(predicate)
        return self._fs.has_files(predicate)


class RecordingActiveRules:
    def __init__(self, active: dict[str, bool] | None = None) -> None:
        self.active = active or {}
        self.queries: list[str] = []

    def has_active_rule(self, repository: str) -> bool:
        self.queries.append(repository)
        return self.active.get(repository, False)


class RecordingSettings:
    def __init__(self, keys: set[str] | None = None) -> None:
        self.keys = keys or set()
        self.queries: list[str] = []

    def has_key(self, key: str) -> bool:
        self.queries.append(key)
        return key in self.keys


def _file(path: str, language: str | None, file_type: str = MAIN) -> FileMeta:
    return FileMeta(path=path, size=1, language=language, role="test" if file_type == TEST else "src", type=file_type)


def _optimizer(
    files: list[FileMeta] | None = None,
    active: dict[str, bool] | None = None,
    keys: set[str] | None = None,
) -> tuple[SensorOptimizer, RecordingFileIndex, RecordingActiveRules, RecordingSettings]:
    fs = RecordingFileIndex(files)
    rules = RecordingActiveRules(active)
    settings = RecordingSettings(keys)
    return SensorOptimizer(fs, rules, settings), fs, rules, settings


def test_unrestricted_descriptor_always_executes() -> None:
    optimizer, fs, rules, settings = _optimizer()

    assert optimizer.should_execute(SensorDescriptor(name="anything")) is True
    assert fs.queries == []
    assert rules.queries == []
    assert settings.queries == []


def test_missing_language_skips_without_querying_rules_or_settings() -> None:
    optimizer, fs, rules, settings = _optimizer(
        files=[_file("src/app.py", "py")],
        active={"java": True},
        keys={"sonar.java.binaries"},
    )
    descriptor = SensorDescriptor(
        name="Java",
        languages={"java"},
        rule_repositories={"java"},
        required_properties={"sonar.java.binaries"},
    )

    assert optimizer.should_execute(descriptor) is False
    assert len(fs.queries) == 1
    assert rules.queries == []
    assert settings.queries == []


def test_language_match_is_independent_of_other_collaborators() -> None:
    optimizer, _, _, _ = _optimizer(files=[_file("src/Main.java", "java")])

    assert optimizer.should_execute(SensorDescriptor(name="Java", languages={"java", "kotlin"})) is True


def test_file_type_restriction_requires_matching_type() -> None:
    optimizer, _, _, _ = _optimizer(files=[_file("src/Main.java", "java", MAIN)])

    assert optimizer.should_execute(SensorDescriptor(name="Tests", file_type=TEST)) is False
    assert optimizer.should_execute(SensorDescriptor(name="Main", file_type=MAIN)) is True


def test_language_and_type_are_combined_on_the_same_file() -> None:
    optimizer, _, _, _ = _optimizer(
        files=[_file("src/Main.java", "java", MAIN), _file("tests/test_app.py", "py", TEST)]
    )

    java_tests = SensorDescriptor(name="Java tests", languages={"java"}, file_type=TEST)
    python_tests = SensorDescriptor(name="Python tests", languages={"py"}, file_type=TEST)

    assert optimizer.should_execute(java_tests) is False
    assert optimizer.should_execute(python_tests) is True


def test_any_active_repository_is_enough() -> None:
    optimizer, _, rules, _ = _optimizer(active={"repoA": False, "repoB": True})
    descriptor = SensorDescriptor(name="Multi", rule_repositories={"repoA", "repoB"})

    assert optimizer.should_execute(descriptor) is True
    assert "repoB" in rules.queries


def test_no_active_repository_skips_without_querying_settings() -> None:
    optimizer, _, rules, settings = _optimizer(
        active={"repoA": False, "repoB": False},
        keys={"sonar.foo.path"},
    )
    descriptor = SensorDescriptor(
        name="Multi",
        rule_repositories={"repoA", "repoB"},
        required_properties={"sonar.foo.path"},
    )

    assert optimizer.should_execute(descriptor) is False
    assert sorted(rules.queries) == ["repoA", "repoB"]
    assert settings.queries == []


def test_missing_required_property_skips() -> None:
    optimizer, _, _, settings = _optimizer()
    descriptor = SensorDescriptor(name="Foo", required_properties={"sonar.foo.path"})

    assert optimizer.should_execute(descriptor) is False
    assert settings.queries == ["sonar.foo.path"]


def test_every_required_property_must_be_set() -> None:
    optimizer, _, _, _ = _optimizer(keys={"a"})

    assert optimizer.should_execute(SensorDescriptor(name="One", required_properties={"a"})) is True
    assert optimizer.should_execute(SensorDescriptor(name="Two", required_properties={"a", "b"})) is False


def test_fully_satisfied_descriptor_executes() -> None:
    optimizer, fs, rules, settings = _optimizer(
        files=[_file("src/Main.java", "java", MAIN)],
        active={"java": True},
        keys={"sonar.java.binaries"},
    )
    descriptor = SensorDescriptor(
        name="Java",
        languages={"java"},
        file_type=MAIN,
        rule_repositories={"java"},
        required_properties={"sonar.java.binaries"},
    )

    assert optimizer.should_execute(descriptor) is True
    assert len(fs.queries) == 1
    assert rules.queries == ["java"]
    assert settings.queries == ["sonar.java.binaries"]


@pytest.mark.parametrize(
    ("descriptor", "expected"),
    [
        (SensorDescriptor(name="files", languages={"go"}), SkipReason.NO_RELATED_FILE),
        (SensorDescriptor(name="rules", rule_repositories={"go"}), SkipReason.NO_ACTIVE_RULE),
        (SensorDescriptor(name="props", required_properties={"x"}), SkipReason.MISSING_PROPERTY),
        (SensorDescriptor(name="ok"), None),
    ],
)
def test_check_reports_failing_condition(descriptor: SensorDescriptor, expected: SkipReason | None) -> None:
    optimizer, _, _, _ = _optimizer(files=[_file("src/app.py", "py")])

    assert optimizer.check(descriptor) is expected


def test_skip_reason_is_logged_at_debug(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    optimizer, _, _, _ = _optimizer()
    # configure_logging disables propagation when the CLI tests run first.
    monkeypatch.setattr(logging.getLogger("sensorgate"), "propagate", True)
    caplog.set_level(logging.DEBUG, logger="sensorgate")

    optimizer.should_execute(SensorDescriptor(name="Foo", required_properties={"sonar.foo.path"}))

    assert "'Foo' skipped because one of the required properties is missing" in caplog.text


def test_works_with_real_collaborators() -> None:
    fs = ManifestFileSystem(RepoManifest(root="/repo", files=[_file("src/Main.java", "java")]))
    optimizer = SensorOptimizer(
        fs,
        ActiveRules.from_keys(["java:S100"]),
        Settings({"sonar.java.binaries": "target/classes"}),
    )
    descriptor = SensorDescriptor(
        name="Java",
        languages={"java"},
        rule_repositories={"java", "kotlin"},
        required_properties={"sonar.java.binaries"},
    )

    assert optimizer.should_execute(descriptor) is True


def test_collaborator_errors_propagate() -> None:
    class BrokenRules:
        def has_active_rule(self, repository: str) -> bool:
            raise RuntimeError("profile unavailable")

    optimizer = SensorOptimizer(RecordingFileIndex(), BrokenRules(), RecordingSettings())

    with pytest.raises(RuntimeError, match="profile unavailable"):
        optimizer.should_execute(SensorDescriptor(name="Foo", rule_repositories={"java"}))
