"""Tests for routing outcomes to a test-failure reporter via `snapshot_t`."""

from __future__ import annotations

from pathlib import Path

import snapcheck
from snapcheck.core.config import Config
from snapcheck.core.engine import Snapcheck


class FakeReporter:
    """Records calls the way a test framework's test object would receive them."""

    def __init__(self, name: str, already_failed: bool = False) -> None:
        self._name = name
        self._failed = already_failed
        self.errors: list[str] = []
        self.fatals: list[str] = []

    def name(self) -> str:
        return self._name

    def failed(self) -> bool:
        return self._failed

    def error(self, message: str) -> None:
        self._failed = True
        self.errors.append(message)

    def fatal(self, message: str) -> None:
        self._failed = True
        self.fatals.append(message)


def _engine(tmp_path: Path, **options: object) -> Snapcheck:
    config = Config.default().with_options(subdirectory=str(tmp_path), should_update=lambda: False)
    return Snapcheck(config.with_options(**options))


def test_skipped_when_test_already_failed(tmp_path: Path) -> None:
    reporter = FakeReporter("TestThing", already_failed=True)
    _engine(tmp_path).snapshot_t(reporter, "value")

    assert not (tmp_path / "TestThing").exists()
    assert reporter.errors == [] and reporter.fatals == []


def test_created_snapshot_is_soft_error(tmp_path: Path) -> None:
    reporter = FakeReporter("TestThing/sub case")
    _engine(tmp_path).snapshot_t(reporter, "value")

    assert (tmp_path / "TestThing-sub case").read_text() == "value\n"
    assert len(reporter.errors) == 1 and "snapshot created" in reporter.errors[0]
    assert reporter.fatals == []


def test_mismatch_is_fatal_when_configured(tmp_path: Path) -> None:
    (tmp_path / "TestThing").write_text("old\n")
    reporter = FakeReporter("TestThing")
    _engine(tmp_path, fatal_on_mismatch=True).snapshot_t(reporter, "new")

    assert reporter.errors == []
    assert len(reporter.fatals) == 1
    assert "-old" in reporter.fatals[0] and "+new" in reporter.fatals[0]


def test_match_and_silent_update_report_nothing(tmp_path: Path) -> None:
    (tmp_path / "TestThing").write_text("same\n")
    reporter = FakeReporter("TestThing")
    engine = _engine(tmp_path, fail_on_update=False, should_update=lambda: True)

    engine.snapshot_t(reporter, "same")
    engine.snapshot_t(reporter, "changed")

    assert reporter.errors == [] and reporter.fatals == []
    assert (tmp_path / "TestThing").read_text() == "changed\n"


def test_package_level_snapshot_t_uses_default(tmp_path: Path) -> None:
    snapcheck.set_default(_engine(tmp_path))
    reporter = FakeReporter("TestDefault")

    snapcheck.snapshot_t(reporter, 42)

    assert (tmp_path / "TestDefault").read_text() == "(int) 42\n"
