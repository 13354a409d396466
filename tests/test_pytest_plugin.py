"""Tests for the pytest integration (`snapshot` fixture, `--snapshot-update`)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from snapcheck.core.config import Config
from snapcheck.core.engine import Snapcheck
from snapcheck.pytest_plugin import PytestReporter, SnapshotFixture


def _fixture(tmp_path: Path, name: str = "test_case", **options: Any) -> SnapshotFixture:
    config = Config.default().with_options(subdirectory=str(tmp_path), should_update=lambda: False)
    return SnapshotFixture(Snapcheck(config.with_options(**options)), PytestReporter(name))


def test_soft_failures_are_collected(tmp_path: Path) -> None:
    fixture = _fixture(tmp_path)
    fixture("first")

    assert fixture.reporter.failed()
    assert "snapshot created" in fixture.reporter.errors[0]

    # Further comparisons in a failed test are skipped.
    fixture("second")
    fixture.multi("extra", "third")
    assert len(fixture.reporter.errors) == 1
    assert not (tmp_path / "test_case-extra").exists()


def test_fatal_failure_stops_the_test(tmp_path: Path) -> None:
    fixture = _fixture(tmp_path, fatal_on_mismatch=True)
    with pytest.raises(pytest.fail.Exception, match="snapshot created"):
        fixture("value")


def test_multi_uses_separate_slots(tmp_path: Path) -> None:
    fixture = _fixture(tmp_path, "test_case[param/1]", fail_on_update=False)
    fixture.multi("a", 1)
    fixture.multi("b", 2)

    assert not fixture.reporter.failed()
    assert (tmp_path / "test_case[param-1]-a").read_text() == "(int) 1\n"
    assert (tmp_path / "test_case[param-1]-b").read_text() == "(int) 2\n"


def test_with_options_shares_failure_record(tmp_path: Path) -> None:
    fixture = _fixture(tmp_path)
    derived = fixture.with_options(file_extension=".txt")
    derived("value")

    assert (tmp_path / "test_case.txt").exists()
    assert fixture.reporter.failed()


_SAMPLE_TEST = """
def test_render(snapshot):
    snapshot({"title": "Report", "rows": [1, 2, 3]})
"""


def test_fixture_end_to_end(pytester: pytest.Pytester, monkeypatch: Any) -> None:
    """First run records (and flags) the snapshot, second run passes."""
    monkeypatch.delenv("UPDATE_SNAPSHOTS", raising=False)
    pytester.makepyfile(test_sample=_SAMPLE_TEST)

    first = pytester.runpytest_subprocess()
    first.assert_outcomes(passed=1, errors=1)
    first.stdout.fnmatch_lines(["*snapshot created for test test_render*"])
    assert (pytester.path / ".snapshots" / "test_render").exists()

    second = pytester.runpytest_subprocess()
    second.assert_outcomes(passed=1)


def test_snapshot_update_flag(pytester: pytest.Pytester, monkeypatch: Any) -> None:
    """`--snapshot-update` rewrites a mismatching snapshot."""
    monkeypatch.delenv("UPDATE_SNAPSHOTS", raising=False)
    monkeypatch.setenv("SNAPCHECK_FAIL_ON_UPDATE", "false")
    pytester.makepyfile(test_sample=_SAMPLE_TEST)
    slot = pytester.path / ".snapshots" / "test_render"
    slot.parent.mkdir()
    slot.write_text("stale\n")

    rejected = pytester.runpytest_subprocess()
    rejected.assert_outcomes(passed=1, errors=1)
    assert slot.read_text() == "stale\n"

    updated = pytester.runpytest_subprocess("--snapshot-update")
    updated.assert_outcomes(passed=1)
    assert "'title'" in slot.read_text()
