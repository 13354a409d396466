"""pytest integration: the ``snapshot`` fixture and ``--snapshot-update``.

Registered through the ``pytest11`` entry point, so installing the package is
enough::

    def test_render(snapshot):
        snapshot(render_page())

Failure routing
---------------
- ``fatal_on_mismatch`` on: the test stops immediately via ``pytest.fail``.
- otherwise: failures are collected while the test keeps running and are
  reported together when the fixture is torn down. Later ``snapshot`` calls in
  a test that already recorded a failure are skipped.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from snapcheck.api import get_default
from snapcheck.core.engine import Snapcheck


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("snapcheck")
    group.addoption(
        "--snapshot-update",
        action="store_true",
        default=False,
        help="Rewrite snapshots that do not match the current values.",
    )


class PytestReporter:
    """Adapts a pytest test item to :class:`snapcheck.core.engine.Reporter`."""

    def __init__(self, node_name: str) -> None:
        self._name = node_name
        self.errors: list[str] = []

    def name(self) -> str:
        return self._name

    def failed(self) -> bool:
        return bool(self.errors)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def fatal(self, message: str) -> None:
        pytest.fail(message, pytrace=False)


class SnapshotFixture:
    """Callable handed to tests by the ``snapshot`` fixture."""

    def __init__(self, engine: Snapcheck, reporter: PytestReporter) -> None:
        self.engine = engine
        self.reporter = reporter

    def __call__(self, *values: Any) -> None:
        """Compare ``values`` against the slot named after the current test."""
        self.engine.snapshot_t(self.reporter, *values)

    def multi(self, snapshot_id: str, *values: Any) -> None:
        """Compare against ``<test name>-<snapshot_id>``; callable many times per test."""
        if self.reporter.failed():
            return
        name = f"{self.reporter.name()}-{snapshot_id}".replace("/", "-")
        result = self.engine.compare(name, *values)
        if result.is_err():
            message = str(result.unwrap_err())
            if self.engine.config.fatal_on_mismatch:
                self.reporter.fatal(message)
            else:
                self.reporter.error(message)

    def with_options(self, **overrides: Any) -> SnapshotFixture:
        """Return a fixture using a derived engine and the same failure record."""
        return SnapshotFixture(self.engine.with_options(**overrides), self.reporter)


@pytest.fixture
def snapshot(request: pytest.FixtureRequest) -> Iterator[SnapshotFixture]:
    """Snapshot assertions bound to the requesting test."""
    engine = get_default()
    if request.config.getoption("--snapshot-update", default=False):
        engine = engine.with_options(should_update=lambda: True)
    fixture = SnapshotFixture(engine, PytestReporter(request.node.name))
    yield fixture
    if fixture.reporter.errors:
        pytest.fail("\n\n".join(fixture.reporter.errors), pytrace=False)


__all__ = ["PytestReporter", "SnapshotFixture", "snapshot"]
