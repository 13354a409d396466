"""Tests for slot-name normalization and caller-derived names."""

from __future__ import annotations

from snapcheck.core.naming import name_of_caller, normalize_slot


def test_normalize_slot_replaces_separators() -> None:
    assert normalize_slot("TestParent/child") == "TestParent-child"
    assert normalize_slot("a\\b/c") == "a-b-c"
    assert normalize_slot("plain_name") == "plain_name"


def _resolve_from_helper() -> str:
    return name_of_caller()


def test_name_of_caller_uses_module_and_function() -> None:
    """The default depth names the function that called the helper."""
    assert _resolve_from_helper() == "test_naming-test_name_of_caller_uses_module_and_function"


def test_name_of_caller_nested_function() -> None:
    def inner() -> str:
        return name_of_caller(depth=1)

    assert inner() == "test_naming-test_name_of_caller_nested_function-inner"


class _Widget:
    def render(self) -> str:
        return name_of_caller(depth=1)


def test_name_of_caller_method() -> None:
    assert _Widget().render() == "test_naming-_Widget-render"
