"""Tests for octosync.output.console."""

from octosync.output.console import MockConsole, Style


def test_debug_is_hidden_by_default() -> None:
    console = MockConsole()
    console.debug("request https://api.github.com")
    assert console.outputs == []


def test_debug_when_enabled() -> None:
    console = MockConsole(debug_enabled=True)
    console.debug("page 2")
    assert console.messages == ["debug: page 2"]
    assert console.count(Style.DEBUG) == 1


def test_error_is_prefixed() -> None:
    console = MockConsole()
    console.error("nope")
    assert console.has_error()
    assert console.text == "error: nope"


def test_find_and_clear() -> None:
    console = MockConsole()
    console.print("a")
    console.print("  would clone", Style.DIM)
    assert len(console.find("would")) == 1
    console.clear()
    assert console.messages == []
