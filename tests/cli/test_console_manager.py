from __future__ import annotations

import pytest
from rich.console import Console

from learnshelf.cli.console import ConsoleManager, rich_enabled


def test_console_manager_yields_console_and_spins():  # noqa: D103
    with ConsoleManager(record=True) as console:  # type: Console
        assert isinstance(console, Console)
        console.print("Scanning")
        with console.status("Scanning library..."):
            console.print("Course-A")
        console.print("Done")

        output = console.export_text()

    for expected in ("Scanning", "Course-A", "Done"):
        assert expected in output


def test_rich_enabled_follows_environment(monkeypatch: pytest.MonkeyPatch):  # noqa: D103
    assert rich_enabled()
    monkeypatch.setenv("LEARNSHELF_NO_RICH", "true")
    assert not rich_enabled()


def test_disabled_console_has_no_colour(monkeypatch: pytest.MonkeyPatch):  # noqa: D103
    monkeypatch.setenv("LEARNSHELF_NO_RICH", "1")

    with ConsoleManager(record=True) as console:
        assert console.color_system is None
        console.print("[red]plain[/red]")
        output = console.export_text()

    assert output.strip() == "plain"


def test_force_use_overrides_environment(monkeypatch: pytest.MonkeyPatch):  # noqa: D103
    monkeypatch.setenv("LEARNSHELF_NO_RICH", "1")

    with ConsoleManager(force_use=True, color_system="standard") as console:
        assert console.color_system == "standard"


def test_exceptions_propagate():  # noqa: D103
    with pytest.raises(ZeroDivisionError):
        with ConsoleManager():
            1 / 0
