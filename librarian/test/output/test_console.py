"""Tests for librarian.output.console module."""

from __future__ import annotations

import pytest

from librarian.output.console import MockConsole, RichConsole, Style, format_fields


class TestFormatFields:
    def test_no_fields(self) -> None:
        assert format_fields("No modifications to commit.", {}) == "No modifications to commit."

    def test_fields_in_order(self) -> None:
        assert format_fields("Generator image", {"image": "img:1", "lang": "go"}) == (
            "Generator image image=img:1 lang=go"
        )


class TestMockConsole:
    def test_captures_styles(self) -> None:
        console = MockConsole()
        console.info("Temporary working directory", dir="/tmp/x")
        console.error("boom")
        console.print("plain", Style.DIM)

        assert console.messages == [
            "info: Temporary working directory dir=/tmp/x",
            "error: boom",
            "plain",
        ]
        assert [o.style for o in console.outputs] == [Style.INFO, Style.ERROR, Style.DIM]


class TestRichConsole:
    def test_info_and_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.info("Language repo", dir="/r")
        console.error("language repo must be clean")

        err = capsys.readouterr().err
        assert "info: Language repo dir=/r" in err
        assert "error: language repo must be clean" in err

    def test_quiet_suppresses_info_only(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole(quiet=True)
        console.info("hidden")
        console.error("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "error: shown" in err

    def test_markup_is_not_interpreted(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.info("value", text="[bold]x[/bold]")
        assert "[bold]x[/bold]" in capsys.readouterr().err
