"""Tests for gfwtags.output.console module."""

from __future__ import annotations

import pytest

from gfwtags.output.console import (
    ConsoleProtocol,
    MockConsole,
    OutputRecord,
    RichConsole,
    Style,
)


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.REPORT) == "report"


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs == [OutputRecord("hello", Style.DEFAULT)]

    def test_prefixed_helpers(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("bad")
        console.warning("careful")
        console.info("fyi")
        assert console.messages == ["OK done", "error: bad", "warning: careful", "info: fyi"]
        assert console.has_error()
        assert console.has_warning()

    def test_report_only_holds_lines(self) -> None:
        console = MockConsole()
        console.header("Matching releases")
        console.line("mingw-w64-x86_64-git 1.0 abc")
        console.debug("probing")
        console.line("")
        assert console.report == ["mingw-w64-x86_64-git 1.0 abc", ""]
        assert console.count(Style.DIM) == 1

    def test_find_and_clear(self) -> None:
        console = MockConsole()
        console.print("alpha")
        console.print("beta")
        assert [o.message for o in console.find("al")] == ["alpha"]
        assert console.text == "alpha\nbeta"
        console.clear()
        assert console.outputs == []

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.header("Releases")


class TestRichConsole:
    def test_line_goes_to_stdout_verbatim(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()

        console.line("mingw-w64-x86_64-git [1.0] abc")

        captured = capsys.readouterr()
        assert captured.out == "mingw-w64-x86_64-git [1.0] abc\n"
        assert captured.err == ""

    def test_diagnostics_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()

        console.warning("slow")
        console.error("broken")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "warning: slow" in captured.err
        assert "error: broken" in captured.err

    def test_debug_requires_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().debug("quiet")
        RichConsole(verbose=True).debug("loud")

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "loud" in err

    def test_report_style_routes_to_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().print("x y z", Style.REPORT)

        assert capsys.readouterr().out == "x y z\n"

    def test_upstream_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()

        console.warning("v2.41.0.windows.3: 'mingw-w64 [/bold] 1.0' does not match")
        console.print("hint: [/x]", Style.DIM)

        err = capsys.readouterr().err
        assert "'mingw-w64 [/bold] 1.0' does not match" in err
        assert "hint: [/x]" in err
