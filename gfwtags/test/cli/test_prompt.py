from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from gfwtags.cli.prompt import parse_selection, select_candidate
from gfwtags.core.result import Err, Ok
from gfwtags.output.console import MockConsole
from gfwtags.services.model import Candidate, Release


def _candidates() -> list[Candidate]:
    tags = ["v2.41.0.windows.3", "v2.41.0.windows.2", "v2.41.0.windows.1"]
    return [
        Candidate(
            release=Release(
                tag=tag,
                name=tag,
                published_at=datetime(2023, 7, 13 - i, 23, 6, 2, tzinfo=UTC),
            ),
            normalized_version=tag,
        )
        for i, tag in enumerate(tags)
    ]


def _reader(answer: str) -> Callable[[str], str]:
    prompts: list[str] = []

    def read(prompt: str) -> str:
        prompts.append(prompt)
        return answer

    return read


class TestParseSelection:
    def test_empty_defaults_to_first(self) -> None:
        assert parse_selection("", 3) == Ok(1)
        assert parse_selection("   ", 3) == Ok(1)

    @pytest.mark.parametrize("token", ["q", "Q", " q "])
    def test_quit(self, token: str) -> None:
        assert parse_selection(token, 3) == Ok(None)

    def test_valid_number(self) -> None:
        assert parse_selection(" 2 ", 3) == Ok(2)

    @pytest.mark.parametrize("token", ["abc", "1.5", "quit", "1_0", "\u0663", "--1"])
    def test_non_numeric(self, token: str) -> None:
        result = parse_selection(token, 3)
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_selection"
        assert "not a number" in result.error.message

    @pytest.mark.parametrize("token", ["0", "4", "99", "-1"])
    def test_out_of_range(self, token: str) -> None:
        result = parse_selection(token, 3)
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_selection"
        assert "out of range" in result.error.message


class TestSelectCandidate:
    def test_lists_candidates_numbered_newest_first(self) -> None:
        console = MockConsole()

        select_candidate(_candidates(), console=console, read_input=_reader(""))

        listed = [m for m in console.messages if ")" in m]
        assert listed[0].startswith("  1) v2.41.0.windows.3")
        assert "2023-07-13 23:06:02 UTC" in listed[0]
        assert listed[2].startswith("  3) v2.41.0.windows.1")

    def test_default_selects_first(self) -> None:
        result = select_candidate(_candidates(), console=MockConsole(), read_input=_reader(""))

        assert isinstance(result, Ok)
        assert result.value.action == "select"
        assert result.value.index == 1
        assert result.value.value is not None
        assert result.value.value.tag == "v2.41.0.windows.3"

    def test_numeric_choice(self) -> None:
        result = select_candidate(_candidates(), console=MockConsole(), read_input=_reader("3"))

        assert isinstance(result, Ok)
        assert result.value.value is not None
        assert result.value.value.tag == "v2.41.0.windows.1"

    def test_quit(self) -> None:
        result = select_candidate(_candidates(), console=MockConsole(), read_input=_reader("q"))

        assert isinstance(result, Ok)
        assert result.value.action == "quit"
        assert result.value.value is None

    def test_eof_quits(self) -> None:
        def eof(prompt: str) -> str:
            raise EOFError

        result = select_candidate(_candidates(), console=MockConsole(), read_input=eof)

        assert isinstance(result, Ok)
        assert result.value.action == "quit"

    def test_out_of_range(self) -> None:
        result = select_candidate(_candidates(), console=MockConsole(), read_input=_reader("99"))

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_selection"

    def test_requires_candidates(self) -> None:
        with pytest.raises(ValueError):
            select_candidate([], console=MockConsole(), read_input=_reader(""))
