"""Tests for gfwtags.core.errors module."""

from __future__ import annotations

from gfwtags.core.errors import ErrorCode


class TestErrorCode:
    def test_values_are_stable(self) -> None:
        assert [int(c) for c in ErrorCode] == list(range(9))
        assert ErrorCode.OK == 0
        assert ErrorCode.USAGE_ERROR == 1
        assert ErrorCode.NO_RELEASE == 5
        assert ErrorCode.NO_CANDIDATES == 6

    def test_codes_are_unique(self) -> None:
        assert len({int(c) for c in ErrorCode}) == len(ErrorCode)

    def test_str(self) -> None:
        assert str(ErrorCode.OK) == "ok"
        assert str(ErrorCode.SDK_COMMIT_ERROR) == "sdk commit error"
