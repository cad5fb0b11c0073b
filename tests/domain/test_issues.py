"""Tests for Issue, IssueCode, MISSING, and runtime type naming."""

import asyncio
import copy
from datetime import date, datetime

import pytest

from shapecheck.domain.issues import MISSING, Issue, IssueCode, get_type_name


class TestMissing:
    def test_is_falsy_singleton(self) -> None:
        assert not MISSING
        assert copy.deepcopy(MISSING) is MISSING
        assert copy.copy(MISSING) is MISSING

    def test_repr(self) -> None:
        assert repr(MISSING) == "MISSING"


class TestIssueCode:
    def test_members(self) -> None:
        assert {c.value for c in IssueCode} == {
            "type_mismatch",
            "too_small",
            "too_big",
            "invalid_literal",
            "invalid_enum_value",
            "custom",
        }


class TestIssue:
    def test_defaults(self) -> None:
        issue = Issue(code=IssueCode.CUSTOM, message="nope")
        assert issue.path == ()
        assert issue.params == {}

    def test_frozen(self) -> None:
        issue = Issue(code=IssueCode.CUSTOM, message="nope")
        with pytest.raises(ValueError):
            issue.message = "changed"  # type: ignore[misc]

    def test_serializes(self) -> None:
        issue = Issue(path=("a", 1), code=IssueCode.TOO_SMALL, message="m", params={"minimum": 2})
        assert issue.model_dump(mode="json") == {
            "path": ["a", 1],
            "code": "too_small",
            "message": "m",
            "params": {"minimum": 2},
        }


class TestGetTypeName:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (MISSING, "undefined"),
            (None, "null"),
            (True, "boolean"),
            (3, "number"),
            (2.5, "number"),
            (float("nan"), "nan"),
            ("x", "string"),
            (date(2024, 1, 1), "date"),
            (datetime(2024, 1, 1, 12), "date"),
            ({"a": 1}, "object"),
            ([1], "array"),
            ((1,), "array"),
            ({1}, "set"),
            (len, "function"),
            (b"raw", "bytes"),
        ],
    )
    def test_names(self, value: object, expected: str) -> None:
        assert get_type_name(value) == expected

    def test_awaitable_is_promise(self) -> None:
        loop = asyncio.new_event_loop()
        try:
            future = loop.create_future()
            assert get_type_name(future) == "promise"
        finally:
            loop.close()
