"""Tests for the exception hierarchy and the safe-parse result models."""

import pytest

from shapecheck.domain.errors import (
    AsyncParseRequired,
    SchemaDefinitionError,
    SchemaValidationError,
    ShapecheckError,
)
from shapecheck.domain.issues import Issue, IssueCode
from shapecheck.domain.result import ParseFailure, ParseSuccess


def _issues() -> list[Issue]:
    return [
        Issue(path=("title",), code=IssueCode.TYPE_MISMATCH, message="Required"),
        Issue(path=(), code=IssueCode.CUSTOM, message="Bad post"),
    ]


class TestHierarchy:
    def test_all_derive_from_base(self) -> None:
        assert issubclass(SchemaDefinitionError, ShapecheckError)
        assert issubclass(SchemaValidationError, ShapecheckError)
        assert issubclass(AsyncParseRequired, ShapecheckError)

    def test_builtin_bases(self) -> None:
        assert issubclass(SchemaDefinitionError, ValueError)
        assert issubclass(SchemaValidationError, ValueError)
        assert issubclass(AsyncParseRequired, RuntimeError)


class TestSchemaValidationError:
    def test_carries_issues(self) -> None:
        err = SchemaValidationError(_issues())
        assert len(err.issues) == 2
        assert isinstance(err.issues, tuple)

    def test_str_is_formatted_summary(self) -> None:
        err = SchemaValidationError(_issues())
        assert str(err) == "title: Required; (root): Bad post"

    def test_repr(self) -> None:
        assert repr(SchemaValidationError(_issues())) == "SchemaValidationError(2 issue(s))"

    def test_flatten(self) -> None:
        flat = SchemaValidationError(_issues()).flatten()
        assert flat == {"form_errors": ["Bad post"], "field_errors": {"title": ["Required"]}}

    def test_raisable(self) -> None:
        with pytest.raises(SchemaValidationError, match="title: Required"):
            raise SchemaValidationError(_issues())


class TestParseResult:
    def test_success_discriminator(self) -> None:
        result = ParseSuccess(data={"a": 1})
        assert result.success is True
        assert result.data == {"a": 1}

    def test_failure_error(self) -> None:
        result = ParseFailure(issues=tuple(_issues()))
        assert result.success is False
        assert isinstance(result.error, SchemaValidationError)
        assert result.error.issues == result.issues

    def test_success_keeps_data_identity(self) -> None:
        payload = {"tags": {"a", "b"}}
        assert ParseSuccess(data=payload).data is payload
