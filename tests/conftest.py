"""Shared pytest fixtures and test helpers for shapecheck tests."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest

import shapecheck as sc
from shapecheck.config.settings import reset_settings
from shapecheck.domain.result import ParseFailure

HOBBIES = ("coding", "reading", "gaming")


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None]:
    """Drop cached settings around each test so env overrides never leak."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def user_schema() -> sc.ObjectSchema:
    """User profile schema with every field optional."""
    return sc.object_(
        {
            "username": sc.string(),
            "age": sc.number().gt(0).optional(),
            "date": sc.date().optional(),
            "is_programmer": sc.boolean().nullable(),
            "position": sc.string().min(5),
            "salary": sc.number().default(0),
            "dish": sc.literal("pizza"),
            "hobbies": sc.enum_(HOBBIES),
        }
    ).partial()


@pytest.fixture
def blog_schema() -> sc.ObjectSchema:
    """Blog post schema with the default (strip) unknown-key policy."""
    return sc.object_(
        {
            "title": sc.string(),
            "description": sc.string(),
            "date": sc.date(),
        }
    )


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def issues_of(schema: sc.Schema, value: Any) -> list[sc.Issue]:
    """Parse *value*, asserting failure, and return its issues."""
    result = schema.safe_parse(value)
    assert isinstance(result, ParseFailure), result
    return list(result.issues)


def paths_of(schema: sc.Schema, value: Any) -> list[tuple[str | int, ...]]:
    """Paths of every issue raised by parsing *value*."""
    return [issue.path for issue in issues_of(schema, value)]
