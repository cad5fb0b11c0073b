"""shapecheck — composable, immutable schema validation.

Build schemas from the factory functions exported here, then validate
with ``schema.parse(value)`` (raising) or ``schema.safe_parse(value)``
(returning a ParseSuccess/ParseFailure)::

    import shapecheck as sc

    User = sc.object_({"username": sc.string(), "age": sc.number().gt(0).optional()})
    User.parse({"username": "Faizan"})
"""

from __future__ import annotations

from shapecheck.builders import (
    any_,
    array,
    boolean,
    date,
    enum_,
    literal,
    map_,
    never,
    null,
    nullable,
    number,
    object_,
    optional,
    promise,
    record,
    set_,
    string,
    tuple_,
    union,
    unknown,
)
from shapecheck.domain.errors import (
    AsyncParseRequired,
    SchemaDefinitionError,
    SchemaValidationError,
    ShapecheckError,
)
from shapecheck.domain.issues import MISSING, Issue, IssueCode
from shapecheck.domain.result import ParseFailure, ParseResult, ParseSuccess
from shapecheck.executor import parse, parse_async, safe_parse, safe_parse_async
from shapecheck.output.formatters import flatten_issues, format_issues
from shapecheck.schemas.base import Schema
from shapecheck.schemas.objects import ObjectSchema, UnknownKeys

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "AsyncParseRequired",
    "Issue",
    "IssueCode",
    "ObjectSchema",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "Schema",
    "SchemaDefinitionError",
    "SchemaValidationError",
    "ShapecheckError",
    "UnknownKeys",
    "__version__",
    "any_",
    "array",
    "boolean",
    "date",
    "enum_",
    "flatten_issues",
    "format_issues",
    "literal",
    "map_",
    "never",
    "null",
    "nullable",
    "number",
    "object_",
    "optional",
    "parse",
    "parse_async",
    "promise",
    "record",
    "safe_parse",
    "safe_parse_async",
    "set_",
    "string",
    "tuple_",
    "union",
    "unknown",
]
