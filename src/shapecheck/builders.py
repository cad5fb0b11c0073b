"""Factory functions for building schemas.

Intended usage is ``import shapecheck as sc`` followed by
``sc.object_({"name": sc.string()})``. Names that would shadow a
builtin carry a trailing underscore.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from shapecheck.schemas.base import Schema
from shapecheck.schemas.collections import (
    ArraySchema,
    MapSchema,
    RecordSchema,
    SetSchema,
    TupleSchema,
)
from shapecheck.schemas.objects import ObjectSchema
from shapecheck.schemas.primitives import (
    AnySchema,
    BooleanSchema,
    DateSchema,
    EnumSchema,
    LiteralSchema,
    NeverSchema,
    NullSchema,
    NumberSchema,
    StringSchema,
    UnknownSchema,
)
from shapecheck.schemas.unions import UnionSchema
from shapecheck.schemas.wrappers import NullableSchema, OptionalSchema, PromiseSchema

# --- Primitives ---


def string() -> StringSchema:
    return StringSchema()


def number() -> NumberSchema:
    return NumberSchema()


def boolean() -> BooleanSchema:
    return BooleanSchema()


def date() -> DateSchema:
    return DateSchema()


def literal(value: Any) -> LiteralSchema:
    return LiteralSchema(value=value)


def enum_(values: Sequence[Any]) -> EnumSchema:
    """Enum of *values*, e.g. ``enum_(["coding", "reading"])``."""
    return EnumSchema(options=tuple(values))


def any_() -> AnySchema:
    return AnySchema()


def unknown() -> UnknownSchema:
    return UnknownSchema()


def never() -> NeverSchema:
    return NeverSchema()


def null() -> NullSchema:
    return NullSchema()


# --- Composites ---


def object_(shape: Mapping[str, Schema]) -> ObjectSchema:
    return ObjectSchema(shape=shape)


def array(element: Schema) -> ArraySchema:
    return ArraySchema(element=element)


def tuple_(items: Sequence[Schema], rest: Schema | None = None) -> TupleSchema:
    return TupleSchema(items=tuple(items), rest=rest)


def union(options: Sequence[Schema]) -> UnionSchema:
    return UnionSchema(options=tuple(options))


def record(value_schema: Schema, key_schema: Schema | None = None) -> RecordSchema:
    """Mapping of *key_schema* (default: string) to *value_schema*."""
    if key_schema is None:
        return RecordSchema(value_schema=value_schema)
    return RecordSchema(value_schema=value_schema, key_schema=key_schema)


def map_(key_schema: Schema, value_schema: Schema) -> MapSchema:
    return MapSchema(key_schema=key_schema, value_schema=value_schema)


def set_(element: Schema) -> SetSchema:
    return SetSchema(element=element)


def promise(inner: Schema) -> PromiseSchema:
    return PromiseSchema(inner=inner)


# --- Wrappers ---


def optional(inner: Schema) -> OptionalSchema:
    return OptionalSchema(inner=inner)


def nullable(inner: Schema) -> NullableSchema:
    return NullableSchema(inner=inner)
