"""Object schema — named fields plus an unknown-key policy.

Unknown-key policies:
- strip (default): keys not in the shape are dropped from the output.
- strict: any unknown key fails the parse with one ``type_mismatch``
  issue at the object's path.
- passthrough: unknown keys are copied to the output verbatim.

Shape combinators (``pick``, ``omit``, ``partial``, ...) validate the
keys they are given at build time and raise ``SchemaDefinitionError``
for keys the shape does not declare.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from shapecheck.domain.errors import SchemaDefinitionError
from shapecheck.domain.issues import MISSING, IssueCode
from shapecheck.schemas.base import Schema
from shapecheck.schemas.context import INVALID, ParseContext
from shapecheck.schemas.primitives import EnumSchema
from shapecheck.schemas.wrappers import DefaultSchema, OptionalSchema

logger = logging.getLogger(__name__)


class UnknownKeys(StrEnum):
    """Policy for input keys absent from an object's shape."""

    STRIP = "strip"
    STRICT = "strict"
    PASSTHROUGH = "passthrough"


def _frozen_shape(shape: Mapping[str, Schema]) -> Mapping[str, Schema]:
    for key, schema in shape.items():
        if not isinstance(key, str):
            msg = f"object_() field names must be strings, got {key!r}"
            raise SchemaDefinitionError(msg)
        if not isinstance(schema, Schema):
            msg = f"object_() field {key!r} must be a schema, got {type(schema).__name__}"
            raise SchemaDefinitionError(msg)
    return MappingProxyType(dict(shape))


@dataclass(frozen=True, eq=False, kw_only=True)
class ObjectSchema(Schema):
    """Mapping with declared fields.

    Attributes:
        shape: Read-only, insertion-ordered mapping of field name to schema.
        unknown_keys: What to do with input keys outside ``shape``.
    """

    shape: Mapping[str, Schema]
    unknown_keys: UnknownKeys = UnknownKeys.STRIP

    def __post_init__(self) -> None:
        if not isinstance(self.shape, Mapping):
            msg = f"object_() expects a mapping of fields, got {type(self.shape).__name__}"
            raise SchemaDefinitionError(msg)
        object.__setattr__(self, "shape", _frozen_shape(self.shape))
        object.__setattr__(self, "unknown_keys", UnknownKeys(self.unknown_keys))

    # --- Parsing ---

    def _accepts(self, value: Any, ctx: ParseContext) -> bool:
        if not isinstance(value, Mapping):
            ctx.add_type_issue("object", value)
            return False
        return True

    def _finish(self, value: Mapping[Any, Any], results: dict[str, Any], ctx: ParseContext) -> Any:
        """Assemble declared-field results and apply the unknown-key policy."""
        valid = True
        output: dict[Any, Any] = {}
        for key, result in results.items():
            if result is INVALID:
                valid = False
            elif result is not MISSING:
                output[key] = result

        extra = [key for key in value if key not in self.shape]
        if extra and self.unknown_keys is UnknownKeys.STRICT:
            listed = ", ".join(repr(key) for key in extra)
            ctx.add_issue(
                IssueCode.TYPE_MISMATCH,
                f"Unrecognized key(s) in object: {listed}",
                keys=extra,
            )
            valid = False
        elif extra and self.unknown_keys is UnknownKeys.PASSTHROUGH:
            for key in extra:
                output[key] = value[key]

        return output if valid else INVALID

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not self._accepts(value, ctx):
            return INVALID
        results = {
            key: schema._parse(value.get(key, MISSING), ctx.child(key))
            for key, schema in self.shape.items()
        }
        return self._finish(value, results, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if not self._accepts(value, ctx):
            return INVALID
        results: dict[str, Any] = {}
        for key, schema in self.shape.items():
            results[key] = await schema._parse_async(value.get(key, MISSING), ctx.child(key))
        return self._finish(value, results, ctx)

    # --- Unknown-key policy ---

    def strict(self) -> ObjectSchema:
        return replace(self, unknown_keys=UnknownKeys.STRICT)

    def passthrough(self) -> ObjectSchema:
        return replace(self, unknown_keys=UnknownKeys.PASSTHROUGH)

    def strip(self) -> ObjectSchema:
        return replace(self, unknown_keys=UnknownKeys.STRIP)

    # --- Shape combinators ---

    def _require_keys(self, method: str, keys: Iterable[str]) -> tuple[str, ...]:
        keys = tuple(keys)
        unknown = [key for key in keys if key not in self.shape]
        if unknown:
            logger.debug("%s() named undeclared field(s): %s", method, unknown)
            msg = f"{method}() received keys not in the shape: {', '.join(map(repr, unknown))}"
            raise SchemaDefinitionError(msg)
        return keys

    def _with_shape(self, shape: Mapping[str, Schema]) -> ObjectSchema:
        return replace(self, shape=shape)

    def pick(self, *keys: str) -> ObjectSchema:
        """Object with only the named fields, in shape order."""
        wanted = set(self._require_keys("pick", keys))
        return self._with_shape({k: s for k, s in self.shape.items() if k in wanted})

    def omit(self, *keys: str) -> ObjectSchema:
        """Object with every field except the named ones."""
        dropped = set(self._require_keys("omit", keys))
        return self._with_shape({k: s for k, s in self.shape.items() if k not in dropped})

    def partial(self, *keys: str) -> ObjectSchema:
        """Make the named fields (default: all fields) optional.

        Each field keeps its own constraints; only absence becomes valid.
        Fields that already accept absence (optional or defaulted) are kept
        as-is, so defaults still apply.
        """
        targets = set(self._require_keys("partial", keys) or self.shape)
        return self._with_shape(
            {
                k: s.optional()
                if k in targets and not isinstance(s, (OptionalSchema, DefaultSchema))
                else s
                for k, s in self.shape.items()
            }
        )

    def required(self, *keys: str) -> ObjectSchema:
        """Inverse of :meth:`partial`: unwrap optional fields."""
        targets = set(self._require_keys("required", keys) or self.shape)
        shape: dict[str, Schema] = {}
        for key, schema in self.shape.items():
            while key in targets and isinstance(schema, OptionalSchema):
                schema = schema.inner
            shape[key] = schema
        return self._with_shape(shape)

    def extend(self, fields: Mapping[str, Schema]) -> ObjectSchema:
        """Object with *fields* added; same-named fields are overridden."""
        return self._with_shape({**self.shape, **fields})

    def merge(self, other: ObjectSchema) -> ObjectSchema:
        """Union of both field sets; *other* wins on collision and its
        unknown-key policy is adopted."""
        if not isinstance(other, ObjectSchema):
            msg = f"merge() expects an object schema, got {type(other).__name__}"
            raise SchemaDefinitionError(msg)
        return ObjectSchema(shape={**self.shape, **other.shape}, unknown_keys=other.unknown_keys)

    def keyof(self) -> EnumSchema:
        """Enum of this object's field names."""
        return EnumSchema(options=tuple(self.shape))
