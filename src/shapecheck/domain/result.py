"""ParseSuccess and ParseFailure — the safe-parse contract.

INVARIANT: ``safe_parse`` always returns one of these two models and
never raises for invalid input. ``parse`` raises exactly when
``safe_parse`` would have returned a ParseFailure.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

from shapecheck.domain.errors import SchemaValidationError
from shapecheck.domain.issues import Issue


class ParseSuccess(BaseModel):
    """Successful parse carrying the validated output.

    Attributes:
        success: Always True; the discriminator.
        data: Parsed value. Unknown object keys are already stripped or
            retained per the schema's strictness, and defaults applied.
    """

    model_config = {"frozen": True}

    success: Literal[True] = True
    data: Any = None


class ParseFailure(BaseModel):
    """Failed parse carrying every issue found.

    Attributes:
        success: Always False; the discriminator.
        issues: Issues in discovery order. Never empty.
    """

    model_config = {"frozen": True}

    success: Literal[False] = False
    issues: tuple[Issue, ...]

    @property
    def error(self) -> SchemaValidationError:
        """The exception ``parse`` would have raised for this input."""
        return SchemaValidationError(self.issues)


ParseResult = ParseSuccess | ParseFailure
