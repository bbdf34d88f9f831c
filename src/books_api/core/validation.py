"""Declarative schema validation for book payloads.

A ``SchemaSpec`` is a named set of required fields and their primitive types.
Each spec is compiled once into a strict pydantic model, and ``validate``
reports every violation found in a payload rather than stopping at the first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic import ValidationError as PydanticValidationError

from src.books_api.core.errors import ValidationError

# Range of a signed 64-bit SQL INTEGER column
SQL_INTEGER_MIN = -(2**63)
SQL_INTEGER_MAX = 2**63 - 1

SqlInteger = Annotated[int, Field(ge=SQL_INTEGER_MIN, le=SQL_INTEGER_MAX)]


@dataclass(frozen=True)
class FieldSpec:
    """A required field and the type its value must have.

    ``type`` may be an ``Annotated`` type carrying pydantic constraints.
    """

    name: str
    type: Any


@dataclass(frozen=True)
class SchemaSpec:
    """An immutable set of required fields."""

    name: str
    fields: tuple[FieldSpec, ...]

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def without(self, *names: str, name: str | None = None) -> SchemaSpec:
        """Return a copy of this spec with the given fields removed."""
        return SchemaSpec(
            name=name or self.name,
            fields=tuple(f for f in self.fields if f.name not in names),
        )

    @cached_property
    def model(self) -> type[BaseModel]:
        """Strict pydantic model equivalent to this spec; unknown keys are ignored."""
        return create_model(
            self.name,
            __config__=ConfigDict(strict=True, extra="ignore"),
            **{f.name: (f.type, ...) for f in self.fields},
        )


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


def _format_error(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "body"
    return f"{location}: {error['msg']}"


def validate(payload: Any, schema: SchemaSpec) -> ValidationResult:
    """Check ``payload`` against ``schema``.

    Returns the validity together with one message per violation.
    """
    if not isinstance(payload, dict):
        return ValidationResult(valid=False, errors=["body: must be a JSON object"])

    try:
        schema.model.model_validate(payload)
    except PydanticValidationError as exc:
        return ValidationResult(
            valid=False, errors=[_format_error(err) for err in exc.errors()]
        )
    return ValidationResult(valid=True)


def ensure_valid(payload: Any, schema: SchemaSpec) -> dict[str, Any]:
    """Validate ``payload`` and return only the fields named by ``schema``.

    Raises:
        ValidationError: carrying every violation message.
    """
    result = validate(payload, schema)
    if not result.valid:
        raise ValidationError(result.errors)
    return {name: payload[name] for name in schema.field_names}


NEW_BOOK_SCHEMA = SchemaSpec(
    name="NewBook",
    fields=(
        FieldSpec("isbn", str),
        FieldSpec("amazon_url", str),
        FieldSpec("author", str),
        FieldSpec("language", str),
        FieldSpec("pages", SqlInteger),
        FieldSpec("publisher", str),
        FieldSpec("title", str),
        FieldSpec("year", SqlInteger),
    ),
)

UPDATE_BOOK_SCHEMA = NEW_BOOK_SCHEMA.without("isbn", name="UpdateBook")
