"""Base for request structs validated at the HTTP boundary."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from blockhub.domain.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound="RequestSchema")


class RequestSchema(BaseModel):
    """Camel-cased on the wire, snake_cased in Python; unknown keys are ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
    )


class PageParams(RequestSchema):
    page: Optional[int] = Field(default=None, ge=1)
    page_size: Optional[int] = Field(default=None, ge=1)


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "body"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


def parse_request(schema: Type[SchemaT], data: Optional[Mapping[str, Any]]) -> SchemaT:
    """
    Validate a request body or query mapping into ``schema``.

    Raises:
    - ValidationError with every field problem joined into one message
    """
    try:
        return schema.model_validate(dict(data or {}))
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc
