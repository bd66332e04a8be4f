"""Lessons schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, SerializerFunctionWrapHandler, model_serializer

JsonNumber = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

IMMUTABLE_LESSON_FIELDS = frozenset({"id", "created_at", "updated_at"})


class LessonRead(BaseModel):
    """Lesson response schema.

    Free-form ``attributes`` are flattened next to the column fields, so a
    lesson reads back the way it was updated. Column fields win on clashes.
    Flattened keys survive response revalidation as extras.
    """

    model_config = ConfigDict(from_attributes=True, extra="allow")

    id: UUID
    topic: str
    location: str
    price: JsonNumber
    space: int
    icon: str | None
    created_at: datetime
    updated_at: datetime
    attributes: dict[str, Any] = Field(default_factory=dict, exclude=True)

    @model_serializer(mode="wrap")
    def _flatten_attributes(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {**self.attributes, **data}


class LessonSetFields(BaseModel):
    """Set-operation payload: typed columns, anything else kept as attributes.

    Bounds are intentionally absent: ``space`` may be set below zero.
    """

    model_config = ConfigDict(extra="allow")

    topic: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    price: Decimal | None = None
    space: int | None = None
    icon: str | None = Field(default=None, max_length=255)


class LessonIncrementFields(BaseModel):
    """Numeric columns an increment operation may add to."""

    model_config = ConfigDict(extra="forbid")

    price: Decimal | None = None
    space: int | None = None


class LessonUpdated(BaseModel):
    """Lesson update acknowledgement."""

    message: str = "Lesson updated"
