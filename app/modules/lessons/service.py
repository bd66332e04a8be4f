"""Lessons business logic layer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from fastapi import Depends
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.core.enums import LessonUpdateOperator
from app.modules.lessons.models import Lesson
from app.modules.lessons.operations import (
    IncrementOperation,
    LessonUpdateOperation,
    build_update_operations,
)
from app.modules.lessons.repository import LessonsRepository
from app.modules.lessons.schemas import IMMUTABLE_LESSON_FIELDS, LessonIncrementFields, LessonSetFields
from app.shared.exceptions import LessonUpdateException, NotFoundException, StoreException
from app.shared.utils import parse_uuid

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolvedLessonUpdate:
    """Typed column increments and assignments plus free-form attributes."""

    increments: dict[str, Any] = field(default_factory=dict)
    assignments: dict[str, Any] = field(default_factory=dict)
    attributes: dict[str, Any] = field(default_factory=dict)


def _parse_fields(
    schema: type[BaseModel],
    operator: LessonUpdateOperator,
    fields: dict[str, Any],
) -> BaseModel:
    try:
        return schema.model_validate(fields)
    except ValidationError as exc:
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or operator.value
        raise LessonUpdateException(
            f"Invalid {operator.value} field '{location}': {error['msg']}",
        ) from exc


def _column_values(parsed: BaseModel) -> dict[str, Any]:
    extra = set(parsed.model_extra or {})
    values = parsed.model_dump(exclude_unset=True, exclude=extra)
    # Explicit nulls are skipped, as with any other partial update.
    return {key: value for key, value in values.items() if value is not None}


def resolve_update_fields(operations: list[LessonUpdateOperation]) -> ResolvedLessonUpdate:
    """Split operations into typed column changes and free-form attributes."""
    resolved = ResolvedLessonUpdate()
    for operation in operations:
        if isinstance(operation, IncrementOperation):
            parsed = _parse_fields(LessonIncrementFields, LessonUpdateOperator.INCREMENT, operation.fields)
            resolved.increments.update(_column_values(parsed))
            continue

        parsed = _parse_fields(LessonSetFields, LessonUpdateOperator.SET, operation.fields)
        resolved.assignments.update(_column_values(parsed))
        resolved.attributes.update(
            {key: value for key, value in (parsed.model_extra or {}).items() if key not in IMMUTABLE_LESSON_FIELDS},
        )

    conflicting = sorted(resolved.increments.keys() & resolved.assignments.keys())
    if conflicting:
        raise LessonUpdateException(f"Conflicting update for field '{conflicting[0]}'")
    return resolved


class LessonsService:
    """Lessons domain service."""

    def __init__(self, repository: LessonsRepository) -> None:
        self.repository = repository

    async def list_lessons(self) -> list[Lesson]:
        """Return the whole lesson catalogue."""
        try:
            return await self.repository.list_lessons()
        except SQLAlchemyError as exc:
            logger.exception("Error fetching lessons")
            raise StoreException("Failed to fetch lessons") from exc

    async def update_lesson(self, lesson_ref: str | UUID, payload: Any) -> None:
        """Apply a flexible increment/set update to one lesson.

        Unknown keys are stored as free-form attributes. No bounds are
        enforced on the result, so a decrement may take ``space`` below zero.
        """
        lesson_id = parse_uuid(lesson_ref)
        if lesson_id is None:
            raise NotFoundException("Lesson not found")
        if not isinstance(payload, Mapping):
            raise LessonUpdateException("Lesson update must be an object")

        update = resolve_update_fields(build_update_operations(payload))
        try:
            matched = await self.repository.update_lesson_fields(
                lesson_id,
                increments=update.increments,
                assignments=update.assignments,
                attributes=update.attributes,
            )
        except SQLAlchemyError as exc:
            logger.exception("Error updating lesson %s", lesson_id)
            raise StoreException("Failed to update lesson") from exc

        if matched == 0:
            raise NotFoundException("Lesson not found")
        logger.info("Lesson %s updated: %s", lesson_id, update)


async def get_lessons_service(session: AsyncSession = Depends(get_db_session)) -> LessonsService:
    """Dependency provider for lessons service."""
    return LessonsService(LessonsRepository(session))
