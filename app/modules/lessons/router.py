"""Lessons API router."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from app.modules.lessons.schemas import LessonRead, LessonUpdated
from app.modules.lessons.service import LessonsService, get_lessons_service

router = APIRouter(prefix="/lessons", tags=["lessons"])


@router.get("", response_model=list[LessonRead])
async def list_lessons(
    service: LessonsService = Depends(get_lessons_service),
) -> list[LessonRead]:
    """List every lesson in the catalogue."""
    lessons = await service.list_lessons()
    return [LessonRead.model_validate(lesson) for lesson in lessons]


@router.put("/{lesson_id}", response_model=LessonUpdated)
async def update_lesson(
    lesson_id: str,
    payload: Any = Body(default=None),
    service: LessonsService = Depends(get_lessons_service),
) -> LessonUpdated:
    """Update lesson attributes with ``$inc``/``$set`` or a plain object.

    Ids that are not UUIDs cannot match any lesson and answer 404.
    """
    await service.update_lesson(lesson_id, payload)
    return LessonUpdated()
