"""Lessons repository layer."""

from __future__ import annotations

from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import select, type_coerce, update
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.lessons.models import Lesson


class LessonsRepository:
    """DB operations for lessons domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_lesson(
        self,
        topic: str,
        location: str,
        price: Decimal,
        space: int,
        icon: str | None,
    ) -> Lesson:
        lesson = Lesson(topic=topic, location=location, price=price, space=space, icon=icon)
        self.session.add(lesson)
        await self.session.flush()
        return lesson

    async def get_lesson_by_topic_and_location(self, topic: str, location: str) -> Lesson | None:
        stmt = select(Lesson).where(Lesson.topic == topic, Lesson.location == location)
        return await self.session.scalar(stmt)

    async def get_lesson_by_id(self, lesson_id: UUID) -> Lesson | None:
        stmt = select(Lesson).where(Lesson.id == lesson_id)
        return await self.session.scalar(stmt)

    async def list_lessons(self) -> list[Lesson]:
        stmt = select(Lesson).order_by(Lesson.created_at.asc(), Lesson.id.asc())
        return list((await self.session.scalars(stmt)).all())

    async def update_lesson_fields(
        self,
        lesson_id: UUID,
        *,
        increments: dict[str, Any],
        assignments: dict[str, Any],
        attributes: dict[str, Any],
    ) -> int:
        """Apply increments, assignments and attribute merges in one statement.

        Returns the number of matched rows.
        """
        values: dict[str, Any] = {
            name: getattr(Lesson, name) + delta for name, delta in increments.items()
        }
        values.update(assignments)
        if attributes:
            values["attributes"] = Lesson.attributes.op("||")(type_coerce(attributes, JSONB))

        if not values:
            existing = await self.session.scalar(select(Lesson.id).where(Lesson.id == lesson_id))
            return 0 if existing is None else 1

        stmt = (
            update(Lesson)
            .where(Lesson.id == lesson_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return int(result.rowcount or 0)
