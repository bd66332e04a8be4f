from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.modules.lessons.operations import IncrementOperation, SetOperation, build_update_operations
from app.modules.lessons.service import LessonsService, resolve_update_fields
from app.shared.exceptions import LessonUpdateException, NotFoundException, StoreException


@dataclass
class FakeLesson:
    id: UUID
    topic: str
    location: str
    price: Decimal
    space: int
    icon: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)


class FakeLessonsRepository:
    def __init__(self, lessons: list[FakeLesson], fail_with: Exception | None = None) -> None:
        self._lessons = {lesson.id: lesson for lesson in lessons}
        self.fail_with = fail_with
        self.calls: list[tuple[UUID, dict[str, Any], dict[str, Any], dict[str, Any]]] = []

    async def list_lessons(self) -> list[FakeLesson]:
        if self.fail_with is not None:
            raise self.fail_with
        return list(self._lessons.values())

    async def update_lesson_fields(
        self,
        lesson_id: UUID,
        *,
        increments: dict[str, Any],
        assignments: dict[str, Any],
        attributes: dict[str, Any],
    ) -> int:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append((lesson_id, increments, assignments, attributes))
        lesson = self._lessons.get(lesson_id)
        if lesson is None:
            return 0
        for name, delta in increments.items():
            setattr(lesson, name, getattr(lesson, name) + delta)
        for name, value in assignments.items():
            setattr(lesson, name, value)
        lesson.attributes.update(attributes)
        return 1


def make_lesson(**overrides: Any) -> FakeLesson:
    values: dict[str, Any] = {
        "id": uuid4(),
        "topic": "Math",
        "location": "Hendon",
        "price": Decimal("100"),
        "space": 5,
    }
    values.update(overrides)
    return FakeLesson(**values)


def test_increment_operator_builds_increment_operation() -> None:
    assert build_update_operations({"$inc": {"space": -1}}) == [IncrementOperation({"space": -1})]


def test_set_operator_builds_set_operation() -> None:
    assert build_update_operations({"$set": {"topic": "New"}}) == [SetOperation({"topic": "New"})]


def test_both_operators_are_applied_together() -> None:
    operations = build_update_operations({"$inc": {"space": 2}, "$set": {"topic": "New"}})
    assert operations == [IncrementOperation({"space": 2}), SetOperation({"topic": "New"})]


def test_plain_payload_defaults_to_set() -> None:
    assert build_update_operations({"topic": "New", "space": 3}) == [
        SetOperation({"topic": "New", "space": 3}),
    ]


def test_null_operator_is_treated_as_absent() -> None:
    assert build_update_operations({"$inc": None, "topic": "New"}) == [
        SetOperation({"topic": "New"}),
    ]


def test_non_object_operator_is_rejected() -> None:
    with pytest.raises(LessonUpdateException):
        build_update_operations({"$inc": 1})


def test_unknown_set_field_becomes_attribute() -> None:
    update = resolve_update_fields([SetOperation({"colour": "red", "topic": "Art"})])
    assert update.assignments == {"topic": "Art"}
    assert update.attributes == {"colour": "red"}


def test_immutable_fields_are_never_assigned() -> None:
    update = resolve_update_fields([SetOperation({"id": "x", "created_at": "now", "space": 1})])
    assert update.assignments == {"space": 1}
    assert update.attributes == {}


def test_increment_on_unknown_field_is_rejected() -> None:
    with pytest.raises(LessonUpdateException) as exc:
        resolve_update_fields([IncrementOperation({"colour": 1})])
    assert "colour" in exc.value.message


def test_wrong_value_type_for_column_is_rejected() -> None:
    with pytest.raises(LessonUpdateException) as exc:
        resolve_update_fields([SetOperation({"space": "lots"})])
    assert "space" in exc.value.message


def test_increment_on_text_field_is_rejected() -> None:
    with pytest.raises(LessonUpdateException):
        resolve_update_fields([IncrementOperation({"topic": 1})])


def test_same_field_in_both_operators_is_rejected() -> None:
    with pytest.raises(LessonUpdateException) as exc:
        resolve_update_fields([IncrementOperation({"space": 1}), SetOperation({"space": 3})])
    assert "space" in exc.value.message


def test_null_set_values_are_skipped() -> None:
    update = resolve_update_fields([SetOperation({"topic": None, "space": 2})])
    assert update.increments == {}
    assert update.assignments == {"space": 2}


@pytest.mark.asyncio
async def test_increment_decrements_space_and_leaves_other_fields() -> None:
    lesson = make_lesson(space=5)
    service = LessonsService(FakeLessonsRepository([lesson]))

    await service.update_lesson(lesson.id, {"$inc": {"space": -1}})

    assert lesson.space == 4
    assert lesson.topic == "Math"
    assert lesson.location == "Hendon"
    assert lesson.price == Decimal("100")


@pytest.mark.asyncio
async def test_plain_payload_replaces_topic() -> None:
    lesson = make_lesson()
    service = LessonsService(FakeLessonsRepository([lesson]))

    await service.update_lesson(lesson.id, {"topic": "New"})

    assert lesson.topic == "New"
    assert lesson.space == 5


@pytest.mark.asyncio
async def test_space_may_go_negative() -> None:
    lesson = make_lesson(space=0)
    service = LessonsService(FakeLessonsRepository([lesson]))

    await service.update_lesson(lesson.id, {"$inc": {"space": -1}})

    assert lesson.space == -1


@pytest.mark.asyncio
async def test_set_values_are_coerced_to_column_types() -> None:
    lesson = make_lesson()
    repository = FakeLessonsRepository([lesson])
    service = LessonsService(repository)

    await service.update_lesson(lesson.id, {"$set": {"price": "85.50", "space": 7}})

    assert lesson.price == Decimal("85.50")
    assert lesson.space == 7


@pytest.mark.asyncio
async def test_unknown_keys_are_stored_on_the_lesson() -> None:
    lesson = make_lesson()
    repository = FakeLessonsRepository([lesson])
    service = LessonsService(repository)

    await service.update_lesson(lesson.id, {"teacher": "Smith", "space": 4})

    assert lesson.attributes == {"teacher": "Smith"}
    assert lesson.space == 4
    assert repository.calls[0][3] == {"teacher": "Smith"}


@pytest.mark.asyncio
async def test_lesson_id_given_as_text_is_parsed() -> None:
    lesson = make_lesson()
    service = LessonsService(FakeLessonsRepository([lesson]))

    await service.update_lesson(f" {lesson.id} ", {"$inc": {"space": 1}})

    assert lesson.space == 6


@pytest.mark.asyncio
async def test_malformed_lesson_id_is_not_found() -> None:
    repository = FakeLessonsRepository([make_lesson()])
    service = LessonsService(repository)

    with pytest.raises(NotFoundException) as exc:
        await service.update_lesson("not-a-real-id", {"$inc": {"space": -1}})

    assert exc.value.message == "Lesson not found"
    assert repository.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [[1, 2], "topic", 7, None])
async def test_non_object_update_is_rejected(payload: Any) -> None:
    lesson = make_lesson()
    service = LessonsService(FakeLessonsRepository([lesson]))

    with pytest.raises(LessonUpdateException) as exc:
        await service.update_lesson(lesson.id, payload)

    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_missing_lesson_is_not_found() -> None:
    service = LessonsService(FakeLessonsRepository([]))

    with pytest.raises(NotFoundException) as exc:
        await service.update_lesson(uuid4(), {"$inc": {"space": -1}})

    assert exc.value.status_code == 404
    assert exc.value.message == "Lesson not found"


@pytest.mark.asyncio
async def test_empty_update_still_reports_missing_lesson() -> None:
    service = LessonsService(FakeLessonsRepository([]))

    with pytest.raises(NotFoundException):
        await service.update_lesson(uuid4(), {})


@pytest.mark.asyncio
async def test_store_failure_on_update_is_generic() -> None:
    service = LessonsService(FakeLessonsRepository([], fail_with=SQLAlchemyError("timeout")))

    with pytest.raises(StoreException) as exc:
        await service.update_lesson(uuid4(), {"topic": "New"})

    assert exc.value.message == "Failed to update lesson"


@pytest.mark.asyncio
async def test_list_lessons_returns_every_lesson() -> None:
    lessons = [make_lesson(topic="Math"), make_lesson(topic="Art")]
    service = LessonsService(FakeLessonsRepository(lessons))

    assert [lesson.topic for lesson in await service.list_lessons()] == ["Math", "Art"]


@pytest.mark.asyncio
async def test_list_lessons_store_failure() -> None:
    service = LessonsService(FakeLessonsRepository([], fail_with=SQLAlchemyError("down")))

    with pytest.raises(StoreException) as exc:
        await service.list_lessons()

    assert exc.value.message == "Failed to fetch lessons"
    assert exc.value.status_code == 500
