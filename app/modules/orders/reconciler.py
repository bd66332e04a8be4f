"""Order reconciliation against current lesson availability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol
from uuid import UUID

from app.core.enums import OrderRejectionReason
from app.modules.lessons.models import Lesson
from app.modules.orders.validation import ValidatedOrder
from app.shared.exceptions import AvailabilityException
from app.shared.utils import parse_uuid

FALLBACK_LESSON_LABEL = "lesson"


class LessonLookup(Protocol):
    """Read access to lessons needed while reconciling an order."""

    async def get_lesson_by_id(self, lesson_id: UUID) -> Lesson | None:
        """Return lesson by id or None."""


@dataclass(frozen=True, slots=True)
class ReconciledOrderItem:
    """Order line with the lesson reference resolved and its topic captured."""

    lesson_id: UUID
    lesson_topic: str
    quantity: int


def parse_lesson_ref(value: Any) -> UUID | None:
    """Parse client lesson reference; unusable references resolve to None."""
    return parse_uuid(value)


def _not_enough_space(reason: OrderRejectionReason, topic: str | None) -> AvailabilityException:
    return AvailabilityException(reason, f"Not enough space in {topic or FALLBACK_LESSON_LABEL}.")


class OrderReconciler:
    """Resolve order lines against lessons, stopping at the first failure.

    Space is only checked, never reserved: two concurrent orders may both pass
    against the same seats. Decrementing space is left to the lesson update
    endpoint.
    """

    def __init__(self, lessons: LessonLookup) -> None:
        self.lessons = lessons

    async def reconcile(self, order: ValidatedOrder) -> list[ReconciledOrderItem]:
        reconciled: list[ReconciledOrderItem] = []
        for item in order.items:
            lesson_id = parse_lesson_ref(item.lesson_ref)
            lesson = await self.lessons.get_lesson_by_id(lesson_id) if lesson_id is not None else None
            if lesson is None:
                raise _not_enough_space(OrderRejectionReason.LESSON_NOT_FOUND, None)
            if lesson.space < item.quantity:
                raise _not_enough_space(OrderRejectionReason.INSUFFICIENT_SPACE, lesson.topic)

            reconciled.append(
                ReconciledOrderItem(
                    lesson_id=lesson.id,
                    lesson_topic=lesson.topic,
                    quantity=item.quantity,
                ),
            )
        return reconciled
