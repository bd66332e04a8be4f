"""Lesson update operations built from a client update payload.

A payload may wrap its fields in ``$inc`` (field-wise add) and/or ``$set``
(field-wise replace). When neither operator is present the whole payload is a
set operation::

    {"$inc": {"space": -1}}              -> [IncrementOperation({"space": -1})]
    {"topic": "Chess"}                   -> [SetOperation({"topic": "Chess"})]
    {"$inc": {...}, "$set": {...}}       -> [IncrementOperation(...), SetOperation(...)]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from app.core.enums import LessonUpdateOperator
from app.shared.exceptions import LessonUpdateException


@dataclass(frozen=True, slots=True)
class IncrementOperation:
    """Add each value to the current field value."""

    fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SetOperation:
    """Replace each field with the given value."""

    fields: dict[str, Any] = field(default_factory=dict)


LessonUpdateOperation = IncrementOperation | SetOperation


def _operator_fields(payload: Mapping[str, Any], operator: LessonUpdateOperator) -> dict[str, Any] | None:
    value = payload.get(operator.value)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise LessonUpdateException(f"{operator.value} must be an object")
    return dict(value)


def build_update_operations(payload: Mapping[str, Any]) -> list[LessonUpdateOperation]:
    """Translate an update payload into increment/set operations."""
    operations: list[LessonUpdateOperation] = []

    increments = _operator_fields(payload, LessonUpdateOperator.INCREMENT)
    if increments is not None:
        operations.append(IncrementOperation(increments))

    assignments = _operator_fields(payload, LessonUpdateOperator.SET)
    if assignments is not None:
        operations.append(SetOperation(assignments))

    if not operations:
        operators = {operator.value for operator in LessonUpdateOperator}
        operations.append(
            SetOperation({key: value for key, value in payload.items() if key not in operators}),
        )
    return operations
