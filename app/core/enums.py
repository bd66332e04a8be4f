"""Core enums used across modules."""

from enum import StrEnum


class OrderRejectionReason(StrEnum):
    """Machine codes for rejected orders."""

    MISSING_FIELDS = "missing_fields"
    INVALID_NAME = "invalid_name"
    INVALID_PHONE = "invalid_phone"
    MISSING_ADDRESS = "missing_address"
    INVALID_ZIP = "invalid_zip"
    INVALID_QUANTITY = "invalid_quantity"
    LESSON_NOT_FOUND = "lesson_not_found"
    INSUFFICIENT_SPACE = "insufficient_space"


class LessonUpdateOperator(StrEnum):
    """Update operators accepted by the lesson update endpoint."""

    INCREMENT = "$inc"
    SET = "$set"
