"""Pure validation rules for incoming order payloads.

Rules run in a fixed order and the first failure wins; errors are never
aggregated. Nothing here performs I/O.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from app.core.enums import OrderRejectionReason
from app.modules.orders.schemas import OrderCreate, OrderLineCreate
from app.shared.exceptions import OrderValidationException

HOME_DELIVERY_METHOD = "Home Delivery"

NAME_PATTERN = re.compile(r"[A-Za-z]+")
PHONE_PATTERN = re.compile(r"[0-9]{7,15}")
ZIP_PATTERN = re.compile(r"[0-9]{5}")

REQUIRED_FIELDS = ("first_name", "last_name", "phone", "method")


@dataclass(frozen=True, slots=True)
class OrderItemRequest:
    """Order line as sent by the client, before the lesson is resolved."""

    lesson_ref: Any
    quantity: int


@dataclass(frozen=True, slots=True)
class ValidatedOrder:
    first_name: str
    last_name: str
    phone: str
    method: str
    address: str | None
    zip_code: str | None
    items: tuple[OrderItemRequest, ...]


def _reject(reason: OrderRejectionReason, message: str) -> OrderValidationException:
    return OrderValidationException(reason, message)


def _is_valid_name(value: Any) -> bool:
    return isinstance(value, str) and NAME_PATTERN.fullmatch(value.strip()) is not None


def _phone_text(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    return None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _as_order_create(payload: Any) -> OrderCreate:
    if isinstance(payload, OrderCreate):
        return payload
    return OrderCreate.model_validate(dict(payload) if isinstance(payload, Mapping) else {})


def _order_line(entry: Any) -> OrderLineCreate | None:
    if not isinstance(entry, Mapping):
        return None
    return OrderLineCreate.model_validate(dict(entry))


def validate_order(payload: Any) -> ValidatedOrder:
    """Validate an order request or raise ``OrderValidationException``.

    Accepts the parsed ``OrderCreate`` or the raw JSON body; a body that is
    not an object is treated as missing every field.
    """
    request = _as_order_create(payload)

    lessons = request.lessons
    if any(not getattr(request, name) for name in REQUIRED_FIELDS) or not isinstance(lessons, list) or not lessons:
        raise _reject(OrderRejectionReason.MISSING_FIELDS, "Missing required fields.")

    if not _is_valid_name(request.first_name):
        raise _reject(OrderRejectionReason.INVALID_NAME, "Invalid first name.")
    if not _is_valid_name(request.last_name):
        raise _reject(OrderRejectionReason.INVALID_NAME, "Invalid last name.")

    phone = _phone_text(request.phone)
    if phone is None or PHONE_PATTERN.fullmatch(phone) is None:
        raise _reject(OrderRejectionReason.INVALID_PHONE, "Invalid phone number.")

    method = str(request.method)
    if method == HOME_DELIVERY_METHOD:
        if not isinstance(request.address, str) or not request.address.strip():
            raise _reject(OrderRejectionReason.MISSING_ADDRESS, "Address is required.")
        if isinstance(request.zip, bool) or ZIP_PATTERN.fullmatch(str(request.zip)) is None:
            raise _reject(OrderRejectionReason.INVALID_ZIP, "Invalid ZIP code.")

    items: list[OrderItemRequest] = []
    for entry in lessons:
        line = _order_line(entry)
        if line is None or not _is_positive_int(line.quantity):
            raise _reject(OrderRejectionReason.INVALID_QUANTITY, "Invalid lesson quantity.")
        items.append(OrderItemRequest(lesson_ref=line.id, quantity=line.quantity))

    return ValidatedOrder(
        first_name=request.first_name.strip(),
        last_name=request.last_name.strip(),
        phone=phone,
        method=method,
        address=_optional_text(request.address),
        zip_code=_optional_text(request.zip),
        items=tuple(items),
    )
