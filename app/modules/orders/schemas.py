"""Orders schemas."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class OrderLineCreate(BaseModel):
    """Order line as posted by the storefront."""

    model_config = ConfigDict(extra="allow")

    id: Any = None
    quantity: Any = None


class OrderCreate(BaseModel):
    """Create order request.

    Field types stay loose on purpose: the order rules decide which value is
    wrong and report it with their own message, first failure first.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    first_name: Any = None
    last_name: Any = None
    phone: Any = None
    method: Any = None
    address: Any = None
    zip: Any = None
    lessons: Any = None


class OrderCreated(BaseModel):
    """Order creation acknowledgement."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = "Order created"
    order_id: UUID
