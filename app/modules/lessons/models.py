"""Lessons ORM models."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import Numeric, String, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, BaseModelMixin


class Lesson(BaseModelMixin, Base):
    """Storefront lesson with a limited number of seats."""

    __tablename__ = "lessons"

    topic: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    space: Mapped[int] = mapped_column(nullable=False, default=0)
    icon: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Display attributes without a column of their own, as sent by clients.
    attributes: Mapped[dict[str, Any]] = mapped_column(
        JSONB,
        nullable=False,
        default=dict,
        server_default=text("'{}'::jsonb"),
    )
