"""Orders repository layer."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.orders.models import Order, OrderItem
from app.modules.orders.reconciler import ReconciledOrderItem
from app.modules.orders.validation import ValidatedOrder


class OrdersRepository:
    """DB access methods for orders."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_order(
        self,
        order: ValidatedOrder,
        items: list[ReconciledOrderItem],
    ) -> Order:
        record = Order(
            first_name=order.first_name,
            last_name=order.last_name,
            phone=order.phone,
            method=order.method,
            address=order.address,
            zip_code=order.zip_code,
            items=[
                OrderItem(
                    position=position,
                    lesson_id=item.lesson_id,
                    lesson_topic=item.lesson_topic,
                    quantity=item.quantity,
                )
                for position, item in enumerate(items)
            ],
        )
        self.session.add(record)
        await self.session.flush()
        return record
