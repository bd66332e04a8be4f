"""Orders business logic layer."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.core.metrics import record_order_outcome
from app.modules.lessons.repository import LessonsRepository
from app.modules.orders.models import Order
from app.modules.orders.reconciler import OrderReconciler
from app.modules.orders.repository import OrdersRepository
from app.modules.orders.validation import validate_order
from app.shared.exceptions import OrderRejectedException, StoreException

logger = logging.getLogger(__name__)


class OrdersService:
    """Orders domain service."""

    def __init__(self, repository: OrdersRepository, reconciler: OrderReconciler) -> None:
        self.repository = repository
        self.reconciler = reconciler

    async def create_order(self, payload: Any) -> Order:
        """Validate, reconcile and persist an order.

        The order is stored only after every line passed reconciliation, so a
        rejected order leaves nothing behind.
        """
        try:
            order = validate_order(payload)
            items = await self.reconciler.reconcile(order)
            record = await self.repository.create_order(order, items)
        except OrderRejectedException as exc:
            record_order_outcome(exc.code)
            logger.info("Order rejected (%s): %s", exc.code, exc.message)
            raise
        except SQLAlchemyError as exc:
            record_order_outcome("store_error")
            logger.exception("Order error")
            raise StoreException("Internal server error") from exc

        record_order_outcome("created")
        logger.info("Order %s created with %d lesson(s)", record.id, len(items))
        return record


async def get_orders_service(session: AsyncSession = Depends(get_db_session)) -> OrdersService:
    """Dependency provider for orders service."""
    return OrdersService(
        repository=OrdersRepository(session),
        reconciler=OrderReconciler(LessonsRepository(session)),
    )
