"""Orders API router."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from app.modules.orders.schemas import OrderCreated
from app.modules.orders.service import OrdersService, get_orders_service

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: Any = Body(default=None),
    service: OrdersService = Depends(get_orders_service),
) -> OrderCreated:
    """Place an order for one or more lessons."""
    order = await service.create_order(payload)
    return OrderCreated(order_id=order.id)
