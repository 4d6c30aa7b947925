"""Orders router: public checkout plus admin order management."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.datetime_utils import utc_now
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.storefront_service.models import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
)
from services.storefront_service.routers._helpers import get_or_404, paginate
from services.storefront_service.schemas import (
    OrderCreate,
    OrderItemQuantityUpdate,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdate,
)
from services.storefront_service.services.order_ops import (
    place_order,
    update_order_item_quantity,
)
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

router = APIRouter(tags=["orders"])


def order_query(order_id: uuid.UUID):
    return (
        select(Order)
        .where(Order.id == order_id)
        .options(selectinload(Order.items).selectinload(OrderItem.product))
    )


# ============================================================================
# CHECKOUT
# ============================================================================


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_in: OrderCreate,
    db: AsyncSession = Depends(get_async_db),
):
    """Place an order. Either every line is fulfilled or nothing is saved."""
    return await place_order(db, order_in)


# ============================================================================
# ADMIN
# ============================================================================


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    payment_status: Optional[PaymentStatus] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    query = select(Order).options(
        selectinload(Order.items).selectinload(OrderItem.product)
    )
    if status_filter:
        query = query.where(Order.status == status_filter)
    if payment_status:
        query = query.where(Order.payment_status == payment_status)
    query = query.order_by(Order.created_at.desc())

    orders, meta = await paginate(db, query, page, page_size)
    return OrderListResponse(items=orders, **meta)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    return await get_or_404(db, order_query(order_id), "Order not found")


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: uuid.UUID,
    status_in: OrderStatusUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Move an order to a new status. Delivery stamps delivered_at."""
    order = await get_or_404(
        db, select(Order).where(Order.id == order_id), "Order not found"
    )

    previous = order.status
    order.status = status_in.status
    if status_in.tracking_number is not None:
        order.tracking_number = status_in.tracking_number
    if status_in.status == OrderStatus.DELIVERED and order.delivered_at is None:
        order.delivered_at = utc_now()

    await db.commit()
    logger.info(
        "Order %s: %s -> %s", order.order_number, previous.value, order.status.value
    )
    return await get_or_404(db, order_query(order_id), "Order not found")


@router.patch("/{order_id}/items/{item_id}", response_model=OrderResponse)
async def update_order_item(
    order_id: uuid.UUID,
    item_id: uuid.UUID,
    item_in: OrderItemQuantityUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Change a line's quantity on a pending order. Stock and totals follow."""
    return await update_order_item_quantity(db, order_id, item_id, item_in.quantity)
