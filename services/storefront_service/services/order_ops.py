"""Order placement: stock validation, pricing and persistence as one unit.

The whole workflow (validate lines, insert order, decrement stock, insert
items) runs in a single transaction. Stock is decremented with a
conditional UPDATE so two concurrent orders can never oversell the last
unit; any failure rolls everything back. Quantity edits on a pending
order follow the same rules.
"""

import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from fastapi import HTTPException, status
from libs.common.logging import get_logger
from services.storefront_service.models import Order, OrderItem, OrderStatus, Product
from services.storefront_service.schemas import OrderCreate, OrderItemCreate
from services.storefront_service.services.derivations import (
    compute_line_total,
    derive_fields,
)
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Pricing constants
# ---------------------------------------------------------------------------
TAX_RATE = Decimal("0.08")
FREE_SHIPPING_THRESHOLD = Decimal("500")
FLAT_SHIPPING_FEE = Decimal("50")

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    discount: Decimal
    total: Decimal


@dataclass(frozen=True)
class PricedLine:
    request: OrderItemCreate
    unit_price: Decimal
    line_total: Decimal


def compute_order_totals(
    subtotal: Decimal, discount: Decimal = Decimal("0")
) -> OrderTotals:
    """8% tax; free shipping strictly above 500, otherwise a flat 50."""
    subtotal = Decimal(subtotal).quantize(CENTS)
    tax = (subtotal * TAX_RATE).quantize(CENTS, rounding=ROUND_HALF_UP)
    shipping = Decimal("0") if subtotal > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE
    discount = Decimal(discount).quantize(CENTS)
    total = subtotal + tax + shipping - discount
    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping.quantize(CENTS),
        discount=discount,
        total=total.quantize(CENTS),
    )


def insufficient_stock(product_name: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"Insufficient stock for product {product_name}",
    )


async def price_lines(
    db: AsyncSession, items: list[OrderItemCreate]
) -> list[PricedLine]:
    """Check each requested line against its product and snapshot prices."""
    priced: list[PricedLine] = []
    for item in items:
        product = await db.get(Product, item.product_id)
        if product is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Product with ID {item.product_id} not found",
            )
        if not product.in_stock or product.stock_quantity < item.quantity:
            raise insufficient_stock(product.name)

        priced.append(
            PricedLine(
                request=item,
                unit_price=product.price,
                line_total=compute_line_total(item.quantity, product.price),
            )
        )
    return priced


async def decrement_stock(
    db: AsyncSession, product_id: uuid.UUID, quantity: int
) -> None:
    """Atomically take ``quantity`` units, failing if not enough remain."""
    result = await db.execute(
        update(Product)
        .where(Product.id == product_id, Product.stock_quantity >= quantity)
        .values(stock_quantity=Product.stock_quantity - quantity)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        product = await db.get(Product, product_id)
        raise insufficient_stock(product.name if product else str(product_id))


async def load_order(db: AsyncSession, order_id: uuid.UUID) -> Optional[Order]:
    result = await db.execute(
        select(Order)
        .where(Order.id == order_id)
        .options(selectinload(Order.items).selectinload(OrderItem.product))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def place_order(
    db: AsyncSession,
    order_in: OrderCreate,
    *,
    user_id: Optional[uuid.UUID] = None,
) -> Order:
    """Create an order from a cart payload, all-or-nothing.

    1. Validate every line (product exists, in stock, enough quantity)
    2. Compute subtotal, tax, shipping and total
    3. Insert the order header
    4. Per line: conditional stock decrement, then insert the order item
    5. Commit once; roll back on any failure
    """
    try:
        lines = await price_lines(db, order_in.items)
        totals = compute_order_totals(sum((line.line_total for line in lines), Decimal("0")))

        shipping_address = order_in.shipping_address.model_dump()
        billing_address = (
            order_in.billing_address.model_dump()
            if order_in.billing_address
            else shipping_address
        )
        order = Order(
            order_number=Order.generate_order_number(),
            user_id=user_id,
            customer_info=order_in.customer_info.model_dump(),
            shipping_address=shipping_address,
            billing_address=billing_address,
            subtotal=totals.subtotal,
            tax=totals.tax,
            shipping=totals.shipping,
            discount=totals.discount,
            total=totals.total,
            payment_method=order_in.payment_method or "pending",
            notes=order_in.notes,
        )
        db.add(order)
        await db.flush()  # Get order ID

        for line in lines:
            await decrement_stock(db, line.request.product_id, line.request.quantity)
            item = OrderItem(
                order_id=order.id,
                product_id=line.request.product_id,
                quantity=line.request.quantity,
                unit_price=line.unit_price,
                customizations=line.request.customizations,
                special_instructions=line.request.special_instructions,
            )
            db.add(derive_fields(item, is_new=True))

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Placed order %s: %d lines, subtotal=%s total=%s",
        order.order_number,
        len(lines),
        totals.subtotal,
        totals.total,
    )
    return await load_order(db, order.id)


async def restore_stock(
    db: AsyncSession, product_id: uuid.UUID, quantity: int
) -> None:
    await db.execute(
        update(Product)
        .where(Product.id == product_id)
        .values(stock_quantity=Product.stock_quantity + quantity)
        .execution_options(synchronize_session=False)
    )


async def update_order_item_quantity(
    db: AsyncSession, order_id: uuid.UUID, item_id: uuid.UUID, quantity: int
) -> Order:
    """Change one line of a pending order.

    Stock moves by the difference, the line total follows the new quantity
    and the order's subtotal, tax, shipping and total are recomputed.
    Everything commits together or not at all.
    """
    if quantity < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Quantity must be at least 1",
        )

    try:
        result = await db.execute(
            select(Order)
            .where(Order.id == order_id)
            .options(selectinload(Order.items))
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        order = result.scalar_one_or_none()
        if order is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Order not found"
            )
        if order.status != OrderStatus.PENDING:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Only pending orders can be changed",
            )

        item = next((line for line in order.items if line.id == item_id), None)
        if item is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Order item not found"
            )

        delta = quantity - item.quantity
        if delta > 0:
            await decrement_stock(db, item.product_id, delta)
        elif delta < 0:
            await restore_stock(db, item.product_id, -delta)

        item.quantity = quantity
        derive_fields(item, {"quantity"})

        totals = compute_order_totals(
            sum((line.total_price for line in order.items), Decimal("0")),
            order.discount,
        )
        order.subtotal = totals.subtotal
        order.tax = totals.tax
        order.shipping = totals.shipping
        order.total = totals.total

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Order %s item %s quantity %+d, total=%s",
        order.order_number,
        item_id,
        delta,
        totals.total,
    )
    return await load_order(db, order_id)
