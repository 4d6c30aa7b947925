"""Commerce models: orders, order items, product reviews."""

import random
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import epoch_millis, utc_now
from libs.db.base import Base
from services.storefront_service.models.enums import (
    OrderStatus,
    PaymentStatus,
    ReviewStatus,
    enum_values,
)
from services.storefront_service.models.types import JSONType
from sqlalchemy import CheckConstraint, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

# ============================================================================
# ORDERS
# ============================================================================


class Order(Base):
    """Customer orders. Totals are computed by the placement workflow."""

    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    order_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Customer snapshot
    customer_info: Mapped[dict] = mapped_column(JSONType, nullable=False)
    shipping_address: Mapped[dict] = mapped_column(JSONType, nullable=False)
    billing_address: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)

    # Totals
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tax: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), server_default="0"
    )
    shipping: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), server_default="0"
    )
    discount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), server_default="0"
    )
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    status: Mapped[OrderStatus] = mapped_column(
        SAEnum(OrderStatus, values_callable=enum_values, name="order_status_enum"),
        default=OrderStatus.PENDING,
        server_default="pending",
        index=True,
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        SAEnum(
            PaymentStatus,
            values_callable=enum_values,
            name="order_payment_status_enum",
        ),
        default=PaymentStatus.PENDING,
        server_default="pending",
        index=True,
    )
    payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Fulfilment
    tracking_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    delivered_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        CheckConstraint(
            "subtotal >= 0 AND tax >= 0 AND shipping >= 0 AND discount >= 0 "
            "AND total >= 0",
            name="order_amounts_non_negative",
        ),
    )

    # Relationships
    items = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan"
    )
    user = relationship("User")

    @staticmethod
    def generate_order_number() -> str:
        """Generate an order number like FC-1767225600000-042."""
        return f"FC-{epoch_millis()}-{random.randint(0, 999):03d}"

    def __repr__(self):
        return f"<Order {self.order_number}>"


class OrderItem(Base):
    """Line items. unit_price is a snapshot of the product price at purchase."""

    __tablename__ = "order_items"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    order_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    customizations: Mapped[dict] = mapped_column(JSONType, default=dict)
    special_instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="order_item_quantity_positive"),
        CheckConstraint(
            "unit_price >= 0 AND total_price >= 0", name="order_item_prices_valid"
        ),
    )

    # Relationships
    order = relationship("Order", back_populates="items")
    product = relationship("Product")

    def __repr__(self):
        return f"<OrderItem product={self.product_id} qty={self.quantity}>"


# ============================================================================
# REVIEWS
# ============================================================================


class Review(Base):
    """Product reviews. Only approved reviews count toward product ratings."""

    __tablename__ = "reviews"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    reviewer_name: Mapped[str] = mapped_column(String(100), nullable=False)
    reviewer_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    status: Mapped[ReviewStatus] = mapped_column(
        SAEnum(ReviewStatus, values_callable=enum_values, name="review_status_enum"),
        default=ReviewStatus.PENDING,
        server_default="pending",
        index=True,
    )
    moderated_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    moderated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="review_rating_range"),
    )

    # Relationships
    product = relationship("Product", back_populates="reviews")

    def __repr__(self):
        return f"<Review {self.rating}* {self.status}>"
