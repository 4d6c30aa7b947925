"""Storefront models package."""

from services.storefront_service.models.accounts import User
from services.storefront_service.models.catalog import (
    Category,
    Product,
    Tag,
    blog_post_tags,
    product_tags,
    project_tags,
)
from services.storefront_service.models.commerce import Order, OrderItem, Review
from services.storefront_service.models.content import BlogPost, Contact, Project
from services.storefront_service.models.enums import (
    BlogPostStatus,
    ContactStatus,
    ContactSubject,
    OrderStatus,
    PaymentStatus,
    PreferredContact,
    ProductStatus,
    ProjectStatus,
    ReviewStatus,
    Urgency,
    UserRole,
    UserStatus,
)

__all__ = [
    "BlogPost",
    "BlogPostStatus",
    "Category",
    "Contact",
    "ContactStatus",
    "ContactSubject",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentStatus",
    "PreferredContact",
    "Product",
    "ProductStatus",
    "Project",
    "ProjectStatus",
    "Review",
    "ReviewStatus",
    "Tag",
    "Urgency",
    "User",
    "UserRole",
    "UserStatus",
    "blog_post_tags",
    "product_tags",
    "project_tags",
]
