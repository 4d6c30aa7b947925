"""Pydantic schemas for the storefront service.

Payloads are camelCase on the wire (``customerInfo``, ``productId``);
snake_case field names are accepted as well.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from services.storefront_service.models import (
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

SLUG_PATTERN = r"^[a-z0-9-]+$"
HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CamelORMModel(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class Page(CamelModel):
    total: int
    page: int
    page_size: int
    total_pages: int


# ============================================================================
# CATEGORY SCHEMAS
# ============================================================================


class CategoryBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[uuid.UUID] = None
    sort_order: int = 0
    is_active: bool = True


class CategoryCreate(CategoryBase):
    slug: Optional[str] = Field(None, max_length=100, pattern=SLUG_PATTERN)


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=100, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[uuid.UUID] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryResponse(CategoryBase, CamelORMModel):
    id: uuid.UUID
    slug: str
    created_at: datetime
    updated_at: datetime


class CategoryWithChildren(CategoryResponse):
    children: list[CategoryResponse] = []


# ============================================================================
# TAG SCHEMAS
# ============================================================================


class TagBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    is_active: bool = True


class TagCreate(TagBase):
    slug: Optional[str] = Field(None, max_length=50, pattern=SLUG_PATTERN)


class TagUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    slug: Optional[str] = Field(None, max_length=50, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    is_active: Optional[bool] = None


class TagResponse(TagBase, CamelORMModel):
    id: uuid.UUID
    slug: str
    usage_count: int
    created_at: datetime
    updated_at: datetime


# ============================================================================
# PRODUCT SCHEMAS
# ============================================================================


class ProductBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(0, ge=0)
    in_stock: bool = True
    category_id: Optional[uuid.UUID] = None
    material: Optional[str] = Field(None, max_length=100)
    image: Optional[str] = None
    status: ProductStatus = ProductStatus.ACTIVE
    featured: bool = False


class ProductCreate(ProductBase):
    tag_ids: list[uuid.UUID] = []


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock_quantity: Optional[int] = Field(None, ge=0)
    in_stock: Optional[bool] = None
    category_id: Optional[uuid.UUID] = None
    material: Optional[str] = Field(None, max_length=100)
    image: Optional[str] = None
    status: Optional[ProductStatus] = None
    featured: Optional[bool] = None
    tag_ids: Optional[list[uuid.UUID]] = None


class ProductSummary(CamelORMModel):
    id: uuid.UUID
    name: str
    image: Optional[str] = None
    price: Decimal


class ProductResponse(ProductBase, CamelORMModel):
    id: uuid.UUID
    rating: Decimal
    review_count: int
    created_at: datetime
    updated_at: datetime
    tags: list[TagResponse] = []


class ProductListResponse(Page):
    items: list[ProductResponse]


# ============================================================================
# REVIEW SCHEMAS
# ============================================================================


class ReviewCreate(CamelModel):
    product_id: uuid.UUID
    rating: int = Field(..., ge=1, le=5)
    title: Optional[str] = Field(None, max_length=200)
    comment: str = Field(..., min_length=10, max_length=2000)
    reviewer_name: str = Field(..., min_length=1, max_length=100)
    reviewer_email: Optional[EmailStr] = None


class ReviewModerate(CamelModel):
    status: Literal["approved", "rejected"]


class ReviewSummary(CamelORMModel):
    id: uuid.UUID
    product_id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    rating: int
    title: Optional[str] = None
    comment: str
    reviewer_name: str
    status: ReviewStatus
    moderated_at: Optional[datetime] = None
    created_at: datetime


class ReviewResponse(ReviewSummary):
    product: Optional[ProductSummary] = None


class ReviewListResponse(Page):
    items: list[ReviewResponse]


class ProductDetail(ProductResponse):
    """Product with its category and approved reviews."""

    category: Optional[CategoryResponse] = None
    reviews: list[ReviewSummary] = []


# ============================================================================
# ORDER SCHEMAS
# ============================================================================


class CustomerInfo(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=30)


class Address(CamelModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    country: Optional[str] = None


class OrderItemCreate(CamelModel):
    product_id: uuid.UUID
    quantity: int = Field(..., ge=1)
    customizations: dict = Field(default_factory=dict)
    special_instructions: Optional[str] = None


class OrderCreate(CamelModel):
    customer_info: CustomerInfo
    shipping_address: Address
    billing_address: Optional[Address] = None
    items: list[OrderItemCreate] = Field(..., min_length=1)
    payment_method: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None


class OrderItemResponse(CamelORMModel):
    id: uuid.UUID
    product_id: uuid.UUID
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    customizations: dict = {}
    special_instructions: Optional[str] = None
    product: Optional[ProductSummary] = None


class OrderResponse(CamelORMModel):
    id: uuid.UUID
    order_number: str
    user_id: Optional[uuid.UUID] = None
    customer_info: CustomerInfo
    shipping_address: Address
    billing_address: Optional[Address] = None
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    discount: Decimal
    total: Decimal
    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: Optional[str] = None
    tracking_number: Optional[str] = None
    delivered_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    items: list[OrderItemResponse] = []


class OrderListResponse(Page):
    items: list[OrderResponse]


class OrderStatusUpdate(CamelModel):
    status: OrderStatus
    tracking_number: Optional[str] = Field(None, max_length=100)


class OrderItemQuantityUpdate(CamelModel):
    quantity: int = Field(..., ge=1)


# ============================================================================
# BLOG SCHEMAS
# ============================================================================


class BlogPostBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = Field(None, max_length=500)
    image: Optional[str] = None
    status: BlogPostStatus = BlogPostStatus.DRAFT
    featured: bool = False
    category_id: Optional[uuid.UUID] = None


class BlogPostCreate(BlogPostBase):
    slug: Optional[str] = Field(None, max_length=220, pattern=SLUG_PATTERN)
    read_time: Optional[int] = Field(None, ge=0)
    tag_ids: list[uuid.UUID] = []


class BlogPostUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = Field(None, max_length=220, pattern=SLUG_PATTERN)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = Field(None, max_length=500)
    image: Optional[str] = None
    status: Optional[BlogPostStatus] = None
    featured: Optional[bool] = None
    category_id: Optional[uuid.UUID] = None
    tag_ids: Optional[list[uuid.UUID]] = None


class BlogPostResponse(BlogPostBase, CamelORMModel):
    id: uuid.UUID
    slug: str
    read_time: Optional[int] = None
    views: int
    likes: int
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    tags: list[TagResponse] = []


class BlogPostListResponse(Page):
    items: list[BlogPostResponse]


class BlogLikeResponse(CamelModel):
    likes: int


# ============================================================================
# PROJECT SCHEMAS
# ============================================================================


class ProjectBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=2000)
    before_image: Optional[str] = None
    after_image: Optional[str] = None
    cost: Decimal = Field(..., ge=0)
    materials: Optional[str] = None
    duration: Optional[str] = Field(None, max_length=100)
    status: ProjectStatus = ProjectStatus.COMPLETED
    featured: bool = False
    category_id: Optional[uuid.UUID] = None


class ProjectCreate(ProjectBase):
    tag_ids: list[uuid.UUID] = []


class ProjectUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    before_image: Optional[str] = None
    after_image: Optional[str] = None
    cost: Optional[Decimal] = Field(None, ge=0)
    materials: Optional[str] = None
    duration: Optional[str] = Field(None, max_length=100)
    status: Optional[ProjectStatus] = None
    featured: Optional[bool] = None
    category_id: Optional[uuid.UUID] = None
    tag_ids: Optional[list[uuid.UUID]] = None


class ProjectResponse(ProjectBase, CamelORMModel):
    id: uuid.UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime
    tags: list[TagResponse] = []


class ProjectListResponse(Page):
    items: list[ProjectResponse]


# ============================================================================
# CONTACT SCHEMAS
# ============================================================================


class ContactCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    subject: ContactSubject
    message: str = Field(..., min_length=1, max_length=2000)
    preferred_contact: PreferredContact = PreferredContact.EMAIL
    urgency: Urgency = Urgency.MEDIUM


class ContactUpdate(CamelModel):
    status: Optional[ContactStatus] = None
    assigned_to: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None


class ContactResponse(ContactCreate, CamelORMModel):
    id: uuid.UUID
    status: ContactStatus
    assigned_to: Optional[str] = None
    notes: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ContactListResponse(Page):
    items: list[ContactResponse]


# ============================================================================
# AUTH SCHEMAS
# ============================================================================


class UserRegister(CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)  # username or email
    password: str = Field(..., min_length=6)


class UserResponse(CamelORMModel):
    id: uuid.UUID
    username: str
    email: str
    role: UserRole
    status: UserStatus
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime


class TokenResponse(CamelModel):
    token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


# ============================================================================
# ADMIN SCHEMAS
# ============================================================================


class DashboardStats(CamelModel):
    total_products: int
    total_orders: int
    pending_orders: int
    pending_reviews: int
    new_contacts: int
    revenue: Decimal


class UserListResponse(Page):
    items: list[UserResponse]


class UserStatusUpdate(CamelModel):
    status: UserStatus


AnalyticsPeriod = Literal["7d", "30d", "90d", "1y"]


class DailyCount(CamelModel):
    day: date
    count: int


class PopularProduct(CamelORMModel):
    id: uuid.UUID
    name: str
    rating: Decimal
    review_count: int


class BlogPostViews(CamelORMModel):
    id: uuid.UUID
    title: str
    views: int
    likes: int


class AnalyticsResponse(CamelModel):
    period: AnalyticsPeriod
    contacts_over_time: list[DailyCount]
    user_registrations: list[DailyCount]
    popular_products: list[PopularProduct]
    blog_views: list[BlogPostViews]
