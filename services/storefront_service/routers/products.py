"""Product catalog router: public browsing plus admin management."""

import uuid
from decimal import Decimal
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.storefront_service.models import (
    Category,
    Product,
    ProductStatus,
    Review,
    ReviewStatus,
)
from services.storefront_service.routers._helpers import (
    ensure_category,
    get_or_404,
    paginate,
    sync_tags,
)
from services.storefront_service.schemas import (
    ProductCreate,
    ProductDetail,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload, with_loader_criteria

logger = get_logger(__name__)

router = APIRouter(tags=["products"])

SORTABLE_FIELDS = {
    "created_at": Product.created_at,
    "name": Product.name,
    "price": Product.price,
    "rating": Product.rating,
}


def product_query(product_id: uuid.UUID):
    return (
        select(Product)
        .where(Product.id == product_id)
        .options(selectinload(Product.tags))
    )


# ============================================================================
# PUBLIC
# ============================================================================


@router.get("", response_model=ProductListResponse)
async def list_products(
    category: Optional[str] = Query(None, description="Category slug"),
    material: Optional[str] = None,
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    in_stock: Optional[bool] = None,
    featured: Optional[bool] = None,
    search: Optional[str] = None,
    sort_by: Literal["created_at", "name", "price", "rating"] = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    page: int = Query(1, ge=1),
    page_size: int = Query(12, ge=1, le=100),
    db: AsyncSession = Depends(get_async_db),
):
    """List active products with filters."""
    query = (
        select(Product)
        .where(Product.status == ProductStatus.ACTIVE)
        .options(selectinload(Product.tags))
    )

    if category:
        query = query.join(Category, Product.category_id == Category.id).where(
            Category.slug == category
        )
    if material:
        query = query.where(Product.material.ilike(f"%{material}%"))
    if min_price is not None:
        query = query.where(Product.price >= min_price)
    if max_price is not None:
        query = query.where(Product.price <= max_price)
    if in_stock is not None:
        query = query.where(Product.in_stock.is_(in_stock))
    if featured is not None:
        query = query.where(Product.featured.is_(featured))
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(Product.name.ilike(pattern), Product.description.ilike(pattern))
        )

    column = SORTABLE_FIELDS[sort_by]
    query = query.order_by(column.asc() if sort_order == "asc" else column.desc())

    products, meta = await paginate(db, query, page, page_size)
    return ProductListResponse(items=products, **meta)


@router.get("/{product_id}", response_model=ProductDetail)
async def get_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_db),
):
    """Get a product with its category, tags and approved reviews."""
    query = product_query(product_id).options(
        selectinload(Product.category),
        selectinload(Product.reviews),
        with_loader_criteria(Review, Review.status == ReviewStatus.APPROVED),
    )
    return await get_or_404(db, query, "Product not found")


# ============================================================================
# ADMIN
# ============================================================================


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_in: ProductCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Create a new product."""
    await ensure_category(db, product_in.category_id)
    product = Product(**product_in.model_dump(exclude={"tag_ids"}))
    await sync_tags(db, product, product_in.tag_ids)
    db.add(product)
    await db.commit()

    logger.info("Product %s created by %s", product.id, current_user.user_id)
    return await get_or_404(db, product_query(product.id), "Product not found")


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: uuid.UUID,
    product_in: ProductUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Update a product. Rating and review count are not writable."""
    product = await get_or_404(db, product_query(product_id), "Product not found")

    update_data = product_in.model_dump(exclude_unset=True)
    await ensure_category(db, update_data.get("category_id"))
    tag_ids = update_data.pop("tag_ids", None)
    for field, value in update_data.items():
        setattr(product, field, value)
    await sync_tags(db, product, tag_ids)

    await db.commit()
    return await get_or_404(db, product_query(product_id), "Product not found")


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def archive_product(
    product_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Archive a product. Order history keeps referencing it."""
    product = await get_or_404(
        db, select(Product).where(Product.id == product_id), "Product not found"
    )
    product.status = ProductStatus.ARCHIVED
    await db.commit()
    logger.info("Product %s archived by %s", product_id, current_user.user_id)
