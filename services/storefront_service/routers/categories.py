"""Category router. Slugs are derived from names unless given explicitly."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.storefront_service.models import Category
from services.storefront_service.routers._helpers import get_or_404
from services.storefront_service.schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CategoryWithChildren,
)
from services.storefront_service.services.derivations import apply_changes
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload, with_loader_criteria

router = APIRouter(tags=["categories"])


@router.get("", response_model=list[CategoryWithChildren])
async def list_categories(
    db: AsyncSession = Depends(get_async_db),
):
    """List active top-level categories with their active subcategories."""
    query = (
        select(Category)
        .where(Category.parent_id.is_(None), Category.is_active.is_(True))
        .options(
            selectinload(Category.children),
            with_loader_criteria(Category, Category.is_active.is_(True)),
        )
        .order_by(Category.sort_order, Category.name)
    )
    result = await db.execute(query)
    categories = result.scalars().all()

    responses = []
    for category in categories:
        children = sorted(category.children, key=lambda c: (c.sort_order, c.name))
        resp = CategoryWithChildren.model_validate(category)
        resp.children = [CategoryResponse.model_validate(c) for c in children]
        responses.append(resp)
    return responses


@router.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED
)
async def create_category(
    category_in: CategoryCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Create a new category."""
    if category_in.parent_id:
        await get_or_404(
            db,
            select(Category).where(Category.id == category_in.parent_id),
            "Parent category not found",
        )

    category = apply_changes(
        Category(), category_in.model_dump(exclude_none=True), is_new=True
    )
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: uuid.UUID,
    category_in: CategoryUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Update a category. Renaming re-derives the slug."""
    category = await get_or_404(
        db, select(Category).where(Category.id == category_id), "Category not found"
    )

    update_data = category_in.model_dump(exclude_unset=True)
    if update_data.get("parent_id") == category_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A category cannot be its own parent",
        )

    apply_changes(category, update_data)
    await db.commit()
    await db.refresh(category)
    return category
