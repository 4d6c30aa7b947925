"""Shared helper functions for storefront routers."""

import math
import uuid
from typing import Any, Optional, Sequence

from fastapi import HTTPException
from services.storefront_service.models import Category, Tag
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


async def get_or_404(
    db: AsyncSession, query: Select, detail: str = "Resource not found"
) -> Any:
    result = await db.execute(query.execution_options(populate_existing=True))
    obj = result.scalar_one_or_none()
    if obj is None:
        raise HTTPException(status_code=404, detail=detail)
    return obj


async def ensure_category(db: AsyncSession, category_id: Optional[uuid.UUID]) -> None:
    """404 when a referenced category does not exist."""
    if category_id is None:
        return
    await get_or_404(
        db, select(Category).where(Category.id == category_id), "Category not found"
    )


async def paginate(
    db: AsyncSession, query: Select, page: int, page_size: int
) -> tuple[Sequence[Any], dict]:
    """Run ``query`` for one page and return (rows, page metadata)."""
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await db.execute(count_query)).scalar_one()

    offset = (page - 1) * page_size
    result = await db.execute(query.offset(offset).limit(page_size))
    rows = result.scalars().unique().all()

    total_pages = math.ceil(total / page_size) if total > 0 else 0
    return rows, {
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": total_pages,
    }


async def resolve_tags(db: AsyncSession, tag_ids: list[uuid.UUID]) -> list[Tag]:
    """Load tags by id, 400 if any id is unknown."""
    if not tag_ids:
        return []
    unique_ids = list(dict.fromkeys(tag_ids))
    result = await db.execute(select(Tag).where(Tag.id.in_(unique_ids)))
    tags = result.scalars().all()
    if len(tags) != len(unique_ids):
        missing = set(unique_ids) - {t.id for t in tags}
        raise HTTPException(
            status_code=400,
            detail=f"Unknown tag IDs: {', '.join(sorted(str(m) for m in missing))}",
        )
    return list(tags)


async def sync_tags(
    db: AsyncSession, entity: Any, tag_ids: Optional[list[uuid.UUID]]
) -> None:
    """Replace ``entity.tags`` and keep each tag's usage_count in step.

    ``entity.tags`` must already be loaded for persistent entities.
    """
    if tag_ids is None:
        return
    new_tags = await resolve_tags(db, tag_ids)
    old_ids = {t.id for t in entity.tags}
    new_ids = {t.id for t in new_tags}

    for tag in entity.tags:
        if tag.id not in new_ids:
            tag.usage_count = max((tag.usage_count or 0) - 1, 0)
    for tag in new_tags:
        if tag.id not in old_ids:
            tag.usage_count = (tag.usage_count or 0) + 1

    entity.tags = new_tags
