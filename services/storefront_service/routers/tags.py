"""Tag router."""

import uuid

from fastapi import APIRouter, Depends, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.storefront_service.models import Tag
from services.storefront_service.routers._helpers import get_or_404
from services.storefront_service.schemas import TagCreate, TagResponse, TagUpdate
from services.storefront_service.services.derivations import apply_changes
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["tags"])


@router.get("", response_model=list[TagResponse])
async def list_tags(
    db: AsyncSession = Depends(get_async_db),
):
    """List active tags, most used first."""
    query = (
        select(Tag)
        .where(Tag.is_active.is_(True))
        .order_by(Tag.usage_count.desc(), Tag.name)
    )
    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    tag_in: TagCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    tag = apply_changes(Tag(), tag_in.model_dump(exclude_none=True), is_new=True)
    db.add(tag)
    await db.commit()
    await db.refresh(tag)
    return tag


@router.patch("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: uuid.UUID,
    tag_in: TagUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    tag = await get_or_404(db, select(Tag).where(Tag.id == tag_id), "Tag not found")
    apply_changes(tag, tag_in.model_dump(exclude_unset=True))
    await db.commit()
    await db.refresh(tag)
    return tag


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_tag(
    tag_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Deactivate a tag. Existing associations are kept."""
    tag = await get_or_404(db, select(Tag).where(Tag.id == tag_id), "Tag not found")
    tag.is_active = False
    await db.commit()
