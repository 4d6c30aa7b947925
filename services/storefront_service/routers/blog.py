"""Blog router: published posts for readers, full management for admins."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.storefront_service.models import (
    BlogPost,
    BlogPostStatus,
    Category,
    Tag,
)
from services.storefront_service.routers._helpers import (
    ensure_category,
    get_or_404,
    paginate,
    sync_tags,
)
from services.storefront_service.schemas import (
    BlogLikeResponse,
    BlogPostCreate,
    BlogPostListResponse,
    BlogPostResponse,
    BlogPostUpdate,
)
from services.storefront_service.services.derivations import apply_changes
from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

router = APIRouter(tags=["blog"])


def post_query(post_id: uuid.UUID):
    return (
        select(BlogPost)
        .where(BlogPost.id == post_id)
        .options(selectinload(BlogPost.tags))
    )


def parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


# ============================================================================
# PUBLIC
# ============================================================================


@router.get("", response_model=BlogPostListResponse)
async def list_posts(
    search: Optional[str] = None,
    category: Optional[str] = Query(None, description="Category slug"),
    tag: Optional[str] = Query(None, description="Tag slug"),
    featured: Optional[bool] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_async_db),
):
    """List published posts, newest first."""
    query = (
        select(BlogPost)
        .where(BlogPost.status == BlogPostStatus.PUBLISHED)
        .options(selectinload(BlogPost.tags))
    )
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                BlogPost.title.ilike(pattern),
                BlogPost.excerpt.ilike(pattern),
                BlogPost.content.ilike(pattern),
            )
        )
    if category:
        query = query.where(BlogPost.category.has(Category.slug == category))
    if tag:
        query = query.where(BlogPost.tags.any(Tag.slug == tag))
    if featured is not None:
        query = query.where(BlogPost.featured.is_(featured))

    query = query.order_by(BlogPost.published_at.desc(), BlogPost.created_at.desc())
    posts, meta = await paginate(db, query, page, page_size)
    return BlogPostListResponse(items=posts, **meta)


@router.get("/{id_or_slug}", response_model=BlogPostResponse)
async def get_post(
    id_or_slug: str,
    db: AsyncSession = Depends(get_async_db),
):
    """Get a published post by id or slug. Each read counts as a view."""
    post_id = parse_uuid(id_or_slug)
    lookup = BlogPost.id == post_id if post_id else BlogPost.slug == id_or_slug
    post = await get_or_404(
        db,
        select(BlogPost).where(lookup, BlogPost.status == BlogPostStatus.PUBLISHED),
        "Blog post not found",
    )

    await db.execute(
        update(BlogPost)
        .where(BlogPost.id == post.id)
        .values(views=BlogPost.views + 1)
    )
    await db.commit()
    return await get_or_404(db, post_query(post.id), "Blog post not found")


@router.post("/{post_id}/like", response_model=BlogLikeResponse)
async def like_post(
    post_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_db),
):
    await get_or_404(
        db, select(BlogPost.id).where(BlogPost.id == post_id), "Blog post not found"
    )
    result = await db.execute(
        update(BlogPost)
        .where(BlogPost.id == post_id)
        .values(likes=BlogPost.likes + 1)
        .returning(BlogPost.likes)
    )
    likes = result.scalar_one()
    await db.commit()
    return BlogLikeResponse(likes=likes)


# ============================================================================
# ADMIN
# ============================================================================


@router.post("", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_in: BlogPostCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Create a post. Slug and read time are derived when omitted."""
    await ensure_category(db, post_in.category_id)
    post = apply_changes(
        BlogPost(author_id=uuid.UUID(current_user.user_id)),
        post_in.model_dump(exclude={"tag_ids"}, exclude_none=True),
        is_new=True,
    )
    await sync_tags(db, post, post_in.tag_ids)
    db.add(post)
    await db.commit()

    logger.info("Blog post %s created (%s)", post.slug, post.status.value)
    return await get_or_404(db, post_query(post.id), "Blog post not found")


@router.patch("/{post_id}", response_model=BlogPostResponse)
async def update_post(
    post_id: uuid.UUID,
    post_in: BlogPostUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    post = await get_or_404(db, post_query(post_id), "Blog post not found")

    update_data = post_in.model_dump(exclude_unset=True)
    await ensure_category(db, update_data.get("category_id"))
    tag_ids = update_data.pop("tag_ids", None)
    apply_changes(post, update_data)
    await sync_tags(db, post, tag_ids)

    await db.commit()
    return await get_or_404(db, post_query(post_id), "Blog post not found")


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    post = await get_or_404(db, post_query(post_id), "Blog post not found")
    await sync_tags(db, post, [])
    await db.delete(post)
    await db.commit()
