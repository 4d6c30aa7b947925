"""Portfolio projects router."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.storefront_service.models import Category, Project
from services.storefront_service.routers._helpers import (
    ensure_category,
    get_or_404,
    paginate,
    sync_tags,
)
from services.storefront_service.schemas import (
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

router = APIRouter(tags=["projects"])


def project_query(project_id: uuid.UUID):
    return (
        select(Project)
        .where(Project.id == project_id)
        .options(selectinload(Project.tags))
    )


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    category: Optional[str] = Query(None, description="Category slug"),
    featured: Optional[bool] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(12, ge=1, le=100),
    db: AsyncSession = Depends(get_async_db),
):
    """List active projects, featured first."""
    query = (
        select(Project)
        .where(Project.is_active.is_(True))
        .options(selectinload(Project.tags))
    )
    if category:
        query = query.where(Project.category.has(Category.slug == category))
    if featured is not None:
        query = query.where(Project.featured.is_(featured))

    query = query.order_by(Project.featured.desc(), Project.created_at.desc())
    projects, meta = await paginate(db, query, page, page_size)
    return ProjectListResponse(items=projects, **meta)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_db),
):
    query = project_query(project_id).where(Project.is_active.is_(True))
    return await get_or_404(db, query, "Project not found")


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: ProjectCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    await ensure_category(db, project_in.category_id)
    project = Project(**project_in.model_dump(exclude={"tag_ids"}))
    await sync_tags(db, project, project_in.tag_ids)
    db.add(project)
    await db.commit()
    return await get_or_404(db, project_query(project.id), "Project not found")


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: uuid.UUID,
    project_in: ProjectUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    project = await get_or_404(db, project_query(project_id), "Project not found")

    update_data = project_in.model_dump(exclude_unset=True)
    await ensure_category(db, update_data.get("category_id"))
    tag_ids = update_data.pop("tag_ids", None)
    for field, value in update_data.items():
        setattr(project, field, value)
    await sync_tags(db, project, tag_ids)

    await db.commit()
    return await get_or_404(db, project_query(project_id), "Project not found")


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Soft delete: the project is hidden from public listings."""
    project = await get_or_404(
        db, select(Project).where(Project.id == project_id), "Project not found"
    )
    project.is_active = False
    await db.commit()
