"""Contact form router."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.emails.contact import (
    send_contact_acknowledgement_email,
    send_contact_notification_email,
)
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.storefront_service.models import Contact, ContactStatus, Urgency
from services.storefront_service.routers._helpers import get_or_404, paginate
from services.storefront_service.schemas import (
    ContactCreate,
    ContactListResponse,
    ContactResponse,
    ContactUpdate,
)
from services.storefront_service.services.derivations import apply_changes
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

router = APIRouter(tags=["contact"])


@router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact(
    contact_in: ContactCreate,
    db: AsyncSession = Depends(get_async_db),
):
    """Submit a contact form. Open to anyone."""
    contact = Contact(**contact_in.model_dump())
    db.add(contact)
    await db.commit()
    await db.refresh(contact)

    logger.info(
        "Contact %s received (%s, urgency=%s)",
        contact.id,
        contact.subject.value,
        contact.urgency.value,
    )

    # Email failures never fail the submission
    try:
        await send_contact_notification_email(contact)
        await send_contact_acknowledgement_email(contact)
    except Exception as e:
        logger.error("Failed to send contact emails for %s: %s", contact.id, e)

    return contact


# ============================================================================
# ADMIN
# ============================================================================


@router.get("", response_model=ContactListResponse)
async def list_contacts(
    status_filter: Optional[ContactStatus] = Query(None, alias="status"),
    urgency: Optional[Urgency] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    query = select(Contact)
    if status_filter:
        query = query.where(Contact.status == status_filter)
    if urgency:
        query = query.where(Contact.urgency == urgency)
    query = query.order_by(Contact.created_at.desc())

    contacts, meta = await paginate(db, query, page, page_size)
    return ContactListResponse(items=contacts, **meta)


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    return await get_or_404(
        db, select(Contact).where(Contact.id == contact_id), "Contact not found"
    )


@router.patch("/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: uuid.UUID,
    contact_in: ContactUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Update status, assignee or notes. Resolving stamps resolved_at once."""
    contact = await get_or_404(
        db, select(Contact).where(Contact.id == contact_id), "Contact not found"
    )
    apply_changes(contact, contact_in.model_dump(exclude_unset=True))
    await db.commit()
    await db.refresh(contact)
    return contact


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    contact = await get_or_404(
        db, select(Contact).where(Contact.id == contact_id), "Contact not found"
    )
    await db.delete(contact)
    await db.commit()
