"""Derived-field rules applied explicitly before an entity is persisted.

Write paths call :func:`derive_fields` with the set of attribute names the
current write touched; each rule decides from that set whether it applies.
"""

import math
import re
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, TypeVar

from libs.common.datetime_utils import utc_now
from libs.common.error_handler import DomainValidationError
from services.storefront_service.models import (
    BlogPost,
    BlogPostStatus,
    Category,
    Contact,
    ContactStatus,
    OrderItem,
    Tag,
)

WORDS_PER_MINUTE = 200

_DISALLOWED_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_SLUG_SEPARATORS = re.compile(r"[\s-]+")

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Slugs
# ---------------------------------------------------------------------------


def slugify(text: str) -> str:
    """Lowercase, drop anything outside [a-z0-9-], join words with single hyphens."""
    slug = _DISALLOWED_SLUG_CHARS.sub("", text.lower())
    return _SLUG_SEPARATORS.sub("-", slug).strip("-")


def derive_slug(
    entity: T,
    *,
    source_attr: str,
    changed: Iterable[str] = (),
) -> T:
    """Recompute ``entity.slug`` from ``source_attr`` when needed.

    The slug is (re)derived when it is empty, or when the source field
    changed in this write without an explicit slug override.
    """
    changed = set(changed)
    source_changed = source_attr in changed and "slug" not in changed
    if getattr(entity, "slug", None) and not source_changed:
        return entity

    source = getattr(entity, source_attr) or ""
    slug = slugify(source)
    if not slug:
        raise DomainValidationError(
            f"Cannot derive a slug from {source_attr} {source!r}"
        )
    entity.slug = slug
    return entity


# ---------------------------------------------------------------------------
# Blog read time
# ---------------------------------------------------------------------------


def estimate_read_time(content: str) -> int:
    """Minutes to read ``content`` at 200 words per minute, rounded up."""
    return math.ceil(len(content.split()) / WORDS_PER_MINUTE)


def derive_read_time(
    post: BlogPost, *, changed: Iterable[str] = (), is_new: bool = False
) -> BlogPost:
    if is_new:
        if post.read_time is None:
            post.read_time = estimate_read_time(post.content or "")
    elif "content" in set(changed):
        post.read_time = estimate_read_time(post.content or "")
    return post


# ---------------------------------------------------------------------------
# Status timestamps
# ---------------------------------------------------------------------------


def stamp_published_at(post: BlogPost, now: Optional[datetime] = None) -> BlogPost:
    """Set published_at the first time a post is published. Never overwrites."""
    if post.status == BlogPostStatus.PUBLISHED and post.published_at is None:
        post.published_at = now or utc_now()
    return post


def stamp_resolved_at(contact: Contact, now: Optional[datetime] = None) -> Contact:
    """Set resolved_at the first time a contact is resolved. Never overwrites."""
    if contact.status == ContactStatus.RESOLVED and contact.resolved_at is None:
        contact.resolved_at = now or utc_now()
    return contact


# ---------------------------------------------------------------------------
# Order line totals
# ---------------------------------------------------------------------------


def compute_line_total(quantity: int, unit_price: Decimal) -> Decimal:
    return (Decimal(unit_price) * quantity).quantize(Decimal("0.01"))


def derive_line_total(item: OrderItem) -> OrderItem:
    item.total_price = compute_line_total(item.quantity, item.unit_price)
    return item


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


def derive_fields(entity: T, changed: Iterable[str] = (), *, is_new: bool = False) -> T:
    """Run every derivation rule that applies to ``entity``'s type."""
    changed = set(changed)
    if isinstance(entity, (Category, Tag)):
        derive_slug(entity, source_attr="name", changed=changed)
    elif isinstance(entity, BlogPost):
        derive_slug(entity, source_attr="title", changed=changed)
        derive_read_time(entity, changed=changed, is_new=is_new)
        stamp_published_at(entity)
    elif isinstance(entity, Contact):
        stamp_resolved_at(entity)
    elif isinstance(entity, OrderItem):
        derive_line_total(entity)
    return entity


def apply_changes(entity: T, changes: dict, *, is_new: bool = False) -> T:
    """Assign ``changes`` onto ``entity`` then run its derivation rules.

    Only fields whose value actually differs count as changed, so resending
    the stored name keeps a custom slug.
    """
    changed = set()
    for field, value in changes.items():
        if is_new or getattr(entity, field, None) != value:
            changed.add(field)
        setattr(entity, field, value)
    return derive_fields(entity, changed, is_new=is_new)
