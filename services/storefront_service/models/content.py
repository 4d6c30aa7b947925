"""Editorial content models: blog posts, portfolio projects, contact requests."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.storefront_service.models.catalog import blog_post_tags, project_tags
from services.storefront_service.models.enums import (
    BlogPostStatus,
    ContactStatus,
    ContactSubject,
    PreferredContact,
    ProjectStatus,
    Urgency,
    enum_values,
)
from sqlalchemy import Boolean, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship


class BlogPost(Base):
    """Blog articles. slug, read_time and published_at are derived."""

    __tablename__ = "blog_posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    author_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    category_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), unique=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    read_time: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # minutes

    status: Mapped[BlogPostStatus] = mapped_column(
        SAEnum(
            BlogPostStatus,
            values_callable=enum_values,
            name="blog_post_status_enum",
        ),
        default=BlogPostStatus.DRAFT,
        server_default="draft",
        index=True,
    )
    featured: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false"
    )
    views: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    likes: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # Relationships
    author = relationship("User")
    category = relationship("Category")
    tags = relationship("Tag", secondary=blog_post_tags)

    def __repr__(self):
        return f"<BlogPost {self.slug}>"


class Project(Base):
    """Portfolio projects (completed commissions)."""

    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    category_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    before_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    after_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    materials: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    duration: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    status: Mapped[ProjectStatus] = mapped_column(
        SAEnum(
            ProjectStatus,
            values_callable=enum_values,
            name="project_status_enum",
        ),
        default=ProjectStatus.COMPLETED,
        server_default="completed",
    )
    featured: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false"
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true", index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    # Relationships
    category = relationship("Category")
    tags = relationship("Tag", secondary=project_tags)

    def __repr__(self):
        return f"<Project {self.title}>"


class Contact(Base):
    """Contact form submissions handled by staff."""

    __tablename__ = "contacts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    subject: Mapped[ContactSubject] = mapped_column(
        SAEnum(
            ContactSubject,
            values_callable=enum_values,
            name="contact_subject_enum",
        ),
        nullable=False,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    preferred_contact: Mapped[PreferredContact] = mapped_column(
        SAEnum(
            PreferredContact,
            values_callable=enum_values,
            name="contact_preferred_enum",
        ),
        default=PreferredContact.EMAIL,
        server_default="email",
    )
    urgency: Mapped[Urgency] = mapped_column(
        SAEnum(Urgency, values_callable=enum_values, name="contact_urgency_enum"),
        default=Urgency.MEDIUM,
        server_default="medium",
    )
    status: Mapped[ContactStatus] = mapped_column(
        SAEnum(
            ContactStatus,
            values_callable=enum_values,
            name="contact_status_enum",
        ),
        default=ContactStatus.NEW,
        server_default="new",
        index=True,
    )
    assigned_to: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    resolved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Contact {self.email} {self.status}>"
