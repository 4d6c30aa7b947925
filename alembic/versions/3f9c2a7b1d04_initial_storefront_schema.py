"""initial_storefront_schema

Revision ID: 3f9c2a7b1d04
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7b1d04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


product_status = sa.Enum('active', 'inactive', 'draft', 'archived', name='product_status_enum')
order_status = sa.Enum(
    'pending', 'confirmed', 'processing', 'shipped', 'delivered', 'cancelled', 'refunded',
    name='order_status_enum',
)
payment_status = sa.Enum('pending', 'paid', 'failed', 'refunded', name='order_payment_status_enum')
review_status = sa.Enum('pending', 'approved', 'rejected', 'spam', name='review_status_enum')
user_role = sa.Enum('admin', 'staff', 'customer', name='user_role_enum')
user_status = sa.Enum('active', 'inactive', 'suspended', name='user_status_enum')
blog_post_status = sa.Enum('draft', 'published', 'archived', name='blog_post_status_enum')
project_status = sa.Enum('planning', 'in-progress', 'completed', 'on-hold', name='project_status_enum')
contact_subject = sa.Enum(
    'custom-order', 'quote-request', 'product-inquiry', 'design-consultation',
    'delivery-inquiry', 'support', 'partnership', 'other',
    name='contact_subject_enum',
)
contact_preferred = sa.Enum('email', 'phone', 'whatsapp', name='contact_preferred_enum')
contact_urgency = sa.Enum('low', 'medium', 'high', name='contact_urgency_enum')
contact_status = sa.Enum('new', 'in-progress', 'resolved', 'closed', name='contact_status_enum')


def timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def tag_link_table(name: str, owner_column: str, owner_table: str) -> None:
    op.create_table(
        name,
        sa.Column(owner_column, UUID(as_uuid=True), nullable=False),
        sa.Column('tag_id', UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint([owner_column], [f'{owner_table}.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint(owner_column, 'tag_id'),
    )


def upgrade() -> None:
    """Upgrade schema - Create storefront tables."""

    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('role', user_role, server_default='customer', nullable=False),
        sa.Column('status', user_status, server_default='active', nullable=False),
        sa.Column('login_attempts', sa.Integer(), server_default='0', nullable=False),
        sa.Column('lock_until', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'categories',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image', sa.Text(), nullable=True),
        sa.Column('parent_id', UUID(as_uuid=True), nullable=True),
        sa.Column('sort_order', sa.Integer(), server_default='0', nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(['parent_id'], ['categories.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_categories_parent_id', 'categories', ['parent_id'])
    op.create_index('ix_categories_is_active', 'categories', ['is_active'])

    op.create_table(
        'tags',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('slug', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.String(length=7), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=True),
        sa.Column('usage_count', sa.Integer(), server_default='0', nullable=True),
        *timestamps(),
        sa.CheckConstraint('usage_count >= 0', name='tag_usage_non_negative'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_tags_is_active', 'tags', ['is_active'])

    op.create_table(
        'products',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('category_id', UUID(as_uuid=True), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('material', sa.String(length=100), nullable=True),
        sa.Column('image', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('stock_quantity', sa.Integer(), server_default='0', nullable=False),
        sa.Column('in_stock', sa.Boolean(), server_default='true', nullable=True),
        sa.Column('rating', sa.Numeric(3, 2), server_default='0', nullable=False),
        sa.Column('review_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('status', product_status, server_default='active', nullable=True),
        sa.Column('featured', sa.Boolean(), server_default='false', nullable=True),
        *timestamps(),
        sa.CheckConstraint('price >= 0', name='product_price_non_negative'),
        sa.CheckConstraint('stock_quantity >= 0', name='product_stock_non_negative'),
        sa.CheckConstraint('rating >= 0 AND rating <= 5', name='product_rating_range'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_products_category_id', 'products', ['category_id'])
    op.create_index('ix_products_status', 'products', ['status'])

    op.create_table(
        'blog_posts',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('author_id', UUID(as_uuid=True), nullable=True),
        sa.Column('category_id', UUID(as_uuid=True), nullable=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('slug', sa.String(length=220), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.String(length=500), nullable=True),
        sa.Column('image', sa.Text(), nullable=True),
        sa.Column('read_time', sa.Integer(), nullable=True),
        sa.Column('status', blog_post_status, server_default='draft', nullable=True),
        sa.Column('featured', sa.Boolean(), server_default='false', nullable=True),
        sa.Column('views', sa.Integer(), server_default='0', nullable=True),
        sa.Column('likes', sa.Integer(), server_default='0', nullable=True),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_blog_posts_status', 'blog_posts', ['status'])
    op.create_index('ix_blog_posts_published_at', 'blog_posts', ['published_at'])

    op.create_table(
        'projects',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('category_id', UUID(as_uuid=True), nullable=True),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('before_image', sa.Text(), nullable=True),
        sa.Column('after_image', sa.Text(), nullable=True),
        sa.Column('cost', sa.Numeric(12, 2), nullable=False),
        sa.Column('materials', sa.Text(), nullable=True),
        sa.Column('duration', sa.String(length=100), nullable=True),
        sa.Column('status', project_status, server_default='completed', nullable=True),
        sa.Column('featured', sa.Boolean(), server_default='false', nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_projects_is_active', 'projects', ['is_active'])

    op.create_table(
        'contacts',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('subject', contact_subject, nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('preferred_contact', contact_preferred, server_default='email', nullable=True),
        sa.Column('urgency', contact_urgency, server_default='medium', nullable=True),
        sa.Column('status', contact_status, server_default='new', nullable=True),
        sa.Column('assigned_to', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_contacts_status', 'contacts', ['status'])

    op.create_table(
        'orders',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('order_number', sa.String(length=50), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), nullable=True),
        sa.Column('customer_info', JSONB(), nullable=False),
        sa.Column('shipping_address', JSONB(), nullable=False),
        sa.Column('billing_address', JSONB(), nullable=True),
        sa.Column('subtotal', sa.Numeric(12, 2), nullable=False),
        sa.Column('tax', sa.Numeric(12, 2), server_default='0', nullable=True),
        sa.Column('shipping', sa.Numeric(12, 2), server_default='0', nullable=True),
        sa.Column('discount', sa.Numeric(12, 2), server_default='0', nullable=True),
        sa.Column('total', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', order_status, server_default='pending', nullable=True),
        sa.Column('payment_status', payment_status, server_default='pending', nullable=True),
        sa.Column('payment_method', sa.String(length=50), nullable=True),
        sa.Column('tracking_number', sa.String(length=100), nullable=True),
        sa.Column('delivered_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *timestamps(),
        sa.CheckConstraint(
            'subtotal >= 0 AND tax >= 0 AND shipping >= 0 AND discount >= 0 AND total >= 0',
            name='order_amounts_non_negative',
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('order_number'),
    )
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_payment_status', 'orders', ['payment_status'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])

    op.create_table(
        'order_items',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('order_id', UUID(as_uuid=True), nullable=False),
        sa.Column('product_id', UUID(as_uuid=True), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('customizations', JSONB(), nullable=True),
        sa.Column('special_instructions', sa.Text(), nullable=True),
        *timestamps(),
        sa.CheckConstraint('quantity >= 1', name='order_item_quantity_positive'),
        sa.CheckConstraint('unit_price >= 0 AND total_price >= 0', name='order_item_prices_valid'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])
    op.create_index('ix_order_items_product_id', 'order_items', ['product_id'])

    op.create_table(
        'reviews',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('product_id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=True),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('reviewer_name', sa.String(length=100), nullable=False),
        sa.Column('reviewer_email', sa.String(length=255), nullable=True),
        sa.Column('status', review_status, server_default='pending', nullable=True),
        sa.Column('moderated_by', UUID(as_uuid=True), nullable=True),
        sa.Column('moderated_at', sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='review_rating_range'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['moderated_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reviews_product_id', 'reviews', ['product_id'])
    op.create_index('ix_reviews_status', 'reviews', ['status'])

    tag_link_table('product_tags', 'product_id', 'products')
    tag_link_table('project_tags', 'project_id', 'projects')
    tag_link_table('blog_post_tags', 'blog_post_id', 'blog_posts')


def downgrade() -> None:
    """Downgrade schema - Drop storefront tables."""
    for table in (
        'blog_post_tags', 'project_tags', 'product_tags',
        'reviews', 'order_items', 'orders', 'contacts', 'projects',
        'blog_posts', 'products', 'tags', 'categories', 'users',
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (
        contact_status, contact_urgency, contact_preferred, contact_subject,
        project_status, blog_post_status, user_status, user_role,
        review_status, payment_status, order_status, product_status,
    ):
        enum_type.drop(bind, checkfirst=True)
