"""Unit tests for the derived-field pipeline.

Entities are plain transient model instances; nothing touches the database.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal

import pytest
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
from services.storefront_service.services.derivations import (
    apply_changes,
    derive_fields,
    estimate_read_time,
    slugify,
    stamp_published_at,
    stamp_resolved_at,
)

SLUG_CHARS = re.compile(r"^[a-z0-9-]*$")


def _words(count: int) -> str:
    return " ".join(["word"] * count)


# ---------------------------------------------------------------------------
# slugify
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, expected",
    [
        ("Living Room", "living-room"),
        ("  Mid-Century   Modern!  ", "mid-century-modern"),
        ("Oak & Walnut -- Tables", "oak-walnut-tables"),
        ("Café Chairs", "caf-chairs"),
        ("2024 Collection", "2024-collection"),
    ],
)
def test_slugify_examples(text, expected):
    assert slugify(text) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    ["Living Room", "--Leading and trailing--", "a___b", "Ünïcode Sofa", "  ", "x"],
)
def test_slugify_output_is_clean_and_idempotent(text):
    slug = slugify(text)
    assert SLUG_CHARS.match(slug)
    assert not slug.startswith("-")
    assert not slug.endswith("-")
    assert "--" not in slug
    assert slugify(slug) == slug


# ---------------------------------------------------------------------------
# derive_slug via derive_fields
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_new_category_gets_slug_from_name():
    category = derive_fields(Category(name="Living Room"), is_new=True)
    assert category.slug == "living-room"


@pytest.mark.unit
def test_explicit_slug_is_kept_on_create():
    tag = apply_changes(Tag(), {"name": "Hand Made", "slug": "handmade"}, is_new=True)
    assert tag.slug == "handmade"


@pytest.mark.unit
def test_rename_rederives_slug():
    category = Category(name="Office", slug="office")
    apply_changes(category, {"name": "Home Office"})
    assert category.slug == "home-office"


@pytest.mark.unit
def test_rename_with_explicit_slug_keeps_override():
    category = Category(name="Office", slug="office")
    apply_changes(category, {"name": "Home Office", "slug": "work-space"})
    assert category.slug == "work-space"


@pytest.mark.unit
def test_unrelated_change_keeps_slug():
    category = Category(name="Office", slug="custom-office")
    apply_changes(category, {"description": "Desks and chairs"})
    assert category.slug == "custom-office"


@pytest.mark.unit
def test_resent_name_keeps_custom_slug():
    category = Category(name="Living Room", slug="lounge")
    apply_changes(category, {"name": "Living Room", "description": "Sofas"})
    assert category.slug == "lounge"


@pytest.mark.unit
def test_unsluggable_name_is_rejected():
    with pytest.raises(DomainValidationError):
        derive_fields(Tag(name="!!!"), is_new=True)


# ---------------------------------------------------------------------------
# Blog read time
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    "word_count, minutes",
    [(0, 0), (1, 1), (199, 1), (200, 1), (201, 2), (400, 2), (401, 3)],
)
def test_read_time_is_ceiling_of_words_over_200(word_count, minutes):
    assert estimate_read_time(_words(word_count)) == minutes


@pytest.mark.unit
def test_read_time_is_monotonic():
    times = [estimate_read_time(_words(n)) for n in range(0, 1000, 37)]
    assert times == sorted(times)


@pytest.mark.unit
def test_new_post_derives_read_time_and_slug():
    post = derive_fields(
        BlogPost(title="Caring for Oak", content=_words(201)), is_new=True
    )
    assert post.slug == "caring-for-oak"
    assert post.read_time == 2


@pytest.mark.unit
def test_new_post_keeps_supplied_read_time():
    post = derive_fields(
        BlogPost(title="Quick Tip", content=_words(900), read_time=1), is_new=True
    )
    assert post.read_time == 1


@pytest.mark.unit
def test_content_update_recomputes_read_time():
    post = BlogPost(title="Tip", slug="tip", content=_words(10), read_time=7)
    apply_changes(post, {"content": _words(450)})
    assert post.read_time == 3


@pytest.mark.unit
def test_resent_content_keeps_read_time():
    content = _words(10)
    post = BlogPost(title="Tip", slug="tip", content=content, read_time=7)
    apply_changes(post, {"title": "Tip", "content": content})
    assert post.read_time == 7
    assert post.slug == "tip"


@pytest.mark.unit
def test_title_update_leaves_read_time_alone():
    post = BlogPost(title="Tip", slug="tip", content=_words(10), read_time=7)
    apply_changes(post, {"title": "Better Tip"})
    assert post.read_time == 7
    assert post.slug == "better-tip"


# ---------------------------------------------------------------------------
# Status timestamps
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_publishing_stamps_published_at_once():
    first = datetime(2026, 1, 1, tzinfo=timezone.utc)
    later = datetime(2026, 6, 1, tzinfo=timezone.utc)
    post = BlogPost(title="Hello", status=BlogPostStatus.PUBLISHED)

    stamp_published_at(post, now=first)
    stamp_published_at(post, now=later)

    assert post.published_at == first


@pytest.mark.unit
def test_draft_post_has_no_published_at():
    post = stamp_published_at(BlogPost(title="Draft", status=BlogPostStatus.DRAFT))
    assert post.published_at is None


@pytest.mark.unit
def test_resolving_contact_stamps_resolved_at_once():
    first = datetime(2026, 2, 1, tzinfo=timezone.utc)
    contact = Contact(status=ContactStatus.RESOLVED)

    stamp_resolved_at(contact, now=first)
    stamp_resolved_at(contact, now=datetime(2026, 3, 1, tzinfo=timezone.utc))

    assert contact.resolved_at == first


@pytest.mark.unit
def test_contact_status_change_via_pipeline():
    contact = Contact(status=ContactStatus.NEW)
    apply_changes(contact, {"status": ContactStatus.IN_PROGRESS})
    assert contact.resolved_at is None

    apply_changes(contact, {"status": ContactStatus.RESOLVED})
    assert contact.resolved_at is not None


# ---------------------------------------------------------------------------
# Order line totals
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_line_total_follows_quantity_changes():
    item = derive_fields(
        OrderItem(quantity=2, unit_price=Decimal("49.99")), is_new=True
    )
    assert item.total_price == Decimal("99.98")

    apply_changes(item, {"quantity": 3})
    assert item.total_price == Decimal("149.97")
