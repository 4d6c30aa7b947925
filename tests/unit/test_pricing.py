"""Unit tests for order totals and rating aggregation (pure functions)."""

from decimal import Decimal

import pytest
from services.storefront_service.services.order_ops import compute_order_totals
from services.storefront_service.services.rating_ops import aggregate_ratings

# ---------------------------------------------------------------------------
# compute_order_totals
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_totals_below_free_shipping_threshold():
    totals = compute_order_totals(Decimal("200.00"))
    assert totals.subtotal == Decimal("200.00")
    assert totals.tax == Decimal("16.00")
    assert totals.shipping == Decimal("50.00")
    assert totals.discount == Decimal("0.00")
    assert totals.total == Decimal("266.00")


@pytest.mark.unit
def test_exactly_500_still_pays_shipping():
    totals = compute_order_totals(Decimal("500.00"))
    assert totals.shipping == Decimal("50.00")
    assert totals.total == Decimal("590.00")


@pytest.mark.unit
def test_above_500_ships_free():
    totals = compute_order_totals(Decimal("500.01"))
    assert totals.shipping == Decimal("0.00")
    assert totals.tax == Decimal("40.00")
    assert totals.total == Decimal("540.01")


@pytest.mark.unit
def test_tax_rounds_half_up_to_cents():
    # 8% of 10.06 = 0.8048 -> 0.80; 8% of 10.19 = 0.8152 -> 0.82
    assert compute_order_totals(Decimal("10.06")).tax == Decimal("0.80")
    assert compute_order_totals(Decimal("10.19")).tax == Decimal("0.82")


# ---------------------------------------------------------------------------
# aggregate_ratings
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_mean_of_approved_ratings():
    assert aggregate_ratings([5, 4, 3]) == (Decimal("4.00"), 3)


@pytest.mark.unit
def test_mean_is_rounded_to_two_places():
    rating, count = aggregate_ratings([5, 4, 4])
    assert rating == Decimal("4.33")
    assert count == 3


@pytest.mark.unit
def test_no_ratings_gives_zero():
    assert aggregate_ratings([]) == (Decimal("0.00"), 0)
