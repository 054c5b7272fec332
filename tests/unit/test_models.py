"""
Pydantic model validation tests.

Run with: pytest tests/unit/test_models.py -v
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from order_portal.models import (
    Customer,
    DashboardView,
    FlattenedProductRow,
    LoginResult,
    NormalizationResult,
    Order,
    Product,
    SkippedOrder,
    UpcomingPayment,
)


class TestCustomer:
    """Test Customer model."""

    def test_valid_customer(self):
        """Valid customer should pass validation."""
        customer = Customer(
            customer_id="C1",
            order_count=2,
            orders=["101", "102"],
            first_name="A",
            last_name="B",
            email="a@b.com",
        )
        assert customer.orders == ["101", "102"]

    def test_negative_order_count_rejected(self):
        """order_count cannot be negative."""
        with pytest.raises(ValidationError):
            Customer(customer_id="C1", order_count=-1, first_name="A", last_name="B", email="x")

    def test_customer_is_immutable(self):
        """Customers cannot be changed after construction."""
        customer = Customer(customer_id="C1", order_count=0, first_name="A", last_name="B", email="x")
        with pytest.raises(ValidationError):
            customer.order_count = 3


class TestOrder:
    """Test Order and Product models."""

    def test_product_defaults(self):
        """Products default to the unknown sentinels and zero prices."""
        product = Product()
        assert product.name == "Unknown Product"
        assert product.order_type == "Unknown"
        assert product.price == 0.0
        assert product.next_billing_price == 0.0
        assert product.is_trial is False
        assert product.is_recurring is False

    def test_negative_price_rejected(self):
        """Prices are non-negative."""
        with pytest.raises(ValidationError):
            Product(price=-1.0)

    def test_order_keeps_id_type(self):
        """Integer and string ids are both kept as given."""
        assert Order(order_id=5).order_id == 5
        assert Order(order_id="5").order_id == "5"

    def test_normalization_result_skipped_ids(self):
        """skipped_ids lists the ids that were left out."""
        result = NormalizationResult(
            skipped=[SkippedOrder(order_id="1", reason="x"), SkippedOrder(order_id="3", reason="y")]
        )
        assert result.skipped_ids == ["1", "3"]


class TestDerivedModels:
    """Test derived view models."""

    def test_flattened_row_has_product_fields(self):
        """Rows carry product fields plus order context."""
        row = FlattenedProductRow(name="Plan A", order_id=1, order_date="2025-06-05", key="1-0")
        assert row.name == "Plan A"
        assert row.order_type == "Unknown"
        assert row.key == "1-0"

    def test_upcoming_payment(self):
        """Upcoming payments keep the raw date next to the parsed one."""
        payment = UpcomingPayment(
            product_name="Plan A",
            date="2099-01-01",
            amount=24.99,
            is_trial=True,
            due_at=datetime(2099, 1, 1, tzinfo=timezone.utc),
        )
        assert payment.date == "2099-01-01"

    def test_login_result_ok(self):
        """ok reflects whether a customer was resolved."""
        assert not LoginResult(error_message="nope").ok
        customer = Customer(customer_id="C1", order_count=0, first_name="A", last_name="B", email="x")
        assert LoginResult(customer=customer).ok

    def test_dashboard_defaults(self):
        """An empty dashboard has no rows and no next payment."""
        customer = Customer(customer_id="C1", order_count=0, first_name="A", last_name="B", email="x")
        view = DashboardView(customer=customer)
        assert view.orders == []
        assert view.next_payment is None
        assert view.error is None
