"""
Login and dashboard facades for the presentation layer.

Both return plain result models instead of raising, so the caller only
switches between the unauthenticated, authenticated and error states.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from order_portal.config.settings import Settings
from order_portal.models.customer import Customer
from order_portal.models.portal import DashboardView, LoginResult
from order_portal.repositories.order_api import OrderApiClient, Transport
from order_portal.services.customer_service import CustomerService
from order_portal.services.order_service import OrderService
from order_portal.services.schedule_service import (
    derive_upcoming_payments,
    flatten_products,
    next_payment,
)
from order_portal.utils.error_handling import PortalError, user_message_for
from order_portal.utils.logging_config import get_logger
from order_portal.utils.validators import clean_credentials

logger = get_logger(__name__)

DASHBOARD_LOAD_ERROR = "Failed to load order details"


class PortalService:
    """Ties identity, order loading and schedule derivation together for one session."""

    def __init__(self, client: Transport, settings: Optional[Settings] = None):
        self.customers = CustomerService(client, settings)
        self.orders = OrderService(client, settings)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "PortalService":
        settings = settings or Settings.from_environment()
        return cls(OrderApiClient.from_settings(settings), settings)

    def login(self, email: str, zip_code: str) -> LoginResult:
        """Resolve the customer or return the message to show on the login form."""
        try:
            email, zip_code = clean_credentials(email, zip_code)
            customer = self.customers.resolve_customer(email, zip_code)
        except PortalError as exc:
            logger.info("Login failed", extra={"error_type": exc.__class__.__name__})
            return LoginResult(error_message=user_message_for(exc))
        return LoginResult(customer=customer)

    def load_dashboard(self, customer: Customer, now: datetime) -> DashboardView:
        """
        Load orders and derive the views for ``customer``.

        A customer without orders gets an empty view without any request.
        Any failure yields an empty view carrying the generic banner.
        """
        if not customer.orders:
            return DashboardView(customer=customer)

        try:
            result = self.orders.normalize_orders(customer.orders)
            upcoming = derive_upcoming_payments(result.orders, now)
            return DashboardView(
                customer=customer,
                orders=result.orders,
                rows=flatten_products(result.orders),
                upcoming_payments=upcoming,
                next_payment=next_payment(upcoming, now),
                skipped=result.skipped,
            )
        except Exception:  # broad: the dashboard shows a banner instead of failing
            logger.exception(
                "Error fetching order details",
                extra={"customer_id": customer.customer_id},
            )
            return DashboardView(customer=customer, error=DASHBOARD_LOAD_ERROR)
