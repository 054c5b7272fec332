"""Pydantic models for customers, orders and derived views."""

from order_portal.models.customer import Customer  # noqa: F401
from order_portal.models.order import (  # noqa: F401
    NormalizationResult,
    Order,
    Product,
    SkippedOrder,
)
from order_portal.models.portal import DashboardView, LoginResult  # noqa: F401
from order_portal.models.schedule import (  # noqa: F401
    FlattenedProductRow,
    NextPayment,
    UpcomingPayment,
)
