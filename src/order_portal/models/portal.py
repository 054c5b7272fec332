"""Results handed back to the presentation layer."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from order_portal.models.customer import Customer
from order_portal.models.order import Order, SkippedOrder
from order_portal.models.schedule import FlattenedProductRow, NextPayment, UpcomingPayment


class LoginResult(BaseModel):
    """Either an authenticated customer or a message for the login form."""

    model_config = ConfigDict(frozen=True)

    customer: Optional[Customer] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.customer is not None


class DashboardView(BaseModel):
    """Everything the dashboard renders for one customer."""

    model_config = ConfigDict(frozen=True)

    customer: Customer
    orders: List[Order] = Field(default_factory=list)
    rows: List[FlattenedProductRow] = Field(default_factory=list)
    upcoming_payments: List[UpcomingPayment] = Field(default_factory=list)
    next_payment: Optional[NextPayment] = None
    skipped: List[SkippedOrder] = Field(default_factory=list)
    error: Optional[str] = None
