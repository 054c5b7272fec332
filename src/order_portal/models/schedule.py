"""Derived views over normalized orders. Recomputed on demand, never stored."""

from datetime import datetime
from typing import Union

from pydantic import BaseModel, ConfigDict

from order_portal.models.order import Product


class UpcomingPayment(BaseModel):
    """A future recurring charge."""

    model_config = ConfigDict(frozen=True)

    product_name: str
    date: str
    amount: float
    is_trial: bool
    due_at: datetime


class NextPayment(UpcomingPayment):
    """The earliest upcoming payment with a whole-day countdown."""

    days_until: int


class FlattenedProductRow(Product):
    """One (order, product) pair for list display and search."""

    order_id: Union[int, str]
    order_date: str
    key: str
