"""
Schedule and view derivation over normalized orders.

Pure functions: no I/O, and the current time is always passed in so the
results are reproducible.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional, Sequence

from order_portal.models.order import Order
from order_portal.models.schedule import FlattenedProductRow, NextPayment, UpcomingPayment
from order_portal.utils.decoding import as_utc, format_display_date, is_sentinel_date, parse_api_date

SECONDS_PER_DAY = 24 * 60 * 60


def derive_upcoming_payments(orders: Sequence[Order], now: datetime) -> List[UpcomingPayment]:
    """
    Future recurring charges across all orders, earliest first.

    A product qualifies when it is recurring and has a real (non-sentinel,
    parseable) recurring date strictly after ``now``. Equal dates keep
    their order of appearance.
    """
    cutoff = as_utc(now)
    upcoming: List[UpcomingPayment] = []
    for order in orders:
        for product in order.products:
            if not product.is_recurring or not product.recurring_date:
                continue
            if is_sentinel_date(product.recurring_date):
                continue
            due_at = parse_api_date(product.recurring_date)
            if due_at is None or due_at <= cutoff:
                continue
            upcoming.append(
                UpcomingPayment(
                    product_name=product.name,
                    date=product.recurring_date,
                    amount=product.next_billing_price,
                    is_trial=product.is_trial,
                    due_at=due_at,
                )
            )

    # list.sort is stable, so ties stay in first-seen order
    upcoming.sort(key=lambda payment: payment.due_at)
    return upcoming


def next_payment(upcoming: Sequence[UpcomingPayment], now: datetime) -> Optional[NextPayment]:
    """The first upcoming payment with the number of days left, rounded up."""
    if not upcoming:
        return None
    first = upcoming[0]
    seconds = (first.due_at - as_utc(now)).total_seconds()
    return NextPayment(
        **first.model_dump(),
        days_until=math.ceil(seconds / SECONDS_PER_DAY),
    )


def flatten_products(orders: Sequence[Order]) -> List[FlattenedProductRow]:
    """One row per (order, product) pair in order-then-product order."""
    rows: List[FlattenedProductRow] = []
    for order in orders:
        for position, product in enumerate(order.products):
            rows.append(
                FlattenedProductRow(
                    **product.model_dump(),
                    order_id=order.order_id,
                    order_date=order.date,
                    key=f"{order.order_id}-{position}",
                )
            )
    return rows


def filter_rows(rows: Sequence[FlattenedProductRow], query: str) -> Sequence[FlattenedProductRow]:
    """
    Case-insensitive search over product name and order date.

    A blank query returns ``rows`` itself. Otherwise a row matches when the
    query is a substring of its product name, its display date
    (``Jun 5, 2025``) or its raw order date.
    """
    if not query or not query.strip():
        return rows

    needle = query.lower()
    matches: List[FlattenedProductRow] = []
    for row in rows:
        raw_date = row.order_date or ""
        if (
            needle in row.name.lower()
            or needle in format_display_date(raw_date).lower()
            or needle in raw_date.lower()
        ):
            matches.append(row)
    return matches


def format_price(amount: float) -> str:
    """Dollar rendering used for prices and upcoming charges (``$19.99``)."""
    return f"${amount:.2f}"
