"""
Wire-format decoding for the order-management API.

The API returns numbers and flags as strings, omits fields freely and uses
an all-zero date to mean "no date". Everything that turns those loose
payloads into strict models lives here, so the services can stay typed.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from order_portal.models.customer import Customer
from order_portal.models.order import UNKNOWN_ORDER_TYPE, UNKNOWN_PRODUCT, Order, Product

SUCCESS_CODE = "100"
TRIAL_FLAG = "1"
RECURRING_MARKER = "subscription"

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M %p",
)
_DIGITS = re.compile(r"\d")


def is_success(payload: Mapping[str, Any]) -> bool:
    """True when the API reported the literal success code."""
    return payload.get("response_code") == SUCCESS_CODE


def to_float(value: Any, default: float = 0.0) -> float:
    """Parse a loosely-typed amount; anything unusable becomes ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(str(value).strip())
    except ValueError:
        return default
    if math.isnan(number) or math.isinf(number) or number < 0:
        return default
    return number


def to_int(value: Any) -> int:
    """Parse a string-encoded integer. Raises ValueError when it is not one."""
    if value is None or isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    return int(str(value).strip())


def to_flag(value: Any) -> bool:
    return value == TRIAL_FLAG


def is_sentinel_date(value: Optional[str]) -> bool:
    """True for all-zero dates such as ``0000-00-00`` or ``0000-00-00 00:00:00``."""
    if not value:
        return False
    digits = _DIGITS.findall(value)
    return bool(digits) and all(d == "0" for d in digits)


def parse_api_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an API date string into an aware UTC datetime.

    Returns None for empty, sentinel or unrecognised values, and for
    offset dates whose UTC instant falls outside ``datetime``'s range.
    Dates without an offset are read as UTC.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if not text or is_sentinel_date(text):
        return None

    parsed = None
    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
            break
        except ValueError:
            continue
    if parsed is None:
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # offset pushes the instant outside datetime's range
        return None


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with parsed API dates."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_display_date(value: Optional[str]) -> str:
    """Render an API date as ``Jun 5, 2025``; unparseable values come back unchanged."""
    parsed = parse_api_date(value)
    if parsed is None:
        return value or ""
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def split_order_list(value: Any) -> List[str]:
    """Split the comma-joined ``order_list`` field, keeping order and duplicates."""
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return str(value).split(",")


def decode_customer(customer_id: str, record: Mapping[str, Any]) -> Customer:
    """
    Build a Customer from one ``customer_view`` record.

    Raises KeyError/ValueError when the record is structurally broken; the
    caller turns that into an API error rather than a partial Customer.
    """
    return Customer(
        customer_id=str(customer_id),
        order_count=to_int(record["order_count"]),
        orders=split_order_list(record["order_list"]),
        first_name=str(record.get("first_name") or ""),
        last_name=str(record.get("last_name") or ""),
        email=str(record.get("email") or ""),
    )


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def decode_product(raw: Any) -> Product:
    """Decode one entry of an order's ``products`` array with defaults for every field."""
    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    billing_model = data.get("billing_model")
    if not isinstance(billing_model, Mapping):
        billing_model = {}

    order_type = _text(billing_model.get("name")) or UNKNOWN_ORDER_TYPE
    return Product(
        name=_text(data.get("name")) or UNKNOWN_PRODUCT,
        price=to_float(data.get("price")),
        order_type=order_type,
        recurring_date=_text(data.get("recurring_date")),
        next_billing_price=to_float(data.get("next_subscription_product_price")),
        is_trial=to_flag(data.get("is_in_trial")),
        is_recurring=RECURRING_MARKER in order_type.lower(),
    )


def _product_entries(value: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, Mapping):
        return list(value.values())
    return []


def decode_order(payload: Dict[str, Any], requested_id: str) -> Order:
    """Decode a successful ``order_view`` response into an Order."""
    order_id = payload.get("order_id")
    if order_id is None or order_id == "":
        order_id = requested_id
    return Order(
        order_id=order_id,
        date=_text(payload.get("acquisition_date")) or "",
        total=to_float(payload.get("order_total")),
        products=[decode_product(item) for item in _product_entries(payload.get("products"))],
    )
