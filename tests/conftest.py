"""
Pytest configuration shared by the unit tests.

Puts src/ on sys.path so the package imports without an editable install,
and provides a fake transport that answers from canned payloads.
"""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest


def _ensure_src_on_sys_path() -> None:
    """Add src/ to sys.path if missing."""
    src_root = Path(__file__).resolve().parents[1] / "src"
    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_src_on_sys_path()

# Offline-friendly defaults so nothing reaches a real API or AWS.
os.environ.setdefault("ENVIRONMENT", "dev")
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("ORDER_API_BASE_URL", "https://orders.example.test/api/v1")


@pytest.fixture
def order_payload():
    """Build a successful ``order_view`` response."""

    def _build(order_id, products=None, **fields):
        payload = {
            "response_code": "100",
            "order_id": order_id,
            "acquisition_date": fields.pop("acquisition_date", "2025-06-05 10:15:00"),
            "order_total": fields.pop("order_total", "19.99"),
        }
        if products is not None:
            payload["products"] = products
        payload.update(fields)
        return payload

    return _build


@pytest.fixture
def make_client():
    """
    Build a MagicMock transport.

    ``orders`` maps an order id (int) to a payload dict or an exception
    instance to raise; ``customer`` is the ``customer_find`` response.
    """

    def _make(customer=None, orders=None):
        orders = orders or {}
        client = MagicMock()

        def _post(path, body):
            if path == "customer_find":
                return customer
            outcome = orders[body["order_id"][0]]
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        client.post.side_effect = _post
        return client

    return _make
