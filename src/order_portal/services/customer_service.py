"""
Customer identity service.

Resolves an email + ZIP pair into the single matching customer record of
the order-management API.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from order_portal.config.settings import Settings
from order_portal.models.customer import Customer
from order_portal.repositories.order_api import CUSTOMER_FIND, Transport
from order_portal.utils.decoding import decode_customer, is_success, to_int
from order_portal.utils.error_handling import AmbiguousOrNotFoundError, ApiError
from order_portal.utils.logging_config import get_logger

logger = get_logger(__name__)


class CustomerService:
    """Service for customer identity lookups."""

    def __init__(self, client: Transport, settings: Optional[Settings] = None):
        settings = settings or Settings()
        self.client = client
        self.start_date = settings.lookup_start_date
        self.end_date = settings.lookup_end_date

    def build_lookup(self, email: str, zip_code: str) -> Dict[str, Any]:
        """Request body for ``customer_find`` across all campaigns."""
        return {
            "campaign_id": "all",
            "start_date": self.start_date,
            "end_date": self.end_date,
            "criteria": {"zip": zip_code, "email": email},
            "search_type": "all",
            "return_type": "customer_view",
        }

    def resolve_customer(self, email: str, zip_code: str) -> Customer:
        """
        Return the one customer matching ``email`` and ``zip_code``.

        Raises ApiError on a non-success response code and
        AmbiguousOrNotFoundError unless exactly one customer matched.
        Transport failures propagate unchanged; nothing is retried.
        """
        data = self.client.post(CUSTOMER_FIND, self.build_lookup(email, zip_code))
        if not is_success(data):
            logger.warning(
                "Customer lookup rejected",
                extra={"response_code": data.get("response_code")},
            )
            raise ApiError("API Error", response_code=data.get("response_code"))

        total = _match_count(data.get("total_customers"))
        if total != 1:
            logger.info("Customer lookup did not match exactly one", extra={"total": total})
            raise AmbiguousOrNotFoundError(total_matches=total)

        customer_id = _sole_id(data.get("customer_ids"))
        try:
            record = (data.get("data") or {})[customer_id]
            customer = decode_customer(customer_id, record)
        except (KeyError, TypeError, ValueError) as exc:
            raise ApiError(f"Malformed customer record for {customer_id}") from exc

        logger.info(
            "Customer resolved",
            extra={"customer_id": customer.customer_id, "order_count": customer.order_count},
        )
        return customer


def _match_count(value: Any) -> Optional[int]:
    try:
        return to_int(value)
    except ValueError:
        return None


def _sole_id(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ""
    return str(value)
