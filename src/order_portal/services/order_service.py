"""
Order normalization service.

Fetches every order of a customer from ``order_view`` and decodes it into
the canonical Order shape. Fetches run concurrently on a small thread pool
and are re-assembled in input order. A failing order is skipped and
reported in the result instead of failing the batch.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple, Union

from order_portal.config.settings import Settings
from order_portal.models.order import NormalizationResult, Order, SkippedOrder
from order_portal.repositories.order_api import ORDER_VIEW, Transport
from order_portal.utils.decoding import decode_order, is_success, to_int
from order_portal.utils.logging_config import get_logger

logger = get_logger(__name__)

_Outcome = Tuple[str, Union[Order, str]]


class OrderService:
    """Best-effort batch loader for order details."""

    def __init__(self, client: Transport, settings: Optional[Settings] = None):
        settings = settings or Settings()
        self.client = client
        self.max_workers = max(1, settings.max_workers)

    def normalize_orders(self, order_ids: Sequence[str]) -> NormalizationResult:
        """Fetch and decode ``order_ids``; output keeps input order minus skipped ids."""
        start = time.perf_counter()
        ids = [str(order_id) for order_id in order_ids]
        if not ids:
            return NormalizationResult()

        workers = min(self.max_workers, len(ids))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes: List[_Outcome] = list(pool.map(self._fetch_one, ids))

        orders: List[Order] = []
        skipped: List[SkippedOrder] = []
        for order_id, outcome in outcomes:
            if isinstance(outcome, Order):
                orders.append(outcome)
            else:
                skipped.append(SkippedOrder(order_id=order_id, reason=outcome))

        logger.info(
            "Orders normalized",
            extra={
                "requested": len(ids),
                "loaded": len(orders),
                "skipped": len(skipped),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return NormalizationResult(orders=orders, skipped=skipped)

    def _fetch_one(self, order_id: str) -> _Outcome:
        """Fetch one order. Never raises; failures come back as a reason string."""
        try:
            body = {"order_id": [to_int(order_id)], "return_variants": 1}
            data = self.client.post(ORDER_VIEW, body)
            if not is_success(data):
                reason = f"response_code {data.get('response_code')}"
            else:
                return order_id, decode_order(data, order_id)
        except Exception as exc:  # isolate per-order failures
            reason = f"{exc.__class__.__name__}: {exc}"

        logger.warning("Skipping order", extra={"order_id": order_id, "reason": reason})
        return order_id, reason
