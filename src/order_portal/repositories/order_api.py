"""HTTP transport for the order-management API."""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

import requests

from order_portal.config.settings import Settings
from order_portal.utils.error_handling import TransportError
from order_portal.utils.logging_config import get_logger

logger = get_logger(__name__)

CUSTOMER_FIND = "customer_find"
ORDER_VIEW = "order_view"


class Transport(Protocol):
    """Anything that can POST a JSON body to an API path and return JSON."""

    def post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        ...


class OrderApiClient:
    """
    Basic-auth JSON client. One instance is shared by the services of a session.

    ``requests.Session`` is not guaranteed thread-safe and order fetches run
    on a thread pool, so each calling thread gets its own session built by
    ``session_factory`` (``requests.Session`` by default).
    """

    def __init__(
        self,
        base_url: str,
        auth: Optional[Tuple[str, str]] = None,
        timeout_seconds: float = 60.0,
        session_factory: Optional[Callable[[], requests.Session]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._auth = auth
        self._session_factory = session_factory
        self._local = threading.local()

    @classmethod
    def from_settings(cls, settings: Settings) -> "OrderApiClient":
        return cls(
            base_url=settings.api_base_url,
            auth=settings.api_credentials(),
            timeout_seconds=settings.api_timeout_seconds,
        )

    def _get_session(self) -> requests.Session:
        """Session bound to the current thread, created on first use."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = (self._session_factory or requests.Session)()
            session.headers.update({"Content-Type": "application/json"})
            if self._auth:
                session.auth = self._auth
            self._local.session = session
        return session

    def post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST ``body`` to ``path`` and return the decoded JSON object."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self._get_session().post(url, json=body, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            logger.error(
                "Order API request failed",
                extra={"path": path, "status_code": status_code},
            )
            raise TransportError(f"{path}: HTTP {status_code}") from exc
        except requests.RequestException as exc:
            logger.error("Order API unreachable", extra={"path": path, "error": str(exc)})
            raise TransportError(f"{path}: {exc.__class__.__name__}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(f"{path}: response was not valid JSON") from exc
        if not isinstance(payload, dict):
            raise TransportError(f"{path}: expected a JSON object")
        return payload
