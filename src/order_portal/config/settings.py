"""
Environment-specific configuration settings.

Defaults match the upstream order-management API deployment used in dev.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Optional, Tuple

import boto3

from order_portal.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Settings:
    """Application settings with dev-friendly defaults."""

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"

    # Order API connection
    api_base_url: str = ""
    api_username: Optional[str] = None
    api_password: Optional[str] = None
    api_secret_arn: Optional[str] = None
    api_timeout_seconds: float = 60.0

    # Customer lookup window sent with every customer_find request
    lookup_start_date: str = "01/01/2020"
    lookup_end_date: str = "12/31/2025"

    # Order fetch fan-out
    max_workers: int = 8

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            environment=os.environ.get("ENVIRONMENT", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            api_base_url=os.environ.get("ORDER_API_BASE_URL", ""),
            api_username=os.environ.get("ORDER_API_USERNAME"),
            api_password=os.environ.get("ORDER_API_PASSWORD"),
            api_secret_arn=os.environ.get("ORDER_API_SECRET_ARN"),
            api_timeout_seconds=float(os.environ.get("ORDER_API_TIMEOUT_SECONDS", "60")),
            lookup_start_date=os.environ.get("LOOKUP_START_DATE", "01/01/2020"),
            lookup_end_date=os.environ.get("LOOKUP_END_DATE", "12/31/2025"),
            max_workers=max(1, int(os.environ.get("ORDER_FETCH_WORKERS", "8"))),
        )

    def api_credentials(self) -> Optional[Tuple[str, str]]:
        """
        Resolve basic-auth credentials for the order API.

        Plain environment credentials win; otherwise the secret named by
        ``api_secret_arn`` is read from Secrets Manager.
        """
        if self.api_username and self.api_password:
            return self.api_username, self.api_password
        if self.api_secret_arn:
            return _secret_to_credentials(self.api_secret_arn)
        logger.warning("Order API credentials not configured; requests will be anonymous")
        return None


def _secret_to_credentials(secret_arn: str) -> Optional[Tuple[str, str]]:
    """Read a ``{"username": ..., "password": ...}`` secret."""
    try:
        sm = boto3.client("secretsmanager")
        secret_value = sm.get_secret_value(SecretId=secret_arn)["SecretString"]
        secret = json.loads(secret_value)
        username = secret.get("username")
        password = secret.get("password")
        if not (username and password):
            return None
        return username, password
    except Exception as exc:
        logger.warning("Failed to load order API secret", extra={"error": str(exc)})
        return None
