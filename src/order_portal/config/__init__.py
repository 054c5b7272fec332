"""Runtime configuration."""

from order_portal.config.settings import Settings  # noqa: F401
