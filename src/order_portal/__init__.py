"""Customer order history and subscription schedule on top of an order-management API."""

__version__ = "0.1.0"
