"""Lightweight validation helpers for login input."""

from typing import Any, Tuple

from order_portal.utils.error_handling import InputValidationError


def ensure_present(value: Any, field: str) -> None:
    """Raise ValueError if value is falsy."""
    if value in (None, "", []) or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{field} is required")


def clean_credentials(email: str, zip_code: str) -> Tuple[str, str]:
    """Strip login fields and reject blanks before any request is made."""
    try:
        ensure_present(email, "email")
        ensure_present(zip_code, "zip")
    except ValueError as exc:
        raise InputValidationError() from exc
    return email.strip(), zip_code.strip()
