"""Exception taxonomy shared by the identity, order and portal services."""

from typing import Optional

GENERIC_LOGIN_MESSAGE = "Login failed. Please try again."
NOT_FOUND_MESSAGE = (
    "No account found with this email and ZIP code. "
    "If you have more than one account, please contact support."
)


class PortalError(Exception):
    """Base class for portal errors."""

    user_message = GENERIC_LOGIN_MESSAGE

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        if user_message is not None:
            self.user_message = user_message


class TransportError(PortalError):
    """Raised when the HTTP layer fails (connection, timeout, status, body)."""


class ApiError(PortalError):
    """Raised when the API answers with a non-success response code."""

    def __init__(self, message: str = "API Error", response_code: Optional[str] = None):
        super().__init__(message)
        self.response_code = response_code


class AmbiguousOrNotFoundError(PortalError):
    """
    Raised when an identity lookup does not match exactly one customer.

    Zero and multiple matches are reported the same way upstream, so the two
    cases are not distinguished here either.
    """

    user_message = NOT_FOUND_MESSAGE

    def __init__(
        self, message: str = "Please contact support", total_matches: Optional[int] = None
    ):
        super().__init__(message)
        self.total_matches = total_matches


class InputValidationError(PortalError):
    """Raised when login input is incomplete."""

    def __init__(self, message: str = "Please fill in both email and ZIP code"):
        super().__init__(message, user_message=message)


def user_message_for(error: Exception) -> str:
    """Map any error to the message shown on the login form."""
    if isinstance(error, PortalError):
        return error.user_message
    return GENERIC_LOGIN_MESSAGE
