"""
Domain error kinds raised by the subscription store.

Each kind carries the HTTP status it maps to; the translation into a
response body happens once, in the exception handlers registered by
``subscription_service.main``.
"""


class SubscriptionServiceError(Exception):
    """Base class for every error the store surfaces to callers."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}


class ValidationError(SubscriptionServiceError):
    """Malformed input: bad date format, missing field, invalid UUID."""

    status_code = 400


class NotFoundError(SubscriptionServiceError):
    """No row matched the (user_id, service_name) key."""

    status_code = 404

    def __init__(self, message: str = "subscription not found") -> None:
        super().__init__(message)


class ConflictError(SubscriptionServiceError):
    """A subscription with the same key already exists."""

    status_code = 409

    def __init__(self, message: str = "subscription already exists") -> None:
        super().__init__(message)


class InternalError(SubscriptionServiceError):
    """Any storage-layer failure. The message never carries driver details."""

    status_code = 500

    def __init__(self, message: str = "internal server error") -> None:
        super().__init__(message)
