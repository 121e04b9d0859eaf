"""Domain exceptions for the subscription bridge.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any

from app.domain.enums import ProtocolErrorKind, TransportFailureKind


class BridgeException(Exception):
    """Base exception for all subscription bridge errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. operation, kind).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class RemoteServiceException(BridgeException):
    """Raised when the remote subscription service gives no usable answer.

    Subclasses set kind (a TransportFailureKind or ProtocolErrorKind) so
    callers can record why without depending on infrastructure types.
    """

    kind: TransportFailureKind | ProtocolErrorKind


class ValidationException(BridgeException):
    """Raised when input validation fails (e.g. non-positive identifier)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class SubscriptionRequestNotFoundException(BridgeException):
    """Raised when the remote service has no pending request for the pair."""

    def __init__(self, creator_id: int, subscriber_id: int, message: str) -> None:
        """Initialize with the pair and the literal the remote service returned.

        Args:
            creator_id: Creator side of the subscription request.
            subscriber_id: Subscriber side of the subscription request.
            message: User-facing message (the remote literal).
        """
        super().__init__(
            message,
            "SUBSCRIPTION_NOT_FOUND",
            {"creator_id": creator_id, "subscriber_id": subscriber_id},
        )


class SubscriptionRequestRejectedException(BridgeException):
    """Raised when an accept/reject call was answered but not processed.

    Covers every classified outcome other than the expected one, including
    UNCLASSIFIED literals; the remote literal is carried as the message.
    """

    def __init__(
        self,
        creator_id: int,
        subscriber_id: int,
        outcome: str,
        message: str,
    ) -> None:
        super().__init__(
            message,
            "SUBSCRIPTION_NOT_PROCESSED",
            {
                "creator_id": creator_id,
                "subscriber_id": subscriber_id,
                "outcome": outcome,
            },
        )
