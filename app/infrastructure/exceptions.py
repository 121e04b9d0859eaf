"""Infrastructure exceptions for the remote subscription service.

Extend RemoteServiceException so presentation can map them to HTTP responses
consistently. Neither carries raw payloads or the shared auth key.
"""

from app.domain.enums import ProtocolErrorKind, TransportFailureKind
from app.domain.exceptions import RemoteServiceException


class SubscriptionServiceException(RemoteServiceException):
    """Base exception for remote subscription service calls."""


class ProtocolError(SubscriptionServiceException):
    """Response could not be interpreted (malformed XML or unexpected shape)."""

    def __init__(
        self,
        kind: ProtocolErrorKind,
        operation: str,
        reason: str,
    ) -> None:
        super().__init__(
            f"Unexpected response for {operation}: {reason}",
            "PROTOCOL_ERROR",
            {"kind": kind.value, "operation": operation, "reason": reason},
        )
        self.kind = kind
        self.operation = operation


class TransportFailure(SubscriptionServiceException):
    """Remote call produced no usable response (timeout, connection, HTTP error).

    kind is UNAVAILABLE for reads (safe to try again later) and INDETERMINATE
    for mutations, where the remote side may or may not have applied the change.
    """

    def __init__(
        self,
        kind: TransportFailureKind,
        operation: str,
        reason: str,
        attempts: int = 1,
    ) -> None:
        super().__init__(
            f"Subscription service call {operation} failed: {reason}",
            "SERVICE_UNAVAILABLE",
            {
                "kind": kind.value,
                "operation": operation,
                "reason": reason,
                "attempts": attempts,
            },
        )
        self.kind = kind
        self.operation = operation
        self.attempts = attempts
