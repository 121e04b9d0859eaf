"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import (
    OperationName,
    ProtocolErrorKind,
    SubscriptionOutcome,
    TransportFailureKind,
)
from app.domain.exceptions import (
    BridgeException,
    RemoteServiceException,
    SubscriptionRequestNotFoundException,
    SubscriptionRequestRejectedException,
    ValidationException,
)
from app.domain.value_objects import (
    AuthorizationDecision,
    SubscriptionQuery,
    SubscriptionRecord,
)

__all__ = [
    "AuthorizationDecision",
    "BridgeException",
    "RemoteServiceException",
    "OperationName",
    "ProtocolErrorKind",
    "SubscriptionOutcome",
    "SubscriptionQuery",
    "SubscriptionRecord",
    "SubscriptionRequestNotFoundException",
    "SubscriptionRequestRejectedException",
    "TransportFailureKind",
    "ValidationException",
]
