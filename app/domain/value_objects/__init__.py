"""Domain value objects and shared value types."""

from app.domain.value_objects.core import (
    AuthorizationDecision,
    DecisionReason,
    SubscriptionQuery,
    SubscriptionRecord,
)

__all__ = [
    "AuthorizationDecision",
    "DecisionReason",
    "SubscriptionQuery",
    "SubscriptionRecord",
]
