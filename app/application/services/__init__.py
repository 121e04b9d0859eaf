"""Application services: authorization gate and subscription request handling."""

from app.application.services.authorization_gate import AuthorizationGate
from app.application.services.subscription_request_service import (
    SubscriptionRequestService,
)

__all__ = [
    "AuthorizationGate",
    "SubscriptionRequestService",
]
