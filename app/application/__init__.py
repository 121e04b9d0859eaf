"""Application layer: interfaces and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (remote client, decision cache).
"""

from app.application.interfaces import (
    IDecisionCache,
    ISubscriptionService,
    ISubscriptionValidator,
)
from app.application.services import AuthorizationGate, SubscriptionRequestService

__all__ = [
    "AuthorizationGate",
    "IDecisionCache",
    "ISubscriptionService",
    "ISubscriptionValidator",
    "SubscriptionRequestService",
]
