"""Application interfaces (ports): service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.services import (
    IDecisionCache,
    ISubscriptionService,
    ISubscriptionValidator,
)

__all__ = [
    "IDecisionCache",
    "ISubscriptionService",
    "ISubscriptionValidator",
]
