"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol

from app.domain.enums import SubscriptionOutcome
from app.domain.value_objects import (
    AuthorizationDecision,
    SubscriptionQuery,
    SubscriptionRecord,
)


class ISubscriptionValidator(Protocol):
    """Protocol for the read-only validate capability of the subscription service."""

    async def validate(self, creator_id: int, subscriber_id: int) -> SubscriptionOutcome:
        """Return the classified outcome; raise RemoteServiceException when unanswered."""


class ISubscriptionService(ISubscriptionValidator, Protocol):
    """Protocol for the full remote subscription service (read and mutate)."""

    async def approve(self, creator_id: int, subscriber_id: int) -> SubscriptionOutcome:
        """Approve a pending request; never retried."""

    async def reject(self, creator_id: int, subscriber_id: int) -> SubscriptionOutcome:
        """Reject a pending request; never retried."""

    async def list_pending_for_creator(self, subscriber_id: int) -> list[SubscriptionRecord]:
        """Pending requests for the given user ([] when none)."""

    async def list_subscribers(self, creator_id: int) -> list[SubscriptionRecord]:
        """Subscribers of creator_id ([] when none)."""


class IDecisionCache(Protocol):
    """Minimal cache protocol for authorization decisions (DIP)."""

    def get(self, key: SubscriptionQuery) -> AuthorizationDecision | None:
        """Return the live cached decision or None."""

    def set(self, key: SubscriptionQuery, value: AuthorizationDecision) -> None:
        """Store a decision for the cache's TTL."""

    async def get_or_load(
        self,
        key: SubscriptionQuery,
        loader: Callable[[], Awaitable[AuthorizationDecision]],
    ) -> AuthorizationDecision:
        """Return the cached decision, or load it once for all concurrent callers."""
