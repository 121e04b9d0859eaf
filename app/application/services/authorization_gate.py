"""Authorization gate: fail-closed subscription checks with request-scoped caching."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from app.application.interfaces.services import IDecisionCache, ISubscriptionValidator
from app.domain.enums import SubscriptionOutcome
from app.domain.exceptions import RemoteServiceException
from app.domain.value_objects import AuthorizationDecision, SubscriptionQuery

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Single entry point for "may subscriber S read creator C's content?".

    Grants only on an explicit APPROVED outcome from validate; every other
    outcome, transport failure, or protocol error is a cached denial. Build
    one gate (and cache) per request so decisions never leak across requests.
    """

    def __init__(self, validator: ISubscriptionValidator, cache: IDecisionCache) -> None:
        self.validator = validator
        self.cache = cache

    async def authorize(self, creator_id: int, subscriber_id: int) -> AuthorizationDecision:
        """Return the (possibly cached) decision for the pair."""
        query = SubscriptionQuery(creator_id=creator_id, subscriber_id=subscriber_id)
        return await self.cache.get_or_load(query, lambda: self._decide(query))

    async def authorize_many(
        self, queries: Iterable[SubscriptionQuery]
    ) -> dict[SubscriptionQuery, AuthorizationDecision]:
        """Authorize distinct pairs concurrently (one remote call per pair)."""
        distinct = list(dict.fromkeys(queries))
        decisions = await asyncio.gather(
            *(self.authorize(q.creator_id, q.subscriber_id) for q in distinct)
        )
        return dict(zip(distinct, decisions))

    async def _decide(self, query: SubscriptionQuery) -> AuthorizationDecision:
        try:
            outcome = await self.validator.validate(query.creator_id, query.subscriber_id)
        except RemoteServiceException as e:
            decision = AuthorizationDecision.deny(e.kind)
        else:
            if outcome is SubscriptionOutcome.APPROVED:
                decision = AuthorizationDecision.grant()
            else:
                decision = AuthorizationDecision.deny(outcome)
        if not decision.allowed:
            logger.info(
                "Access denied: creator=%s subscriber=%s reason=%s",
                query.creator_id,
                query.subscriber_id,
                decision.reason.value,
            )
        return decision
