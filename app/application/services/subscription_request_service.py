"""Subscription request service: accept/reject/list on behalf of creators.

Turns classified outcomes into results or business exceptions. Transport
and protocol failures (RemoteServiceException) propagate unchanged; the
presentation layer collapses them to a generic 503.
"""

from __future__ import annotations

import logging

from app.application.interfaces.services import ISubscriptionService
from app.core.constants import (
    LITERAL_SUBSCRIPTION_ACCEPTED,
    LITERAL_SUBSCRIPTION_NOT_FOUND,
    LITERAL_SUBSCRIPTION_REJECTED,
)
from app.domain.enums import SubscriptionOutcome
from app.domain.exceptions import (
    SubscriptionRequestNotFoundException,
    SubscriptionRequestRejectedException,
)
from app.domain.value_objects import SubscriptionQuery, SubscriptionRecord

logger = logging.getLogger(__name__)

_NOT_PROCESSED_MESSAGE = "Subscription request could not be processed"


class SubscriptionRequestService:
    """Application service behind the subscription request endpoints."""

    def __init__(self, subscription_service: ISubscriptionService) -> None:
        self.subscription_service = subscription_service

    async def accept(self, creator_id: int, subscriber_id: int) -> str:
        """Approve a pending request; return the success message.

        Raises:
            SubscriptionRequestNotFoundException: No such pending request.
            SubscriptionRequestRejectedException: Any other non-approved outcome.
        """
        query = SubscriptionQuery(creator_id=creator_id, subscriber_id=subscriber_id)
        outcome = await self.subscription_service.approve(query.creator_id, query.subscriber_id)
        self._raise_unless(query, outcome, SubscriptionOutcome.APPROVED)
        return LITERAL_SUBSCRIPTION_ACCEPTED

    async def reject(self, creator_id: int, subscriber_id: int) -> str:
        """Reject a pending request; return the success message.

        Raises:
            SubscriptionRequestNotFoundException: No such pending request.
            SubscriptionRequestRejectedException: Any other non-rejected outcome.
        """
        query = SubscriptionQuery(creator_id=creator_id, subscriber_id=subscriber_id)
        outcome = await self.subscription_service.reject(query.creator_id, query.subscriber_id)
        self._raise_unless(query, outcome, SubscriptionOutcome.REJECTED)
        return LITERAL_SUBSCRIPTION_REJECTED

    async def list_pending(self, subscriber_id: int) -> list[SubscriptionRecord]:
        return await self.subscription_service.list_pending_for_creator(subscriber_id)

    async def list_subscribers(self, creator_id: int) -> list[SubscriptionRecord]:
        return await self.subscription_service.list_subscribers(creator_id)

    @staticmethod
    def _raise_unless(
        query: SubscriptionQuery,
        outcome: SubscriptionOutcome,
        expected: SubscriptionOutcome,
    ) -> None:
        if outcome is expected:
            return
        if outcome is SubscriptionOutcome.NOT_FOUND:
            raise SubscriptionRequestNotFoundException(
                query.creator_id, query.subscriber_id, LITERAL_SUBSCRIPTION_NOT_FOUND
            )
        logger.info(
            "Subscription request not processed: creator=%s subscriber=%s outcome=%s",
            query.creator_id,
            query.subscriber_id,
            outcome.value,
        )
        raise SubscriptionRequestRejectedException(
            query.creator_id,
            query.subscriber_id,
            outcome.value,
            _NOT_PROCESSED_MESSAGE,
        )
