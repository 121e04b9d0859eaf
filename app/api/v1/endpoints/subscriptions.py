"""Subscription request API: thin routes delegating to SubscriptionRequestService.

Business rejections map to 404/400 through the exception handlers;
transport and protocol failures map to a generic 503.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Query

from app.api.v1.dependencies import SubscriptionRequestServiceDep
from app.schemas.subscription import (
    SubscriptionActionRequest,
    SubscriptionActionResponse,
    SubscriptionListResponse,
    SubscriptionRecordResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/accept", response_model=SubscriptionActionResponse)
async def accept_subscription(
    body: SubscriptionActionRequest,
    svc: SubscriptionRequestServiceDep,
) -> SubscriptionActionResponse:
    """Approve a pending subscription request (404 if there is none)."""
    message = await svc.accept(body.creator_id, body.subscriber_id)
    return SubscriptionActionResponse(message=message)


@router.post("/reject", response_model=SubscriptionActionResponse)
async def reject_subscription(
    body: SubscriptionActionRequest,
    svc: SubscriptionRequestServiceDep,
) -> SubscriptionActionResponse:
    """Reject a pending subscription request (404 if there is none)."""
    message = await svc.reject(body.creator_id, body.subscriber_id)
    return SubscriptionActionResponse(message=message)


@router.get("/pending", response_model=SubscriptionListResponse)
async def list_pending(
    svc: SubscriptionRequestServiceDep,
    subscriber_id: Annotated[int, Query(gt=0)],
) -> SubscriptionListResponse:
    """Pending subscription requests for the given user."""
    records = await svc.list_pending(subscriber_id)
    logger.debug("Pending requests for %s: %s", subscriber_id, len(records))
    return SubscriptionListResponse(
        data=[SubscriptionRecordResponse.from_record(r) for r in records]
    )


@router.get("/subscribers", response_model=SubscriptionListResponse)
async def list_subscribers(
    svc: SubscriptionRequestServiceDep,
    creator_id: Annotated[int, Query(gt=0)],
) -> SubscriptionListResponse:
    """Current subscribers of creator_id."""
    records = await svc.list_subscribers(creator_id)
    return SubscriptionListResponse(
        data=[SubscriptionRecordResponse.from_record(r) for r in records]
    )
