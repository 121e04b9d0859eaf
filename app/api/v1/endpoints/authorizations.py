"""Authorization API: subscription checks for content-serving callers.

Every response is 200 with only the allowed flag; remote failures are
denials (fail-closed) and reasons are logged, never returned.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from app.api.v1.dependencies import AuthorizationGateDep
from app.domain.value_objects import SubscriptionQuery
from app.schemas.authorization import (
    AuthorizationBatchRequest,
    AuthorizationBatchResponse,
    AuthorizationResponse,
    AuthorizationResultItem,
)

router = APIRouter()


@router.get("", response_model=AuthorizationResponse)
async def authorize(
    gate: AuthorizationGateDep,
    creator_id: Annotated[int, Query(gt=0)],
    subscriber_id: Annotated[int, Query(gt=0)],
) -> AuthorizationResponse:
    """May subscriber_id access creator_id's content?"""
    decision = await gate.authorize(creator_id, subscriber_id)
    return AuthorizationResponse(allowed=decision.allowed)


@router.post("/batch", response_model=AuthorizationBatchResponse)
async def authorize_batch(
    body: AuthorizationBatchRequest,
    gate: AuthorizationGateDep,
) -> AuthorizationBatchResponse:
    """Check many pairs at once (e.g. every item of a listing).

    Distinct pairs are checked concurrently; repeated pairs reuse the
    request's cached decision.
    """
    queries = [
        SubscriptionQuery(creator_id=item.creator_id, subscriber_id=item.subscriber_id)
        for item in body.queries
    ]
    decisions = await gate.authorize_many(queries)
    return AuthorizationBatchResponse(
        results=[
            AuthorizationResultItem(
                creator_id=q.creator_id,
                subscriber_id=q.subscriber_id,
                allowed=decisions[q].allowed,
            )
            for q in queries
        ]
    )
