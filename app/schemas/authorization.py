"""Authorization check API schemas.

Responses carry only the allow/deny bit; the denial reason stays in the
server log.
"""

from pydantic import BaseModel, Field


class AuthorizationResponse(BaseModel):
    """Response for GET /authorizations."""

    allowed: bool


class AuthorizationQueryItem(BaseModel):
    """One creator/subscriber pair to check."""

    creator_id: int = Field(..., gt=0)
    subscriber_id: int = Field(..., gt=0)


class AuthorizationBatchRequest(BaseModel):
    """Request body for POST /authorizations/batch (e.g. one pair per listed item)."""

    queries: list[AuthorizationQueryItem] = Field(..., min_length=1, max_length=500)


class AuthorizationResultItem(BaseModel):
    creator_id: int
    subscriber_id: int
    allowed: bool


class AuthorizationBatchResponse(BaseModel):
    """Results in request order; duplicate pairs share one remote check."""

    results: list[AuthorizationResultItem]
