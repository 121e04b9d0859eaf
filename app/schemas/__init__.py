"""Pydantic request/response schemas for the API."""

from app.schemas.authorization import (
    AuthorizationBatchRequest,
    AuthorizationBatchResponse,
    AuthorizationQueryItem,
    AuthorizationResponse,
    AuthorizationResultItem,
)
from app.schemas.health import HealthResponse, ReadinessErrorResponse, ReadinessResponse
from app.schemas.subscription import (
    SubscriptionActionRequest,
    SubscriptionActionResponse,
    SubscriptionListResponse,
    SubscriptionRecordResponse,
)

__all__ = [
    "AuthorizationBatchRequest",
    "AuthorizationBatchResponse",
    "AuthorizationQueryItem",
    "AuthorizationResponse",
    "AuthorizationResultItem",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "SubscriptionActionRequest",
    "SubscriptionActionResponse",
    "SubscriptionListResponse",
    "SubscriptionRecordResponse",
]
