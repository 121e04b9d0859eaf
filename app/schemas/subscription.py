"""Subscription request API schemas.

Field names keep the camelCase used by the original REST clients
(creatorID, subscriberID, ...); Python attributes are snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field

from app.domain.value_objects import SubscriptionRecord


class SubscriptionActionRequest(BaseModel):
    """Request body for accepting or rejecting a pending subscription."""

    model_config = ConfigDict(populate_by_name=True)

    creator_id: int = Field(..., gt=0, alias="creatorID", description="Creator (author) user ID")
    subscriber_id: int = Field(..., gt=0, alias="subscriberID", description="Subscriber user ID")


class SubscriptionActionResponse(BaseModel):
    """Response for a processed accept/reject request."""

    message: str


class SubscriptionRecordResponse(BaseModel):
    """One subscription as reported by the remote subscription service."""

    model_config = ConfigDict(populate_by_name=True)

    creator_id: int = Field(..., alias="creatorID")
    subscriber_id: int = Field(..., alias="subscriberID")
    creator_name: str = Field(..., alias="creatorName")
    subscriber_name: str = Field(..., alias="subscriberName")

    @classmethod
    def from_record(cls, record: SubscriptionRecord) -> "SubscriptionRecordResponse":
        return cls(
            creator_id=record.creator_id,
            subscriber_id=record.subscriber_id,
            creator_name=record.creator_name,
            subscriber_name=record.subscriber_name,
        )


class SubscriptionListResponse(BaseModel):
    """Response for pending-request and subscriber listings."""

    message: str = Field(default="OK")
    data: list[SubscriptionRecordResponse] = Field(default_factory=list)
