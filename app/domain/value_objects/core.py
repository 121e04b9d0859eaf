"""Domain value objects for the subscription bridge.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass

from app.domain.enums import ProtocolErrorKind, SubscriptionOutcome, TransportFailureKind

DecisionReason = SubscriptionOutcome | TransportFailureKind | ProtocolErrorKind


def _validate_id(value: int, field_name: str) -> None:
    """Raise ValueError unless value is a positive int (bool excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer")
    if value <= 0:
        raise ValueError(f"{field_name} must be positive")


@dataclass(frozen=True)
class SubscriptionQuery:
    """One creator/subscriber relationship; also the authorization cache key."""

    creator_id: int
    subscriber_id: int

    def __post_init__(self) -> None:
        _validate_id(self.creator_id, "creator_id")
        _validate_id(self.subscriber_id, "subscriber_id")


@dataclass(frozen=True)
class SubscriptionRecord:
    """Read-only snapshot of a subscription returned by list operations."""

    creator_id: int
    subscriber_id: int
    creator_name: str
    subscriber_name: str


@dataclass(frozen=True)
class AuthorizationDecision:
    """Outcome of an authorization check, as seen by content-serving code.

    allowed is True only for an APPROVED reason. Build instances through
    grant() and deny(); direct construction is validated the same way.
    """

    allowed: bool
    reason: DecisionReason

    def __post_init__(self) -> None:
        """Enforce that only an APPROVED outcome can allow access.

        Raises:
            ValueError: If allowed and reason disagree.
        """
        approved = self.reason is SubscriptionOutcome.APPROVED
        if self.allowed != approved:
            raise ValueError(
                f"AuthorizationDecision(allowed={self.allowed}) "
                f"is inconsistent with reason {self.reason.value!r}"
            )

    @classmethod
    def grant(cls) -> "AuthorizationDecision":
        return cls(allowed=True, reason=SubscriptionOutcome.APPROVED)

    @classmethod
    def deny(cls, reason: DecisionReason) -> "AuthorizationDecision":
        return cls(allowed=False, reason=reason)
