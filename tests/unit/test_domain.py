"""Tests for domain exceptions and value objects."""

import pytest

from app.domain.enums import (
    ProtocolErrorKind,
    SubscriptionOutcome,
    TransportFailureKind,
)
from app.domain.exceptions import (
    BridgeException,
    RemoteServiceException,
    SubscriptionRequestNotFoundException,
    SubscriptionRequestRejectedException,
    ValidationException,
)
from app.domain.value_objects import AuthorizationDecision, SubscriptionQuery
from app.infrastructure.exceptions import ProtocolError, TransportFailure


def test_bridge_exception_default_error_code() -> None:
    """Base BridgeException uses class name as error_code when not provided."""
    exc = BridgeException("Something failed")
    assert exc.error_code == "BridgeException"
    assert exc.details == {}
    assert exc.to_dict() == {"error": "BridgeException", "message": "Something failed", "details": {}}


def test_validation_exception() -> None:
    exc = ValidationException("Invalid id", field="creator_id")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "creator_id"}


def test_subscription_exceptions() -> None:
    not_found = SubscriptionRequestNotFoundException(1, 2, "Subscription not found")
    assert not_found.error_code == "SUBSCRIPTION_NOT_FOUND"
    rejected = SubscriptionRequestRejectedException(1, 2, "unclassified", "not processed")
    assert rejected.error_code == "SUBSCRIPTION_NOT_PROCESSED"
    assert rejected.details["outcome"] == "unclassified"


def test_infrastructure_errors_are_remote_service_exceptions() -> None:
    transport = TransportFailure(TransportFailureKind.UNAVAILABLE, "getAllSubscribers", "HTTP 503", 3)
    protocol = ProtocolError(ProtocolErrorKind.MISSING_NODE, "approveSubscribe", "no Body")
    assert isinstance(transport, RemoteServiceException)
    assert isinstance(protocol, RemoteServiceException)
    assert transport.details == {
        "kind": "unavailable",
        "operation": "getAllSubscribers",
        "reason": "HTTP 503",
        "attempts": 3,
    }
    assert protocol.error_code == "PROTOCOL_ERROR"


@pytest.mark.parametrize(
    ("creator_id", "subscriber_id"),
    [(0, 1), (1, 0), (-5, 1), (True, 1), ("1", 1)],
)
def test_subscription_query_rejects_invalid_ids(creator_id, subscriber_id) -> None:
    with pytest.raises(ValueError):
        SubscriptionQuery(creator_id, subscriber_id)


def test_subscription_query_is_hashable_key() -> None:
    assert {SubscriptionQuery(1, 2): "x"}[SubscriptionQuery(1, 2)] == "x"
    assert SubscriptionQuery(1, 2) != SubscriptionQuery(2, 1)


def test_decision_constructors() -> None:
    assert AuthorizationDecision.grant().allowed is True
    denied = AuthorizationDecision.deny(TransportFailureKind.UNAVAILABLE)
    assert denied.allowed is False
    assert denied.reason is TransportFailureKind.UNAVAILABLE


@pytest.mark.parametrize(
    ("allowed", "reason"),
    [
        (True, SubscriptionOutcome.UNCLASSIFIED),
        (True, TransportFailureKind.INDETERMINATE),
        (False, SubscriptionOutcome.APPROVED),
    ],
)
def test_decision_rejects_inconsistent_state(allowed, reason) -> None:
    """Only an APPROVED reason can allow access."""
    with pytest.raises(ValueError):
        AuthorizationDecision(allowed=allowed, reason=reason)
