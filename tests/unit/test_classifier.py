"""Tests for ResultClassifier and the outcome tables."""

import pytest

from app.domain.enums import OperationName, SubscriptionOutcome
from app.infrastructure.external.subscription import (
    ParsedNode,
    ResultClassifier,
    build_table,
)

_classifier = ResultClassifier()


def _result(text: str) -> ParsedNode:
    return ParsedNode("return", text)


@pytest.mark.parametrize(
    ("operation", "literal", "expected"),
    [
        (OperationName.APPROVE, "Subscription accepted", SubscriptionOutcome.APPROVED),
        (OperationName.APPROVE, "Subscription not found", SubscriptionOutcome.NOT_FOUND),
        (OperationName.REJECT, "Subscription rejected", SubscriptionOutcome.REJECTED),
        (OperationName.REJECT, "Subscription not found", SubscriptionOutcome.NOT_FOUND),
    ],
)
def test_known_literals(operation: OperationName, literal: str, expected: SubscriptionOutcome) -> None:
    assert _classifier.classify(_result(literal), operation) is expected


@pytest.mark.parametrize(
    "literal",
    ["", "subscription accepted", "Subscription accepted ", "Subscription accepted.", "Subscription"],
)
def test_near_misses_are_unclassified(literal: str) -> None:
    """Matching is exact: no trimming, case folding or substring search."""
    assert _classifier.classify(_result(literal), OperationName.APPROVE) is SubscriptionOutcome.UNCLASSIFIED


def test_tables_are_per_operation() -> None:
    """A reject literal sent back for approve is not an approval."""
    assert _classifier.classify(_result("Subscription rejected"), OperationName.APPROVE) is (
        SubscriptionOutcome.UNCLASSIFIED
    )


def test_validate_has_no_builtin_literals() -> None:
    """Without configured literals, validate never yields APPROVED."""
    assert _classifier.classify(_result("Subscription accepted"), OperationName.VALIDATE) is (
        SubscriptionOutcome.UNCLASSIFIED
    )


def test_configured_validate_table() -> None:
    classifier = ResultClassifier(
        {
            OperationName.VALIDATE: build_table(
                approved=["active"],
                not_found=["none"],
                already_processed=["done"],
            )
        }
    )
    assert classifier.classify(_result("active"), OperationName.VALIDATE) is SubscriptionOutcome.APPROVED
    assert classifier.classify(_result("none"), OperationName.VALIDATE) is SubscriptionOutcome.NOT_FOUND
    assert classifier.classify(_result("done"), OperationName.VALIDATE) is (
        SubscriptionOutcome.ALREADY_PROCESSED
    )
    assert classifier.classify(_result("other"), OperationName.VALIDATE) is (
        SubscriptionOutcome.UNCLASSIFIED
    )
    # Built-in tables are untouched.
    assert classifier.classify(_result("Subscription accepted"), OperationName.APPROVE) is (
        SubscriptionOutcome.APPROVED
    )


def test_build_table_rejects_conflicting_literal() -> None:
    with pytest.raises(ValueError, match="mapped to both"):
        build_table(approved=["yes"], rejected=["yes"])


def test_build_table_is_read_only() -> None:
    table = build_table(approved=["yes"])
    with pytest.raises(TypeError):
        table["no"] = SubscriptionOutcome.REJECTED  # type: ignore[index]


def test_unregistered_operation_is_unclassified() -> None:
    assert _classifier.classify(_result("anything"), OperationName.LIST_PENDING) is (
        SubscriptionOutcome.UNCLASSIFIED
    )
