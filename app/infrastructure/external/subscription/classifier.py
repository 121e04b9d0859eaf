"""Result classifier: remote free-text literals to SubscriptionOutcome.

The remote service reports outcomes as English sentences. Every literal
the bridge understands lives in the per-operation tables below; matching
is exact (no trimming, case folding, or substring search) and anything
else is UNCLASSIFIED.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from app.core.constants import (
    LITERAL_SUBSCRIPTION_ACCEPTED,
    LITERAL_SUBSCRIPTION_NOT_FOUND,
    LITERAL_SUBSCRIPTION_REJECTED,
)
from app.domain.enums import OperationName, SubscriptionOutcome
from app.infrastructure.external.subscription.envelope import ParsedNode

OutcomeTable = Mapping[str, SubscriptionOutcome]

APPROVE_TABLE: OutcomeTable = MappingProxyType(
    {
        LITERAL_SUBSCRIPTION_ACCEPTED: SubscriptionOutcome.APPROVED,
        LITERAL_SUBSCRIPTION_NOT_FOUND: SubscriptionOutcome.NOT_FOUND,
    }
)

REJECT_TABLE: OutcomeTable = MappingProxyType(
    {
        LITERAL_SUBSCRIPTION_REJECTED: SubscriptionOutcome.REJECTED,
        LITERAL_SUBSCRIPTION_NOT_FOUND: SubscriptionOutcome.NOT_FOUND,
    }
)


def build_table(
    *,
    approved: Iterable[str] = (),
    rejected: Iterable[str] = (),
    not_found: Iterable[str] = (),
    already_processed: Iterable[str] = (),
) -> OutcomeTable:
    """Build a read-only table from literal lists (e.g. from settings).

    Raises:
        ValueError: If one literal is listed under two outcomes.
    """
    table: dict[str, SubscriptionOutcome] = {}
    groups = (
        (approved, SubscriptionOutcome.APPROVED),
        (rejected, SubscriptionOutcome.REJECTED),
        (not_found, SubscriptionOutcome.NOT_FOUND),
        (already_processed, SubscriptionOutcome.ALREADY_PROCESSED),
    )
    for literals, outcome in groups:
        for literal in literals:
            existing = table.get(literal)
            if existing is not None and existing is not outcome:
                raise ValueError(
                    f"Literal {literal!r} mapped to both {existing.value} and {outcome.value}"
                )
            table[literal] = outcome
    return MappingProxyType(table)


class ResultClassifier:
    """Classifies a parsed result node per operation. Never raises on literals."""

    def __init__(self, tables: Mapping[OperationName, OutcomeTable] | None = None) -> None:
        self._tables: dict[OperationName, OutcomeTable] = {
            OperationName.APPROVE: APPROVE_TABLE,
            OperationName.REJECT: REJECT_TABLE,
            OperationName.VALIDATE: MappingProxyType({}),
        }
        if tables:
            self._tables.update(tables)

    def table(self, operation: OperationName) -> OutcomeTable:
        return self._tables.get(operation, MappingProxyType({}))

    def classify_literal(self, literal: str, operation: OperationName) -> SubscriptionOutcome:
        return self.table(operation).get(literal, SubscriptionOutcome.UNCLASSIFIED)

    def classify(self, node: ParsedNode, operation: OperationName) -> SubscriptionOutcome:
        """Map node.text through the operation's table; unknown -> UNCLASSIFIED."""
        return self.classify_literal(node.text, operation)

