"""Remote subscription service: SOAP codec, result classifier, and async client.

Components:
- EnvelopeCodec / ParsedNode: request envelopes and namespace-free response trees
- OperationRegistry / OperationSpec: wire description of each remote operation
- ResultClassifier: exact literal -> SubscriptionOutcome tables
- SubscriptionServiceClient: one async method per remote capability

Usage:
    client = SubscriptionServiceClient.from_settings(http_client, get_settings())
    outcome = await client.approve(creator_id, subscriber_id)
"""

from app.infrastructure.external.subscription.classifier import (
    ResultClassifier,
    build_table,
)
from app.infrastructure.external.subscription.client import SubscriptionServiceClient
from app.infrastructure.external.subscription.envelope import EnvelopeCodec, ParsedNode
from app.infrastructure.external.subscription.operations import (
    OperationRegistry,
    OperationSpec,
    get_default_registry,
)
from app.infrastructure.external.subscription.retry import RetryConfig

__all__ = [
    "EnvelopeCodec",
    "OperationRegistry",
    "OperationSpec",
    "ParsedNode",
    "ResultClassifier",
    "RetryConfig",
    "SubscriptionServiceClient",
    "build_table",
    "get_default_registry",
]
