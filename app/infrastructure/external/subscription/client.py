"""Async client for the remote subscription service.

One method per remote capability, each composing EnvelopeCodec + httpx
transport + ResultClassifier. Read-only operations retry transient
transport failures with bounded exponential backoff; approve/reject are
sent exactly once and report failures as INDETERMINATE.

Construct once at startup over a shared httpx.AsyncClient and inject it
(see app.core.lifespan and app.api.v1.dependencies).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import httpx

from app.core.config import Settings
from app.core.constants import SOAP_CONTENT_TYPE
from app.domain.enums import (
    OperationName,
    ProtocolErrorKind,
    SubscriptionOutcome,
    TransportFailureKind,
)
from app.domain.value_objects import SubscriptionRecord
from app.infrastructure.exceptions import ProtocolError, TransportFailure
from app.infrastructure.external.subscription.classifier import (
    ResultClassifier,
    build_table,
)
from app.infrastructure.external.subscription.envelope import EnvelopeCodec, ParsedNode
from app.infrastructure.external.subscription.operations import (
    OperationSpec,
    get_default_registry,
)
from app.infrastructure.external.subscription.retry import NO_RETRY, RetryConfig
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

_RECORD_FIELDS = ("creatorID", "subscriberID", "creatorName", "subscriberName")


class SubscriptionServiceClient:
    """Typed facade over the SOAP subscription service.

    Every method either returns a classified outcome / records or raises:
    TransportFailure (no usable response) or ProtocolError (response not
    understood). A transport failure is never reported as a business outcome.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        url: str,
        auth_key: str,
        *,
        timeout: httpx.Timeout | float = 5.0,
        retry_config: RetryConfig | None = None,
        codec: EnvelopeCodec | None = None,
        classifier: ResultClassifier | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Shared async HTTP client (owned by the caller).
            url: Full URL of the remote SOAP endpoint.
            auth_key: Shared key appended to every operation.
            timeout: Per-request timeout (seconds or httpx.Timeout).
            retry_config: Retry policy for read-only operations.
            codec: Envelope codec (default registry when omitted).
            classifier: Result classifier (built-in tables when omitted).
        """
        self._http = http_client
        self._url = url
        self._auth_key = auth_key
        self._timeout = timeout if isinstance(timeout, httpx.Timeout) else httpx.Timeout(timeout)
        self.retry_config = retry_config or RetryConfig()
        self.codec = codec or EnvelopeCodec()
        self.classifier = classifier or ResultClassifier()

    @classmethod
    def from_settings(
        cls, http_client: httpx.AsyncClient, settings: Settings
    ) -> SubscriptionServiceClient:
        """Build a client wired from application settings."""
        validate_table = build_table(
            approved=settings.soap_validate_approved_literals,
            rejected=settings.soap_validate_rejected_literals,
            not_found=settings.soap_validate_not_found_literals,
            already_processed=settings.soap_validate_already_processed_literals,
        )
        return cls(
            http_client,
            settings.soap_service_url,
            settings.soap_key.get_secret_value(),
            timeout=httpx.Timeout(
                settings.soap_timeout_seconds,
                connect=settings.soap_connect_timeout_seconds,
            ),
            retry_config=RetryConfig(
                max_attempts=settings.soap_read_max_attempts,
                backoff_factor=settings.soap_retry_backoff_seconds,
                max_backoff=settings.soap_retry_max_backoff_seconds,
            ),
            codec=EnvelopeCodec(get_default_registry(settings.soap_validate_operation)),
            classifier=ResultClassifier({OperationName.VALIDATE: validate_table}),
        )

    @traced("subscription_service.validate")
    async def validate(self, creator_id: int, subscriber_id: int) -> SubscriptionOutcome:
        """Ask whether subscriber_id holds an active subscription to creator_id. Retryable."""
        node = await self._call(OperationName.VALIDATE, [creator_id, subscriber_id])
        outcome = self.classifier.classify(node, OperationName.VALIDATE)
        logger.debug(
            "Validate creator=%s subscriber=%s -> %s", creator_id, subscriber_id, outcome.value
        )
        return outcome

    @traced("subscription_service.approve")
    async def approve(self, creator_id: int, subscriber_id: int) -> SubscriptionOutcome:
        """Approve a pending subscription request. Never retried."""
        return await self._mutate(OperationName.APPROVE, creator_id, subscriber_id)

    @traced("subscription_service.reject")
    async def reject(self, creator_id: int, subscriber_id: int) -> SubscriptionOutcome:
        """Reject a pending subscription request. Never retried."""
        return await self._mutate(OperationName.REJECT, creator_id, subscriber_id)

    @traced("subscription_service.list_pending")
    async def list_pending_for_creator(self, subscriber_id: int) -> list[SubscriptionRecord]:
        """Pending subscription requests addressed to the given user. Retryable.

        An absent or empty data list is an empty result, not an error.
        """
        return await self._list(OperationName.LIST_PENDING, subscriber_id)

    @traced("subscription_service.list_subscribers")
    async def list_subscribers(self, creator_id: int) -> list[SubscriptionRecord]:
        """Subscribers of creator_id. Retryable; empty list when there are none."""
        return await self._list(OperationName.LIST_SUBSCRIBERS, creator_id)

    async def _mutate(
        self, operation: OperationName, creator_id: int, subscriber_id: int
    ) -> SubscriptionOutcome:
        node = await self._call(operation, [creator_id, subscriber_id])
        outcome = self.classifier.classify(node, operation)
        if outcome is SubscriptionOutcome.UNCLASSIFIED:
            logger.warning(
                "Unrecognized %s result for creator=%s subscriber=%s: %r",
                operation.value,
                creator_id,
                subscriber_id,
                node.text,
            )
        else:
            logger.info(
                "%s creator=%s subscriber=%s -> %s",
                operation.value,
                creator_id,
                subscriber_id,
                outcome.value,
            )
        return outcome

    async def _list(self, operation: OperationName, user_id: int) -> list[SubscriptionRecord]:
        node = await self._call(operation, [user_id])
        spec = self.codec.spec(operation)
        return [self._to_record(item, spec) for item in self.codec.record_nodes(node, operation)]

    async def _call(self, operation: OperationName, args: Sequence[int]) -> ParsedNode:
        spec = self.codec.spec(operation)
        body = self.codec.build_request(operation, [str(a) for a in args], self._auth_key)
        response = await self._send(spec, body)
        try:
            return self.codec.parse_response(response.content, operation)
        except ProtocolError as e:
            logger.error("Protocol error from subscription service: %s", e.message)
            raise

    async def _send(self, spec: OperationSpec, body: bytes) -> httpx.Response:
        """POST body, retrying per policy. Raises TransportFailure when exhausted.

        A 500 carrying a SOAP Fault envelope is returned as is so the codec
        reports it as a ProtocolError.

        asyncio.CancelledError is not caught: cancelling the caller cancels the
        in-flight request and any pending backoff.
        """
        retry = self.retry_config if spec.retryable else NO_RETRY
        kind = (
            TransportFailureKind.UNAVAILABLE
            if spec.retryable
            else TransportFailureKind.INDETERMINATE
        )
        reason = "no attempt made"
        attempts = 0
        for attempt in range(retry.max_attempts):
            attempts = attempt + 1
            add_span_attributes(**{"soap.operation": spec.request_tag, "soap.attempt": attempts})
            try:
                response = await self._http.post(
                    self._url,
                    content=body,
                    headers={"Content-Type": SOAP_CONTENT_TYPE},
                    timeout=self._timeout,
                )
            except httpx.RequestError as e:
                reason = type(e).__name__
                if not isinstance(e, retry.retry_exceptions):
                    break
            else:
                if response.is_success:
                    return response
                # A Fault is a definite answer: parse it, never retry it.
                if response.status_code == 500 and self.codec.is_fault(response.content, spec.name):
                    return response
                reason = f"HTTP {response.status_code}"
                if response.status_code not in retry.retry_status_codes:
                    break
            if attempts >= retry.max_attempts:
                break
            delay = retry.delay(attempt)
            logger.warning(
                "%s failed with %s, retrying in %.2fs (attempt %s/%s)",
                spec.request_tag,
                reason,
                delay,
                attempts,
                retry.max_attempts,
            )
            await asyncio.sleep(delay)

        logger.warning(
            "%s failed after %s attempt(s): %s (%s)",
            spec.request_tag,
            attempts,
            reason,
            kind.value,
        )
        raise TransportFailure(kind, spec.request_tag, reason, attempts=attempts)

    @staticmethod
    def _to_record(node: ParsedNode, spec: OperationSpec) -> SubscriptionRecord:
        values: dict[str, str] = {}
        for name in _RECORD_FIELDS:
            text = node.text_of(name)
            if text is None:
                raise ProtocolError(
                    ProtocolErrorKind.MISSING_NODE,
                    spec.request_tag,
                    f"record has no {name}",
                )
            values[name] = text
        try:
            creator_id = int(values["creatorID"])
            subscriber_id = int(values["subscriberID"])
        except ValueError as e:
            raise ProtocolError(
                ProtocolErrorKind.MALFORMED,
                spec.request_tag,
                "record IDs are not integers",
            ) from e
        return SubscriptionRecord(
            creator_id=creator_id,
            subscriber_id=subscriber_id,
            creator_name=values["creatorName"],
            subscriber_name=values["subscriberName"],
        )
