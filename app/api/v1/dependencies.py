"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the subscription service client and the
application services built on it. The client is created once in
app.core.lifespan; the authorization gate (and its decision cache) is
created per request, so cached decisions never cross requests.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from app.application.services.authorization_gate import AuthorizationGate
from app.application.services.subscription_request_service import (
    SubscriptionRequestService,
)
from app.core.config import get_settings
from app.infrastructure.cache import ScopedTTLCache
from app.infrastructure.external.subscription import SubscriptionServiceClient


def get_subscription_client(request: Request) -> SubscriptionServiceClient:
    """Subscription service client from app state (composition root)."""
    client = getattr(request.app.state, "subscription_client", None)
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Subscription service client is not initialized",
        )
    return client


SubscriptionClientDep = Annotated[SubscriptionServiceClient, Depends(get_subscription_client)]


def get_authorization_gate(client: SubscriptionClientDep) -> AuthorizationGate:
    """Fresh gate with its own decision cache for this request.

    FastAPI caches a dependency's value within one request, so every
    route/dependency in the same request that asks for the gate shares it.
    """
    settings = get_settings()
    return AuthorizationGate(
        validator=client,
        cache=ScopedTTLCache(ttl_seconds=settings.authorization_cache_ttl_seconds),
    )


def get_subscription_request_service(
    client: SubscriptionClientDep,
) -> SubscriptionRequestService:
    """Accept/reject/list service over the shared client (composition root)."""
    return SubscriptionRequestService(subscription_service=client)


AuthorizationGateDep = Annotated[AuthorizationGate, Depends(get_authorization_gate)]
SubscriptionRequestServiceDep = Annotated[
    SubscriptionRequestService, Depends(get_subscription_request_service)
]
