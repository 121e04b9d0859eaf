"""Cache: scoped in-memory TTL cache used by the authorization gate.

Entries never outlive the owning scope (one HTTP request) and are never
persisted. Implements app.application.interfaces.services.IDecisionCache.
"""

from app.infrastructure.cache.scoped_cache import ScopedTTLCache

__all__ = ["ScopedTTLCache"]
