"""Domain enumerations for the subscription bridge.

Enums represent the closed sets of values the bridge hands to callers
instead of the remote service's raw literals.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class OperationName(_ValuesMixin, str, Enum):
    """Remote subscription service operations the bridge knows how to call."""

    VALIDATE = "validate"
    APPROVE = "approve"
    REJECT = "reject"
    LIST_PENDING = "list_pending"
    LIST_SUBSCRIBERS = "list_subscribers"


class SubscriptionOutcome(_ValuesMixin, str, Enum):
    """Classified business outcome of a remote subscription operation.

    Produced only by the result classifier. UNCLASSIFIED covers every
    literal the classifier does not recognize and must be treated as a
    denial by authorization logic.
    """

    APPROVED = "approved"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    ALREADY_PROCESSED = "already_processed"
    UNCLASSIFIED = "unclassified"


class TransportFailureKind(_ValuesMixin, str, Enum):
    """Why a remote call produced no usable response.

    UNAVAILABLE: a read failed (after retries); nothing changed remotely.
    INDETERMINATE: a mutation failed mid-flight; the remote state is unknown.
    """

    UNAVAILABLE = "unavailable"
    INDETERMINATE = "indeterminate"


class ProtocolErrorKind(_ValuesMixin, str, Enum):
    """Why a response body could not be interpreted."""

    MISSING_NODE = "missing_node"
    MALFORMED = "malformed"
