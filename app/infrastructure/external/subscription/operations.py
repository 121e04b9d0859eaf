"""Operation registry for the remote subscription service.

Each remote operation is described once (request tag, response tag, where
the result lives, how its positional arguments are numbered) so the codec
and client never hard-code wire names. New operations are registered, not
coded into the client.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.enums import OperationName


@dataclass(frozen=True)
class OperationSpec:
    """Wire description of one remote operation.

    Attributes:
        name: Operation identifier used by the client and classifier.
        request_tag: Element wrapping the arguments inside the request Body.
        response_tag: Element wrapping the result inside the response Body.
        arity: Number of caller arguments (the auth key is appended after them).
        first_arg_index: Index of the first <argN> element.
        result_path: Local names walked from the response element to the
            scalar result; empty for list operations.
        record_path: Local names (from the result node) whose matches are the
            list records; empty for scalar operations.
        retryable: True for read-only operations.
    """

    name: OperationName
    request_tag: str
    response_tag: str
    arity: int
    first_arg_index: int = 0
    result_path: tuple[str, ...] = ()
    record_path: tuple[str, ...] = ()
    retryable: bool = True

    @property
    def is_list(self) -> bool:
        return bool(self.record_path)


@dataclass
class OperationRegistry:
    """Mutable lookup of OperationSpec by OperationName."""

    _specs: dict[OperationName, OperationSpec] = field(default_factory=dict)

    def register(self, spec: OperationSpec) -> None:
        """Add or replace the spec for spec.name."""
        self._specs[spec.name] = spec

    def get(self, name: OperationName) -> OperationSpec:
        """Return the spec for name.

        Raises:
            KeyError: If the operation was never registered.
        """
        try:
            return self._specs[name]
        except KeyError:
            raise KeyError(f"Operation not registered: {name.value}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._specs


def validate_spec(request_tag: str) -> OperationSpec:
    """Spec for the validate operation with a configurable request tag."""
    return OperationSpec(
        name=OperationName.VALIDATE,
        request_tag=request_tag,
        response_tag=f"{request_tag}Response",
        arity=2,
        result_path=("return",),
    )


def get_default_registry(validate_tag: str = "validateSubscribe") -> OperationRegistry:
    """Registry with every operation the remote subscription service exposes.

    Args:
        validate_tag: Request tag of the validate operation (configurable
            because the remote service does not publish it).
    """
    registry = OperationRegistry()
    registry.register(
        OperationSpec(
            name=OperationName.APPROVE,
            request_tag="approveSubscribe",
            response_tag="approveSubscribeResponse",
            arity=2,
            result_path=("return",),
            retryable=False,
        )
    )
    registry.register(
        OperationSpec(
            name=OperationName.REJECT,
            request_tag="rejectSubscribe",
            response_tag="rejectSubscribeResponse",
            arity=2,
            result_path=("return",),
            retryable=False,
        )
    )
    # List operations bind their arguments from arg1 on the remote side.
    registry.register(
        OperationSpec(
            name=OperationName.LIST_PENDING,
            request_tag="getAllReqSubscribe",
            response_tag="getAllReqSubscribeResponse",
            arity=1,
            first_arg_index=1,
            record_path=("return", "data"),
        )
    )
    registry.register(
        OperationSpec(
            name=OperationName.LIST_SUBSCRIBERS,
            request_tag="getAllSubscribers",
            response_tag="getAllSubscriberResponse",
            arity=1,
            first_arg_index=1,
            record_path=("return",),
        )
    )
    registry.register(validate_spec(validate_tag))
    return registry
