"""SOAP envelope codec for the remote subscription service.

Builds request envelopes and parses response envelopes into ParsedNode
trees. Single responsibility: wire format. Pure functions only; no I/O
and no logging (requests carry the shared auth key).
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from dataclasses import dataclass, field

from app.core.constants import (
    BODY_TAG,
    ENVELOPE_TAG,
    FAULT_STRING_TAG,
    FAULT_TAG,
    SOAP_ENVELOPE_NS,
    SUBSCRIPTION_SERVICE_NS,
)
from app.domain.enums import OperationName, ProtocolErrorKind
from app.infrastructure.exceptions import ProtocolError
from app.infrastructure.external.subscription.operations import (
    OperationRegistry,
    OperationSpec,
    get_default_registry,
)


# Real responses nest a handful of levels; anything far deeper is refused.
MAX_DEPTH = 64


def _local_name(tag: str) -> str:
    """Strip the '{namespace}' part ElementTree puts in front of qualified tags."""
    return tag.rsplit("}", 1)[-1]


@dataclass(frozen=True)
class ParsedNode:
    """Namespace-free, immutable view of one XML element.

    text is the element's own text exactly as received ('' when empty);
    it is never stripped so literal matching stays exact.
    """

    tag: str
    text: str = ""
    children: tuple[ParsedNode, ...] = field(default=())

    @classmethod
    def from_element(cls, element: ET.Element, max_depth: int = MAX_DEPTH) -> ParsedNode:
        """Convert an element tree without recursion.

        Raises:
            ValueError: If elements are nested deeper than max_depth.
        """
        # Each frame: (element, depth, children converted so far).
        stack: list[tuple[ET.Element, int, list[ParsedNode]]] = [(element, 1, [])]
        while True:
            current, depth, done = stack[-1]
            if len(done) < len(current):
                if depth >= max_depth:
                    raise ValueError(f"elements nested deeper than {max_depth}")
                stack.append((current[len(done)], depth + 1, []))
                continue
            stack.pop()
            node = cls(
                tag=_local_name(current.tag),
                text=current.text or "",
                children=tuple(done),
            )
            if not stack:
                return node
            stack[-1][2].append(node)

    def child(self, name: str) -> ParsedNode | None:
        """First direct child with local name, or None."""
        for node in self.children:
            if node.tag == name:
                return node
        return None

    def children_named(self, name: str) -> list[ParsedNode]:
        return [node for node in self.children if node.tag == name]

    def find_all(self, path: Sequence[str]) -> list[ParsedNode]:
        """All nodes reached by following path (every match at every level)."""
        nodes = [self]
        for name in path:
            nodes = [child for node in nodes for child in node.children_named(name)]
        return nodes

    def find(self, path: Sequence[str]) -> ParsedNode | None:
        """First node reached by following path, or None."""
        matches = self.find_all(path)
        return matches[0] if matches else None

    def text_of(self, name: str) -> str | None:
        node = self.child(name)
        return node.text if node is not None else None


class EnvelopeCodec:
    """Builds and parses SOAP 1.1 envelopes for registered operations."""

    def __init__(self, registry: OperationRegistry | None = None) -> None:
        self.registry = registry or get_default_registry()

    def spec(self, operation: OperationName) -> OperationSpec:
        return self.registry.get(operation)

    def build_request(
        self,
        operation: OperationName,
        args: Sequence[str | int],
        auth_key: str,
    ) -> bytes:
        """Build the request envelope for operation.

        Arguments are emitted as <argN xmlns=""> in the given order, numbered
        from the operation's first_arg_index, with auth_key as the final one.

        Args:
            operation: Registered operation to call.
            args: Positional arguments, exactly the operation's arity.
            auth_key: Shared key appended as the last argument.

        Returns:
            UTF-8 encoded envelope.

        Raises:
            ValueError: If len(args) does not match the operation's arity.
        """
        spec = self.spec(operation)
        if len(args) != spec.arity:
            raise ValueError(
                f"{spec.request_tag} takes {spec.arity} argument(s), got {len(args)}"
            )
        values = [*args, auth_key]
        args_xml = "\n      ".join(
            self._serialize_arg(spec.first_arg_index + i, value)
            for i, value in enumerate(values)
        )
        envelope = f"""<?xml version="1.0" encoding="utf-8"?>
<Envelope xmlns="{SOAP_ENVELOPE_NS}">
  <Body>
    <{spec.request_tag} xmlns="{SUBSCRIPTION_SERVICE_NS}">
      {args_xml}
    </{spec.request_tag}>
  </Body>
</Envelope>"""
        return envelope.encode("utf-8")

    def parse_response(self, payload: bytes, operation: OperationName) -> ParsedNode:
        """Locate operation's result inside a response envelope.

        For scalar operations returns the node at the operation's result_path
        (e.g. approveSubscribeResponse/return). For list operations returns
        the response element itself; use record_nodes() for the records.

        Raises:
            ProtocolError: MALFORMED if payload is not well-formed XML (or
                carries a DTD); MISSING_NODE if the expected shape is absent
                or the body holds a SOAP Fault.
        """
        spec = self.spec(operation)
        root = self._parse(payload, spec)
        if root.tag != ENVELOPE_TAG:
            raise ProtocolError(
                ProtocolErrorKind.MISSING_NODE,
                spec.request_tag,
                f"root element is {root.tag!r}, expected {ENVELOPE_TAG!r}",
            )
        body = root.child(BODY_TAG)
        if body is None:
            raise ProtocolError(
                ProtocolErrorKind.MISSING_NODE, spec.request_tag, "envelope has no Body"
            )
        fault = body.child(FAULT_TAG)
        if fault is not None:
            raise ProtocolError(
                ProtocolErrorKind.MISSING_NODE,
                spec.request_tag,
                f"SOAP fault: {fault.text_of(FAULT_STRING_TAG) or 'no faultstring'}",
            )
        response = body.child(spec.response_tag)
        if response is None:
            raise ProtocolError(
                ProtocolErrorKind.MISSING_NODE,
                spec.request_tag,
                f"Body has no {spec.response_tag}",
            )
        if not spec.result_path:
            return response
        result = response.find(spec.result_path)
        if result is None:
            raise ProtocolError(
                ProtocolErrorKind.MISSING_NODE,
                spec.request_tag,
                f"missing {spec.response_tag}/{'/'.join(spec.result_path)}",
            )
        return result

    def is_fault(self, payload: bytes, operation: OperationName) -> bool:
        """True when payload is a well-formed envelope whose Body holds a SOAP Fault.

        SOAP 1.1 servers deliver faults with HTTP 500; such a body is a
        definite answer, unlike a 500 carrying an HTML error page.
        """
        try:
            root = self._parse(payload, self.spec(operation))
        except ProtocolError:
            return False
        body = root.child(BODY_TAG) if root.tag == ENVELOPE_TAG else None
        return body is not None and body.child(FAULT_TAG) is not None

    def record_nodes(self, node: ParsedNode, operation: OperationName) -> list[ParsedNode]:
        """Record elements under a list operation's result; [] when absent."""
        return node.find_all(self.spec(operation).record_path)

    @staticmethod
    def _parse(payload: bytes, spec: OperationSpec) -> ParsedNode:
        if not payload or not payload.strip():
            raise ProtocolError(
                ProtocolErrorKind.MALFORMED, spec.request_tag, "empty response body"
            )
        # SOAP messages must not contain a DTD; refusing it also rules out entity expansion.
        if b"<!DOCTYPE" in payload:
            raise ProtocolError(
                ProtocolErrorKind.MALFORMED, spec.request_tag, "DTD not allowed"
            )
        try:
            element = ET.fromstring(payload)
        except ET.ParseError as e:
            raise ProtocolError(
                ProtocolErrorKind.MALFORMED, spec.request_tag, f"invalid XML: {e}"
            ) from e
        except RecursionError as e:
            raise ProtocolError(
                ProtocolErrorKind.MALFORMED, spec.request_tag, "XML nested too deeply"
            ) from e
        try:
            return ParsedNode.from_element(element)
        except ValueError as e:
            raise ProtocolError(ProtocolErrorKind.MALFORMED, spec.request_tag, str(e)) from e

    def _serialize_arg(self, index: int, value: str | int) -> str:
        return f'<arg{index} xmlns="">{self._escape_xml(value)}</arg{index}>'

    @staticmethod
    def _escape_xml(value: str | int) -> str:
        """Escape XML special characters.

        Args:
            value: Value to escape.

        Returns:
            XML-safe string.
        """
        s = str(value)
        return (
            s.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
            .replace("'", "&apos;")
        )
