"""Tests for EnvelopeCodec and ParsedNode (request building, response parsing)."""

import xml.etree.ElementTree as ET

import pytest

from app.core.constants import SOAP_ENVELOPE_NS, SUBSCRIPTION_SERVICE_NS
from app.domain.enums import OperationName, ProtocolErrorKind
from app.infrastructure.exceptions import ProtocolError
from app.infrastructure.external.subscription import EnvelopeCodec, ParsedNode


def _envelope(body: str) -> bytes:
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<S:Envelope xmlns:S="{SOAP_ENVELOPE_NS}"><S:Body>{body}</S:Body></S:Envelope>'
    ).encode()


def _args(payload: bytes) -> list[tuple[str, str]]:
    """(tag, text) of each argument element in a built request."""
    root = ET.fromstring(payload)
    body = root.find(f"{{{SOAP_ENVELOPE_NS}}}Body")
    (operation,) = list(body)
    return [(arg.tag, arg.text or "") for arg in operation]


@pytest.fixture
def codec() -> EnvelopeCodec:
    return EnvelopeCodec()


def test_approve_request_puts_key_last(codec: EnvelopeCodec) -> None:
    """approveSubscribe carries arg0=creator, arg1=subscriber, arg2=key."""
    payload = codec.build_request(OperationName.APPROVE, ["7", "42"], "secret")
    root = ET.fromstring(payload)
    operation = root.find(f"{{{SOAP_ENVELOPE_NS}}}Body/{{{SUBSCRIPTION_SERVICE_NS}}}approveSubscribe")
    assert operation is not None
    assert _args(payload) == [("arg0", "7"), ("arg1", "42"), ("arg2", "secret")]


def test_list_request_starts_at_arg1(codec: EnvelopeCodec) -> None:
    """getAllReqSubscribe binds its arguments from arg1."""
    payload = codec.build_request(OperationName.LIST_PENDING, ["42"], "secret")
    assert _args(payload) == [("arg1", "42"), ("arg2", "secret")]


def test_request_escapes_special_characters(codec: EnvelopeCodec) -> None:
    """Argument text is XML-escaped and round-trips through a parser."""
    payload = codec.build_request(OperationName.REJECT, ["1", "2"], "a<b&c\"d'")
    assert b"a&lt;b&amp;c&quot;d&apos;" in payload
    assert _args(payload)[-1] == ("arg2", "a<b&c\"d'")


def test_request_rejects_wrong_arity(codec: EnvelopeCodec) -> None:
    with pytest.raises(ValueError, match="takes 2 argument"):
        codec.build_request(OperationName.APPROVE, ["1"], "secret")


def test_parse_approve_returns_result_node(codec: EnvelopeCodec) -> None:
    """Namespace prefixes are ignored; text is returned exactly."""
    payload = _envelope(
        f'<ns2:approveSubscribeResponse xmlns:ns2="{SUBSCRIPTION_SERVICE_NS}">'
        "<return>Subscription accepted</return>"
        "</ns2:approveSubscribeResponse>"
    )
    node = codec.parse_response(payload, OperationName.APPROVE)
    assert node.tag == "return"
    assert node.text == "Subscription accepted"


def test_parse_keeps_surrounding_whitespace(codec: EnvelopeCodec) -> None:
    payload = _envelope(
        "<rejectSubscribeResponse><return> Subscription rejected </return></rejectSubscribeResponse>"
    )
    node = codec.parse_response(payload, OperationName.REJECT)
    assert node.text == " Subscription rejected "


def test_parse_list_pending_records(codec: EnvelopeCodec) -> None:
    """Pending records live under return/data."""
    payload = _envelope(
        "<getAllReqSubscribeResponse><return>"
        "<data><creatorID>1</creatorID><subscriberID>2</subscriberID>"
        "<creatorName>Ann</creatorName><subscriberName>Bob</subscriberName></data>"
        "<data><creatorID>3</creatorID><subscriberID>2</subscriberID>"
        "<creatorName>Cat</creatorName><subscriberName>Bob</subscriberName></data>"
        "</return></getAllReqSubscribeResponse>"
    )
    node = codec.parse_response(payload, OperationName.LIST_PENDING)
    records = codec.record_nodes(node, OperationName.LIST_PENDING)
    assert [r.text_of("creatorName") for r in records] == ["Ann", "Cat"]


def test_parse_list_pending_without_data_is_empty(codec: EnvelopeCodec) -> None:
    payload = _envelope("<getAllReqSubscribeResponse><return/></getAllReqSubscribeResponse>")
    node = codec.parse_response(payload, OperationName.LIST_PENDING)
    assert codec.record_nodes(node, OperationName.LIST_PENDING) == []


def test_parse_list_subscribers_uses_singular_response_tag(codec: EnvelopeCodec) -> None:
    """getAllSubscribers answers with getAllSubscriberResponse; each return is a record."""
    payload = _envelope(
        "<getAllSubscriberResponse>"
        "<return><creatorID>5</creatorID><subscriberID>9</subscriberID>"
        "<creatorName>Eve</creatorName><subscriberName>Max</subscriberName></return>"
        "</getAllSubscriberResponse>"
    )
    node = codec.parse_response(payload, OperationName.LIST_SUBSCRIBERS)
    records = codec.record_nodes(node, OperationName.LIST_SUBSCRIBERS)
    assert len(records) == 1
    assert records[0].text_of("subscriberID") == "9"


@pytest.mark.parametrize(
    "payload",
    [b"", b"   ", b"<Envelope><Body>", b"not xml at all"],
)
def test_parse_malformed(codec: EnvelopeCodec, payload: bytes) -> None:
    with pytest.raises(ProtocolError) as exc_info:
        codec.parse_response(payload, OperationName.APPROVE)
    assert exc_info.value.kind is ProtocolErrorKind.MALFORMED


def test_parse_refuses_doctype(codec: EnvelopeCodec) -> None:
    payload = b'<!DOCTYPE x [<!ENTITY e "boom">]><Envelope><Body/></Envelope>'
    with pytest.raises(ProtocolError) as exc_info:
        codec.parse_response(payload, OperationName.APPROVE)
    assert exc_info.value.kind is ProtocolErrorKind.MALFORMED


@pytest.mark.parametrize(
    "payload",
    [
        b"<NotEnvelope><Body/></NotEnvelope>",
        _envelope("").replace(b"<S:Body></S:Body>", b""),
        _envelope("<rejectSubscribeResponse><return>x</return></rejectSubscribeResponse>"),
        _envelope("<approveSubscribeResponse/>"),
    ],
    ids=["wrong-root", "no-body", "wrong-response", "no-return"],
)
def test_parse_missing_node(codec: EnvelopeCodec, payload: bytes) -> None:
    with pytest.raises(ProtocolError) as exc_info:
        codec.parse_response(payload, OperationName.APPROVE)
    assert exc_info.value.kind is ProtocolErrorKind.MISSING_NODE


def test_parse_fault_is_missing_node_with_faultstring(codec: EnvelopeCodec) -> None:
    payload = _envelope(
        "<S:Fault><faultcode>S:Server</faultcode><faultstring>boom</faultstring></S:Fault>"
    )
    with pytest.raises(ProtocolError) as exc_info:
        codec.parse_response(payload, OperationName.APPROVE)
    assert exc_info.value.kind is ProtocolErrorKind.MISSING_NODE
    assert "boom" in exc_info.value.message


def _nested(depth: int) -> bytes:
    return _envelope(
        "<approveSubscribeResponse>" + "<a>" * depth + "</a>" * depth + "</approveSubscribeResponse>"
    )


def test_parse_deeply_nested_payload_is_malformed(codec: EnvelopeCodec) -> None:
    """Pathological nesting is a protocol error, never a RecursionError."""
    with pytest.raises(ProtocolError) as exc_info:
        codec.parse_response(_nested(5000), OperationName.APPROVE)
    assert exc_info.value.kind is ProtocolErrorKind.MALFORMED


def test_from_element_depth_limit() -> None:
    element = ET.fromstring(b"<r><a><b><c/></b></a></r>")
    assert ParsedNode.from_element(element, max_depth=4).find(("a", "b", "c")) is not None
    with pytest.raises(ValueError, match="deeper than 3"):
        ParsedNode.from_element(element, max_depth=3)


def test_protocol_error_does_not_carry_payload(codec: EnvelopeCodec) -> None:
    payload = _envelope("<approveSubscribeResponse><wrong>secret-ish</wrong></approveSubscribeResponse>")
    with pytest.raises(ProtocolError) as exc_info:
        codec.parse_response(payload, OperationName.APPROVE)
    assert "secret-ish" not in str(exc_info.value.to_dict())


def test_parsed_node_find_all_walks_every_match() -> None:
    tree = ParsedNode(
        "root",
        children=(
            ParsedNode("a", children=(ParsedNode("b", "1"), ParsedNode("b", "2"))),
            ParsedNode("a", children=(ParsedNode("b", "3"),)),
        ),
    )
    assert [n.text for n in tree.find_all(("a", "b"))] == ["1", "2", "3"]
    assert tree.find(("a", "c")) is None
    assert tree.text_of("missing") is None
