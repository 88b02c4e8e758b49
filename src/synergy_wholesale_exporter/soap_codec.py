"""
SOAP codec for the Synergy Wholesale API.

This module translates between the typed request/response models and the
upstream SOAP/XML wire format. The upstream server validates the request
structurally, so the envelope layout, namespace declarations and parameter
order produced by build_envelope are part of the wire contract.

Responses are matched on local element names; namespace prefixes and any
elements not listed in DomainRecord are ignored.
"""

from typing import Callable, Iterable, Optional
import xml.etree.ElementTree as ET

from .enums import ProtocolErrorCode
from .exceptions import MalformedResponseError
from .models import DomainListResponse, DomainRecord, ListDomainsRequest

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

SOAP_ENVELOPE_NS = "http://schemas.xmlsoap.org/soap/envelope/"
API_NS = "http://api.synergywholesale.com"
XML_SOAP_MAP_NS = "http://xml.apache.org/xml-soap"


def build_envelope(operation: str, params: Iterable[tuple[str, str]]) -> bytes:
    """
    Build a request envelope for an operation.

    Args:
        operation: Operation element name without prefix (e.g. 'listDomains')
        params: Ordered key/value pairs emitted as map items

    Returns:
        UTF-8 encoded envelope including the XML declaration
    """
    envelope = ET.Element("Envelope")
    envelope.set("xmlns:SOAP-ENV", SOAP_ENVELOPE_NS)
    envelope.set("xmlns:ns1", API_NS)
    envelope.set("xmlns:ns2", XML_SOAP_MAP_NS)

    body = ET.SubElement(envelope, "Body")
    call = ET.SubElement(body, f"ns1:{operation}")
    param = ET.SubElement(call, "param")
    param.set("xsi:type", "ns2:Map")

    for key, value in params:
        item = ET.SubElement(param, "item")
        ET.SubElement(item, "key").text = key
        ET.SubElement(item, "value").text = value

    ET.indent(envelope, space="  ")
    xml_body = ET.tostring(envelope, encoding="unicode", short_empty_elements=False)
    return (XML_HEADER + xml_body).encode("utf-8")


def encode_request(request: ListDomainsRequest) -> bytes:
    """Encode an operation variant into its request envelope."""
    return build_envelope(request.OPERATION, request.params())


def _local_name(tag) -> str:
    # Comments and processing instructions have non-string tags
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1].split(":")[-1]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _text(element: ET.Element, name: str) -> Optional[str]:
    child = _child(element, name)
    if child is None:
        return None
    return (child.text or "").strip()


def _items(element: ET.Element, name: str) -> list[ET.Element]:
    container = _child(element, name)
    if container is None:
        return []
    return [child for child in container if _local_name(child.tag) == "item"]


def _require(element: Optional[ET.Element], name: str, parent: str) -> ET.Element:
    if element is None:
        raise MalformedResponseError(
            code=ProtocolErrorCode.MISSING_ELEMENT.value,
            message=f"Response is missing <{name}> inside <{parent}>",
            details={"element": name, "parent": parent},
        )
    return element


def _parse_int(value: Optional[str], field_name: str, domain_name: str) -> int:
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        raise MalformedResponseError(
            code=ProtocolErrorCode.INVALID_FIELD.value,
            message=f"Field {field_name} is not an integer: {value!r}",
            details={"field": field_name, "value": value, "domain": domain_name},
        )


def _decode_domain(item: ET.Element) -> DomainRecord:
    domain_name = _text(item, "domainName") or ""

    name_servers = [(ns.text or "").strip() for ns in _items(item, "nameServers")]
    dnssec_keys = []
    for key in _items(item, "DSData"):
        uuid = _text(key, "UUID")
        if uuid is not None:
            dnssec_keys.append(uuid)

    return DomainRecord(
        status=_text(item, "status") or "",
        error_message=_text(item, "errorMessage"),
        domain_name=domain_name,
        domain_status=_text(item, "domain_status") or "",
        domain_created=_text(item, "domain_created") or "",
        domain_expiry=_text(item, "domain_expiry") or "",
        auto_renew=_parse_int(_text(item, "autoRenew"), "autoRenew", domain_name),
        name_servers=[ns for ns in name_servers if ns],
        dnssec_keys=dnssec_keys,
    )


def _decode_list_domains(result: ET.Element) -> DomainListResponse:
    return DomainListResponse(
        status=_text(result, "status") or "",
        error_message=_text(result, "errorMessage"),
        domains=[_decode_domain(item) for item in _items(result, "domainList")],
    )


# operation name -> (response element, decoder for its <return> element)
_DECODERS: dict[str, tuple[str, Callable[[ET.Element], DomainListResponse]]] = {
    ListDomainsRequest.OPERATION: (
        ListDomainsRequest.RESPONSE_ELEMENT,
        _decode_list_domains,
    ),
}


def decode_response(
    data: bytes,
    operation: str = ListDomainsRequest.OPERATION,
) -> DomainListResponse:
    """
    Decode a response envelope for an operation.

    Args:
        data: Raw response bytes from the upstream API
        operation: Operation the response belongs to

    Returns:
        The decoded response

    Raises:
        MalformedResponseError: If the bytes are not XML or the
            Envelope/Body/<operation>Response/return nesting is absent
    """
    if operation not in _DECODERS:
        raise MalformedResponseError(
            code=ProtocolErrorCode.UNKNOWN_OPERATION.value,
            message=f"No decoder registered for operation: {operation}",
            details={"operation": operation},
        )
    response_element, decoder = _DECODERS[operation]

    try:
        root = ET.fromstring(data)
    except (ET.ParseError, ValueError, LookupError) as e:
        # ValueError and LookupError come from undecodable encoding declarations
        raise MalformedResponseError(
            code=ProtocolErrorCode.NOT_XML.value,
            message=f"Failed to parse SOAP response: {e}",
            details={"size": len(data)},
        )

    if _local_name(root.tag) != "Envelope":
        raise MalformedResponseError(
            code=ProtocolErrorCode.MISSING_ELEMENT.value,
            message=f"Expected <Envelope> root element, got <{_local_name(root.tag)}>",
            details={"element": "Envelope"},
        )

    body = _require(_child(root, "Body"), "Body", "Envelope")
    response = _require(_child(body, response_element), response_element, "Body")
    result = _require(_child(response, "return"), "return", response_element)

    return decoder(result)
