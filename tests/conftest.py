"""
Shared fixtures: canned Synergy Wholesale SOAP responses.
"""

import pytest

ENVELOPE_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<SOAP-ENV:Envelope xmlns:SOAP-ENV="http://schemas.xmlsoap.org/soap/envelope/" xmlns:ns1="http://api.synergywholesale.com" xmlns:xsd="http://www.w3.org/2001/XMLSchema" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xmlns:SOAP-ENC="http://schemas.xmlsoap.org/soap/encoding/" SOAP-ENV:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">
<SOAP-ENV:Body>
<ns1:listDomainsResponse>
<return xsi:type="SOAP-ENC:Struct">
<status xsi:type="xsd:string">{status}</status>
{error_message}<domainList SOAP-ENC:arrayType="SOAP-ENC:Struct[]" xsi:type="SOAP-ENC:Array">
{items}
</domainList>
</return>
</ns1:listDomainsResponse>
</SOAP-ENV:Body>
</SOAP-ENV:Envelope>
"""

DOMAIN_ITEMS = """<item xsi:type="SOAP-ENC:Struct">
<status xsi:type="xsd:string">OK</status>
<domainName xsi:type="xsd:string">example.com.au</domainName>
<domain_status xsi:type="xsd:string">ok</domain_status>
<domain_created xsi:type="xsd:string">2020-01-15 09:30:00</domain_created>
<domain_expiry xsi:type="xsd:string">2025-12-25 10:00:00</domain_expiry>
<createdDate xsi:type="xsd:string">2020-01-15 09:30:00</createdDate>
<transfer_status xsi:type="xsd:string"></transfer_status>
<autoRenew xsi:type="xsd:int">1</autoRenew>
<idProtect xsi:type="xsd:string">Disabled</idProtect>
<nameServers SOAP-ENC:arrayType="xsd:string[2]" xsi:type="SOAP-ENC:Array">
<item xsi:type="xsd:string">ns1.example.net</item>
<item xsi:type="xsd:string">ns2.example.net</item>
</nameServers>
<DSData SOAP-ENC:arrayType="SOAP-ENC:Struct[1]" xsi:type="SOAP-ENC:Array">
<item xsi:type="SOAP-ENC:Struct">
<UUID xsi:type="xsd:string">8f0c1a52-6f7b-4a7e-9d1e-2f3b4c5d6e7f</UUID>
<keyTag xsi:type="xsd:int">12345</keyTag>
<algorithm xsi:type="xsd:int">13</algorithm>
</item>
</DSData>
</item>
<item xsi:type="SOAP-ENC:Struct">
<status xsi:type="xsd:string">OK</status>
<domainName xsi:type="xsd:string">example.net</domainName>
<domain_status xsi:type="xsd:string">clientTransferProhibited</domain_status>
<domain_created xsi:type="xsd:string">2019-03-01 00:00:00</domain_created>
<domain_expiry xsi:type="xsd:string"></domain_expiry>
<autoRenew xsi:type="xsd:int">0</autoRenew>
<nameServers SOAP-ENC:arrayType="xsd:string[1]" xsi:type="SOAP-ENC:Array">
<item xsi:type="xsd:string">ns1.example.net</item>
</nameServers>
</item>
<item xsi:type="SOAP-ENC:Struct">
<status xsi:type="xsd:string">ERR_DOMAIN_DELETED</status>
<errorMessage xsi:type="xsd:string">Domain has been deleted</errorMessage>
<domainName xsi:type="xsd:string">deleted.com.au</domainName>
</item>"""


def build_response_xml(items: str = DOMAIN_ITEMS, status: str = "OK", error_message: str = "") -> bytes:
    """Render a listDomains response envelope."""
    error = ""
    if error_message:
        error = f'<errorMessage xsi:type="xsd:string">{error_message}</errorMessage>\n'
    return ENVELOPE_TEMPLATE.format(status=status, error_message=error, items=items).encode("utf-8")


@pytest.fixture
def response_xml() -> bytes:
    """A well-formed listDomains response with two OK domains and one deleted."""
    return build_response_xml()


@pytest.fixture
def response_builder():
    """Factory for listDomains response envelopes."""
    return build_response_xml
