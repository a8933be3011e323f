from dataclasses import dataclass, field

import pytest
from edgegrid_signers import (
    Authenticator,
    EdgeGridSigningProperties,
    RequestDescriptor,
)
from edgegrid_signers.exceptions import EdgeGridWarning
from edgegrid_signers.signers import derive_signing_key

HOST: str = "akab-baseurl-xxxxxxxxxxx-xxxxxxxxxxxxx.luna.akamaiapis.net"
CLIENT_TOKEN: str = "akab-client-token-xxx-xxxxxxxxxxxxxxxx"
CLIENT_SECRET: str = "SOMESECRET"
ACCESS_TOKEN: str = "akab-access-token-xxx-xxxxxxxxxxxxxxxx"
TIMESTAMP: str = "20140321T19:34:21+0000"
NONCE: str = "nonce-xx-xxxx-xxxx-xxxx-xxxxxxxxxxxx"

UNSIGNED_HEADER: str = (
    f"EG1-HMAC-SHA256 client_token={CLIENT_TOKEN};access_token={ACCESS_TOKEN};"
    f"timestamp={TIMESTAMP};nonce={NONCE};"
)
LOCATIONS_URI: str = "/diagnostic-tools/v2/ghost-locations/available"
PROPERTIES_URI: str = "/papi/v1/properties?contractId=ctr_1"
PAYLOAD: bytes = b'{"name":"example"}'


@dataclass
class SigningVector:
    name: str
    method: str
    request_uri: str
    signature: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    max_body: int = 0
    expected_body: bytes = b""


VECTORS: list[SigningVector] = [
    SigningVector(
        name="get-locations",
        method="GET",
        request_uri=LOCATIONS_URI,
        signature="Z8qpTOuMD62XLRmOcO6QGHHGdrkGed5pStGedijNVUY=",
    ),
    SigningVector(
        name="get-ignores-body",
        method="GET",
        request_uri=LOCATIONS_URI,
        body=PAYLOAD,
        max_body=1024,
        signature="Z8qpTOuMD62XLRmOcO6QGHHGdrkGed5pStGedijNVUY=",
    ),
    SigningVector(
        name="get-with-headers",
        method="GET",
        request_uri=LOCATIONS_URI,
        headers={"X-Test": "t", "Content-Type": "application/json"},
        signature="1XwWSkaz2LrbEl2EuOJ+7MAeLDFeGI2md34nEY/zX/U=",
    ),
    SigningVector(
        name="post-unhashed-body",
        method="POST",
        request_uri=PROPERTIES_URI,
        body=PAYLOAD,
        max_body=0,
        expected_body=PAYLOAD,
        signature="zs5tZ2SR2E+T/WKkpwS63qMI/XRZdYA8aPMk1QFL2oc=",
    ),
]


@pytest.fixture(scope="module")
def authenticator() -> Authenticator:
    return Authenticator(HOST, CLIENT_TOKEN, CLIENT_SECRET, ACCESS_TOKEN)


@pytest.fixture(scope="module")
def fixed_properties() -> EdgeGridSigningProperties:
    return EdgeGridSigningProperties(timestamp=TIMESTAMP, nonce=NONCE)


def test_signing_key() -> None:
    assert (
        derive_signing_key(TIMESTAMP, CLIENT_SECRET)
        == "9KXfMHEbSZwBAOXViKXP54k7j1ReYdSbsWN8/IezYo4="
    )


@pytest.mark.parametrize("vector", VECTORS, ids=lambda v: v.name)
def test_signing_vectors(
    vector: SigningVector,
    authenticator: Authenticator,
    fixed_properties: EdgeGridSigningProperties,
) -> None:
    descriptor = RequestDescriptor(
        request_uri=vector.request_uri,
        headers=vector.headers,
        body=vector.body,
        max_body=vector.max_body,
    )
    signed = authenticator.sign(descriptor, vector.method, fixed_properties)
    assert signed.header == f"{UNSIGNED_HEADER}signature={vector.signature}"
    assert signed.body == vector.expected_body
    assert descriptor.unsigned_header == UNSIGNED_HEADER
    assert descriptor.signed_header == signed.header


def test_truncated_post_vector(
    authenticator: Authenticator, fixed_properties: EdgeGridSigningProperties
) -> None:
    descriptor = RequestDescriptor(
        request_uri=PROPERTIES_URI,
        headers={"Content-Type": " application/json ", "X-Test": "t"},
        body=PAYLOAD,
        max_body=8,
    )
    with pytest.warns(EdgeGridWarning):
        signed = authenticator.post(descriptor, fixed_properties)
    assert signed.header == (
        f"{UNSIGNED_HEADER}signature=gxT2v93MDFnzdWmQ3L9NdIZGfw9Cr0uODVhOxxXC204="
    )
    assert signed.body == b'{"name":'
    assert descriptor.body == b'{"name":'
