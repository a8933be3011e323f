# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import base64
import datetime
import hmac
import logging
import uuid
import warnings
from collections.abc import Mapping
from dataclasses import dataclass, field
from hashlib import sha256
from typing import Self, TypedDict

from ._request import RequestDescriptor, SignedResult
from .config import resolve_environment_credentials
from .exceptions import EdgeGridWarning, InvalidArgumentError, SigningError

logger = logging.getLogger(__name__)

EDGEGRID_ALGORITHM: str = "EG1-HMAC-SHA256"
EDGEGRID_TIMESTAMP_FORMAT: str = "%Y%m%dT%H:%M:%S+0000"
EDGEGRID_SCHEME: str = "https"
SUPPORTED_METHODS: tuple[str, ...] = ("GET", "POST")


class EdgeGridSigningProperties(TypedDict, total=False):
    timestamp: str
    nonce: str


@dataclass(frozen=True)
class Authenticator:
    """Request signer for the Akamai {OPEN} EdgeGrid authentication scheme.

    An Authenticator holds the credentials for one API host and carries no
    per-request state, so a single instance can be shared between threads and
    reused for any number of requests.
    """

    host: str
    """API hostname without scheme or path."""

    client_token: str
    client_secret: str = field(repr=False)
    access_token: str

    def __post_init__(self) -> None:
        for name in ("host", "client_token", "client_secret", "access_token"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise InvalidArgumentError(
                    f"Authenticator requires a non-empty string for {name}."
                )

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Build an Authenticator from ``AKAMAI_API_HOST``, ``CLIENT_TOKEN``,
        ``CLIENT_SECRET`` and ``ACCESS_TOKEN``.

        :param environ: Mapping to read instead of ``os.environ``.
        """
        return cls(**resolve_environment_credentials(environ))

    def get(
        self,
        descriptor: RequestDescriptor,
        properties: EdgeGridSigningProperties | None = None,
    ) -> SignedResult:
        """Sign ``descriptor`` as a GET request."""
        return self.sign(descriptor, "GET", properties)

    def post(
        self,
        descriptor: RequestDescriptor,
        properties: EdgeGridSigningProperties | None = None,
    ) -> SignedResult:
        """Sign ``descriptor`` as a POST request.

        The returned body is the one that must be transmitted.
        """
        return self.sign(descriptor, "POST", properties)

    def sign(
        self,
        descriptor: RequestDescriptor,
        method: str,
        properties: EdgeGridSigningProperties | None = None,
    ) -> SignedResult:
        """Generate the EdgeGrid ``Authorization`` header value for a request.

        :param descriptor: The request to sign. Its ``unsigned_header`` and
            ``signed_header`` fields are overwritten, and for a POST whose body was
            hashed ``body`` is replaced with the truncated bytes.
        :param method: ``GET`` or ``POST``.
        :param properties: Optional fixed ``timestamp`` and ``nonce``. Fresh
            values are generated for whichever is missing.
        """
        method = _validate_method(method)
        _validate_descriptor(descriptor)
        properties = EdgeGridSigningProperties(**(properties or {}))
        timestamp = properties.get("timestamp") or format_timestamp()
        nonce = properties.get("nonce") or generate_nonce()
        logger.debug(
            "Signing %s request for %s%s", method, self.host, descriptor.request_uri
        )

        unsigned_header = build_unsigned_header(
            client_token=self.client_token,
            access_token=self.access_token,
            timestamp=timestamp,
            nonce=nonce,
        )
        body_hash, hashed_body = process_body(
            descriptor.body, descriptor.max_body, method
        )
        canonical = canonical_string(
            method=method,
            host=self.host,
            request_uri=descriptor.request_uri,
            normalized_headers=normalize_headers(descriptor.headers),
            body_hash=body_hash,
            unsigned_header=unsigned_header,
        )
        signing_key = derive_signing_key(timestamp, self.client_secret)
        signature = compute_signature(canonical, signing_key)
        signed_header = build_signed_header(unsigned_header, signature)

        descriptor.unsigned_header = unsigned_header
        descriptor.signed_header = signed_header
        if method != "POST":
            return SignedResult(header=signed_header)
        if body_hash:
            descriptor.body = hashed_body
        return SignedResult(header=signed_header, body=descriptor.body)


def format_timestamp(when: datetime.datetime | None = None) -> str:
    """Render a time in the fixed UTC format EdgeGrid expects.

    Naive datetimes are taken to already be in UTC.
    """
    if when is None:
        when = datetime.datetime.now(datetime.UTC)
    elif when.tzinfo is not None:
        when = when.astimezone(datetime.UTC)
    return when.strftime(EDGEGRID_TIMESTAMP_FORMAT)


def generate_nonce() -> str:
    return str(uuid.uuid4())


def build_unsigned_header(
    *, client_token: str, access_token: str, timestamp: str, nonce: str
) -> str:
    return (
        f"{EDGEGRID_ALGORITHM} "
        f"client_token={client_token};"
        f"access_token={access_token};"
        f"timestamp={timestamp};"
        f"nonce={nonce};"
    )


def build_signed_header(unsigned_header: str, signature: str) -> str:
    return f"{unsigned_header}signature={signature}"


def process_body(body: bytes, max_body: int, method: str) -> tuple[str, bytes]:
    """Hash the request body, truncated to ``max_body`` bytes.

    Only non-empty POST bodies with a positive ``max_body`` are hashed. Anything
    else yields an empty hash and an empty body. Truncation counts bytes, so a
    multi-byte character may be split.

    :returns: The base64 SHA-256 body hash and the exact bytes that were hashed.
    """
    if method != "POST" or not body or max_body <= 0:
        return "", b""

    if len(body) > max_body:
        warnings.warn(
            f"Request body of {len(body)} bytes was truncated to {max_body} bytes "
            "for signing. The truncated body must be sent with the request.",
            EdgeGridWarning,
        )
        logger.debug(
            "Truncating request body from %d to %d bytes", len(body), max_body
        )
        body = body[:max_body]
    return _base64_sha256(body), body


def normalize_headers(headers: Mapping[str, str]) -> str:
    """Render headers as tab separated ``name:value`` pairs.

    Names are lowercased and values stripped of surrounding whitespace. Pairs keep
    the iteration order of ``headers``, which for a ``dict`` is insertion order,
    so the caller controls the signing order. Names that only differ by case are
    rejected by ``Authenticator.sign`` before this runs.
    """
    return "\t".join(
        f"{name.lower()}:{value.strip()}" for name, value in headers.items()
    )


def canonical_string(
    *,
    method: str,
    host: str,
    request_uri: str,
    normalized_headers: str,
    body_hash: str,
    unsigned_header: str,
) -> str:
    """The tab separated string-to-sign.

    The verifier rebuilds this string independently, so any difference here
    results in a signature mismatch rather than a local error.

    Fields, joined by single tab characters:
        <METHOD> https <host> <request_uri> <headers> <body_hash> <unsigned header>
    """
    return "\t".join(
        (
            method,
            EDGEGRID_SCHEME,
            host,
            request_uri,
            normalized_headers,
            body_hash,
            unsigned_header,
        )
    )


def derive_signing_key(timestamp: str, client_secret: str) -> str:
    # SigningKey = base64(HMAC-SHA256(key=<client_secret>, msg=<timestamp>))
    return _base64_hmac_sha256(key=client_secret, value=timestamp)


def compute_signature(canonical: str, signing_key: str) -> str:
    # The base64 text of the signing key is itself the HMAC key.
    return _base64_hmac_sha256(key=signing_key, value=canonical)


def _base64_hmac_sha256(*, key: str, value: str) -> str:
    try:
        digest = hmac.new(
            key=key.encode("utf-8"), msg=value.encode("utf-8"), digestmod=sha256
        ).digest()
    except (TypeError, ValueError) as e:
        raise SigningError(f"Unable to compute HMAC-SHA256: {e}") from e
    return base64.b64encode(digest).decode("ascii")


def _base64_sha256(data: bytes) -> str:
    try:
        digest = sha256(data).digest()
    except (TypeError, ValueError) as e:
        raise SigningError(f"Unable to compute SHA-256 body hash: {e}") from e
    return base64.b64encode(digest).decode("ascii")


def _validate_method(method: str) -> str:
    if not isinstance(method, str) or method.upper() not in SUPPORTED_METHODS:
        raise InvalidArgumentError(
            f"Unsupported method {method!r}. Expected one of: "
            f"{', '.join(SUPPORTED_METHODS)}."
        )
    return method.upper()


def _validate_descriptor(descriptor: RequestDescriptor) -> None:
    """Reject malformed requests before any hashing happens."""
    uri = descriptor.request_uri
    if not isinstance(uri, str) or not uri.startswith("/"):
        raise InvalidArgumentError(
            f"request_uri must be an absolute path starting with '/', got {uri!r}."
        )
    _validate_text(uri, "request_uri")

    seen: set[str] = set()
    for name, value in descriptor.headers.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise InvalidArgumentError(
                f"Header names and values must be strings, got {name!r}."
            )
        _validate_text(name, f"header name {name!r}")
        # Surrounding whitespace is trimmed during normalization.
        _validate_text(value.strip(), f"value of header {name!r}")
        if name.lower() in seen:
            raise InvalidArgumentError(
                f"Header {name!r} is given more than once. Header names are "
                "case insensitive."
            )
        seen.add(name.lower())

    if not isinstance(descriptor.body, bytes):
        raise InvalidArgumentError(
            f"Expected body of type bytes but received {type(descriptor.body)}."
        )
    if isinstance(descriptor.max_body, bool) or not isinstance(
        descriptor.max_body, int
    ):
        raise InvalidArgumentError(
            f"max_body must be an integer, got {descriptor.max_body!r}."
        )
    if descriptor.max_body < 0:
        raise InvalidArgumentError(
            f"max_body must not be negative, got {descriptor.max_body}."
        )


def _validate_text(text: str, description: str) -> None:
    # Control characters would shift the tab separated fields of the string
    # to sign, and the signature covers the UTF-8 encoding.
    if any(ord(char) < 0x20 or ord(char) == 0x7F for char in text):
        raise InvalidArgumentError(f"{description} contains control characters.")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidArgumentError(f"{description} is not valid UTF-8 text.") from e
