# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(kw_only=True)
class RequestDescriptor:
    """The parts of an outgoing HTTP request covered by an EdgeGrid signature.

    A descriptor is built for a single request and consumed by a single call to
    :py:meth:`Authenticator.sign`. Signing overwrites ``unsigned_header`` and
    ``signed_header``, and for POST requests replaces ``body`` with the bytes that
    were actually hashed.
    """

    request_uri: str
    """Absolute path plus optional query string, for example ``/path?a=1``."""

    headers: dict[str, str] = field(default_factory=dict)
    """Headers to include in the signature.

    Names are lowercased when signed. Insertion order is the signing order.
    """

    body: bytes = b""
    """The raw request payload. A ``str`` is encoded as UTF-8."""

    max_body: int = 0
    """Maximum number of body bytes to hash. ``0`` disables body hashing."""

    unsigned_header: str = ""
    """Authorization header text before the signature, set during signing."""

    signed_header: str = ""
    """The complete Authorization header value, set during signing."""

    def __post_init__(self) -> None:
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")


@dataclass(frozen=True)
class SignedResult:
    """Authorization header value and, for POST, the body that must be sent."""

    header: str
    body: bytes = b""
