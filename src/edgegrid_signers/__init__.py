# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""EdgeGrid Signers provides stand-alone Akamai {OPEN} EdgeGrid request signing for
use with HTTP tools such as AioHTTP, Curl, Requests, urllib3, etc."""

from __future__ import annotations

from ._request import RequestDescriptor, SignedResult
from .signers import Authenticator, EdgeGridSigningProperties

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "Authenticator",
    "EdgeGridSigningProperties",
    "RequestDescriptor",
    "SignedResult",
)
