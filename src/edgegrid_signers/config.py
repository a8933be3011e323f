# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
import os
from collections.abc import Mapping
from typing import TypedDict
from urllib.parse import urlparse

from .exceptions import MissingCredentialsError

logger = logging.getLogger(__name__)

ENVIRONMENT_VARIABLES: dict[str, str] = {
    "host": "AKAMAI_API_HOST",
    "client_token": "CLIENT_TOKEN",
    "client_secret": "CLIENT_SECRET",
    "access_token": "ACCESS_TOKEN",
}


class EdgeGridCredentials(TypedDict):
    host: str
    client_token: str
    client_secret: str
    access_token: str


def resolve_environment_credentials(
    environ: Mapping[str, str] | None = None,
) -> EdgeGridCredentials:
    """Read EdgeGrid credentials from environment variables.

    :param environ: Mapping to read instead of ``os.environ``.
    :raises MissingCredentialsError: If any variable is unset or empty.
    """
    if environ is None:
        environ = os.environ

    missing = [var for var in ENVIRONMENT_VARIABLES.values() if not environ.get(var)]
    if missing:
        raise MissingCredentialsError(
            f"Missing EdgeGrid credentials in environment: {', '.join(missing)}"
        )

    host = normalize_host(environ[ENVIRONMENT_VARIABLES["host"]])
    logger.debug("Resolved EdgeGrid credentials from environment for %s", host)
    return EdgeGridCredentials(
        host=host,
        client_token=environ[ENVIRONMENT_VARIABLES["client_token"]],
        client_secret=environ[ENVIRONMENT_VARIABLES["client_secret"]],
        access_token=environ[ENVIRONMENT_VARIABLES["access_token"]],
    )


def normalize_host(host: str) -> str:
    """Reduce ``https://example.net/`` style values to ``example.net``."""
    host = host.strip()
    if "://" in host:
        host = urlparse(host).netloc
    return host.rstrip("/")
