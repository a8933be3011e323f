# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class EdgeGridWarning(UserWarning): ...


class BaseEdgeGridException(Exception):
    """Top-level exception to capture EdgeGrid signing errors."""


class InvalidArgumentError(BaseEdgeGridException, ValueError):
    """The request description can't be signed as given."""


class SigningError(BaseEdgeGridException, RuntimeError):
    """The underlying hash or HMAC primitive failed.

    This indicates a fault in the environment or the key material rather than in
    the request, and the signing attempt should be abandoned.
    """


class MissingCredentialsError(BaseEdgeGridException, LookupError):
    """Required credentials could not be found."""
