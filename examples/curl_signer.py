"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0

Sample signer producing a curl command.
"""

import shlex
from collections.abc import Mapping

from edgegrid_signers import Authenticator, RequestDescriptor


class EdgeGridCurl:
    """Generates a curl command with an EdgeGrid signature applied."""

    @classmethod
    def generate_signed_curl_cmd(
        cls,
        authenticator: Authenticator,
        method: str,
        request_uri: str,
        headers: Mapping[str, str],
        body: bytes = b"",
        max_body: int = 131072,
    ) -> str:
        descriptor = RequestDescriptor(
            request_uri=request_uri,
            headers=dict(headers),
            body=body,
            max_body=max_body,
        )
        signed = authenticator.sign(descriptor, method)

        cmd_list = ["curl", f"-X {method.upper()}"]
        all_headers = {**headers, "Authorization": signed.header}
        for name, value in all_headers.items():
            cmd_list.append(f"-H {shlex.quote(f'{name}: {value}')}")
        if signed.body:
            # Forcing bytes to a utf-8 string, if we need arbitrary bytes for the
            # terminal we should add an option to write to file and use that
            # in the command.
            cmd_list.append(f"-d {shlex.quote(signed.body.decode())}")
        cmd_list.append(shlex.quote(f"https://{authenticator.host}{request_uri}"))
        return " ".join(cmd_list)
