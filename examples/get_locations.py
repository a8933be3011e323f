"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0

Lists edge server locations using aiohttp.

Expects AKAMAI_API_HOST, CLIENT_TOKEN, CLIENT_SECRET and ACCESS_TOKEN to be set.
"""

import asyncio

import aiohttp
from edgegrid_signers import Authenticator, RequestDescriptor

LOCATIONS_URI = "/diagnostic-tools/v2/ghost-locations/available"


async def main() -> None:
    authenticator = Authenticator.from_environment()
    signed = authenticator.get(RequestDescriptor(request_uri=LOCATIONS_URI))

    async with aiohttp.ClientSession() as session:
        async with session.get(
            f"https://{authenticator.host}{LOCATIONS_URI}",
            headers={"Authorization": signed.header},
        ) as response:
            response.raise_for_status()
            print(await response.text())


if __name__ == "__main__":
    asyncio.run(main())
