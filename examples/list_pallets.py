# Python Substrate Docs Library
#
# Copyright 2018-2024 Stichting Polkascan (Polkascan Foundation).
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


import asyncio

from substratedocs import PalletDocsInterface, ScaleMetadataDecoder

# import logging
# logging.basicConfig(level=logging.DEBUG)


async def main():

    async with PalletDocsInterface(decoder=ScaleMetadataDecoder()) as substrate_docs:

        for chain in substrate_docs.get_available_chains():
            print(f"{chain.name}: {chain.endpoint} ({chain.description})")

        endpoint = substrate_docs.resolve_endpoint(chain_name='kusama')

        pallets = await substrate_docs.get_pallets_list(endpoint)
        print(f"{len(pallets)} pallets found on {endpoint}")

        for pallet in pallets:
            print(f"  #{pallet.index} {pallet.name}: {len(pallet.calls)} calls, {len(pallet.storage)} storage functions")


if __name__ == "__main__":
    asyncio.run(main())
