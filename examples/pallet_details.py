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
import json

from substratedocs import PalletDocsInterface, DocsConfig

config = DocsConfig(timeout=20, default_endpoints={'local': 'ws://127.0.0.1:9944'})


async def main():

    substrate_docs = PalletDocsInterface(config=config)
    endpoint = substrate_docs.resolve_endpoint(chain_name='polkadot')

    results = await substrate_docs.search_pallets(endpoint, 'staking')
    print(json.dumps([pallet.summary() for pallet in results], indent=2))

    pallet = await substrate_docs.get_pallet_details(endpoint, 'balances')

    if pallet:
        print(json.dumps({
            'endpoint': endpoint,
            'pallet': pallet.serialize(),
            'examples': substrate_docs.get_pallet_examples(pallet.name) or 'No examples available for this pallet',
            'documentationLinks': substrate_docs.get_documentation_links(pallet.name)
        }, indent=2))


if __name__ == "__main__":
    asyncio.run(main())
