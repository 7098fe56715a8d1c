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


import copy
import logging
from typing import List, Optional

from .config import DocsConfig
from .constants import PALLET_EXAMPLE_CALLS, DEFAULT_CHAIN, DOCS_RS_PALLET_URL, POLKADOT_DOCS_URL
from .decoder import MetadataDecoder, FallbackMetadataDecoder
from .docs import ExternalDocsProvider, StaticDocsProvider
from .exceptions import ConfigurationError
from .models import ChainInfo, PalletInfo, EndpointRegistryEntry
from .registry import EndpointRegistry
from .transport import WebsocketTransport
from .utils.caching import MetadataCache

__all__ = ['PalletDocsInterface', 'logger']

logger = logging.getLogger(__name__)


class PalletDocsInterface:

    def __init__(self, config: DocsConfig = None, transport: WebsocketTransport = None,
                 decoder: MetadataDecoder = None, docs_provider: ExternalDocsProvider = None,
                 cache: MetadataCache = None):
        """
        Pallet documentation of Substrate based chains, derived from the runtime metadata of a node

        Parameters
        ----------
        config: DocsConfig with timeout, cache TTL and default endpoints, defaults are used if omitted
        transport: object with a `fetch_metadata(url)` coroutine, a `WebsocketTransport` is created if omitted
        decoder: MetadataDecoder for the raw metadata, e.g. `ScaleMetadataDecoder`. Defaults to the
            `FallbackMetadataDecoder`
        docs_provider: ExternalDocsProvider used to enrich pallet descriptions
        cache: MetadataCache to use instead of a private one, e.g. to share metadata between instances
        """
        self.config = config or DocsConfig()

        self.transport = transport or WebsocketTransport(
            timeout=self.config.timeout, ws_options=dict(self.config.ws_options)
        )
        self.decoder = decoder or FallbackMetadataDecoder()
        self.docs_provider = docs_provider or StaticDocsProvider()

        self.cache = cache or MetadataCache(
            fetcher=self.transport.fetch_metadata,
            decoder=self.decoder,
            ttl=self.config.cache_ttl
        )

        self.registry = EndpointRegistry(self.config.default_endpoints)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """
        Nothing to clean up: every metadata request uses its own connection, which is closed once the request settles

        Returns
        -------

        """
        self.debug_message("Closing PalletDocsInterface")

    @staticmethod
    def debug_message(message: str):
        logger.debug(message)

    def get_available_chains(self) -> List[EndpointRegistryEntry]:
        """
        Get available Polkadot chains with their default endpoints

        Returns
        -------
        list of EndpointRegistryEntry
        """
        return list(self.registry.entries)

    def resolve_endpoint(self, endpoint: str = None, chain_name: str = None) -> str:
        """
        Determines the endpoint to use: an explicit endpoint, otherwise the endpoint of given chain name, otherwise
        the endpoint of the Polkadot relay chain

        Parameters
        ----------
        endpoint
        chain_name: name of a chain in the endpoint registry, e.g. 'kusama'

        Returns
        -------
        str
        """
        if endpoint:
            return endpoint

        if chain_name:
            resolved = self.registry.get_endpoint(chain_name)
            if resolved is None:
                raise ConfigurationError(f"Chain '{chain_name}' not found in endpoint registry")
            return resolved

        return self.registry.get_endpoint(DEFAULT_CHAIN)

    async def get_chain_info(self, endpoint: str) -> ChainInfo:
        return await self.cache.get(endpoint)

    async def get_pallets_list(self, endpoint: str) -> List[PalletInfo]:
        """
        Get list of pallets for given endpoint, in metadata order

        Parameters
        ----------
        endpoint

        Returns
        -------
        list of PalletInfo
        """
        chain_info = await self.get_chain_info(endpoint)
        return list(chain_info.pallets)

    async def get_pallet_details(self, endpoint: str, pallet_name: str) -> Optional[PalletInfo]:
        """
        Retrieves a pallet by case-insensitive name. The description of the returned copy is replaced by the external
        documentation when available; the cached metadata itself is never modified.

        Parameters
        ----------
        endpoint
        pallet_name

        Returns
        -------
        PalletInfo or None if the pallet is not present
        """
        chain_info = await self.get_chain_info(endpoint)
        pallet = chain_info.get_pallet(pallet_name)

        if pallet is None:
            return None

        pallet = copy.deepcopy(pallet)

        external_docs = self.fetch_external_docs(pallet.name)
        if external_docs and external_docs.get('description'):
            pallet.description = external_docs['description']

        return pallet

    async def search_pallets(self, endpoint: str, query: str) -> List[PalletInfo]:
        """
        Search for pallets by name or functionality, case-insensitive substring match on name or description

        Parameters
        ----------
        endpoint
        query: empty query matches all pallets

        Returns
        -------
        list of PalletInfo
        """
        pallets = await self.get_pallets_list(endpoint)
        search_term = (query or '').lower()

        return [
            pallet for pallet in pallets
            if search_term in pallet.name.lower() or
            (pallet.description is not None and search_term in pallet.description.lower())
        ]

    def fetch_external_docs(self, pallet_name: str) -> Optional[dict]:
        try:
            return self.docs_provider.get(pallet_name)
        except Exception as e:
            # Enrichment is best-effort
            logger.warning(f"Failed to fetch external docs for {pallet_name}: {e}")
            return None

    @staticmethod
    def get_pallet_examples(pallet_name: str) -> Optional[dict]:
        """
        Example calls of well-known pallets

        Parameters
        ----------
        pallet_name: case-insensitive pallet name

        Returns
        -------
        dict of call name to description, or None if no examples are available
        """
        if not pallet_name:
            return None

        for name, examples in PALLET_EXAMPLE_CALLS.items():
            if name.lower() == pallet_name.lower():
                return dict(examples)

    def get_documentation_links(self, pallet_name: str) -> dict:
        """
        Links to the crate documentation of a pallet and the Polkadot developer guide

        Parameters
        ----------
        pallet_name

        Returns
        -------
        dict
        """
        external_docs = self.fetch_external_docs(pallet_name)

        if external_docs and external_docs.get('crate_url'):
            crate_url = external_docs['crate_url']
        else:
            crate_url = DOCS_RS_PALLET_URL.format(name=pallet_name.lower())

        return {
            'crates_io': crate_url,
            'polkadot_docs': POLKADOT_DOCS_URL
        }
