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
import logging
import time
from typing import Awaitable, Callable, Dict

from ..constants import DEFAULT_CACHE_TTL
from ..decoder import MetadataDecoder
from ..models import CacheEntry, ChainInfo

__all__ = ['MetadataCache']

logger = logging.getLogger(__name__)


class MetadataCache:

    def __init__(self, fetcher: Callable[[str], Awaitable[str]], decoder: MetadataDecoder,
                 ttl: float = DEFAULT_CACHE_TTL, clock: Callable[[], float] = time.monotonic):
        """
        In-memory store of decoded metadata per endpoint with a fixed time-to-live. Concurrent lookups of the same
        absent or expired endpoint share a single fetch.

        Parameters
        ----------
        fetcher: coroutine function returning the raw metadata for an endpoint, e.g. `WebsocketTransport.fetch_metadata`
        decoder: MetadataDecoder used to convert the raw metadata
        ttl: time-to-live in seconds, applied to every entry
        clock: monotonic time source in seconds
        """
        self.fetcher = fetcher
        self.decoder = decoder
        self.ttl = ttl
        self.clock = clock

        self.__entries: Dict[str, CacheEntry] = {}
        self.__inflight: Dict[str, asyncio.Task] = {}

    def __contains__(self, endpoint: str) -> bool:
        entry = self.__entries.get(endpoint)
        return entry is not None and entry.is_valid(self.clock())

    def __len__(self) -> int:
        return len(self.__entries)

    async def get(self, endpoint: str) -> ChainInfo:
        """
        Returns the decoded metadata for given endpoint, from memory when the entry is not expired, otherwise
        retrieved from the node

        Parameters
        ----------
        endpoint: websocket URI, used as exact cache key

        Returns
        -------
        ChainInfo
        """
        entry = self.__entries.get(endpoint)

        if entry is not None and entry.is_valid(self.clock()):
            logger.debug(f'Retrieved metadata for {endpoint} from memory')
            return entry.chain_info

        task = self.__inflight.get(endpoint)

        if task is None:
            task = asyncio.ensure_future(self.__refresh(endpoint))
            self.__inflight[endpoint] = task

            def remove_inflight(finished_task):
                if self.__inflight.get(endpoint) is finished_task:
                    del self.__inflight[endpoint]

                # Retrieved here as well, all waiters may have been cancelled before the fetch failed
                if not finished_task.cancelled() and finished_task.exception() is not None:
                    logger.debug(f'Metadata request for {endpoint} failed: {finished_task.exception()}')

            task.add_done_callback(remove_inflight)
        else:
            logger.debug(f'Waiting for metadata request in progress for {endpoint}')

        # Shielded so a cancelled caller does not abort the fetch other callers are waiting for
        return await asyncio.shield(task)

    def invalidate(self, endpoint: str) -> bool:
        """
        Removes the entry for given endpoint, a fetch already in progress is not affected

        Parameters
        ----------
        endpoint

        Returns
        -------
        True if an entry was removed
        """
        return self.__entries.pop(endpoint, None) is not None

    async def __refresh(self, endpoint: str) -> ChainInfo:
        raw_metadata = await self.fetcher(endpoint)
        chain_info = self.decoder.decode(raw_metadata)

        self.__entries[endpoint] = CacheEntry(
            endpoint=endpoint,
            chain_info=chain_info,
            expires_at=self.clock() + self.ttl
        )

        logger.debug(f'Retrieved metadata for {endpoint} from Substrate node')

        return chain_info
