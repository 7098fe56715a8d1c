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


from typing import Mapping, Optional, Tuple

from .constants import CHAIN_DESCRIPTIONS, CUSTOM_CHAIN_DESCRIPTION, DEFAULT_ENDPOINTS
from .models import EndpointRegistryEntry

__all__ = ['EndpointRegistry']


class EndpointRegistry:
    """
    Fixed table of well-known chains and their default websocket endpoints. Polkadot, Kusama and Westend come first,
    chains only present in the configuration follow in configuration order.
    """

    def __init__(self, default_endpoints: Mapping[str, str] = None):
        endpoints = dict(DEFAULT_ENDPOINTS)
        endpoints.update(default_endpoints or {})

        self.__entries = tuple(
            EndpointRegistryEntry(
                name=name,
                endpoint=endpoint,
                description=CHAIN_DESCRIPTIONS.get(name, CUSTOM_CHAIN_DESCRIPTION)
            ) for name, endpoint in endpoints.items()
        )

    @property
    def entries(self) -> Tuple[EndpointRegistryEntry, ...]:
        return self.__entries

    def get_endpoint(self, name: str) -> Optional[str]:
        for entry in self.__entries:
            if entry.name == name:
                return entry.endpoint

    def __iter__(self):
        return iter(self.__entries)

    def __len__(self):
        return len(self.__entries)
