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


from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .constants import DEFAULT_TIMEOUT, DEFAULT_RETRIES, DEFAULT_CACHE_TTL, DEFAULT_ENDPOINTS
from .exceptions import ConfigurationError
from .utils import load_json_file

__all__ = ['DocsConfig']


@dataclass(frozen=True)
class DocsConfig:
    """
    Immutable configuration of a `PalletDocsInterface`

    Parameters
    ----------
    timeout: deadline in seconds for one metadata request, connect included
    retries: reserved for a caller-side backoff policy, not used by the fetch pipeline itself
    default_endpoints: mapping of chain name to websocket URI, merged over the polkadot/kusama/westend defaults
    cache_ttl: time-to-live in seconds of a cached metadata entry
    ws_options: dict of options to pass to the websockets connect function
    """
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    default_endpoints: Mapping[str, str] = field(default_factory=dict)
    cache_ttl: float = DEFAULT_CACHE_TTL
    ws_options: Optional[Mapping] = None

    def __post_init__(self):
        if not self.timeout or self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be a positive number of seconds, got {self.timeout!r}")

        if self.retries is None or self.retries < 0:
            raise ConfigurationError(f"Retries must be zero or more, got {self.retries!r}")

        if not self.cache_ttl or self.cache_ttl <= 0:
            raise ConfigurationError(f"Cache TTL must be a positive number of seconds, got {self.cache_ttl!r}")

        endpoints = dict(DEFAULT_ENDPOINTS)
        endpoints.update(self.default_endpoints or {})

        for name, url in endpoints.items():
            if not url or not (url[0:6] == 'wss://' or url[0:5] == 'ws://'):
                raise ConfigurationError(f"Endpoint for '{name}' must be a ws:// or wss:// URI, got {url!r}")

        object.__setattr__(self, 'default_endpoints', MappingProxyType(endpoints))
        object.__setattr__(self, 'ws_options', MappingProxyType(dict(self.ws_options or {})))

    @classmethod
    def from_json_file(cls, file_path: str) -> 'DocsConfig':
        """
        Create a configuration from a JSON file containing any subset of the constructor arguments

        Parameters
        ----------
        file_path

        Returns
        -------
        DocsConfig
        """
        data = load_json_file(file_path)

        if type(data) is not dict:
            raise ConfigurationError(f"Configuration file {file_path} must contain a JSON object")

        unknown_keys = set(data.keys()) - {'timeout', 'retries', 'default_endpoints', 'cache_ttl', 'ws_options'}
        if unknown_keys:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown_keys))}")

        return cls(**data)
