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


from .base import *
from .config import DocsConfig
from .decoder import MetadataDecoder, FallbackMetadataDecoder
from .docs import ExternalDocsProvider, StaticDocsProvider
from .models import *
from .registry import EndpointRegistry
from .scale import ScaleMetadataDecoder
from .transport import RpcSession, WebsocketTransport
from .utils.caching import MetadataCache

__all__ = (base.__all__ + models.__all__ + [
    'DocsConfig', 'MetadataDecoder', 'FallbackMetadataDecoder', 'ScaleMetadataDecoder', 'ExternalDocsProvider',
    'StaticDocsProvider', 'EndpointRegistry', 'RpcSession', 'WebsocketTransport', 'MetadataCache'
])
