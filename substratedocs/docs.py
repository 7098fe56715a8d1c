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


from abc import ABC, abstractmethod
from typing import Optional

from .constants import EXTERNAL_PALLET_DOCS

__all__ = ['ExternalDocsProvider', 'StaticDocsProvider']


class ExternalDocsProvider(ABC):
    """
    Source of documentation for pallets maintained outside the runtime metadata (crates.io, docs.rs, ...)
    """

    @abstractmethod
    def get(self, pallet_name: str) -> Optional[dict]:
        """
        Parameters
        ----------
        pallet_name: exact pallet name as found in the metadata

        Returns
        -------
        dict with 'description' and 'crate_url', or None when the pallet is unknown
        """
        pass


class StaticDocsProvider(ExternalDocsProvider):

    def __init__(self, docs: dict = None):
        self.docs = EXTERNAL_PALLET_DOCS if docs is None else docs

    def get(self, pallet_name: str) -> Optional[dict]:
        docs = self.docs.get(pallet_name)
        if docs is not None:
            return dict(docs)
