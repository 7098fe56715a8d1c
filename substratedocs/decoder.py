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


import logging
import re
from abc import ABC, abstractmethod

from .constants import WELL_KNOWN_PALLETS, FALLBACK_PALLET_DESCRIPTION, UNKNOWN_CHAIN_NAME, UNKNOWN_CHAIN_VERSION
from .exceptions import DecodeError
from .models import ChainInfo, PalletInfo

__all__ = ['MetadataDecoder', 'FallbackMetadataDecoder', 'payload_length', 'strip_hex_prefix']

logger = logging.getLogger(__name__)

HEX_PATTERN = re.compile(r'^[0-9a-fA-F]*$')


def payload_length(raw_metadata) -> int:
    try:
        return len(raw_metadata)
    except TypeError:
        return 0


def strip_hex_prefix(raw_metadata: str) -> str:
    if raw_metadata[0:2] == '0x':
        return raw_metadata[2:]
    return raw_metadata


class MetadataDecoder(ABC):
    """
    Converts the hex-encoded result of `state_getMetadata` into a `ChainInfo`
    """

    @abstractmethod
    def decode(self, raw_metadata: str) -> ChainInfo:
        pass


class FallbackMetadataDecoder(MetadataDecoder):
    """
    Decoder used when no SCALE decoder is plugged in: the payload is only checked to be hex and the chain is
    described by a fixed inventory of well-known pallets
    """

    def decode(self, raw_metadata: str) -> ChainInfo:

        if type(raw_metadata) is not str:
            raise DecodeError(
                f"Metadata payload must be a hex string, got {type(raw_metadata).__name__}",
                payload_length=payload_length(raw_metadata)
            )

        metadata_hex = strip_hex_prefix(raw_metadata)

        if len(metadata_hex) % 2 != 0 or not HEX_PATTERN.match(metadata_hex):
            raise DecodeError(
                f"Failed to parse metadata: payload of length {len(raw_metadata)} is not valid hex",
                payload_length=len(raw_metadata)
            )

        logger.debug(f"Using fallback pallet inventory for metadata of {len(metadata_hex) // 2} bytes")

        return ChainInfo(
            name=UNKNOWN_CHAIN_NAME,
            version=UNKNOWN_CHAIN_VERSION,
            pallets=self.extract_basic_pallet_info()
        )

    @staticmethod
    def extract_basic_pallet_info() -> list:
        pallets = []

        for name in WELL_KNOWN_PALLETS:
            if any(pallet.name == name for pallet in pallets):
                continue

            pallets.append(PalletInfo(
                name=name,
                index=len(pallets),
                description=FALLBACK_PALLET_DESCRIPTION.format(name=name)
            ))

        return pallets
