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
from typing import Optional

from scalecodec.base import RuntimeConfigurationObject, ScaleBytes
from scalecodec.type_registry import load_type_registry_preset

from ..constants import UNKNOWN_CHAIN_NAME, UNKNOWN_CHAIN_VERSION
from ..decoder import MetadataDecoder, payload_length
from ..exceptions import DecodeError
from ..models import ChainInfo, PalletInfo, StorageItem, CallInfo, ArgumentInfo, EventInfo, ErrorInfo, \
    ConstantInfo

__all__ = ['ScaleMetadataDecoder']

logger = logging.getLogger(__name__)


def type_name(arg) -> Optional[str]:
    """
    Human readable type of a call or event argument, which depending on the metadata version is a plain type string
    or a field of a portable registry type
    """
    value = getattr(arg, 'value', arg)

    if type(value) is dict:
        if value.get('typeName'):
            return value['typeName']
        if value.get('type') is not None:
            return str(value['type'])
        return None

    if value is None:
        return None

    return str(value)


class ScaleMetadataDecoder(MetadataDecoder):

    def __init__(self, runtime_config: RuntimeConfigurationObject = None):
        """
        Decodes `MetadataVersioned` with the SCALE codec and maps all pallets with their storage functions, calls,
        events, errors and constants

        Parameters
        ----------
        runtime_config: RuntimeConfigurationObject to use, a new one with the "core" preset is created if omitted
        """
        self.runtime_config = runtime_config

    def create_runtime_config(self) -> RuntimeConfigurationObject:
        runtime_config = RuntimeConfigurationObject()
        runtime_config.update_type_registry(load_type_registry_preset(name="core"))
        return runtime_config

    def decode(self, raw_metadata: str) -> ChainInfo:
        runtime_config = self.runtime_config or self.create_runtime_config()

        try:
            metadata = runtime_config.create_scale_object('MetadataVersioned', data=ScaleBytes(raw_metadata))
            metadata.decode()

            # PortableRegistry is present in metadata V14+, needed to resolve call and event types
            if metadata.portable_registry is not None:
                logger.debug('Add PortableRegistry from metadata to type registry')
                runtime_config.add_portable_registry(metadata)

            pallets = [
                self.serialize_pallet(pallet, idx) for idx, pallet in enumerate(metadata.pallets)
            ]
            version = self.metadata_version(metadata)
        except Exception as e:
            raise DecodeError(
                f"Failed to decode metadata of length {payload_length(raw_metadata)}: {e}",
                payload_length=payload_length(raw_metadata), cause=e
            ) from e

        return ChainInfo(
            name=UNKNOWN_CHAIN_NAME,
            version=version,
            pallets=pallets
        )

    @staticmethod
    def metadata_version(metadata) -> str:
        versioned = metadata.value[1]
        if type(versioned) is dict and len(versioned) == 1:
            return next(iter(versioned.keys()))
        return UNKNOWN_CHAIN_VERSION

    def serialize_pallet(self, pallet, metadata_index: int) -> PalletInfo:
        """
        Helper function to convert a decoded pallet to a `PalletInfo`

        Parameters
        ----------
        pallet
        metadata_index: position in the metadata, used when the metadata version carries no pallet index

        Returns
        -------
        PalletInfo
        """
        docs = pallet.value.get('docs') or []
        description = '\n'.join(docs).strip()

        return PalletInfo(
            name=pallet.name,
            index=pallet.value.get('index', metadata_index),
            description=description or None,
            storage=tuple(self.serialize_storage_item(item) for item in pallet.storage or []),
            calls=tuple(self.serialize_call(call) for call in pallet.calls or []),
            events=tuple(self.serialize_event(event) for event in pallet.events or []),
            errors=tuple(self.serialize_error(error) for error in pallet.errors or []),
            constants=tuple(self.serialize_constant(constant) for constant in pallet.constants or [])
        )

    @staticmethod
    def serialize_storage_item(storage_item) -> StorageItem:
        try:
            value_type = storage_item.get_value_type_string()
        except (NotImplementedError, ValueError, KeyError):
            value_type = None

        return StorageItem(
            name=storage_item.name,
            modifier=storage_item.value['modifier'],
            type=value_type,
            documentation=tuple(storage_item.docs)
        )

    @staticmethod
    def serialize_call(call) -> CallInfo:
        return CallInfo(
            name=call.name,
            args=tuple(
                ArgumentInfo(name=getattr(arg, 'value', arg).get('name'), type=type_name(arg)) for arg in call.args
            ),
            documentation=tuple(call.docs)
        )

    @staticmethod
    def serialize_event(event) -> EventInfo:
        return EventInfo(
            name=event.name,
            arguments=tuple(type_name(arg) for arg in event.args),
            documentation=tuple(event.docs)
        )

    @staticmethod
    def serialize_error(error) -> ErrorInfo:
        return ErrorInfo(name=error.name, documentation=tuple(error.docs))

    @staticmethod
    def serialize_constant(constant) -> ConstantInfo:
        constant_value = constant.constant_value
        if type(constant_value) in (bytes, bytearray):
            constant_value = f"0x{constant_value.hex()}"

        return ConstantInfo(
            name=constant.name,
            type=constant.type,
            value=constant_value,
            documentation=tuple(constant.docs)
        )
