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
from typing import Optional, Tuple


@dataclass(frozen=True)
class ArgumentInfo:
    name: str
    type: str

    def serialize(self) -> dict:
        return {'name': self.name, 'type': self.type}


@dataclass(frozen=True)
class StorageItem:
    name: str
    modifier: str
    type: Optional[str] = None
    documentation: Tuple[str, ...] = ()

    def serialize(self) -> dict:
        return {
            'name': self.name,
            'modifier': self.modifier,
            'type': self.type,
            'documentation': list(self.documentation)
        }


@dataclass(frozen=True)
class CallInfo:
    name: str
    args: Tuple[ArgumentInfo, ...] = ()
    documentation: Tuple[str, ...] = ()

    def serialize(self) -> dict:
        return {
            'name': self.name,
            'args': [arg.serialize() for arg in self.args],
            'documentation': list(self.documentation)
        }


@dataclass(frozen=True)
class EventInfo:
    name: str
    arguments: Tuple[str, ...] = ()
    documentation: Tuple[str, ...] = ()

    def serialize(self) -> dict:
        return {
            'name': self.name,
            'arguments': list(self.arguments),
            'documentation': list(self.documentation)
        }


@dataclass(frozen=True)
class ErrorInfo:
    name: str
    documentation: Tuple[str, ...] = ()

    def serialize(self) -> dict:
        return {'name': self.name, 'documentation': list(self.documentation)}


@dataclass(frozen=True)
class ConstantInfo:
    name: str
    type: Optional[str] = None
    value: Optional[str] = None
    documentation: Tuple[str, ...] = ()

    def serialize(self) -> dict:
        return {
            'name': self.name,
            'type': self.type,
            'value': self.value,
            'documentation': list(self.documentation)
        }


@dataclass
class PalletInfo:
    """
    A runtime module as found in the metadata. Only `description` is expected to change after construction, when
    external documentation is merged in.
    """
    name: str
    index: int
    description: Optional[str] = None
    storage: Tuple[StorageItem, ...] = ()
    calls: Tuple[CallInfo, ...] = ()
    events: Tuple[EventInfo, ...] = ()
    errors: Tuple[ErrorInfo, ...] = ()
    constants: Tuple[ConstantInfo, ...] = ()

    def summary(self) -> dict:
        return {'name': self.name, 'index': self.index, 'description': self.description}

    def serialize(self) -> dict:
        return {
            'name': self.name,
            'index': self.index,
            'description': self.description,
            'storage': [item.serialize() for item in self.storage],
            'calls': [call.serialize() for call in self.calls],
            'events': [event.serialize() for event in self.events],
            'errors': [error.serialize() for error in self.errors],
            'constants': [constant.serialize() for constant in self.constants]
        }


@dataclass(frozen=True)
class ChainInfo:
    name: str
    version: str
    pallets: Tuple[PalletInfo, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable but store an immutable sequence
        object.__setattr__(self, 'pallets', tuple(self.pallets))

        names = [pallet.name for pallet in self.pallets]
        if len(names) != len(set(names)):
            raise ValueError('Pallet names must be unique within a ChainInfo')

    def get_pallet(self, name: str) -> Optional[PalletInfo]:
        """
        Case-insensitive exact lookup of a pallet by name

        Parameters
        ----------
        name

        Returns
        -------
        PalletInfo or None
        """
        name = name.lower()
        for pallet in self.pallets:
            if pallet.name.lower() == name:
                return pallet

    def serialize(self) -> dict:
        return {
            'name': self.name,
            'version': self.version,
            'pallets': [pallet.serialize() for pallet in self.pallets]
        }


@dataclass(frozen=True)
class CacheEntry:
    endpoint: str
    chain_info: ChainInfo
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(frozen=True)
class EndpointRegistryEntry:
    name: str
    endpoint: str
    description: str

    def serialize(self) -> dict:
        return {'name': self.name, 'endpoint': self.endpoint, 'description': self.description}


__all__ = [
    'ArgumentInfo', 'StorageItem', 'CallInfo', 'EventInfo', 'ErrorInfo', 'ConstantInfo', 'PalletInfo', 'ChainInfo',
    'CacheEntry', 'EndpointRegistryEntry'
]
