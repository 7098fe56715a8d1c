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


METADATA_RPC_METHOD = 'state_getMetadata'

DEFAULT_TIMEOUT = 10
DEFAULT_CLOSE_TIMEOUT = 1
DEFAULT_RETRIES = 3
DEFAULT_CACHE_TTL = 300

NORMAL_CLOSURE_CODE = 1000
ABNORMAL_CLOSURE_CODE = 1006

UNKNOWN_CHAIN_NAME = 'unknown'
UNKNOWN_CHAIN_VERSION = 'unknown'

DEFAULT_CHAIN = 'polkadot'

DEFAULT_ENDPOINTS = {
    'polkadot': 'wss://rpc.polkadot.io',
    'kusama': 'wss://kusama-rpc.polkadot.io',
    'westend': 'wss://westend-rpc.polkadot.io',
}

CHAIN_DESCRIPTIONS = {
    'polkadot': 'Polkadot Relay Chain - Main network',
    'kusama': "Kusama Canary Network - Polkadot's canary network",
    'westend': 'Westend Testnet - Polkadot testnet',
}

CUSTOM_CHAIN_DESCRIPTION = 'Custom Substrate chain endpoint'

# Starting inventory used when no SCALE decoder is plugged in
WELL_KNOWN_PALLETS = [
    'System',
    'Scheduler',
    'Preimage',
    'Babe',
    'Timestamp',
    'Indices',
    'Balances',
    'TransactionPayment',
    'Authorship',
    'Staking',
    'Session',
    'Democracy',
    'Council',
    'TechnicalCommittee',
    'PhragmenElection',
    'TechnicalMembership',
    'Grandpa',
    'Treasury',
    'Sudo',
    'ImOnline',
    'AuthorityDiscovery',
    'Offences',
    'Historical',
    'RandomnessCollectiveFlip',
    'Identity',
    'Society',
    'Recovery',
    'Vesting',
    'Proxy',
    'Multisig',
    'Bounties',
    'Tips',
    'Assets',
    'Mmr',
    'Lottery',
    'Nfts',
    'Uniques',
    'Utility',
    'Conviction Voting',
    'Referenda',
    'Origins',
    'Whitelist',
]

FALLBACK_PALLET_DESCRIPTION = '{name} pallet - Core blockchain functionality'

EXTERNAL_PALLET_DOCS = {
    'Balances': {
        'description': 'The Balances pallet provides functionality for handling accounts and balances, including '
                       'getting and setting free balances, retrieving total, reserved and unreserved balances, '
                       'transferring balances between accounts, and managing locks.',
        'crate_url': 'https://docs.rs/pallet-balances/latest/pallet_balances/',
    },
    'System': {
        'description': 'The System pallet provides low-level access to core types and cross-cutting utilities. It '
                       'acts as the base layer for other pallets to interact with the Substrate framework components.',
        'crate_url': 'https://docs.rs/frame-system/latest/frame_system/',
    },
    'Timestamp': {
        'description': 'The Timestamp pallet provides functionality to get and set the on-chain time. It is used by '
                       'other pallets that need to query the current time.',
        'crate_url': 'https://docs.rs/pallet-timestamp/latest/pallet_timestamp/',
    },
    'Scheduler': {
        'description': 'The Scheduler pallet exposes capabilities for scheduling dispatches to occur at a specified '
                       'block number or at a specified period. These scheduled dispatches may be named or anonymous '
                       'and may be canceled.',
        'crate_url': 'https://docs.rs/pallet-scheduler/latest/pallet_scheduler/',
    },
}

PALLET_EXAMPLE_CALLS = {
    'Balances': {
        'transfer': 'Transfer tokens from one account to another',
        'transfer_keep_alive': 'Transfer tokens but keep the sender account alive (above existential deposit)',
        'set_balance': 'Set the balance of an account (sudo only)',
        'force_transfer': 'Transfer tokens between any two accounts (sudo only)',
    },
    'System': {
        'remark': 'Make an on-chain remark (store arbitrary data)',
        'set_heap_pages': "Set the number of pages in the WebAssembly environment's heap",
        'set_code': 'Set the new runtime code (for runtime upgrades)',
        'kill_storage': 'Kill some items from storage',
    },
    'Staking': {
        'bond': 'Take the origin account as a stash and lock up value of its balance',
        'bond_extra': 'Add some extra amount that have appeared in the stash free balance',
        'unbond': 'Schedule a portion of the stash to be unlocked ready for transfer',
        'nominate': 'Declare the desire to nominate targets for the origin controller',
    },
}

DOCS_RS_PALLET_URL = 'https://docs.rs/pallet-{name}/latest/'
POLKADOT_DOCS_URL = 'https://docs.polkadot.com/develop/parachains/customize-parachain/add-existing-pallets/'
