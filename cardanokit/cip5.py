"""Bech32 human-readable prefixes for Cardano keys, hashes and addresses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Keys:
    """Prefixes for signing and verification keys."""

    acct_sk: str = "acct_sk"
    acct_vk: str = "acct_vk"
    acct_xsk: str = "acct_xsk"
    acct_xvk: str = "acct_xvk"
    acct_shared_sk: str = "acct_shared_sk"
    acct_shared_vk: str = "acct_shared_vk"
    acct_shared_xsk: str = "acct_shared_xsk"
    acct_shared_xvk: str = "acct_shared_xvk"
    addr_sk: str = "addr_sk"
    addr_vk: str = "addr_vk"
    addr_xsk: str = "addr_xsk"
    addr_xvk: str = "addr_xvk"
    addr_shared_sk: str = "addr_shared_sk"
    addr_shared_vk: str = "addr_shared_vk"
    addr_shared_xsk: str = "addr_shared_xsk"
    addr_shared_xvk: str = "addr_shared_xvk"
    kes_sk: str = "kes_sk"
    kes_vk: str = "kes_vk"
    policy_sk: str = "policy_sk"
    policy_vk: str = "policy_vk"
    pool_sk: str = "pool_sk"
    pool_vk: str = "pool_vk"
    root_sk: str = "root_sk"
    root_vk: str = "root_vk"
    root_xsk: str = "root_xsk"
    root_xvk: str = "root_xvk"
    root_shared_sk: str = "root_shared_sk"
    root_shared_vk: str = "root_shared_vk"
    root_shared_xsk: str = "root_shared_xsk"
    root_shared_xvk: str = "root_shared_xvk"
    stake_sk: str = "stake_sk"
    stake_vk: str = "stake_vk"
    stake_xsk: str = "stake_xsk"
    stake_xvk: str = "stake_xvk"
    stake_shared_sk: str = "stake_shared_sk"
    stake_shared_vk: str = "stake_shared_vk"
    stake_shared_xsk: str = "stake_shared_xsk"
    stake_shared_xvk: str = "stake_shared_xvk"
    vrf_sk: str = "vrf_sk"
    vrf_vk: str = "vrf_vk"


@dataclass(frozen=True)
class Hashes:
    """Prefixes for hashes and identifiers."""

    asset: str = "asset"
    pool: str = "pool"
    script: str = "script"
    addr_vkh: str = "addr_vkh"
    addr_shared_vkh: str = "addr_shared_vkh"
    policy_vkh: str = "policy_vkh"
    stake_vkh: str = "stake_vkh"
    stake_shared_vkh: str = "stake_shared_vkh"
    vrf_vkh: str = "vrf_vkh"


@dataclass(frozen=True)
class Miscellaneous:
    """Prefixes for addresses on mainnet and testnet."""

    addr: str = "addr"
    addr_test: str = "addr_test"
    stake: str = "stake"
    stake_test: str = "stake_test"


KEYS = Keys()
HASHES = Hashes()
MISCELLANEOUS = Miscellaneous()