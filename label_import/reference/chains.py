"""
label_import/reference/chains.py

Supported chains and the chain alias table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

CAIP2_PATTERN = re.compile(r"^eip155:([0-9]+)$", re.IGNORECASE)
NUMERIC_PATTERN = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class Chain:
    id: str
    name: str
    caip2: str
    short_name: str

    @property
    def numeric_id(self) -> str:
        return self.caip2.split(":", 1)[1]


CHAINS: tuple[Chain, ...] = (
    Chain(id="arbitrum", name="Arbitrum One", caip2="eip155:42161", short_name="arb1"),
    Chain(id="base", name="Base", caip2="eip155:8453", short_name="base"),
    Chain(id="ethereum", name="Ethereum", caip2="eip155:1", short_name="eth"),
    Chain(id="linea", name="Linea", caip2="eip155:59144", short_name="linea"),
    Chain(id="mantle", name="Mantle", caip2="eip155:5000", short_name="mantle"),
    Chain(id="mode", name="Mode Network", caip2="eip155:34443", short_name="mode"),
    Chain(id="optimism", name="OP Mainnet", caip2="eip155:10", short_name="oeth"),
    Chain(id="scroll", name="Scroll", caip2="eip155:534352", short_name="scr"),
    Chain(id="swell", name="Swellchain", caip2="eip155:1923", short_name="swell-l2"),
    Chain(id="taiko", name="Taiko", caip2="eip155:167000", short_name="tko-mainnet"),
    Chain(id="zksync_era", name="ZKsync Era", caip2="eip155:324", short_name="zksync"),
    Chain(id="zora", name="Zora", caip2="eip155:7777777", short_name="zora"),
)

CHAINS_BY_CAIP2: dict[str, Chain] = {chain.caip2: chain for chain in CHAINS}

# Keyed by decimal chain id without leading zeros.
CHAINS_BY_NUMERIC_ID: dict[str, Chain] = {chain.numeric_id: chain for chain in CHAINS}

VALID_CHAIN_IDS: frozenset[str] = frozenset(CHAINS_BY_CAIP2)

# Common synonyms people type into a chain column. Keys are lowercase.
_RAW_CHAIN_ALIASES: dict[str, str] = {
    "mainnet": "eip155:1",
    "ethereum": "eip155:1",
    "ethereum mainnet": "eip155:1",
    "eth": "eip155:1",
    "l1": "eip155:1",
    "optimism": "eip155:10",
    "op": "eip155:10",
    "op mainnet": "eip155:10",
    "opmainnet": "eip155:10",
    "base": "eip155:8453",
    "base mainnet": "eip155:8453",
    "arbitrum": "eip155:42161",
    "arb": "eip155:42161",
    "arbitrumone": "eip155:42161",
    "arbitrum one": "eip155:42161",
    "linea": "eip155:59144",
    "mantle": "eip155:5000",
    "mode": "eip155:34443",
    "scroll": "eip155:534352",
    "swell": "eip155:1923",
    "swellchain": "eip155:1923",
    "taiko": "eip155:167000",
    "zksync": "eip155:324",
    "zksync era": "eip155:324",
    "zksyncera": "eip155:324",
    "era": "eip155:324",
    "zora": "eip155:7777777",
    "polygon": "eip155:137",
    "matic": "eip155:137",
    "polygonzkevm": "eip155:1101",
    "arbitrumnova": "eip155:42170",
    "celo": "eip155:42220",
    "gnosis": "eip155:100",
    "moonbeam": "eip155:1284",
    "cronos": "eip155:25",
    "aurora": "eip155:1313161554",
    "zircuit": "eip155:48900",
}

# Every alias target must itself be a supported chain.
CHAIN_ALIASES: dict[str, str] = {
    alias: caip2 for alias, caip2 in _RAW_CHAIN_ALIASES.items() if caip2 in VALID_CHAIN_IDS
}


def find_chain(value: str) -> Chain | None:
    """
    Resolve a chain from a CAIP-2 id, numeric id, short id, name, or alias.
    """

    normalized = value.strip().lower()
    if not normalized:
        return None

    match = CAIP2_PATTERN.match(normalized)
    if match:
        return _chain_by_digits(match.group(1))
    if NUMERIC_PATTERN.match(normalized):
        return _chain_by_digits(normalized)

    for chain in CHAINS:
        if normalized in {chain.id.lower(), chain.name.lower(), chain.short_name.lower()}:
            return chain

    alias_target = CHAIN_ALIASES.get(normalized)
    if alias_target is None:
        alias_target = CHAIN_ALIASES.get(re.sub(r"[\s_-]+", "", normalized))
    if alias_target is not None:
        return CHAINS_BY_CAIP2[alias_target]
    return None


def _chain_by_digits(digits: str) -> Chain | None:
    return CHAINS_BY_NUMERIC_ID.get(digits.lstrip("0") or "0")
