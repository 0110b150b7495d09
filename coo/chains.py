from enum import IntEnum
from typing import TypeAlias

__all__ = [
    "Chain",
    "ChainId",
    "chain_id",
    "chain_name",
    "parse_chain",
    "to_chain",
]

MAX_CHAIN_ID = 0xFFFF


class Chain(IntEnum):
    """Chains known to the guardian network, keyed by their wire id"""

    Unset = 0
    Solana = 1
    Ethereum = 2
    Terra = 3
    Bsc = 4
    Polygon = 5
    Avalanche = 6
    Oasis = 7
    Algorand = 8
    Aurora = 9
    Fantom = 10
    Karura = 11
    Acala = 12
    Klaytn = 13
    Celo = 14
    Near = 15
    Moonbeam = 16
    Neon = 17
    Terra2 = 18
    Injective = 19
    Osmosis = 20
    Sui = 21
    Aptos = 22
    Arbitrum = 23
    Optimism = 24
    Gnosis = 25
    Pythnet = 26
    Xpla = 28
    Btc = 29
    Base = 30
    Sei = 32
    Wormchain = 3104


#: A known chain, or the raw id of one we have not heard of yet
ChainId: TypeAlias = Chain | int

_BY_NAME: dict[str, Chain] = {c.name.lower(): c for c in Chain}
# names the guardian docs and other tools also use
_BY_NAME.update({"binance": Chain.Bsc, "bnb": Chain.Bsc, "avax": Chain.Avalanche})


def to_chain(value: int) -> ChainId:
    """map a wire chain id to a Chain, keeping unknown ids as plain ints"""
    if not 0 <= value <= MAX_CHAIN_ID:
        raise ValueError(f"Chain id out of range for u16: {value}")
    try:
        return Chain(value)
    except ValueError:
        return int(value)


def parse_chain(text: str) -> ChainId:
    """parse a chain given by name (any case) or by decimal id"""
    name = text.strip().lower()
    if name in _BY_NAME:
        return _BY_NAME[name]
    try:
        value = int(name, 10)
    except ValueError:
        raise ValueError(f"Unrecognized chain: {text!r}") from None
    return to_chain(value)


def chain_id(chain: ChainId) -> int:
    return int(chain)


def chain_name(chain: ChainId) -> str:
    match chain:
        case Chain():
            return chain.name.lower()
        case int():
            return f"unknown({chain})"
        case _:
            raise TypeError(f"Not a chain: {chain!r}")
