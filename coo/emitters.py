import dataclasses
from collections.abc import Iterator, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Final, TypeAlias

from coo.chains import Chain, ChainId, chain_name
from coo.consts import ADDRESS_LENGTH, CONTRACT_ADDRESS_LENGTH
from coo.encoding import hex_to_bytes
from coo.errors import HexDecodeError, UnknownEmitterError

__all__ = [
    "AddressRegistry",
    "DEFAULT_REGISTRY",
    "EmitterRole",
    "EmitterType",
    "ExplicitAddress",
    "KNOWN_EMITTERS",
    "emitter_label",
    "pad_address",
    "parse_emitter",
    "resolve_emitter_address",
]


class EmitterType(Enum):
    """The protocol roles an emitter may play"""

    UNSET = "unset"
    CORE_BRIDGE = "core"
    TOKEN_BRIDGE = "token"
    NFT_BRIDGE = "nft"


@dataclasses.dataclass(frozen=True)
class ExplicitAddress:
    """An emitter given directly by its 32 byte wire address"""

    address: bytes

    def __post_init__(self) -> None:
        if len(self.address) != ADDRESS_LENGTH:
            raise ValueError(
                f"Emitter address must be {ADDRESS_LENGTH} bytes, got {len(self.address)}"
            )

    def hex(self) -> str:
        return self.address.hex()


EmitterRole: TypeAlias = EmitterType | ExplicitAddress

_BRIDGE_ROLES: Final = (
    EmitterType.CORE_BRIDGE,
    EmitterType.TOKEN_BRIDGE,
    EmitterType.NFT_BRIDGE,
)

#: Mainnet contract deployments, 20 byte addresses as hex
KNOWN_EMITTERS: Final[Mapping[tuple[ChainId, EmitterType], str]] = MappingProxyType(
    {
        (Chain.Ethereum, EmitterType.CORE_BRIDGE): "98f3c9e6E3fAce36bAAd05FE09d375Ef1464288B",
        (Chain.Ethereum, EmitterType.TOKEN_BRIDGE): "3ee18B2214AFF97000D974cf647E7C347E8fa585",
        (Chain.Ethereum, EmitterType.NFT_BRIDGE): "6FFd7EdE62328b3Af38FCD61461Bbfc52F5651fE",
        (Chain.Bsc, EmitterType.CORE_BRIDGE): "98f3c9e6E3fAce36bAAd05FE09d375Ef1464288B",
        (Chain.Bsc, EmitterType.TOKEN_BRIDGE): "B6F6D86a8f9879A9c87f643768d9efc38c1Da6E7",
        (Chain.Bsc, EmitterType.NFT_BRIDGE): "5a58505a96D1dbf8dF91cB21B54419FC36e93fdE",
        (Chain.Polygon, EmitterType.CORE_BRIDGE): "7A4B5a56256163F07b2C80A7cA55aBE66c4ec4d7",
        (Chain.Polygon, EmitterType.TOKEN_BRIDGE): "5a58505a96D1dbf8dF91cB21B54419FC36e93fdE",
        (Chain.Polygon, EmitterType.NFT_BRIDGE): "90BBd86a6Fe93D3bc3ed6335935447E75fAb7fCf",
        (Chain.Avalanche, EmitterType.CORE_BRIDGE): "54a8e5f9c4CbA08F9943965859F6c34eAF03E26c",
        (Chain.Avalanche, EmitterType.TOKEN_BRIDGE): "0e082F06FF657D94310cB8cE8B0D9a04541d8052",
        (Chain.Avalanche, EmitterType.NFT_BRIDGE): "f7B6737Ca9c4e08aE573F75A97B73D7a813f5De5",
    }
)


def pad_address(contract: bytes) -> bytes:
    """left pad a contract address with zeros to the 32 byte wire width"""
    if len(contract) > ADDRESS_LENGTH:
        raise ValueError(
            f"Address longer than {ADDRESS_LENGTH} bytes: {len(contract)}"
        )
    return contract.rjust(ADDRESS_LENGTH, b"\x00")


class AddressRegistry:
    """Read only table of known emitter contracts

    Built once from a mapping of (chain, role) to a hex contract address.
    Addresses are normalized to their padded 32 byte form on construction so
    lookups in both directions are plain dictionary hits.
    """

    def __init__(self, entries: Mapping[tuple[ChainId, EmitterType], str]):
        forward: dict[tuple[int, EmitterType], bytes] = {}
        reverse: dict[tuple[int, bytes], EmitterType] = {}
        for (chain, role), contract_hex in entries.items():
            if role not in _BRIDGE_ROLES:
                raise ValueError(f"Only bridge roles may be registered, got {role}")

            contract = hex_to_bytes(contract_hex)
            if len(contract) != CONTRACT_ADDRESS_LENGTH:
                raise ValueError(
                    f"Expected a {CONTRACT_ADDRESS_LENGTH} byte address for "
                    f"{chain_name(chain)}/{role.value}, got {len(contract)}"
                )

            padded = pad_address(contract)
            forward[(int(chain), role)] = padded
            reverse[(int(chain), padded)] = role

        self._forward = MappingProxyType(forward)
        self._reverse = MappingProxyType(reverse)

    def __len__(self) -> int:
        return len(self._forward)

    def __iter__(self) -> Iterator[tuple[int, EmitterType, bytes]]:
        for (chain, role), address in self._forward.items():
            yield chain, role, address

    def lookup(self, chain: ChainId, role: EmitterType) -> bytes | None:
        """padded address of the contract playing `role` on `chain`, if known"""
        return self._forward.get((int(chain), role))

    def find(self, chain: ChainId, emitter_address: bytes | str) -> EmitterType | None:
        """reverse lookup, returns the role a given emitter plays if it is known"""
        if isinstance(emitter_address, str):
            try:
                emitter_address = hex_to_bytes(emitter_address.lower())
            except HexDecodeError:
                return None
        return self._reverse.get((int(chain), bytes(emitter_address)))


DEFAULT_REGISTRY: Final[AddressRegistry] = AddressRegistry(KNOWN_EMITTERS)


def parse_emitter(text: str) -> EmitterRole:
    """Parse an emitter as typed by a user

    Empty means unset, `core`, `token` and `nft` name a bridge role and
    anything else is taken as a hex address, right aligned into 32 bytes.
    """
    match text:
        case "":
            return EmitterType.UNSET
        case "core" | "token" | "nft":
            return EmitterType(text)
        case _:
            decoded = hex_to_bytes(text)
            if len(decoded) > ADDRESS_LENGTH:
                raise HexDecodeError(
                    f"Emitter address longer than {ADDRESS_LENGTH} bytes: {text}"
                )
            return ExplicitAddress(pad_address(decoded))


def resolve_emitter_address(
    chain: ChainId,
    emitter: EmitterRole,
    registry: AddressRegistry = DEFAULT_REGISTRY,
) -> str:
    """Return the 64 character hex emitter address the guardians index by

    Raises:
        UnknownEmitterError: the role is unset or not deployed on `chain`
    """
    match emitter:
        case EmitterType.UNSET:
            raise UnknownEmitterError("Emitter type is unset")
        case EmitterType.CORE_BRIDGE | EmitterType.TOKEN_BRIDGE | EmitterType.NFT_BRIDGE:
            address = registry.lookup(chain, emitter)
            if address is None:
                raise UnknownEmitterError(
                    f"No known {emitter.value} emitter on {chain_name(chain)}"
                )
            return address.hex()
        case ExplicitAddress():
            return emitter.hex()
        case _:
            raise TypeError(f"Unhandled emitter: {emitter!r}")


def emitter_label(emitter: EmitterRole) -> str:
    """short human form of an emitter, as accepted by parse_emitter"""
    match emitter:
        case EmitterType.UNSET:
            raise UnknownEmitterError("Emitter type is unset")
        case EmitterType.CORE_BRIDGE | EmitterType.TOKEN_BRIDGE | EmitterType.NFT_BRIDGE:
            return emitter.value
        case ExplicitAddress():
            return emitter.hex()
        case _:
            raise TypeError(f"Unhandled emitter: {emitter!r}")
