import logging

from coo.chains import ChainId, chain_name
from coo.consts import (
    ASSET_META_ID,
    NFT_TRANSFER_ID,
    TOKEN_TRANSFER_ID,
    TOKEN_TRANSFER_WITH_PAYLOAD_ID,
)
from coo.emitters import DEFAULT_REGISTRY, AddressRegistry, EmitterType
from coo.errors import EmptyPayloadError
from coo.payloads import DecodedPayload, PayloadKind, decode_payload
from coo.vaa import Vaa

__all__ = ["classify", "classify_vaa", "decode_vaa_payload"]

logger = logging.getLogger(__name__)

_TOKEN_BRIDGE_KINDS = {
    TOKEN_TRANSFER_ID: PayloadKind.TOKEN_TRANSFER,
    ASSET_META_ID: PayloadKind.ASSET_META,
    TOKEN_TRANSFER_WITH_PAYLOAD_ID: PayloadKind.TOKEN_TRANSFER_WITH_PAYLOAD,
}

_NFT_BRIDGE_KINDS = {
    NFT_TRANSFER_ID: PayloadKind.NFT_TRANSFER,
}


def _first_byte(payload: bytes, role: EmitterType) -> int:
    if not payload:
        raise EmptyPayloadError(f"Empty payload from {role.value} bridge emitter")
    return payload[0]


def classify(
    emitter_chain: ChainId,
    emitter_address: bytes | str,
    payload: bytes,
    registry: AddressRegistry = DEFAULT_REGISTRY,
) -> PayloadKind:
    """Infer how a payload should be decoded

    The emitter is looked up in the registry first and only token and nft
    bridge emitters get their payload type byte inspected. Anything not
    recognized falls back to raw bytes.

    Raises:
        EmptyPayloadError: a token or nft bridge emitted an empty payload
    """
    if isinstance(emitter_address, (bytes, bytearray)):
        emitter_address = emitter_address.hex()
    emitter_address = emitter_address.lower()

    role = registry.find(emitter_chain, emitter_address)
    match role:
        case None:
            logger.debug(
                "emitter %s on %s is not known", emitter_address, chain_name(emitter_chain)
            )
            return PayloadKind.RAW_BYTES
        # core bridge payloads are governance messages
        case EmitterType.CORE_BRIDGE:
            return PayloadKind.RAW_BYTES
        case EmitterType.TOKEN_BRIDGE:
            return _TOKEN_BRIDGE_KINDS.get(
                _first_byte(payload, role), PayloadKind.RAW_BYTES
            )
        case EmitterType.NFT_BRIDGE:
            return _NFT_BRIDGE_KINDS.get(
                _first_byte(payload, role), PayloadKind.RAW_BYTES
            )
        case _:
            raise TypeError(f"Unhandled emitter role: {role!r}")


def classify_vaa(vaa: Vaa, registry: AddressRegistry = DEFAULT_REGISTRY) -> PayloadKind:
    return classify(vaa.emitter_chain, vaa.emitter_address, vaa.payload, registry)


def decode_vaa_payload(
    vaa: Vaa,
    kind: PayloadKind | None = None,
    registry: AddressRegistry = DEFAULT_REGISTRY,
) -> DecodedPayload:
    """decode the payload of a parsed VAA, inferring its kind unless one is forced"""
    if kind is None:
        kind = classify_vaa(vaa, registry)
    return decode_payload(vaa.payload, kind)
