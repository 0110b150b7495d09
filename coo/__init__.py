from . import consts, errors
from .cache import CachedVaa, VaaCache
from .chains import Chain, ChainId, chain_id, chain_name, parse_chain, to_chain
from .classifier import classify, classify_vaa, decode_vaa_payload
from .emitters import (
    DEFAULT_REGISTRY,
    AddressRegistry,
    EmitterRole,
    EmitterType,
    ExplicitAddress,
    parse_emitter,
    resolve_emitter_address,
)
from .guardian import GuardianClient, get_query_url
from .options import CooOptions
from .payloads import (
    AssetMeta,
    DecodedPayload,
    NftTransfer,
    PayloadKind,
    RawBytes,
    TokenTransfer,
    TokenTransferWithPayload,
    decode_payload,
)
from .vaa import Signature, Vaa, VaaBody, VaaHeader, parse_vaa

__all__ = [
    "AddressRegistry",
    "AssetMeta",
    "CachedVaa",
    "Chain",
    "ChainId",
    "CooOptions",
    "DEFAULT_REGISTRY",
    "DecodedPayload",
    "EmitterRole",
    "EmitterType",
    "ExplicitAddress",
    "GuardianClient",
    "NftTransfer",
    "PayloadKind",
    "RawBytes",
    "Signature",
    "TokenTransfer",
    "TokenTransferWithPayload",
    "Vaa",
    "VaaBody",
    "VaaCache",
    "VaaHeader",
    "chain_id",
    "chain_name",
    "classify",
    "classify_vaa",
    "consts",
    "decode_payload",
    "decode_vaa_payload",
    "errors",
    "get_query_url",
    "parse_chain",
    "parse_emitter",
    "parse_vaa",
    "resolve_emitter_address",
    "to_chain",
]
