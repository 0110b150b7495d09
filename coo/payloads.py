import dataclasses
import logging
from enum import Enum
from typing import TypeAlias

from coo.chains import ChainId, to_chain
from coo.consts import (
    ASSET_META_ID,
    NFT_TRANSFER_ID,
    TOKEN_TRANSFER_ID,
    TOKEN_TRANSFER_WITH_PAYLOAD_ID,
)
from coo.errors import (
    InvalidUtf8Error,
    PayloadKindMismatchError,
    TrailingPayloadError,
    TruncatedPayloadError,
)
from coo.layout import Layout, Reader

__all__ = [
    "AssetMeta",
    "DecodedPayload",
    "NftTransfer",
    "PayloadKind",
    "RawBytes",
    "TokenTransfer",
    "TokenTransferWithPayload",
    "decode_payload",
]

logger = logging.getLogger(__name__)


class PayloadKind(Enum):
    RAW_BYTES = "raw-bytes"
    TOKEN_TRANSFER = "token-transfer"
    TOKEN_TRANSFER_WITH_PAYLOAD = "token-transfer-payload"
    ASSET_META = "asset-meta"
    NFT_TRANSFER = "nft-transfer"


TRANSFER_PREFIX = (
    #: Type of message
    ("payload_id", "uint8"),
    #: amount of transfer
    ("amount", "byte[32]"),
    #: asset transferred
    ("token_address", "byte[32]"),
    #: Id of the chain the token originated
    ("token_chain", "uint16"),
    #: Receiver of the token transfer
    ("recipient", "byte[32]"),
    #: Id of the chain where the token transfer should be redeemed
    ("recipient_chain", "uint16"),
)

TRANSFER = Layout(
    "token transfer",
    *TRANSFER_PREFIX,
    #: Amount to pay relayer
    ("fee", "byte[32]"),
)

TRANSFER_WITH_PAYLOAD = Layout(
    "token transfer with payload",
    *TRANSFER_PREFIX,
    #: Address that sent the transfer
    ("sender_address", "byte[32]"),
)

ASSET_META = Layout(
    "asset meta",
    ("payload_id", "uint8"),
    ("token_address", "byte[32]"),
    ("token_chain", "uint16"),
    ("decimals", "uint8"),
    ("symbol", "byte[32]"),
    ("name", "byte[32]"),
)

NFT_HEAD = Layout(
    "nft transfer",
    ("payload_id", "uint8"),
    ("nft_address", "byte[32]"),
    ("nft_chain", "uint16"),
    ("symbol", "byte[32]"),
    ("name", "byte[32]"),
    ("token_id", "uint256"),
    ("uri_len", "uint8"),
)

NFT_TAIL = Layout(
    "nft destination",
    ("destination_address", "byte[32]"),
    ("destination_chain", "uint16"),
)


@dataclasses.dataclass(frozen=True)
class RawBytes:
    payload: bytes


@dataclasses.dataclass(frozen=True)
class TokenTransfer:
    amount: bytes
    token_address: bytes
    token_chain: ChainId
    recipient: bytes
    recipient_chain: ChainId
    fee: bytes

    @property
    def amount_value(self) -> int:
        return int.from_bytes(self.amount, "big")

    @property
    def fee_value(self) -> int:
        return int.from_bytes(self.fee, "big")


@dataclasses.dataclass(frozen=True)
class TokenTransferWithPayload:
    amount: bytes
    token_address: bytes
    token_chain: ChainId
    recipient: bytes
    recipient_chain: ChainId
    sender_address: bytes
    payload: bytes

    @property
    def amount_value(self) -> int:
        return int.from_bytes(self.amount, "big")


@dataclasses.dataclass(frozen=True)
class AssetMeta:
    token_address: bytes
    token_chain: ChainId
    decimals: int
    symbol: str
    name: str


@dataclasses.dataclass(frozen=True)
class NftTransfer:
    nft_address: bytes
    nft_chain: ChainId
    symbol: str
    name: str
    token_id: bytes
    uri: str
    destination_address: bytes
    destination_chain: ChainId

    @property
    def token_id_value(self) -> int:
        return int.from_bytes(self.token_id, "big")


DecodedPayload: TypeAlias = (
    RawBytes | TokenTransfer | TokenTransferWithPayload | AssetMeta | NftTransfer
)


def _text(field: str, raw: bytes) -> str:
    """fixed width utf-8 slot, right padded with zeros"""
    trimmed = raw.rstrip(b"\x00")
    try:
        return trimmed.decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidUtf8Error(field, raw) from None


def _expect_id(kind: PayloadKind, expected: int, found: int) -> None:
    if found != expected:
        raise PayloadKindMismatchError(kind.value, expected, found)


def _expect_consumed(kind: PayloadKind, reader: Reader) -> None:
    if reader.remaining:
        raise TrailingPayloadError(kind.value, reader.remaining)


def _token_transfer(reader: Reader) -> TokenTransfer:
    f = reader.read(TRANSFER)
    _expect_id(PayloadKind.TOKEN_TRANSFER, TOKEN_TRANSFER_ID, f["payload_id"])
    _expect_consumed(PayloadKind.TOKEN_TRANSFER, reader)
    return TokenTransfer(
        amount=f["amount"],
        token_address=f["token_address"],
        token_chain=to_chain(f["token_chain"]),
        recipient=f["recipient"],
        recipient_chain=to_chain(f["recipient_chain"]),
        fee=f["fee"],
    )


def _token_transfer_with_payload(reader: Reader) -> TokenTransferWithPayload:
    f = reader.read(TRANSFER_WITH_PAYLOAD)
    _expect_id(
        PayloadKind.TOKEN_TRANSFER_WITH_PAYLOAD,
        TOKEN_TRANSFER_WITH_PAYLOAD_ID,
        f["payload_id"],
    )
    return TokenTransferWithPayload(
        amount=f["amount"],
        token_address=f["token_address"],
        token_chain=to_chain(f["token_chain"]),
        recipient=f["recipient"],
        recipient_chain=to_chain(f["recipient_chain"]),
        sender_address=f["sender_address"],
        payload=reader.rest(),
    )


def _asset_meta(reader: Reader) -> AssetMeta:
    f = reader.read(ASSET_META)
    _expect_id(PayloadKind.ASSET_META, ASSET_META_ID, f["payload_id"])
    _expect_consumed(PayloadKind.ASSET_META, reader)
    return AssetMeta(
        token_address=f["token_address"],
        token_chain=to_chain(f["token_chain"]),
        decimals=f["decimals"],
        symbol=_text("symbol", f["symbol"]),
        name=_text("name", f["name"]),
    )


def _nft_transfer(reader: Reader) -> NftTransfer:
    head = reader.read(NFT_HEAD)
    _expect_id(PayloadKind.NFT_TRANSFER, NFT_TRANSFER_ID, head["payload_id"])
    raw_uri = reader.read_bytes("uri", head["uri_len"])
    tail = reader.read(NFT_TAIL)
    _expect_consumed(PayloadKind.NFT_TRANSFER, reader)

    try:
        uri = raw_uri.decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidUtf8Error("uri", raw_uri) from None

    return NftTransfer(
        nft_address=head["nft_address"],
        nft_chain=to_chain(head["nft_chain"]),
        symbol=_text("symbol", head["symbol"]),
        name=_text("name", head["name"]),
        token_id=head["token_id"].to_bytes(32, "big"),
        uri=uri,
        destination_address=tail["destination_address"],
        destination_chain=to_chain(tail["destination_chain"]),
    )


def decode_payload(payload: bytes, kind: PayloadKind) -> DecodedPayload:
    """Decode a VAA payload as the given kind

    Every layout is read in full or not at all, a short buffer raises
    TruncatedPayloadError and no partial message is returned.
    """
    reader = Reader(payload, TruncatedPayloadError)
    logger.debug("decoding %d byte payload as %s", len(payload), kind.value)

    match kind:
        case PayloadKind.RAW_BYTES:
            return RawBytes(payload=bytes(payload))
        case PayloadKind.TOKEN_TRANSFER:
            return _token_transfer(reader)
        case PayloadKind.TOKEN_TRANSFER_WITH_PAYLOAD:
            return _token_transfer_with_payload(reader)
        case PayloadKind.ASSET_META:
            return _asset_meta(reader)
        case PayloadKind.NFT_TRANSFER:
            return _nft_transfer(reader)
        case _:
            raise TypeError(f"Unhandled payload kind: {kind!r}")
