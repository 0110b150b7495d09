import pytest

from coo.chains import Chain
from coo.classifier import classify, classify_vaa, decode_vaa_payload
from coo.emitters import AddressRegistry, EmitterType
from coo.errors import EmptyPayloadError
from coo.payloads import AssetMeta, PayloadKind, RawBytes, TokenTransfer
from coo.vaa import parse_vaa
from tests.builders import (
    ETH_CORE_BRIDGE,
    ETH_NFT_BRIDGE,
    ETH_TOKEN_BRIDGE,
    build_asset_meta,
    build_vaa,
)


@pytest.mark.parametrize(
    "first,expected",
    [
        (1, PayloadKind.TOKEN_TRANSFER),
        (2, PayloadKind.ASSET_META),
        (3, PayloadKind.TOKEN_TRANSFER_WITH_PAYLOAD),
        (99, PayloadKind.RAW_BYTES),
        (0, PayloadKind.RAW_BYTES),
    ],
)
def test_token_bridge(first: int, expected: PayloadKind) -> None:
    assert classify(Chain.Ethereum, ETH_TOKEN_BRIDGE, bytes([first])) is expected


@pytest.mark.parametrize(
    "first,expected",
    [(1, PayloadKind.NFT_TRANSFER), (2, PayloadKind.RAW_BYTES)],
)
def test_nft_bridge(first: int, expected: PayloadKind) -> None:
    assert classify(Chain.Ethereum, ETH_NFT_BRIDGE, bytes([first])) is expected


def test_core_bridge_is_raw() -> None:
    assert classify(Chain.Ethereum, ETH_CORE_BRIDGE, b"\x01") is PayloadKind.RAW_BYTES


def test_unknown_emitter_is_raw() -> None:
    assert classify(Chain.Ethereum, bytes(32), b"\x01") is PayloadKind.RAW_BYTES
    # right address, wrong chain
    assert classify(Chain.Solana, ETH_TOKEN_BRIDGE, b"\x01") is PayloadKind.RAW_BYTES
    # unknown emitters never look at the payload
    assert classify(Chain.Ethereum, bytes(32), b"") is PayloadKind.RAW_BYTES


@pytest.mark.parametrize("emitter", [ETH_TOKEN_BRIDGE, ETH_NFT_BRIDGE])
def test_empty_bridge_payload(emitter: bytes) -> None:
    with pytest.raises(EmptyPayloadError):
        classify(Chain.Ethereum, emitter, b"")


def test_hex_address_any_case() -> None:
    upper = ETH_TOKEN_BRIDGE.hex().upper()
    assert classify(Chain.Ethereum, upper, b"\x02") is PayloadKind.ASSET_META


def test_classify_is_pure() -> None:
    payload = b"\x01" + bytes(10)
    first = classify(Chain.Ethereum, ETH_TOKEN_BRIDGE, payload)
    second = classify(Chain.Ethereum, ETH_TOKEN_BRIDGE, payload)
    assert first is second is PayloadKind.TOKEN_TRANSFER
    assert payload == b"\x01" + bytes(10)


def test_injected_registry() -> None:
    emitter = bytes(12) + bytes([0x44]) * 20
    registry = AddressRegistry({(Chain.Sui, EmitterType.NFT_BRIDGE): "44" * 20})
    assert classify(Chain.Sui, emitter, b"\x01", registry) is PayloadKind.NFT_TRANSFER
    assert classify(Chain.Sui, emitter, b"\x01") is PayloadKind.RAW_BYTES


def test_smart_infer_decodes(transfer_vaa: bytes) -> None:
    vaa = parse_vaa(transfer_vaa)
    assert classify_vaa(vaa) is PayloadKind.TOKEN_TRANSFER

    message = decode_vaa_payload(vaa)
    assert isinstance(message, TokenTransfer)
    assert message.amount_value == 1_000_000


def test_forced_kind_skips_inference() -> None:
    vaa = parse_vaa(build_vaa(build_asset_meta(), emitter_address=bytes(32)))
    assert isinstance(decode_vaa_payload(vaa), RawBytes)
    assert isinstance(decode_vaa_payload(vaa, PayloadKind.ASSET_META), AssetMeta)
