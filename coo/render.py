import dataclasses
import json
from typing import Any

from rich.console import Console
from rich.table import Table

from coo.chains import Chain, chain_name
from coo.encoding import bytes_to_hex
from coo.payloads import (
    AssetMeta,
    DecodedPayload,
    NftTransfer,
    RawBytes,
    TokenTransfer,
    TokenTransferWithPayload,
)
from coo.vaa import Vaa

__all__ = [
    "dictify",
    "payload_table",
    "to_json",
    "to_text",
    "vaa_table",
]


def _chain(value: int) -> str:
    return f"{int(value)} ({chain_name(value)})" if isinstance(value, Chain) else str(value)


def _table(title: str, rows: list[tuple[str, str]]) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Field")
    table.add_column("Value", overflow="fold")
    for name, value in rows:
        table.add_row(name, value)
    return table


def vaa_table(vaa: Vaa) -> Table:
    return _table(
        "VAA Information",
        [
            ("Version", str(vaa.version)),
            ("Timestamp", str(vaa.body.timestamp)),
            ("Nonce", str(vaa.body.nonce)),
            ("Emitter Chain", _chain(vaa.emitter_chain)),
            ("Emitter Address", vaa.emitter_address.hex()),
            ("Sequence", str(vaa.sequence)),
            ("Consistency Level", str(vaa.body.consistency_level)),
            ("Guardian Set", str(vaa.guardian_set_index)),
            ("Signatures", str(len(vaa.signatures))),
            *((f"Signature {s.index}", s.signature.hex()) for s in vaa.signatures),
        ],
    )


def payload_table(payload: DecodedPayload) -> Table:
    match payload:
        case RawBytes():
            return _table("Payload", [("Raw Bytes", payload.payload.hex())])
        case TokenTransfer():
            return _table(
                "Payload",
                [
                    ("Payload Type", "Wormhole Token Transfer"),
                    ("Amount", bytes_to_hex(payload.amount)),
                    ("Token Address", bytes_to_hex(payload.token_address)),
                    ("Token Chain", _chain(payload.token_chain)),
                    ("Recipient", bytes_to_hex(payload.recipient)),
                    ("Recipient Chain", _chain(payload.recipient_chain)),
                    ("Fee", bytes_to_hex(payload.fee)),
                ],
            )
        case TokenTransferWithPayload():
            return _table(
                "Payload",
                [
                    ("Payload Type", "Wormhole Token Transfer with Payload"),
                    ("Amount", bytes_to_hex(payload.amount)),
                    ("Token Address", bytes_to_hex(payload.token_address)),
                    ("Token Chain", _chain(payload.token_chain)),
                    ("Recipient", bytes_to_hex(payload.recipient)),
                    ("Recipient Chain", _chain(payload.recipient_chain)),
                    ("Sender Address", bytes_to_hex(payload.sender_address)),
                    ("Payload", payload.payload.hex()),
                ],
            )
        case AssetMeta():
            return _table(
                "Payload",
                [
                    ("Payload Type", "Wormhole Asset Meta"),
                    ("Token Address", bytes_to_hex(payload.token_address)),
                    ("Token Chain", _chain(payload.token_chain)),
                    ("Name", payload.name),
                    ("Symbol", payload.symbol),
                    ("Decimals", str(payload.decimals)),
                ],
            )
        case NftTransfer():
            return _table(
                "Payload",
                [
                    ("Payload Type", "Wormhole NFT Transfer"),
                    ("NFT Address", bytes_to_hex(payload.nft_address)),
                    ("NFT Chain", _chain(payload.nft_chain)),
                    ("Name", payload.name),
                    ("Symbol", payload.symbol),
                    ("Token Id", bytes_to_hex(payload.token_id)),
                    ("URI", payload.uri),
                    ("Destination", bytes_to_hex(payload.destination_address)),
                    ("Destination Chain", _chain(payload.destination_chain)),
                ],
            )
        case _:
            raise TypeError(f"Unhandled payload: {payload!r}")


def _jsonable(value: Any) -> Any:
    match value:
        case bytes():
            return value.hex()
        case Chain():
            return int(value)
        case dict():
            return {k: _jsonable(v) for k, v in value.items()}
        case list() | tuple():
            return [_jsonable(v) for v in value]
        case _:
            return value


def dictify(obj: Vaa | DecodedPayload) -> dict[str, Any]:
    d: dict[str, Any]
    if isinstance(obj, Vaa):
        d = {
            "header": dataclasses.asdict(obj.header),
            "body": dataclasses.asdict(obj.body),
        }
    else:
        d = {"type": type(obj).__name__, **dataclasses.asdict(obj)}
    return _jsonable(d)


def to_json(vaa: Vaa, payload: DecodedPayload) -> str:
    return json.dumps({"vaa": dictify(vaa), "payload": dictify(payload)}, indent=4)


def to_text(*tables: Table, width: int = 120) -> str:
    console = Console(width=width, force_terminal=False)
    with console.capture() as capture:
        for table in tables:
            console.print(table)
    return capture.get()
