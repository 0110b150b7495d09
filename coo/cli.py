import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import httpx

from coo.cache import VaaCache
from coo.chains import parse_chain
from coo.classifier import decode_vaa_payload
from coo.consts import DEFAULT_APP_PATH, GUARDIAN_URL, MAX_SEQUENCE
from coo.emitters import emitter_label, parse_emitter, resolve_emitter_address
from coo.encoding import base58_to_bytes, base64_to_bytes, hex_to_bytes
from coo.errors import CooError
from coo.guardian import GuardianClient
from coo.options import CooOptions
from coo.payloads import PayloadKind
from coo.render import payload_table, to_json, to_text, vaa_table
from coo.vaa import parse_vaa

__all__ = ["build_parser", "main", "parse_sequence"]

logger = logging.getLogger("coo")

SMART_INFER = "smart-infer"

_DATA_FORMATS: dict[str, Callable[[str], bytes]] = {
    "base64": base64_to_bytes,
    "base58": base58_to_bytes,
    "hex": hex_to_bytes,
}

_PAYLOAD_TYPES: dict[str, PayloadKind] = {k.value: k for k in PayloadKind}
# longer spellings kept so older scripts keep working
_PAYLOAD_TYPES.update(
    {
        "wormhole-token-transfer": PayloadKind.TOKEN_TRANSFER,
        "wormhole-token-transfer-payload": PayloadKind.TOKEN_TRANSFER_WITH_PAYLOAD,
        "wormhole-asset-meta": PayloadKind.ASSET_META,
        "wormhole-nft-transfer": PayloadKind.NFT_TRANSFER,
    }
)


def parse_sequence(text: str) -> int:
    try:
        value = int(text, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a sequence number: {text!r}") from None
    if not 0 <= value <= MAX_SEQUENCE:
        raise argparse.ArgumentTypeError(f"sequence out of range for u64: {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coo",
        description="Your friendly all-in-one toolkit to view or manipulate Wormhole VAAs.",
    )
    parser.add_argument("--app-path", type=Path, default=DEFAULT_APP_PATH)
    parser.add_argument("-v", "--verbose", action="count", default=0)

    commands = parser.add_subparsers(dest="command")
    vaa = commands.add_parser("vaa", help="view or fetch VAAs")
    vaa_commands = vaa.add_subparsers(dest="vaa_command")

    query = vaa_commands.add_parser(
        "query", help="Performs a query to the Wormhole Guardian API to get the VAA."
    )
    query.add_argument(
        "-g", "--guardian-url", default=GUARDIAN_URL, help="Wormhole Guardian RPC URL"
    )
    query.add_argument(
        "chain", type=parse_chain, help="chain of the emitter aka source chain (id or name)"
    )
    query.add_argument("emitter", help="emitter contract address or one of core, token, nft")
    query.add_argument("sequence", type=parse_sequence, help="sequence number of the VAA")

    decode = vaa_commands.add_parser("decode", help="Decodes a VAA.")
    decode.add_argument(
        "-d",
        "--data-format",
        choices=[*_DATA_FORMATS, "path"],
        default="base64",
        help="VAA data format",
    )
    decode.add_argument(
        "-p",
        "--payload-type",
        choices=[SMART_INFER, *_PAYLOAD_TYPES],
        default=SMART_INFER,
        help="payload type, inferred from the emitter when not given",
    )
    decode.add_argument("--json", action="store_true", help="print json instead of tables")
    decode.add_argument("data", help="VAA data, or a path when --data-format=path")

    vaa_commands.add_parser("list", help="List VAAs that have been queried.")
    return parser


def cli_vaa_query(args: argparse.Namespace, options: CooOptions) -> None:
    emitter = parse_emitter(args.emitter)
    emitter_address = resolve_emitter_address(args.chain, emitter)
    logger.info("resolved %s emitter to %s", emitter_label(emitter), emitter_address)

    with GuardianClient(
        options.guardian_url, timeout=options.timeout, http_client=options.http_client
    ) as guardian:
        vaa_bytes = guardian.get_signed_vaa(args.chain, emitter, args.sequence)

    path = VaaCache(options.app_path).save(
        args.chain, emitter_address, args.sequence, vaa_bytes
    )
    print(f"saved {len(vaa_bytes)} bytes to {path}")
    print(f"vaa data: {vaa_bytes.hex()}")


def cli_vaa_decode(args: argparse.Namespace, options: CooOptions) -> None:
    if args.data_format == "path":
        vaa_bytes = VaaCache(options.app_path).load(args.data)
    else:
        vaa_bytes = _DATA_FORMATS[args.data_format](args.data)

    vaa = parse_vaa(vaa_bytes)
    kind = None if args.payload_type == SMART_INFER else _PAYLOAD_TYPES[args.payload_type]
    payload = decode_vaa_payload(vaa, kind)

    if args.json:
        print(to_json(vaa, payload))
    else:
        print(to_text(vaa_table(vaa), payload_table(payload)), end="")


def cli_vaa_list(options: CooOptions) -> None:
    for index, entry in enumerate(VaaCache(options.app_path).entries()):
        print(f"{index: <3}: {entry.chain_id} {entry.emitter_address} {entry.sequence}")


def main(
    argv: Sequence[str] | None = None, http_client: httpx.Client | None = None
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = CooOptions(
        app_path=args.app_path,
        guardian_url=getattr(args, "guardian_url", GUARDIAN_URL),
        http_client=http_client,
    )
    options.create_dirs()

    if args.command != "vaa":
        print("No command specified")
        return 0

    try:
        match args.vaa_command:
            case "query":
                cli_vaa_query(args, options)
            case "decode":
                cli_vaa_decode(args, options)
            case "list":
                cli_vaa_list(options)
            case _:
                print("No VAA command specified")
    except (CooError, httpx.HTTPError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
