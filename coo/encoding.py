import base64
import binascii

import base58

from coo.errors import EncodingError, HexDecodeError

__all__ = [
    "base58_to_bytes",
    "base64_to_bytes",
    "bytes_to_hex",
    "hex_to_bytes",
]


def hex_to_bytes(s: str) -> bytes:
    """decode a hex string, with or without a leading 0x"""
    if s.startswith(("0x", "0X")):
        s = s[2:]
    try:
        return binascii.unhexlify(s)
    except ValueError as e:
        raise HexDecodeError(f"Invalid hex string {s!r}: {e}") from e


def base64_to_bytes(s: str) -> bytes:
    try:
        return base64.b64decode(s, validate=True)
    except binascii.Error as e:
        raise EncodingError(f"Invalid base64 string: {e}") from e


def base58_to_bytes(s: str) -> bytes:
    try:
        return base58.b58decode(s)
    except ValueError as e:
        raise EncodingError(f"Invalid base58 string: {e}") from e


def bytes_to_hex(b: bytes) -> str:
    """Hex for display, leading zero bytes dropped

    The stored value keeps every byte, this is only ever used for rendering.
    """
    stripped = b.lstrip(b"\x00")
    return "0x" + (stripped.hex() if stripped else "0")
