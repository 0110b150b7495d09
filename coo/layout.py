from typing import Any

from algosdk import abi

from coo.errors import CooError

__all__ = ["Layout", "Reader"]


class Layout:
    """A named, fixed width run of big endian fields

    Fields are declared with ABI type strings. A static ABI tuple encodes as
    the plain concatenation of its members, so the SDK codec reads wire
    layouts like `u8 | u32 | [32]u8` directly.
    """

    def __init__(self, name: str, *fields: tuple[str, str]):
        if not fields:
            raise Exception("Expected fields to be declared but found none")

        self.name = name
        self.field_names = [f for f, _ in fields]
        self.sdk_codec = abi.TupleType([abi.ABIType.from_string(t) for _, t in fields])
        if self.sdk_codec.is_dynamic():
            raise Exception(f"Layout {name} must only contain static fields")

        self._byte_arrays = {f for f, t in fields if t.startswith("byte[")}

    def byte_len(self) -> int:
        return self.sdk_codec.byte_len()

    def decode(self, to_decode: bytes) -> dict[str, Any]:
        """decode exactly byte_len() bytes into a dictionary of field values"""
        values = self.sdk_codec.decode(bytestring=to_decode)
        return {
            name: bytes(value) if name in self._byte_arrays else value
            for name, value in zip(self.field_names, values)
        }

    def __str__(self) -> str:
        return str(self.sdk_codec)


class Reader:
    """Cursor over an immutable buffer that raises `error` when it runs dry"""

    def __init__(self, data: bytes, error: type[CooError]):
        self.data = bytes(data)
        self.offset = 0
        self._error = error

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def _take(self, field: str, size: int) -> bytes:
        if size > self.remaining:
            raise self._error(field, size, self.remaining)  # type: ignore[call-arg]
        chunk = self.data[self.offset : self.offset + size]
        self.offset += size
        return chunk

    def read(self, layout: Layout) -> dict[str, Any]:
        return layout.decode(self._take(layout.name, layout.byte_len()))

    def read_bytes(self, field: str, size: int) -> bytes:
        return self._take(field, size)

    def rest(self) -> bytes:
        return self._take("remainder", self.remaining)
