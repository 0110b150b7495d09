class CooError(Exception):
    """Base class for every error raised by coo"""


class VaaDecodeError(CooError):
    pass


class MalformedVaaError(VaaDecodeError):
    pass


class TruncatedVaaError(VaaDecodeError):
    def __init__(self, field: str, needed: int, available: int):
        self.field = field
        self.needed = needed
        self.available = available

    def __str__(self) -> str:
        return (
            f"VAA truncated while reading {self.field}: "
            f"needed {self.needed} bytes, {self.available} left"
        )


class PayloadDecodeError(CooError):
    pass


class TruncatedPayloadError(PayloadDecodeError):
    def __init__(self, field: str, needed: int, available: int):
        self.field = field
        self.needed = needed
        self.available = available

    def __str__(self) -> str:
        return (
            f"Payload truncated while reading {self.field}: "
            f"needed {self.needed} bytes, {self.available} left"
        )


class TrailingPayloadError(PayloadDecodeError):
    def __init__(self, kind: str, extra: int):
        self.kind = kind
        self.extra = extra

    def __str__(self) -> str:
        return f"{self.extra} unexpected trailing bytes after {self.kind} payload"


class EmptyPayloadError(PayloadDecodeError):
    pass


class InvalidUtf8Error(PayloadDecodeError):
    def __init__(self, field: str, raw: bytes):
        self.field = field
        self.raw = raw

    def __str__(self) -> str:
        return f"Field {self.field} is not valid utf-8: {self.raw.hex()}"


class PayloadKindMismatchError(PayloadDecodeError):
    def __init__(self, kind: str, expected: int, found: int):
        self.kind = kind
        self.expected = expected
        self.found = found

    def __str__(self) -> str:
        return (
            f"Payload type byte {self.found} does not match {self.kind} "
            f"(expected {self.expected})"
        )


class UnknownEmitterError(CooError):
    pass


class HexDecodeError(CooError, ValueError):
    pass


class EncodingError(CooError, ValueError):
    pass


class ProtocolResponseError(CooError):
    def __init__(self, msg: str, body: str, status_code: int | None = None):
        self.msg = msg
        self.body = body
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.msg} (status {self.status_code}): {self.body}"
        return f"{self.msg}: {self.body}"


class CacheError(CooError):
    pass
