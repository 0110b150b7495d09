import dataclasses
import logging

from coo.chains import ChainId, to_chain
from coo.consts import SIGNATURE_LENGTH, VAA_VERSION
from coo.errors import MalformedVaaError, TruncatedVaaError
from coo.layout import Layout, Reader

__all__ = [
    "Signature",
    "Vaa",
    "VaaBody",
    "VaaHeader",
    "parse_vaa",
]

logger = logging.getLogger(__name__)

HEADER = Layout(
    "header",
    #: Version of VAA
    ("version", "uint8"),
    #: Which guardian set to be validated against
    ("guardian_set_index", "uint32"),
    #: How many signatures
    ("signature_count", "uint8"),
)

SIGNATURE = Layout(
    "signature",
    ("index", "uint8"),
    ("signature", f"byte[{SIGNATURE_LENGTH}]"),
)

BODY = Layout(
    "body",
    #: TS of message
    ("timestamp", "uint32"),
    #: Uniquifying
    ("nonce", "uint32"),
    #: The Id of the chain where the message originated
    ("emitter_chain", "uint16"),
    #: The address of the contract that emitted this message on the origin chain
    ("emitter_address", "byte[32]"),
    #: Unique integer representing the index, used for dedupe/ordering
    ("sequence", "uint64"),
    ("consistency_level", "uint8"),
)


@dataclasses.dataclass(frozen=True)
class Signature:
    index: int
    signature: bytes


@dataclasses.dataclass(frozen=True)
class VaaHeader:
    version: int
    guardian_set_index: int
    #: In the order they appear on the wire, indices are not checked
    signatures: tuple[Signature, ...]


@dataclasses.dataclass(frozen=True)
class VaaBody:
    timestamp: int
    nonce: int
    emitter_chain: ChainId
    emitter_address: bytes
    sequence: int
    consistency_level: int
    payload: bytes


@dataclasses.dataclass(frozen=True)
class Vaa:
    header: VaaHeader
    body: VaaBody
    #: The bytes after the signatures, which is what is actually signed
    digest_body: bytes = dataclasses.field(repr=False, compare=False, default=b"")

    @property
    def version(self) -> int:
        return self.header.version

    @property
    def guardian_set_index(self) -> int:
        return self.header.guardian_set_index

    @property
    def signatures(self) -> tuple[Signature, ...]:
        return self.header.signatures

    @property
    def emitter_chain(self) -> ChainId:
        return self.body.emitter_chain

    @property
    def emitter_address(self) -> bytes:
        return self.body.emitter_address

    @property
    def sequence(self) -> int:
        return self.body.sequence

    @property
    def payload(self) -> bytes:
        return self.body.payload


def parse_vaa(data: bytes) -> Vaa:
    """Parse a signed VAA

    Layout, big endian with no padding::

        header:    u8 version | u32 guardian set | u8 n
        sigs:      n * (u8 index | [65]u8 signature)
        body:      u32 timestamp | u32 nonce | u16 chain | [32]u8 emitter
                   | u64 sequence | u8 consistency
        payload:   everything that is left

    Raises:
        TruncatedVaaError: the buffer ends before a field does
        MalformedVaaError: the version is not one we can read
    """
    reader = Reader(data, TruncatedVaaError)

    head = reader.read(HEADER)
    if head["version"] != VAA_VERSION:
        raise MalformedVaaError(
            f"Unsupported VAA version {head['version']}, expected {VAA_VERSION}"
        )

    signatures = tuple(
        Signature(**reader.read(SIGNATURE)) for _ in range(head["signature_count"])
    )

    digest_body = reader.data[reader.offset :]
    fields = reader.read(BODY)
    payload = reader.rest()

    logger.debug(
        "parsed vaa: guardian set %d, %d signatures, %d byte payload",
        head["guardian_set_index"],
        len(signatures),
        len(payload),
    )

    return Vaa(
        header=VaaHeader(
            version=head["version"],
            guardian_set_index=head["guardian_set_index"],
            signatures=signatures,
        ),
        body=VaaBody(
            timestamp=fields["timestamp"],
            nonce=fields["nonce"],
            emitter_chain=to_chain(fields["emitter_chain"]),
            emitter_address=fields["emitter_address"],
            sequence=fields["sequence"],
            consistency_level=fields["consistency_level"],
            payload=payload,
        ),
        digest_body=digest_body,
    )
