from pathlib import Path
from typing import Final

#: Public guardian RPC used when no other is given
GUARDIAN_URL: Final[str] = "https://wormhole-v2-mainnet-api.certus.one/"
#: Path template of the guardian signed VAA endpoint
SIGNED_VAA_PATH: Final[str] = "v1/signed_vaa/{chain}/{emitter}/{sequence}"
#: Seconds to wait on the guardian before giving up
GUARDIAN_TIMEOUT: Final[float] = 30.0

#: Where coo keeps its config and cache unless told otherwise
DEFAULT_APP_PATH: Final[Path] = Path.home() / ".coo"
CONFIG_DIR: Final[str] = "config"
CACHE_DIR: Final[str] = "cache"
#: Sequences are u64 on the wire
MAX_SEQUENCE: Final[int] = 2**64 - 1

#: Extension of cached VAA files
VAA_FILE_SUFFIX: Final[str] = ".vaa"

#: The only VAA version we know how to read
VAA_VERSION: Final[int] = 1
#: Length of a guardian signature (r, s, v)
SIGNATURE_LENGTH: Final[int] = 65
#: Emitter addresses are always this wide on the wire
ADDRESS_LENGTH: Final[int] = 32
#: Width of an EVM contract address before padding
CONTRACT_ADDRESS_LENGTH: Final[int] = 20

#: Token bridge payload type bytes
TOKEN_TRANSFER_ID: Final[int] = 1
ASSET_META_ID: Final[int] = 2
TOKEN_TRANSFER_WITH_PAYLOAD_ID: Final[int] = 3
#: NFT bridge payload type byte
NFT_TRANSFER_ID: Final[int] = 1
