import dataclasses
import logging
from pathlib import Path

from coo.chains import ChainId, chain_id
from coo.consts import CACHE_DIR, VAA_FILE_SUFFIX
from coo.errors import CacheError

__all__ = ["CachedVaa", "VaaCache", "vaa_filename"]

logger = logging.getLogger(__name__)


def vaa_filename(chain: ChainId, emitter_address: str, sequence: int) -> str:
    return f"{chain_id(chain)}-{emitter_address}-{sequence}{VAA_FILE_SUFFIX}"


@dataclasses.dataclass(frozen=True)
class CachedVaa:
    chain_id: int
    emitter_address: str
    sequence: int
    path: Path

    @staticmethod
    def from_path(path: Path) -> "CachedVaa":
        parts = path.stem.split("-")
        if path.suffix != VAA_FILE_SUFFIX or len(parts) != 3:
            raise CacheError(f"Not a cached VAA file name: {path.name}")
        chain, emitter, sequence = parts
        try:
            return CachedVaa(
                chain_id=int(chain),
                emitter_address=emitter,
                sequence=int(sequence),
                path=path,
            )
        except ValueError:
            raise CacheError(f"Not a cached VAA file name: {path.name}") from None


class VaaCache:
    """Flat directory of fetched VAAs, one raw file per (chain, emitter, sequence)"""

    def __init__(self, app_path: Path):
        self.path = app_path / CACHE_DIR

    def ensure(self) -> None:
        self.path.mkdir(parents=True, exist_ok=True)

    def path_for(self, chain: ChainId, emitter_address: str, sequence: int) -> Path:
        return self.path / vaa_filename(chain, emitter_address, sequence)

    def save(
        self, chain: ChainId, emitter_address: str, sequence: int, vaa_bytes: bytes
    ) -> Path:
        self.ensure()
        path = self.path_for(chain, emitter_address, sequence)
        path.write_bytes(vaa_bytes)
        logger.info("saved %d bytes to %s", len(vaa_bytes), path)
        return path

    def resolve(self, name: str) -> Path:
        """absolute paths are taken as is, anything else is relative to the cache"""
        path = Path(name)
        return path if path.is_absolute() else self.path / path

    def load(self, name: str) -> bytes:
        return self.resolve(name).read_bytes()

    def entries(self) -> list[CachedVaa]:
        if not self.path.is_dir():
            return []

        entries: list[CachedVaa] = []
        for path in sorted(self.path.iterdir(), reverse=True):
            try:
                entries.append(CachedVaa.from_path(path))
            except CacheError as e:
                logger.warning("skipping %s", e)
        return entries
