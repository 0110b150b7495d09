import dataclasses
from pathlib import Path

import httpx

from coo.consts import CACHE_DIR, CONFIG_DIR, DEFAULT_APP_PATH, GUARDIAN_TIMEOUT, GUARDIAN_URL

__all__ = [
    "CooOptions",
]


@dataclasses.dataclass(kw_only=True)
class CooOptions:
    app_path: Path = DEFAULT_APP_PATH
    """root directory for coo state, holds the `config` and `cache` directories"""
    guardian_url: str = GUARDIAN_URL
    """guardian public RPC used to fetch signed VAAs"""
    timeout: float = GUARDIAN_TIMEOUT
    """seconds to wait on the guardian before giving up"""
    http_client: httpx.Client | None = None
    """http client used to reach the guardian, a fresh one is made per query when unset"""

    @property
    def config_path(self) -> Path:
        return self.app_path / CONFIG_DIR

    def create_dirs(self) -> None:
        for path in (self.app_path, self.config_path, self.app_path / CACHE_DIR):
            path.mkdir(parents=True, exist_ok=True)
