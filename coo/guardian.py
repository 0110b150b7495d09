import json
import logging
from types import TracebackType

import httpx

from coo.chains import ChainId, chain_id
from coo.consts import GUARDIAN_TIMEOUT, GUARDIAN_URL, MAX_SEQUENCE, SIGNED_VAA_PATH
from coo.emitters import DEFAULT_REGISTRY, AddressRegistry, EmitterRole, resolve_emitter_address
from coo.encoding import base64_to_bytes
from coo.errors import EncodingError, ProtocolResponseError

__all__ = ["GuardianClient", "get_query_url"]

logger = logging.getLogger(__name__)


def get_query_url(
    chain: ChainId,
    emitter: EmitterRole,
    sequence: int,
    guardian_url: str = GUARDIAN_URL,
    registry: AddressRegistry = DEFAULT_REGISTRY,
) -> httpx.URL:
    """URL of the signed VAA for (chain, emitter, sequence) on a guardian RPC"""
    if not 0 <= sequence <= MAX_SEQUENCE:
        raise ValueError(f"Sequence out of range for u64: {sequence}")
    emitter_address = resolve_emitter_address(chain, emitter, registry)
    path = SIGNED_VAA_PATH.format(
        chain=chain_id(chain), emitter=emitter_address, sequence=sequence
    )
    if not guardian_url.endswith("/"):
        guardian_url += "/"
    return httpx.URL(guardian_url).join(path)


class GuardianClient:
    """Fetches signed VAAs from a guardian public RPC

    The client owns its http connection pool unless one is handed in, use it
    as a context manager or call `close` when done.
    """

    def __init__(
        self,
        guardian_url: str = GUARDIAN_URL,
        *,
        timeout: float = GUARDIAN_TIMEOUT,
        registry: AddressRegistry = DEFAULT_REGISTRY,
        http_client: httpx.Client | None = None,
    ):
        self.guardian_url = guardian_url
        self.registry = registry
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def __enter__(self) -> "GuardianClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def query_url(self, chain: ChainId, emitter: EmitterRole, sequence: int) -> httpx.URL:
        return get_query_url(chain, emitter, sequence, self.guardian_url, self.registry)

    def get_signed_vaa(self, chain: ChainId, emitter: EmitterRole, sequence: int) -> bytes:
        """Fetch the raw bytes of a signed VAA

        Raises:
            UnknownEmitterError: the emitter could not be resolved to an address
            ProtocolResponseError: the guardian did not answer with `vaaBytes`
            httpx.HTTPError: the request itself failed
        """
        url = self.query_url(chain, emitter, sequence)
        logger.info("querying guardian at %s", url)

        response = self._client.get(url)
        body = response.text
        if response.is_error:
            raise ProtocolResponseError(
                "Guardian returned an error", body, response.status_code
            )

        try:
            guardian_response = json.loads(body)
        except json.JSONDecodeError:
            raise ProtocolResponseError(
                "Guardian response is not json", body, response.status_code
            ) from None

        vaa_bytes = (
            guardian_response.get("vaaBytes")
            if isinstance(guardian_response, dict)
            else None
        )
        if not isinstance(vaa_bytes, str):
            raise ProtocolResponseError("vaaBytes not found in response", body)

        try:
            raw = base64_to_bytes(vaa_bytes)
        except EncodingError as e:
            raise ProtocolResponseError(f"vaaBytes is not base64 ({e})", body) from e

        logger.debug("guardian returned %d bytes", len(raw))
        return raw
