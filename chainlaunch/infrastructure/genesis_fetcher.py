"""Remote Genesis Fetcher: downloads a genesis over HTTP and hashes its content.

Invariants:
    - Hash is lowercase hex SHA-256 of the genesis bytes, never of the archive or headers
    - A gzip tarball payload is unpacked and its genesis.json member returned
    - Every HTTP or archive failure mapped to RemoteFetchError (core/errors.py)
    - No retry: retry policy belongs to the caller

Design Decisions:
    - httpx.AsyncClient: async, cancellable, injectable transport for tests
    - Client injected or created per call: a shared client is closed by its owner
"""

import hashlib
import io
import logging
import tarfile
from pathlib import PurePosixPath

import httpx

from chainlaunch.core.errors import RemoteFetchError

logger = logging.getLogger(__name__)

GENESIS_FILENAME = "genesis.json"
_GZIP_MAGIC = b"\x1f\x8b"


def genesis_hash(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


class HttpGenesisFetcher:
    """GenesisFetcher over HTTP(S)."""

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.timeout_seconds = timeout_seconds
        self._client = client

    async def fetch_genesis_and_hash(self, url: str) -> tuple[bytes, str]:
        payload = await self._download(url)
        content = _unpack(payload, url) if payload.startswith(_GZIP_MAGIC) else payload
        digest = genesis_hash(content)
        logger.info(
            "Fetched genesis (%d bytes, sha256 %s)", len(content), digest,
            extra={"genesis_url": url},
        )
        return content, digest

    async def _download(self, url: str) -> bytes:
        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(
                    timeout=self.timeout_seconds, follow_redirects=True,
                ) as client:
                    response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RemoteFetchError(url, str(e) or type(e).__name__) from e
        return response.content


def _unpack(payload: bytes, url: str) -> bytes:
    """Return the genesis.json member of a gzip tarball."""
    try:
        with tarfile.open(fileobj=io.BytesIO(payload), mode="r:gz") as archive:
            for member in archive.getmembers():
                if member.isfile() and PurePosixPath(member.name).name == GENESIS_FILENAME:
                    extracted = archive.extractfile(member)
                    if extracted is not None:
                        return extracted.read()
    except (tarfile.TarError, OSError, EOFError) as e:
        raise RemoteFetchError(url, f"invalid genesis archive: {e}") from e
    raise RemoteFetchError(url, f"archive contains no {GENESIS_FILENAME}")
