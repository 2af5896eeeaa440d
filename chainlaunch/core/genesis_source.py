"""Genesis Source: where the initial genesis of a chain comes from.

Invariants:
    - A chain record with an empty genesis_url uses the default genesis
    - An empty recorded hash means "no expectation yet" (trust on first use)
    - check_genesis_hash is PURE: returns the hash to record, raises on mismatch,
      the caller writes nothing when it raises
"""

from dataclasses import dataclass

from chainlaunch.core.chain_record import ChainRecord
from chainlaunch.core.errors import ErrorContext, GenesisHashMismatchError


@dataclass(frozen=True)
class DefaultGenesis:
    """Genesis generated by the chain's own init command."""


@dataclass(frozen=True)
class RemoteGenesis:
    """Genesis downloaded from url, optionally pinned to expected_hash."""
    url: str
    expected_hash: str | None = None


GenesisSource = DefaultGenesis | RemoteGenesis


def genesis_source_for(record: ChainRecord) -> GenesisSource:
    if not record.genesis_url:
        return DefaultGenesis()
    return RemoteGenesis(record.genesis_url, record.genesis_hash or None)


def check_genesis_hash(
    source: RemoteGenesis, actual: str, context: ErrorContext | None = None,
) -> str:
    """Hash to record for the chain after fetching from source."""
    if source.expected_hash is None:
        return actual
    if actual != source.expected_hash:
        raise GenesisHashMismatchError(
            expected=source.expected_hash,
            actual=actual,
            source=source.url,
            context=context,
        )
    return actual
