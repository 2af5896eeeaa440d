"""Chain Record: explicit per-chain mutable state owned by one bootstrapper.

Invariants:
    - One ChainRecord per chain instance, passed by reference, never module-level
    - is_initialized is True only when stage == GENESIS_VALIDATED
    - genesis_hash is written only by the bootstrapper (adopted on first fetch)
    - reset() returns the record to UNINITIALIZED without touching url or hash
"""

from dataclasses import dataclass, field
from pathlib import Path

from chainlaunch.core.domain_types import InitStage, LaunchId


@dataclass
class ChainRecord:
    """Per-chain state: where it lives, where its genesis comes from, how far init got."""

    launch_id: LaunchId
    home: Path
    genesis_url: str = ""
    genesis_hash: str = ""
    stage: InitStage = field(default=InitStage.UNINITIALIZED)

    @property
    def genesis_path(self) -> Path:
        return self.home / "config" / "genesis.json"

    @property
    def is_initialized(self) -> bool:
        return self.stage == InitStage.GENESIS_VALIDATED

    def advance(self, stage: InitStage) -> None:
        self.stage = stage

    def reset(self) -> None:
        self.stage = InitStage.UNINITIALIZED
