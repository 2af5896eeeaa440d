"""Genesis Bootstrapper: resets a chain home, builds the binary, and prepares a launchable genesis.

Invariants:
    - init always restarts from UNINITIALIZED and force-deletes the home directory first;
      there is no partial resume
    - Steps run strictly in order; the first failure aborts init and the record stays
      not initialized (stage keeps the last step that succeeded)
    - A remote genesis is verified against the recorded hash BEFORE anything is written,
      so a mismatch leaves the existing genesis file untouched
    - With no recorded hash the fetched hash is adopted for the chain (trust on first use)
    - The initial genesis must contain zero gentxs; gentxs join later through requests

Design Decisions:
    - Destructive reset as the only recovery path: wipe-and-rebuild is simpler to reason
      about than repairing a half-populated home
    - The bootstrapper owns the home directory, so it also implements LaunchedChain
      (reset_genesis_time) for the coordinator's revert flow
    - step_timeout bounds build, init and fetch steps only. Filesystem steps run in a worker
      thread that cannot be interrupted, so a deadline there would report failure while the
      rmtree or write kept going underneath
"""

import logging
from typing import Any

from chainlaunch.core.chain_genesis import parse_chain_genesis, with_zero_genesis_time
from chainlaunch.core.chain_record import ChainRecord
from chainlaunch.core.domain_types import InitStage
from chainlaunch.core.errors import (
    BuildError,
    ErrorContext,
    FilesystemError,
    GenesisContainsPresubmittedTransactionsError,
    LocalInitError,
    RemoteFetchError,
    StaticValidationError,
)
from chainlaunch.core.events import done, ongoing
from chainlaunch.core.genesis_source import (
    RemoteGenesis,
    check_genesis_hash,
    genesis_source_for,
)
from chainlaunch.core.repository_protocols import (
    ChainCommands,
    ChainDriver,
    EventSink,
    Filesystem,
    GenesisFetcher,
)
from chainlaunch.infrastructure.filesystem import LocalFilesystem
from chainlaunch.services.flow_helpers import notify, run_step

logger = logging.getLogger(__name__)


class GenesisBootstrapper:
    """Local state of one chain: home reset, build, init, genesis acquisition and checks."""

    def __init__(
        self,
        record: ChainRecord,
        driver: ChainDriver,
        fetcher: GenesisFetcher,
        events: EventSink,
        filesystem: Filesystem | None = None,
        moniker: str = "moniker",
        step_timeout: float | None = None,
    ):
        self.record = record
        self.driver = driver
        self.fetcher = fetcher
        self.events = events
        self.fs = filesystem or LocalFilesystem()
        self.moniker = moniker
        self.step_timeout = step_timeout

    @property
    def is_initialized(self) -> bool:
        return self.record.is_initialized

    async def init(self, cache: Any | None = None) -> None:
        """Build the binary, run the init command, create and verify the initial genesis."""
        record = self.record
        ctx = ErrorContext(launch_id=record.launch_id)
        record.reset()

        # cleanup home dir of the chain if it exists
        await self._remove(record.home, "reset_home", ctx)
        record.advance(InitStage.HOME_RESET)

        await run_step(
            "build", self.driver.build(cache),
            lambda e: BuildError(str(e), ctx), ctx, self.step_timeout,
        )
        record.advance(InitStage.BUILT)

        notify(self.events, ongoing("Initializing the blockchain"))
        await run_step(
            "init_chain", self.driver.init(initialize_network=False),
            lambda e: LocalInitError(str(e), ctx), ctx, self.step_timeout,
        )
        record.advance(InitStage.COMMAND_INITIALIZED)
        notify(self.events, done("Blockchain initialized"))

        await self.acquire_genesis(ctx)

        record.advance(InitStage.GENESIS_VALIDATED)
        logger.info("Chain initialized", extra={"launch_id": record.launch_id})

    async def acquire_genesis(self, context: ErrorContext | None = None) -> None:
        """Create the initial genesis from its source (default or URL) and verify it."""
        record = self.record
        ctx = context or ErrorContext(launch_id=record.launch_id)
        notify(self.events, ongoing("Computing the Genesis"))

        source = genesis_source_for(record)
        if isinstance(source, RemoteGenesis):
            genesis, fetched_hash = await run_step(
                "fetch_genesis", self.fetcher.fetch_genesis_and_hash(source.url),
                lambda e: RemoteFetchError(source.url, str(e), ctx), ctx, self.step_timeout,
            )
            verified_hash = check_genesis_hash(source, fetched_hash, ctx)

            # replace whatever init left behind with the fetched genesis
            await self._remove(record.genesis_path, "remove_genesis", ctx)
            await self._write(record.genesis_path, genesis, ctx)
            if not record.genesis_hash:
                logger.info(
                    "Adopting fetched genesis hash %s", verified_hash,
                    extra={"launch_id": record.launch_id, "genesis_url": source.url},
                )
            record.genesis_hash = verified_hash
        else:
            # default genesis: regenerated by the chain's own init command
            await self._remove(record.genesis_path, "remove_genesis", ctx)
            commands = await self._commands(ctx)
            await run_step(
                "init_default_genesis", commands.init(self.moniker),
                lambda e: LocalInitError(str(e), ctx), ctx, self.step_timeout,
            )
        record.advance(InitStage.GENESIS_ACQUIRED)

        await self.validate_initial_genesis(ctx)
        notify(self.events, done("Genesis initialized"))

    async def validate_initial_genesis(self, context: ErrorContext | None = None) -> None:
        """Reject genesis with gentxs, then run the binary's validate-genesis."""
        record = self.record
        ctx = context or ErrorContext(launch_id=record.launch_id)

        content = await self._read(record.genesis_path, "read_genesis", ctx)
        ctx.step = "parse_genesis"
        chain_genesis = parse_chain_genesis(content, str(record.genesis_path), ctx)
        if chain_genesis.gentx_count > 0:
            raise GenesisContainsPresubmittedTransactionsError(chain_genesis.gentx_count, ctx)

        # validate-genesis is static only: gentx formats and account data are not
        # checked, that needs an actual boot of the chain with sample accounts
        commands = await self._commands(ctx)
        await run_step(
            "validate_genesis", commands.validate_genesis(),
            lambda e: StaticValidationError(str(e), ctx), ctx, self.step_timeout,
        )

    async def reset_genesis_time(self) -> None:
        """Zero the genesis_time of the persisted genesis so a relaunch recomputes it."""
        record = self.record
        ctx = ErrorContext(launch_id=record.launch_id)
        content = await self._read(record.genesis_path, "read_genesis", ctx)
        ctx.step = "zero_genesis_time"
        updated = with_zero_genesis_time(content, str(record.genesis_path), ctx)
        await self._write(record.genesis_path, updated, ctx)
        logger.info("Genesis time reset", extra={"launch_id": record.launch_id})

    # ─── IO steps ────────────────────────────────────────────────

    async def _commands(self, ctx: ErrorContext) -> ChainCommands:
        return await run_step(
            "chain_commands", self.driver.commands(),
            lambda e: LocalInitError(str(e), ctx), ctx, self.step_timeout,
        )

    async def _remove(self, path, step: str, ctx: ErrorContext) -> None:
        await run_step(
            step, self.fs.remove_tree(path),
            lambda e: FilesystemError(str(e), "remove", str(path), ctx), ctx,
        )

    async def _read(self, path, step: str, ctx: ErrorContext) -> bytes:
        return await run_step(
            step, self.fs.read_bytes(path),
            lambda e: FilesystemError(str(e), "read", str(path), ctx), ctx,
        )

    async def _write(self, path, data: bytes, ctx: ErrorContext) -> None:
        await run_step(
            "write_genesis", self.fs.write_bytes(path, data),
            lambda e: FilesystemError(str(e), "write", str(path), ctx), ctx,
        )
