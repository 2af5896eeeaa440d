"""Launch Coordinator: schedules and reverts a chain launch as its coordinator.

Invariants:
    - Params and clock are read fresh on every trigger attempt, never cached
    - The launch time is validated before any transaction is built
    - A trigger is confirmed only when its response decodes; a broadcast that
      succeeded but does not decode is still an error
    - No internal retry: every failure propagates to the caller
    - Events are best-effort and never change the outcome

Design Decisions:
    - Revert is not transactional: when the local genesis time reset fails after the
      revert tx succeeded, GenesisTimeResetError is raised for manual intervention
      and the tx is neither rolled back nor retried
    - Collaborators injected as Protocols (core/repository_protocols.py)
"""

import logging
from datetime import datetime, timedelta

from pydantic import ValidationError

from chainlaunch.core.domain_types import SPN, LaunchId
from chainlaunch.core.errors import (
    AddressUnresolvedError,
    BroadcastError,
    ChainLaunchError,
    ErrorContext,
    GenesisTimeResetError,
    ParameterFetchError,
    ResponseDecodeError,
)
from chainlaunch.core.events import done, ongoing
from chainlaunch.core.launch_messages import (
    MsgRevertLaunch,
    MsgTriggerLaunch,
    MsgTriggerLaunchResponse,
)
from chainlaunch.core.launch_window import (
    MIN_LAUNCH_TIME_OFFSET,
    LaunchParams,
    resolve_window,
    validate_or_default,
)
from chainlaunch.core.repository_protocols import (
    AccountRegistry,
    Clock,
    EventSink,
    LaunchedChain,
    LaunchParamsSource,
    TxBroadcaster,
)
from chainlaunch.services.flow_helpers import notify, run_step

logger = logging.getLogger(__name__)


class LaunchCoordinator:
    """Trigger/revert lifecycle of chain launches on the launch network."""

    def __init__(
        self,
        params_source: LaunchParamsSource,
        account: AccountRegistry,
        broadcaster: TxBroadcaster,
        events: EventSink,
        clock: Clock,
        safety_margin: timedelta = MIN_LAUNCH_TIME_OFFSET,
        step_timeout: float | None = None,
    ):
        self.params_source = params_source
        self.account = account
        self.broadcaster = broadcaster
        self.events = events
        self.clock = clock
        self.safety_margin = safety_margin
        self.step_timeout = step_timeout

    async def launch_params(self, context: ErrorContext | None = None) -> LaunchParams:
        """Fetch the launch module params."""
        ctx = context or ErrorContext()
        raw = await run_step(
            "fetch_launch_params",
            self.params_source.get_launch_params(),
            lambda e: ParameterFetchError(str(e), ctx),
            ctx,
            self.step_timeout,
        )
        try:
            return LaunchParams.from_response(raw)
        except (ValidationError, TypeError, KeyError) as e:
            raise ParameterFetchError(f"malformed params: {e}", ctx) from e

    async def trigger_launch(
        self, launch_id: LaunchId, launch_time: datetime | None = None,
    ) -> datetime:
        """Schedule the launch; returns the launch time the network accepted."""
        ctx = ErrorContext(launch_id=launch_id)
        notify(self.events, ongoing(f"Launching chain {launch_id}"))

        params = await self.launch_params(ctx)
        window = resolve_window(params, self.clock.now(), self.safety_margin)
        address = self._coordinator_address(ctx)

        ctx.step = "validate_launch_time"
        launch_time = validate_or_default(launch_time, window, ctx)

        msg = MsgTriggerLaunch(
            coordinator=address, launch_id=launch_id, launch_time=launch_time,
        )
        notify(self.events, ongoing("Setting launch time"))
        response = await run_step(
            "broadcast_trigger_launch",
            self.broadcaster.broadcast_tx(self.account, msg),
            lambda e: BroadcastError(str(e), "MsgTriggerLaunch", ctx),
            ctx,
            self.step_timeout,
        )

        ctx.step = "decode_trigger_launch"
        try:
            response.decode(MsgTriggerLaunchResponse)
        except Exception as e:
            raise ResponseDecodeError(str(e), "MsgTriggerLaunch", ctx) from e

        logger.info(
            "Launch scheduled at %s", launch_time.isoformat(),
            extra={"launch_id": launch_id},
        )
        notify(self.events, done(
            f"Chain {launch_id} will be launched on {launch_time.isoformat()}",
        ))
        return launch_time

    async def revert_launch(self, launch_id: LaunchId, chain: LaunchedChain) -> None:
        """Revert a scheduled launch and reset the chain's local genesis time."""
        ctx = ErrorContext(launch_id=launch_id)
        notify(self.events, ongoing(f"Reverting launched chain {launch_id}"))

        address = self._coordinator_address(ctx)
        msg = MsgRevertLaunch(coordinator=address, launch_id=launch_id)
        await run_step(
            "broadcast_revert_launch",
            self.broadcaster.broadcast_tx(self.account, msg),
            lambda e: BroadcastError(str(e), "MsgRevertLaunch", ctx),
            ctx,
            self.step_timeout,
        )
        notify(self.events, done(f"Chain {launch_id} launch was reverted"))

        notify(self.events, ongoing("Resetting the genesis time"))
        try:
            await run_step(
                "reset_genesis_time",
                chain.reset_genesis_time(),
                lambda e: GenesisTimeResetError(launch_id, str(e), ctx),
                ctx,
                self.step_timeout,
            )
        except ChainLaunchError as e:
            logger.error(
                "Launch reverted on-chain but local genesis time is stale",
                extra={"launch_id": launch_id, "error_code": "GENESIS_TIME_RESET_FAILED"},
            )
            if isinstance(e, GenesisTimeResetError):
                raise
            # Typed failures from the chain handle (filesystem, parse, timeout)
            raise GenesisTimeResetError(launch_id, e.message, ctx) from e
        notify(self.events, done("Genesis time was reset"))

    def _coordinator_address(self, ctx: ErrorContext) -> str:
        ctx.step = "resolve_coordinator_address"
        try:
            return self.account.address(SPN)
        except Exception as e:
            raise AddressUnresolvedError(SPN, str(e), ctx) from e
