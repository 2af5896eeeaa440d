"""chainlaunch wiring: builds the coordinator and bootstrapper from settings.

Invariants:
    - configure() sets up logging once per process, later calls are no-ops
    - Collaborators with no local default (params source, account, broadcaster,
      chain driver) are always supplied by the caller
    - Defaults: SystemClock, EventBus, HttpGenesisFetcher, LocalFilesystem

Design Decisions:
    - Plain factory functions over a DI container: every dependency visible at the call site
"""

import logging

from chainlaunch.config import Settings, get_settings
from chainlaunch.core.chain_record import ChainRecord
from chainlaunch.core.repository_protocols import (
    AccountRegistry,
    ChainDriver,
    Clock,
    EventSink,
    Filesystem,
    GenesisFetcher,
    LaunchParamsSource,
    TxBroadcaster,
)
from chainlaunch.infrastructure.clock import SystemClock
from chainlaunch.infrastructure.event_bus import EventBus
from chainlaunch.infrastructure.filesystem import LocalFilesystem
from chainlaunch.infrastructure.genesis_fetcher import HttpGenesisFetcher
from chainlaunch.infrastructure.observability import setup_logging
from chainlaunch.services.genesis_bootstrapper import GenesisBootstrapper
from chainlaunch.services.launch_coordinator import LaunchCoordinator

logger = logging.getLogger(__name__)

_configured = False


def configure(settings: Settings | None = None) -> Settings:
    """Load settings and set up logging (once)."""
    global _configured
    settings = settings or get_settings()
    if not _configured:
        setup_logging(settings.log_level, settings.log_format)
        _configured = True
        logger.info("chainlaunch configured")
    return settings


def create_event_bus(settings: Settings | None = None) -> EventBus:
    settings = settings or get_settings()
    return EventBus(maxsize=settings.event_queue_size)


def create_coordinator(
    params_source: LaunchParamsSource,
    account: AccountRegistry,
    broadcaster: TxBroadcaster,
    events: EventSink | None = None,
    clock: Clock | None = None,
    settings: Settings | None = None,
) -> LaunchCoordinator:
    settings = configure(settings)
    return LaunchCoordinator(
        params_source=params_source,
        account=account,
        broadcaster=broadcaster,
        events=events or create_event_bus(settings),
        clock=clock or SystemClock(),
        safety_margin=settings.launch_time_safety_margin,
        step_timeout=settings.step_timeout_seconds,
    )


def create_bootstrapper(
    record: ChainRecord,
    driver: ChainDriver,
    events: EventSink | None = None,
    fetcher: GenesisFetcher | None = None,
    filesystem: Filesystem | None = None,
    settings: Settings | None = None,
) -> GenesisBootstrapper:
    settings = configure(settings)
    return GenesisBootstrapper(
        record=record,
        driver=driver,
        fetcher=fetcher or HttpGenesisFetcher(settings.genesis_fetch_timeout_seconds),
        events=events or create_event_bus(settings),
        filesystem=filesystem or LocalFilesystem(),
        moniker=settings.genesis_moniker,
        step_timeout=settings.step_timeout_seconds,
    )
