"""Boundary Protocols: contracts between core and the external collaborators.

Invariants:
    - Core NEVER imports from services/ or infrastructure/; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by the caller or infrastructure/ via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async wherever the implementation does IO, so every external step is awaitable
      and therefore cancellable; EventSink.send and Clock.now stay sync because they
      must never block the flow
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

from chainlaunch.core.events import Event
from chainlaunch.core.launch_window import LaunchParams


ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class Clock(Protocol):
    def now(self) -> datetime: ...


class EventSink(Protocol):
    """Fire-and-forget notification channel."""
    def send(self, event: Event) -> None: ...


class LaunchParamsSource(Protocol):
    """Query client for the launch module params."""
    async def get_launch_params(self) -> LaunchParams | dict: ...


class AccountRegistry(Protocol):
    """Signing account of the coordinator."""
    def address(self, network: str) -> str: ...


class TxResponse(Protocol):
    """Opaque broadcast result; decode raises when the payload does not fit model."""
    def decode(self, model: type[ResponseModel]) -> ResponseModel: ...


class TxBroadcaster(Protocol):
    async def broadcast_tx(self, account: AccountRegistry, message: BaseModel) -> TxResponse: ...


class ChainCommands(Protocol):
    """Commands of the built chain binary."""
    async def init(self, moniker: str) -> None: ...
    async def validate_genesis(self) -> None: ...


class ChainDriver(Protocol):
    """Build pipeline and local init of the chain binary."""
    async def build(self, cache: Any | None = None) -> None: ...
    async def init(self, initialize_network: bool) -> None: ...
    async def commands(self) -> ChainCommands: ...


class GenesisFetcher(Protocol):
    async def fetch_genesis_and_hash(self, url: str) -> tuple[bytes, str]: ...


class Filesystem(Protocol):
    async def remove_tree(self, path: Path) -> None: ...
    async def read_bytes(self, path: Path) -> bytes: ...
    async def write_bytes(self, path: Path, data: bytes) -> None: ...


class LaunchedChain(Protocol):
    """Local chain handle that can forget its cached genesis time."""
    async def reset_genesis_time(self) -> None: ...
