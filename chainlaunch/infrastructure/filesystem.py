"""Local Filesystem: async wrappers over the chain home directory operations.

Invariants:
    - remove_tree on a missing path succeeds (reset is idempotent)
    - write_bytes creates missing parent directories
    - Every OSError mapped to FilesystemError (core/errors.py) with the operation and path

Design Decisions:
    - asyncio.to_thread: blocking IO stays off the event loop and each call is an await point
"""

import asyncio
import shutil
from pathlib import Path

from chainlaunch.core.errors import FilesystemError


class LocalFilesystem:
    """Filesystem protocol over the local disk."""

    async def remove_tree(self, path: Path) -> None:
        try:
            await asyncio.to_thread(_remove_tree, path)
        except OSError as e:
            raise FilesystemError(str(e), "remove", str(path)) from e

    async def read_bytes(self, path: Path) -> bytes:
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise FilesystemError(str(e), "read", str(path)) from e

    async def write_bytes(self, path: Path, data: bytes) -> None:
        try:
            await asyncio.to_thread(_write_bytes, path, data)
        except OSError as e:
            raise FilesystemError(str(e), "write", str(path)) from e


def _remove_tree(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def _write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
