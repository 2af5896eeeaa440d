"""Local Filesystem: tests for reset, read and write under a chain home."""

import pytest

from chainlaunch.core.errors import FilesystemError
from chainlaunch.infrastructure.filesystem import LocalFilesystem


async def test_remove_tree_deletes_directory(tmp_path):
    home = tmp_path / "home"
    (home / "config").mkdir(parents=True)
    (home / "config" / "genesis.json").write_text("{}")
    await LocalFilesystem().remove_tree(home)
    assert not home.exists()


async def test_remove_tree_deletes_single_file(tmp_path):
    target = tmp_path / "genesis.json"
    target.write_text("{}")
    await LocalFilesystem().remove_tree(target)
    assert not target.exists()


async def test_remove_tree_missing_path_is_noop(tmp_path):
    await LocalFilesystem().remove_tree(tmp_path / "absent")


async def test_write_creates_parents_and_read_returns_bytes(tmp_path):
    target = tmp_path / "home" / "config" / "genesis.json"
    fs = LocalFilesystem()
    await fs.write_bytes(target, b'{"chain_id": "orbit-1"}')
    assert await fs.read_bytes(target) == b'{"chain_id": "orbit-1"}'


async def test_read_missing_file_is_filesystem_error(tmp_path):
    with pytest.raises(FilesystemError) as exc:
        await LocalFilesystem().read_bytes(tmp_path / "nope.json")
    assert exc.value.operation == "read"
    assert exc.value.path.endswith("nope.json")
    assert isinstance(exc.value.__cause__, FileNotFoundError)
