"""Chain Genesis: tests for genesis parsing, gentx counting and genesis time reset.

Tests cover:
    - gentx count for empty, missing, null and populated gen_txs
    - malformed JSON and wrong structure raise GenesisParseError
    - with_zero_genesis_time rewrites only genesis_time
"""

import json

import pytest

from chainlaunch.core.chain_genesis import (
    ZERO_GENESIS_TIME,
    parse_chain_genesis,
    with_zero_genesis_time,
)
from chainlaunch.core.errors import ErrorContext, GenesisParseError

from tests.services.fakes import genesis_bytes


def test_counts_zero_gentxs():
    genesis = parse_chain_genesis(genesis_bytes())
    assert genesis.gentx_count == 0
    assert genesis.chain_id == "orbit-1"


@pytest.mark.parametrize("count", [1, 2, 5])
def test_counts_exact_gentxs(count):
    assert parse_chain_genesis(genesis_bytes(gentx_count=count)).gentx_count == count


def test_missing_genutil_counts_as_zero():
    content = json.dumps({"chain_id": "orbit-1", "app_state": {"bank": {}}}).encode()
    assert parse_chain_genesis(content).gentx_count == 0


def test_null_gen_txs_counts_as_zero():
    content = json.dumps({"app_state": {"genutil": {"gen_txs": None}}}).encode()
    assert parse_chain_genesis(content).gentx_count == 0


def test_malformed_json_raises_parse_error():
    with pytest.raises(GenesisParseError) as exc:
        parse_chain_genesis(b"{not json", "/tmp/genesis.json")
    assert exc.value.code == "GENESIS_PARSE_FAILED"
    assert exc.value.path == "/tmp/genesis.json"


def test_wrong_structure_raises_parse_error():
    content = json.dumps({"app_state": {"genutil": {"gen_txs": "oops"}}}).encode()
    with pytest.raises(GenesisParseError):
        parse_chain_genesis(content)


def test_top_level_array_raises_parse_error():
    with pytest.raises(GenesisParseError):
        parse_chain_genesis(b"[]")


def test_zero_genesis_time_keeps_other_fields():
    original = json.loads(genesis_bytes(gentx_count=1))
    updated = json.loads(with_zero_genesis_time(genesis_bytes(gentx_count=1)))
    assert updated["genesis_time"] == ZERO_GENESIS_TIME
    del original["genesis_time"], updated["genesis_time"]
    assert updated == original


def test_zero_genesis_time_rejects_non_object():
    with pytest.raises(GenesisParseError):
        with_zero_genesis_time(b'"genesis"')


def test_zero_genesis_time_rejects_invalid_json():
    with pytest.raises(GenesisParseError):
        with_zero_genesis_time(b"\xff\xfe")


def test_parse_error_carries_caller_context():
    ctx = ErrorContext(launch_id=7, step="parse_genesis")
    with pytest.raises(GenesisParseError) as exc:
        parse_chain_genesis(b"{not json", "/tmp/genesis.json", ctx)
    assert exc.value.context is ctx
    assert exc.value.to_dict()["error"]["context"]["step"] == "parse_genesis"


def test_zero_genesis_time_error_carries_caller_context():
    ctx = ErrorContext(launch_id=7)
    with pytest.raises(GenesisParseError) as exc:
        with_zero_genesis_time(b"[]", context=ctx)
    assert exc.value.context.launch_id == 7
