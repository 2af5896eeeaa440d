"""Chain Genesis: structural view of a genesis file, just deep enough to count gentxs.

Invariants:
    - Parsing is PURE: bytes in, model out, no file access
    - Malformed JSON or structure raises GenesisParseError, never the semantic gentx error
    - Unknown fields are ignored; the chain binary owns full structural validation
    - with_zero_genesis_time keeps every other field of the document unchanged

Design Decisions:
    - Pydantic over hand-walking dicts: defaults for missing sections, typed errors for wrong ones
"""

import json
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from chainlaunch.core.errors import ErrorContext, GenesisParseError


ZERO_GENESIS_TIME: str = "1970-01-01T00:00:00Z"


class GenUtilState(BaseModel):
    gen_txs: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("gen_txs", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class AppState(BaseModel):
    genutil: GenUtilState = Field(default_factory=GenUtilState)

    @field_validator("genutil", mode="before")
    @classmethod
    def null_as_default(cls, v: Any) -> Any:
        return {} if v is None else v


class ChainGenesis(BaseModel):
    """Parsed genesis: chain id, genesis time and the genutil gentx list."""

    chain_id: str = ""
    genesis_time: str | None = None
    app_state: AppState = Field(default_factory=AppState)

    @property
    def gentx_count(self) -> int:
        return len(self.app_state.genutil.gen_txs)


def parse_chain_genesis(
    content: bytes, path: str = "genesis.json", context: ErrorContext | None = None,
) -> ChainGenesis:
    """Parse raw genesis bytes into ChainGenesis."""
    try:
        return ChainGenesis.model_validate_json(content)
    except ValidationError as e:
        raise GenesisParseError(_first_error(e), path, context) from e


def with_zero_genesis_time(
    content: bytes, path: str = "genesis.json", context: ErrorContext | None = None,
) -> bytes:
    """Return the genesis document with genesis_time reset to the zero timestamp."""
    try:
        document = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise GenesisParseError(str(e), path, context) from e
    if not isinstance(document, dict):
        raise GenesisParseError("top-level value is not an object", path, context)

    document["genesis_time"] = ZERO_GENESIS_TIME
    return json.dumps(document, indent=2).encode()


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    location = ".".join(str(part) for part in err["loc"]) or "<root>"
    return f"{location}: {err['msg']}"
