"""Session configuration and the constants that form the public contract."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MAX_DEPTH = 100
HISTORY_CAPACITY = 50
ROOT_LABEL = "1"

# Upper bound for a configured max_depth; every add copies the whole tree into history.
DEPTH_CEILING = 500


class SessionConfig(BaseModel):
    """Tunable limits of a graph session. Defaults match the contract constants."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_depth: int = Field(default=MAX_DEPTH, ge=0, le=DEPTH_CEILING)
    history_capacity: int = Field(default=HISTORY_CAPACITY, ge=1)
    verify_invariants: bool = True


class ConfigFileSpec(BaseModel):
    """Top-level layout of a configuration YAML file."""

    model_config = ConfigDict(extra="forbid")

    session: SessionConfig = Field(default_factory=SessionConfig)


__all__ = [
    "MAX_DEPTH",
    "HISTORY_CAPACITY",
    "ROOT_LABEL",
    "DEPTH_CEILING",
    "SessionConfig",
    "ConfigFileSpec",
]
