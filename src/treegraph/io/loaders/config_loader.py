from __future__ import annotations

"""Load session configuration from YAML."""

import os
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from treegraph.core.config import ConfigFileSpec, SessionConfig
from treegraph.io.loaders.errors import LoaderError


def _read_yaml_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_session_config(path: str | None) -> SessionConfig:
    """Load a session configuration file.

    Expected format (every key optional):
    session:
      max_depth: 100
      history_capacity: 50
      verify_invariants: true

    ``None`` returns the defaults.
    """
    if path is None:
        return SessionConfig()
    if not os.path.isfile(path):
        raise LoaderError(path, "Configuration file not found")

    try:
        data = _read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Configuration file is not valid YAML", cause=exc) from exc

    if not isinstance(data, dict):
        raise LoaderError(path, f"Expected a mapping at the top level, got {type(data).__name__}")

    try:
        spec = ConfigFileSpec.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(path, "Invalid session configuration", cause=exc) from exc
    return spec.session
