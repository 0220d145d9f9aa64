from __future__ import annotations

"""Utilities for resolving the configuration file path."""

from pathlib import Path

DEFAULT_CONFIG_NAME = "treegraph.yaml"


def default_config_path() -> Path:
    return Path.cwd() / DEFAULT_CONFIG_NAME


def resolve_config_path(path: str | None) -> str | None:
    """
    Resolve which configuration file to use.

    1. An explicit path is returned as-is (missing files are reported by the loader)
    2. Otherwise ./treegraph.yaml, if it exists
    3. Otherwise None, meaning built-in defaults
    """
    if path:
        return path
    candidate = default_config_path()
    if candidate.is_file():
        return str(candidate)
    return None


__all__ = ["DEFAULT_CONFIG_NAME", "default_config_path", "resolve_config_path"]
