"""Errors raised while loading a session configuration file."""

from __future__ import annotations

import os
from typing import List, Optional

import yaml
from pydantic import ValidationError


class LoaderError(RuntimeError):
    """A configuration file that could not be read, parsed or validated.

    The message names the file and, where the cause allows it, the line and
    column in that file or the offending ``section.key`` settings.
    """

    def __init__(self, file_path: str, message: str, *, cause: Optional[Exception] = None):
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(self._build_message())

    @property
    def line(self) -> Optional[int]:
        """1-based line of a YAML syntax error, if known."""
        mark = self._yaml_mark()
        return mark.line + 1 if mark is not None else None

    @property
    def column(self) -> Optional[int]:
        mark = self._yaml_mark()
        return mark.column + 1 if mark is not None else None

    def _yaml_mark(self) -> Optional[yaml.Mark]:
        if isinstance(self.cause, yaml.MarkedYAMLError):
            return self.cause.problem_mark
        return None

    def _build_message(self) -> str:
        location = _display_path(self.file_path)
        if self.line is not None:
            location = f"{location}, line {self.line}, column {self.column}"
        base = f"{self.message} ({location})"

        if isinstance(self.cause, ValidationError):
            return f"{base}: {'; '.join(_setting_problems(self.cause))}"
        if isinstance(self.cause, yaml.MarkedYAMLError) and self.cause.problem:
            return f"{base}: {self.cause.problem}"
        if self.cause:
            return f"{base}: {self.cause}"
        return base

    def __str__(self) -> str:
        return self._build_message()


def _display_path(path: str) -> str:
    try:
        return os.path.relpath(path)
    except ValueError:  # pragma: no cover - different drive on Windows
        return path


def _setting_problems(exc: ValidationError) -> List[str]:
    """One ``section.key: problem (got value)`` entry per rejected setting."""
    problems = []
    for err in exc.errors(include_url=False):
        key = ".".join(str(part) for part in err["loc"]) or "<file>"
        if err["type"] == "extra_forbidden":
            problems.append(f"{key}: unknown setting")
        elif err["type"] == "missing":
            problems.append(f"{key}: required")
        else:
            problems.append(f"{key}: {err['msg']} (got {err['input']!r})")
    return problems


__all__ = ["LoaderError"]
