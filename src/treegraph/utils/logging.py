from __future__ import annotations
import logging
from functools import wraps
from typing import Any, Callable

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "treegraph"


def log_calls(logger_name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator tracing session operations at DEBUG level and logging failures before re-raising."""

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        name = logger_name or func.__module__
        logger = logging.getLogger(name)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            # args[0] is the session itself; its repr is not useful here
            logger.debug("Calling %s args=%s kwargs=%s", func.__qualname__, args[1:], kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.exception("Error in %s: %s", func.__qualname__, e)
                raise
            logger.debug("%s returned %r", func.__qualname__, result)
            return result

        return _wrapper

    return _decorator


def configure_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Route package logs through rich. ``verbose`` lowers the level to DEBUG."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    handler = RichHandler(console=console or Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


__all__ = ["log_calls", "configure_logging", "PACKAGE_LOGGER"]
