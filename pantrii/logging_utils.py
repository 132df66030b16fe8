from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable, Sized
from typing import Any, TypeVar


F = TypeVar("F", bound=Callable[..., Any])

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_HANDLER_NAME = "pantrii"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not any(handler.get_name() == _HANDLER_NAME for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def _size(value: Any) -> int | None:
    if isinstance(value, Sized) and not isinstance(value, (str, bytes)):
        return len(value)
    return None


def log_stage(stage: str, logger: logging.Logger | None = None) -> Callable[[F], F]:
    """Wrap a pipeline stage with DEBUG timing and list-size logging.

    The engine functions stay free of logging; instrumentation is attached
    where they are composed.
    """
    log = logger or logging.getLogger("pantrii.pipeline")

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not log.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            started = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - started) * 1000
            log.debug(
                "stage=%s in=%s out=%s elapsed_ms=%.2f",
                stage,
                _size(args[0]) if args else None,
                _size(result),
                elapsed_ms,
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
