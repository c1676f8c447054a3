"""Request/response logging around route handlers."""

import inspect
import logging
import time
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict

# =============================================================================
#   Logger
# =============================================================================
logger = logging.getLogger(Path(__file__).stem)

# Long payloads (echoed bodies, system info) are cut in the log line.
MAX_LOGGED_REPR = 500


def _short_repr(value: Any) -> str:
    text = repr(value)
    if len(text) > MAX_LOGGED_REPR:
        return text[:MAX_LOGGED_REPR] + "...(truncated)"
    return text


def _loggable_arguments(kwargs: Dict[str, Any]) -> Dict[str, str]:
    # Injected infrastructure (executors, requests) is not worth a log line.
    return {
        name: _short_repr(value)
        for name, value in kwargs.items()
        if isinstance(value, (str, int, float, bool, type(None), list, dict, tuple))
    }


def log_api_call(func: Callable) -> Callable:
    """
    Decorator that logs a route handler's arguments, result and elapsed time.

    Errors are logged with their message and elapsed time, then re-raised
    unchanged so the global exception handlers still produce the response.
    The wrapped signature is preserved for FastAPI's dependency resolution.
    Works for both ``async def`` and plain ``def`` handlers.

    Args:
        func: The route handler.

    Returns:
        Callable: The wrapped handler.

    Example:
        >>> @router.get("/echo")
        ... @log_api_call
        ... async def echo(name: str = "World"):
        ...     ...
    """
    endpoint = f"{func.__module__.rsplit('.', 1)[-1]}.{func.__name__}"

    def _before(kwargs: Dict[str, Any]) -> float:
        logger.info("API call start: %s args=%s", endpoint, _loggable_arguments(kwargs))
        return time.perf_counter()

    def _after(result: Any, start: float) -> None:
        cost_ms = (time.perf_counter() - start) * 1000.0
        logger.info("API call end: %s result=%s (%.1f ms)", endpoint, _short_repr(result), cost_ms)

    def _failed(exc: BaseException, start: float) -> None:
        cost_ms = (time.perf_counter() - start) * 1000.0
        logger.error("API call failed: %s error=%s: %s (%.1f ms)", endpoint, type(exc).__name__, exc, cost_ms)

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            start = _before(kwargs)
            try:
                result = await func(*args, **kwargs)
            except Exception as exc:
                _failed(exc, start)
                raise
            _after(result, start)
            return result

        return async_wrapper

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start = _before(kwargs)
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            _failed(exc, start)
            raise
        _after(result, start)
        return result

    return wrapper
