"""Tool-call logging for the Jenkins MCP server.

Handlers never raise for Jenkins failures, they return an error block. The
wrapper therefore decides success from the returned text as well as from
exceptions, and stores the recovered error kind for later aggregation.
"""

from __future__ import annotations

import functools
import inspect
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, Optional, TypeVar

from ..utils.errors import kind_from_text
from .config import get_config
from .repo import init_db, log_tool_call

SERVER_NAME = "jenkins-mcp"

F = TypeVar("F", bound=Callable[..., Any])

_initialised_urls: set = set()


def _ensure_db(database_url: Optional[str]) -> None:
    url = database_url or get_config().database_url
    if url in _initialised_urls:
        return
    try:
        init_db(database_url)
    except Exception:
        return
    _initialised_urls.add(url)


def _bound_args(fn: Callable[..., Any], args: tuple, kwargs: Dict[str, Any]) -> Dict[str, Any]:
    try:
        bound = inspect.signature(fn).bind_partial(*args, **kwargs)
    except TypeError:
        return dict(kwargs)
    return dict(bound.arguments)


def logged_tool(
    tool_name: str,
    server_name: str = SERVER_NAME,
    database_url: Optional[str] = None,
) -> Callable[[F], F]:
    """Record every call of the wrapped handler in the MCP log.

    Example:
        ```python
        @logged_tool("sanity-check")
        def handle_sanity_check() -> str:
            ...
        ```

    Logging is skipped entirely when ``MCP_LOG_ENABLED`` is false, and a
    failing log write never changes the handler's result.
    """

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not get_config().enabled:
                return fn(*args, **kwargs)

            started_at = datetime.utcnow()
            request_id = str(uuid.uuid4())[:8]
            call_args = _bound_args(fn, args, kwargs)

            success = False
            result_preview = None
            error_message = None
            error_type = None
            error_kind = None

            try:
                result = fn(*args, **kwargs)
                result_preview = str(result)[:2000]
                kind = kind_from_text(result) if isinstance(result, str) else None
                if kind is not None:
                    error_kind = kind.value
                    error_message = result_preview
                else:
                    success = True
                return result

            except Exception as exc:
                error_message = str(exc)
                error_type = type(exc).__name__
                raise

            finally:
                finished_at = datetime.utcnow()
                try:
                    _ensure_db(database_url)
                    log_tool_call(
                        server_name=server_name,
                        tool_name=tool_name,
                        args=call_args,
                        success=success,
                        result_preview=result_preview,
                        error_message=error_message,
                        error_type=error_type,
                        error_kind=error_kind,
                        started_at=started_at,
                        finished_at=finished_at,
                        duration_ms=(finished_at - started_at).total_seconds() * 1000,
                        request_id=request_id,
                        database_url=database_url,
                    )
                except Exception:
                    # Never let logging break the tool call
                    pass

        return wrapper  # type: ignore[return-value]

    return decorator


def reset_initialised() -> None:
    _initialised_urls.clear()
