# failflow/core/errors/info.py
"""
Generic access to structured exception context.

Loggers and top-level handlers use these helpers to read data, message and
cause from any exception, without knowing whether it is a Fail.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator, List, Optional, Protocol, runtime_checkable

from .exceptions import Fail
from .render import _safe_str


@runtime_checkable
class ExceptionInfo(Protocol):
    """An exception that reports attached structured context."""

    @property
    def data(self) -> Mapping[str, Any]: ...


def ex_data(exc: Any) -> Optional[Mapping[str, Any]]:
    """Return the structured data of exc, or None if it carries none."""
    if not isinstance(exc, BaseException) or not isinstance(exc, ExceptionInfo):
        return None
    data = getattr(exc, "data", None)
    if isinstance(data, Mapping):
        return data
    return None


def ex_message(exc: BaseException) -> str:
    # Fail.message is the bare message; str(Fail) also renders data
    message = getattr(exc, "message", None)
    if isinstance(message, str) and ex_data(exc) is not None:
        return message
    return _safe_str(exc)


def ex_cause(exc: BaseException) -> Optional[BaseException]:
    """
    Return the failure that triggered exc.

    A Fail reports exactly its constructor cause; None means it is a root.
    Other exceptions carrying data report only an explicit cause. Anything
    else falls back to the implicit __context__ unless it was suppressed,
    matching traceback's rules.
    """
    if isinstance(exc, Fail):
        return exc.cause
    cause = getattr(exc, "cause", None)
    if isinstance(cause, BaseException):
        return cause
    if ex_data(exc) is not None:
        return exc.__cause__
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__context__ is not None and not exc.__suppress_context__:
        return exc.__context__
    return None


def iter_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield exc followed by each cause. Stops on cycles."""
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = ex_cause(current)


def root_cause(exc: BaseException) -> BaseException:
    root = exc
    for root in iter_chain(exc):
        pass
    return root


def format_chain(exc: BaseException) -> str:
    """
    Render the cause chain, one failure per line:

        Fail: outer failed {stage "parse"}
        Caused by: Fail: inner failed {stage "lex"}
    """
    lines: List[str] = []
    for i, current in enumerate(iter_chain(exc)):
        text = _safe_str(current)
        if ex_data(current) is None:
            text = f"{type(current).__name__}: {text}"
        lines.append(text if i == 0 else f"Caused by: {text}")
    return "\n".join(lines)
