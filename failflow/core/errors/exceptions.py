# failflow/core/errors/exceptions.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
import logging
import sys
import traceback

from ...config import get_config
from .render import render_data


logger = logging.getLogger(__name__)

# Attributes that may not change once the failure is constructed
_FROZEN_FIELDS = frozenset({
    "_message",
    "_data",
    "_cause",
    "enable_suppression",
    "capture_trace",
    "creation_stack",
    "_suppressed",
})


class Fail(Exception):
    """
    A failure that always carries structured data.

    - message: human-readable description (may be empty, never None)
    - data: mapping of machine-readable context (never None, stored by reference)
    - cause: the failure that triggered this one, or None for a root cause

    The cause is also installed as ``__cause__`` so the standard
    "direct cause" chain shows up in tracebacks and logs.

    Example:
        >>> raise Fail("bad input", {"code": 42})
        >>> raise Fail("outer failed", {"stage": "parse"}, cause=inner)
    """

    def __init__(
        self,
        message: str,
        data: Mapping[str, Any],
        cause: Optional[BaseException] = None,
        enable_suppression: Optional[bool] = None,
        capture_trace: Optional[bool] = None,
    ) -> None:
        if message is None:
            raise ValueError("Fail message must be non-None.")
        if not isinstance(message, str):
            raise TypeError(
                f"Fail message must be a string, got {type(message).__name__}."
            )
        if data is None:
            raise ValueError("Additional data must be non-None.")
        if not isinstance(data, Mapping):
            raise TypeError(
                f"Additional data must be a mapping, got {type(data).__name__}."
            )
        if cause is not None and not isinstance(cause, BaseException):
            raise TypeError(
                f"Fail cause must be an exception, got {type(cause).__name__}."
            )

        config = get_config()
        if enable_suppression is None:
            enable_suppression = config.enable_suppression
        if capture_trace is None:
            capture_trace = config.capture_trace

        super().__init__(message)
        self._message = message
        self._data = data
        self._cause = cause
        self._suppressed: list = []
        self.enable_suppression = bool(enable_suppression)
        self.capture_trace = bool(capture_trace)

        if self.capture_trace:
            self.creation_stack: Optional[traceback.StackSummary] = traceback.extract_stack(
                self._creation_frame(), limit=config.trace_limit
            )
        else:
            self.creation_stack = None

        if cause is not None:
            self.__cause__ = cause
            self.__suppress_context__ = True

        self._frozen = True

    def _creation_frame(self):
        # First frame outside this instance's __init__ chain (subclasses included)
        frame = sys._getframe(1)
        while (
            frame.f_back is not None
            and frame.f_code.co_name == "__init__"
            and frame.f_locals.get("self") is self
        ):
            frame = frame.f_back
        return frame

    # ---- read accessors ----

    @property
    def message(self) -> str:
        return self._message

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    @property
    def cause(self) -> Optional[BaseException]:
        return self._cause

    @property
    def suppressed(self) -> Tuple[BaseException, ...]:
        return tuple(self._suppressed)

    # ---- immutability ----

    def __setattr__(self, name: str, value: Any) -> None:
        if self.__dict__.get("_frozen", False) and (name in _FROZEN_FIELDS or name == "_frozen"):
            raise AttributeError(f"Fail is immutable: cannot assign {name!r}")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name in _FROZEN_FIELDS or name == "_frozen":
            raise AttributeError(f"Fail is immutable: cannot delete {name!r}")
        super().__delattr__(name)

    # ---- suppression ----

    def add_suppressed(self, exc: BaseException) -> None:
        """Record an exception that was suppressed while handling this failure."""
        if not isinstance(exc, BaseException):
            raise TypeError(f"Cannot suppress non-exception {type(exc).__name__}")
        if exc is self:
            raise ValueError("Self-suppression not permitted")
        if self.enable_suppression:
            self._suppressed.append(exc)

    # ---- representation ----

    def __str__(self) -> str:
        return "Fail: " + self._message + " " + render_data(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._message!r}, {dict(self._data)!r})"

    # ---- pickle / copy ----

    def __reduce__(self):
        # Rebuild from state, not __init__: subclasses may have their own signature
        state = dict(self.__dict__)
        state["_suppressed"] = list(self._suppressed)
        if self.creation_stack is not None:
            # FrameSummary may hold code objects; keep plain tuples
            state["creation_stack"] = [
                (fs.filename, fs.lineno, fs.name, fs.line) for fs in self.creation_stack
            ]
        return (_restore_fail, (type(self), state))

    def __setstate__(self, state: Dict[str, Any]) -> None:
        if self.__dict__.get("_frozen", False):
            raise AttributeError("Fail is immutable: cannot restore state")
        state = dict(state)
        stack = state.pop("creation_stack", None)
        if stack is not None:
            stack = traceback.StackSummary.from_list(stack)
        state["creation_stack"] = stack
        # Direct __dict__ update: the frozen guard would reject these names
        self.__dict__.update(state)
        if self._cause is not None:
            self.__cause__ = self._cause
            self.__suppress_context__ = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the whole failure chain (see contracts.FailRecordV1)."""
        from .contracts import to_record

        return to_record(self).model_dump()


def _restore_fail(cls: type, state: Dict[str, Any]) -> Fail:
    fail = cls.__new__(cls, state["_message"])
    fail.__setstate__(state)
    return fail


@dataclass(frozen=True)
class FailResult:
    """Outcome of try_create: exactly one of fail / error is set."""
    fail: Optional[Fail] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.fail is not None


def try_create(
    message: str,
    data: Mapping[str, Any],
    cause: Optional[BaseException] = None,
    *,
    enable_suppression: Optional[bool] = None,
    capture_trace: Optional[bool] = None,
) -> FailResult:
    """
    Build a Fail without raising on invalid arguments.

    Construction-validation errors (ValueError / TypeError) are returned in
    FailResult.error instead of being raised.
    """
    try:
        fail = Fail(
            message,
            data,
            cause,
            enable_suppression=enable_suppression,
            capture_trace=capture_trace,
        )
    except (ValueError, TypeError) as e:
        logger.debug("Fail construction rejected: %s", e)
        return FailResult(error=e)
    return FailResult(fail=fail)
