# failflow/core/errors/contracts.py
"""
FailRecordV1: Stable serialized form of a failure chain.

Used by loggers, reports and anything that ships failures across a process
boundary. It must be:
- Stable (fields are append-only)
- JSON-safe (non-native data values are stringified, never rejected)
- Complete (the whole cause chain is kept)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Literal, Optional, Set
import traceback

from pydantic import BaseModel, ConfigDict, Field

from .info import ex_data, ex_message, iter_chain
from .render import _safe_str


class FailRecordV1(BaseModel):
    """
    Serialized failure.

    Core fields:
    - type: exception class name (e.g., Fail, KeyError)
    - message: bare message (without rendered data)
    - data: structured context, or None for exceptions that carry none
    - cause: the next record in the chain
    - stack: formatted creation stack / traceback lines (opt-in)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    schema_version: Literal["v1"] = Field(default="v1")
    type: str = Field(..., description="Exception class name")
    message: str = Field(default="", description="Human-readable message")
    data: Optional[Dict[str, Any]] = Field(default=None, description="Structured context")
    cause: Optional["FailRecordV1"] = Field(default=None, description="Underlying failure")
    stack: Optional[List[str]] = Field(default=None, description="Formatted stack lines")


FailRecordV1.model_rebuild()


def _jsonable(value: Any, seen: Set[int]) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        if id(value) in seen:
            return "<cycle>"
        seen.add(id(value))
        try:
            if isinstance(value, Mapping):
                return {_safe_str(k): _jsonable(v, seen) for k, v in value.items()}
            return [_jsonable(v, seen) for v in value]
        finally:
            seen.discard(id(value))
    return _safe_str(value)


def _stack_lines(exc: BaseException) -> Optional[List[str]]:
    creation_stack = getattr(exc, "creation_stack", None)
    if isinstance(creation_stack, traceback.StackSummary):
        return [line.rstrip("\n") for line in creation_stack.format()]
    if exc.__traceback__ is not None:
        return [line.rstrip("\n") for line in traceback.format_tb(exc.__traceback__)]
    return None


def _record_for(
    exc: BaseException, cause: Optional[FailRecordV1], include_stack: bool
) -> FailRecordV1:
    data = ex_data(exc)
    return FailRecordV1(
        type=type(exc).__name__,
        message=ex_message(exc),
        data=_jsonable(data, set()) if data is not None else None,
        cause=cause,
        stack=_stack_lines(exc) if include_stack else None,
    )


def to_record(exc: BaseException, include_stack: bool = False) -> FailRecordV1:
    """
    Build a FailRecordV1 for exc and its whole cause chain.

    Args:
        exc: Any exception (Fail or not)
        include_stack: Attach creation stack (Fail) or traceback lines

    Returns:
        FailRecordV1 (frozen)
    """
    # iter_chain always yields exc first, so chain is never empty
    *outer, root = list(iter_chain(exc))

    # Build from the root outward so each record can hold its cause
    record = _record_for(root, None, include_stack)
    for item in reversed(outer):
        record = _record_for(item, record, include_stack)
    return record
