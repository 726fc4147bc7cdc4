# failflow/core/errors/__init__.py
"""
Core error types for failflow.

This package defines the components responsible for:
- Representing structured failures (Fail)
- Reading structured context from any exception
- Serializing and logging failure chains

No side effects on import.
"""

from .exceptions import Fail, FailResult, try_create
from .info import ExceptionInfo, ex_data, ex_message, ex_cause, iter_chain, root_cause, format_chain
from .render import render_data
from .contracts import FailRecordV1, to_record
from .log import FailDataFilter, log_failure

__all__ = [
    "Fail",
    "FailResult",
    "try_create",
    "ExceptionInfo",
    "ex_data",
    "ex_message",
    "ex_cause",
    "iter_chain",
    "root_cause",
    "format_chain",
    "render_data",
    "FailRecordV1",
    "to_record",
    "FailDataFilter",
    "log_failure",
]
