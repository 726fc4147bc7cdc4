# failflow/__init__.py
"""
failflow - structured failures that always carry data

User-facing API:
- Fail: exception with a message, a mandatory data mapping and an optional cause
- try_create(): build a Fail without raising on bad arguments
- ex_data / ex_message / ex_cause: read context from any exception
- to_record(): stable serialized form of a failure chain

Basic usage:

    >>> from failflow import Fail
    >>> raise Fail("bad input", {"code": 42})
    Traceback (most recent call last):
    ...
    failflow.core.errors.exceptions.Fail: Fail: bad input {code 42}

Chaining:
    >>> try:
    ...     parse(text)
    ... except Fail as inner:
    ...     raise Fail("outer failed", {"stage": "parse"}, cause=inner)

Generic handlers:
    >>> from failflow import ex_data
    >>> except Exception as e:
    ...     context = ex_data(e)  # None for exceptions without data
"""

__version__ = "0.1.0"

from .core.errors import (
    Fail,
    FailResult,
    try_create,
    ExceptionInfo,
    ex_data,
    ex_message,
    ex_cause,
    iter_chain,
    root_cause,
    format_chain,
    render_data,
    FailRecordV1,
    to_record,
    FailDataFilter,
    log_failure,
)
from .config import FailFlowConfig, load_config, get_config, set_config

__all__ = [
    # Version
    "__version__",

    # Failure type
    "Fail",
    "FailResult",
    "try_create",

    # Interop
    "ExceptionInfo",
    "ex_data",
    "ex_message",
    "ex_cause",
    "iter_chain",
    "root_cause",
    "format_chain",
    "render_data",

    # Serialization / logging
    "FailRecordV1",
    "to_record",
    "FailDataFilter",
    "log_failure",

    # Configuration
    "FailFlowConfig",
    "load_config",
    "get_config",
    "set_config",
]
