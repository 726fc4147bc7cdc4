# failflow/core/errors/log.py
"""
Logging integration.

FailDataFilter attaches failure context to log records so formatters and
structured handlers can use %(fail_data)s / record.fail_chain without knowing
the exception type. No handlers are installed here.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
import logging

from .info import ex_data, ex_message, iter_chain


def _chain_messages(exc: BaseException) -> List[str]:
    return [ex_message(e) for e in iter_chain(exc)]


def _context(exc: BaseException) -> Dict[str, Any]:
    return {
        "fail_data": ex_data(exc),
        "fail_chain": _chain_messages(exc),
    }


class FailDataFilter(logging.Filter):
    """
    Add fail_data / fail_chain to records that carry exc_info.

    Records without an exception get fail_data=None and fail_chain=[].
    Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if hasattr(record, "fail_data"):
            return True

        exc: Optional[BaseException] = None
        if record.exc_info and isinstance(record.exc_info, tuple):
            exc = record.exc_info[1]

        if exc is None:
            record.fail_data = None
            record.fail_chain = []
        else:
            for key, value in _context(exc).items():
                setattr(record, key, value)
        return True


def log_failure(
    logger: logging.Logger,
    exc: BaseException,
    level: int = logging.ERROR,
    msg: Optional[str] = None,
) -> None:
    """Log exc with its traceback and structured context as record extras."""
    logger.log(level, msg if msg is not None else ex_message(exc), exc_info=exc, extra=_context(exc))
