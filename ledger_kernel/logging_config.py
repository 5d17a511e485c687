"""
Structured JSON logging for the ledger kernel.

Every record is a single JSON line:

    {"ts": "...", "level": "INFO", "logger": "ledger_kernel.services.posting",
     "message": "transaction_posted", "client_id": "...", "transaction_id": "...",
     "correlation_id": "...", "entry_count": 2, "total_debits": "250.00"}

Contract:
    - ``client_id`` and ``transaction_id`` are on every record (null when
      nothing is bound), so one tenant's or one transaction's trail can be
      pulled out with a single key match.
    - ``correlation_id`` and ``actor_id`` appear only when bound.
    - ``extra=`` fields are merged in; a bound context value wins over an
      extra of the same name.
    - A ledger error passed via ``exc_info`` becomes ``exc_type``,
      ``exc_code``, ``exc_message`` and one ``exc_<attribute>`` per
      structured attribute (``exc_debits``, ``exc_account_ids``, ...).
      Ledger errors are outcomes, not crashes: no traceback.
    - Any other exception keeps ``exc_type``, ``exc_message`` and the full
      ``traceback``.
    - UUID, date, Decimal and Enum values serialise as strings.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from ledger_kernel.exceptions import LedgerKernelError

ROOT_LOGGER = "ledger_kernel"

# Present on every record, bound or not
ALWAYS_FIELDS = ("client_id", "transaction_id")
CONTEXT_FIELDS = ("correlation_id", "client_id", "actor_id", "transaction_id")


class LogContext:
    """
    Fields stamped on every ledger log record for the current request.

    Held in one ContextVar, so each thread and each asyncio task sees its
    own bindings.  Values are stored as strings.
    """

    _bound: ContextVar[dict[str, str] | None] = ContextVar(
        "ledger_log_context", default=None
    )

    @classmethod
    def _with(cls, fields: dict[str, Any]) -> dict[str, str]:
        unknown = set(fields) - set(CONTEXT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown log context field(s): {', '.join(sorted(unknown))}")
        merged = dict(cls._bound.get() or {})
        merged.update({k: str(v) for k, v in fields.items() if v is not None})
        return merged

    @classmethod
    def set(cls, **fields: Any) -> None:
        """Bind fields until cleared.  None values are ignored."""
        cls._bound.set(cls._with(fields))

    @classmethod
    def get_all(cls) -> dict[str, str]:
        return dict(cls._bound.get() or {})

    @classmethod
    def clear(cls) -> None:
        cls._bound.set(None)

    @classmethod
    @contextmanager
    def bind(cls, **fields: Any) -> Iterator[None]:
        """Bind fields for the duration of a ``with`` block, then restore."""
        token = cls._bound.set(cls._with(fields))
        try:
            yield
        finally:
            cls._bound.reset(token)


# Attributes every LogRecord has; anything else on a record came from extra=
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _to_json(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _describe_exception(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    if isinstance(exc, LedgerKernelError):
        fields["exc_code"] = exc.code
        for name, value in exc.details().items():
            fields[f"exc_{name}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per record; see the module docstring for the layout."""

    def format(self, record: logging.LogRecord) -> str:
        context = LogContext.get_all()
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in ALWAYS_FIELDS:
            payload[name] = context.pop(name, None)
        payload.update(context)

        for key, value in vars(record).items():
            if key in _RECORD_ATTRS:
                continue
            if payload.get(key) is None:
                payload[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload.update(_describe_exception(exc))
            if not isinstance(exc, LedgerKernelError):
                payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_to_json)


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``ledger_kernel`` namespace, e.g. ``services.posting``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


_lock = threading.Lock()


def _is_ledger_handler(handler: logging.Handler) -> bool:
    return getattr(handler, "ledger_json", False)


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach the JSON handler to the ``ledger_kernel`` logger.

    Only the first call has any effect until reset_logging().  Records do not
    propagate to the root logger.
    """
    root = logging.getLogger(ROOT_LOGGER)
    with _lock:
        if any(_is_ledger_handler(h) for h in root.handlers):
            return
        target = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
        target.setFormatter(StructuredFormatter())
        target.ledger_json = True  # type: ignore[attr-defined]
        root.setLevel(level)
        root.propagate = False
        root.addHandler(target)


def reset_logging() -> None:
    """Drop every handler and fall back to WARNING.  Used by tests."""
    root = logging.getLogger(ROOT_LOGGER)
    with _lock:
        root.handlers.clear()
        root.setLevel(logging.WARNING)
