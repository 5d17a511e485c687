"""Database layer - store handle, base classes, money types."""

from ledger_kernel.db.base import UUID, Base, TimestampedBase, UUIDString
from ledger_kernel.db.engine import LedgerDatabase
from ledger_kernel.db.types import MinorUnits, LongText, ShortCode

__all__ = [
    "LedgerDatabase",
    "Base",
    "TimestampedBase",
    "UUIDString",
    "UUID",
    "MinorUnits",
    "ShortCode",
    "LongText",
]
