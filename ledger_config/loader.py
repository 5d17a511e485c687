"""
Configuration Loader (``ledger_config.loader``).

Responsibility
--------------
Loads YAML files and parses them into typed ``ledger_config.schema``
dataclass instances.  The single public entry point for runtime settings
is ``ledger_config.get_active_settings()``.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  May import the kernel's
closed enumerations for validation; the kernel never imports from here.

Invariants enforced
-------------------
* All parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys in a chart entry  -> ``KeyError`` propagates.
* Unknown account type or bad tolerance  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import ChartAccountDef, LedgerSettings
from ledger_kernel.domain.values import AccountType


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_decimal(value: Any, name: str) -> Decimal:
    """Parse a YAML scalar into a Decimal, refusing floats' binary noise."""
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"{name} is not a decimal: {value!r}") from exc


def parse_settings(data: dict[str, Any]) -> LedgerSettings:
    """
    Parse ``LedgerSettings`` from the settings document.

    Every section is optional; absent keys keep the schema defaults.
    """
    database = data.get("database") or {}
    posting = data.get("posting") or {}
    logging_section = data.get("logging") or {}

    kwargs: dict[str, Any] = {}
    if "url" in database:
        kwargs["database_url"] = str(database["url"])
    for key in ("pool_size", "max_overflow", "pool_timeout", "pool_recycle"):
        if key in database:
            kwargs[key] = int(database[key])
    if "echo" in database:
        kwargs["echo"] = bool(database["echo"])
    if "balance_tolerance" in posting:
        kwargs["balance_tolerance"] = parse_decimal(
            posting["balance_tolerance"], "posting.balance_tolerance",
        )
    if "level" in logging_section:
        kwargs["log_level"] = str(logging_section["level"]).upper()

    return LedgerSettings(
        reporting=dict(data.get("reporting") or {}),
        chart_of_accounts=data.get("chart_of_accounts"),
        checksum=compute_checksum(data),
        **kwargs,
    )


def parse_chart_account(data: dict[str, Any]) -> ChartAccountDef:
    """
    Parse one chart entry.

    Raises:
        KeyError: if ``code``, ``name`` or ``type`` is missing.
        ValueError: if ``type`` is not an account type.
    """
    return ChartAccountDef(
        code=str(data["code"]),
        name=data["name"],
        account_type=AccountType.parse(data["type"]).value,
        description=data.get("description"),
    )


def parse_chart(data: dict[str, Any]) -> tuple[ChartAccountDef, ...]:
    """Parse the ``accounts`` list of a chart-of-accounts document."""
    accounts = tuple(parse_chart_account(item) for item in data.get("accounts") or ())
    codes = [a.code for a in accounts]
    duplicates = sorted({c for c in codes if codes.count(c) > 1})
    if duplicates:
        raise ValueError(f"Duplicate account codes in chart: {duplicates}")
    return accounts


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
