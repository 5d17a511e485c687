"""
ledger_config -- single public entrypoint for ledger settings.

Responsibility:
    Provides the ONLY way to obtain settings at runtime through
    ``get_active_settings()``.  No other component reads configuration
    files or environment variables directly.

Architecture position:
    Configuration -- sits above ``ledger_kernel``.  The kernel MUST NEVER
    import from ``ledger_config``; callers pass the parsed values in.

Invariants enforced:
    - Single entrypoint: settings flow through ``get_active_settings()``;
      it alone reads ``LEDGER_CONFIG`` (settings file path) and
      ``DATABASE_URL`` (store override).

Failure modes:
    - ``FileNotFoundError`` -- the settings or chart file does not exist.
    - ``ValueError`` -- a value fails schema validation.
"""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path

from ledger_config.loader import load_yaml_file, parse_chart, parse_settings
from ledger_config.schema import ChartAccountDef, LedgerSettings
from ledger_kernel.logging_config import get_logger

logger = get_logger("config")

DEFAULTS_DIR = Path(__file__).parent / "defaults"
DEFAULT_SETTINGS_PATH = DEFAULTS_DIR / "ledger.yaml"
DEFAULT_CHART_PATH = DEFAULTS_DIR / "chart_of_accounts.yaml"

CONFIG_ENV_VAR = "LEDGER_CONFIG"
DATABASE_URL_ENV_VAR = "DATABASE_URL"


def get_active_settings(path: Path | str | None = None) -> LedgerSettings:
    """The ONLY public settings entrypoint.

    Resolution order for the file: ``path`` argument, then the
    ``LEDGER_CONFIG`` environment variable, then the packaged defaults.
    ``DATABASE_URL``, when set, overrides the file's database url.

    Returns:
        Frozen LedgerSettings.
    """
    source = Path(path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_SETTINGS_PATH)
    settings = parse_settings(load_yaml_file(source))

    chart = settings.chart_of_accounts
    if chart is not None and not Path(chart).is_absolute():
        settings = dataclasses.replace(settings, chart_of_accounts=str(source.parent / chart))

    url_override = os.environ.get(DATABASE_URL_ENV_VAR)
    if url_override:
        settings = dataclasses.replace(settings, database_url=url_override)

    logger.info(
        "LEDGER_CONFIG_TRACE",
        extra={
            "config_path": str(source),
            "checksum": settings.checksum,
            "database_url_overridden": bool(url_override),
        },
    )
    return settings


def load_chart_of_accounts(path: Path | str | None = None) -> tuple[ChartAccountDef, ...]:
    """Load a chart-of-accounts template (default: the packaged standard chart)."""
    return parse_chart(load_yaml_file(Path(path or DEFAULT_CHART_PATH)))


__all__ = [
    "LedgerSettings",
    "ChartAccountDef",
    "get_active_settings",
    "load_chart_of_accounts",
]
