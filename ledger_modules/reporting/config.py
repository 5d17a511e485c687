"""
Reporting Configuration Schema.

Defines report formatting and presentation options.  Loaded from the
``reporting`` section of the ledger YAML file, or built with defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Self

from ledger_kernel.logging_config import get_logger

logger = get_logger("modules.reporting.config")


@dataclass(frozen=True)
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    Controls presentation only; no setting here changes a computed balance.
    """

    # Entity name shown on reports
    entity_name: str = "Company"

    # Currency label for reports (no conversion is ever performed)
    default_currency: str = "USD"

    # Rounding precision for display
    display_precision: int = 2

    # Whether to list accounts whose balance is zero
    include_zero_balances: bool = True

    # Whether the balance sheet carries a synthetic current-earnings equity line
    include_current_earnings: bool = True

    # Report totals count as balanced when they differ by less than this
    balance_tolerance: Decimal = Decimal("0.01")

    def __post_init__(self):
        if self.display_precision < 0:
            raise ValueError("display_precision cannot be negative")
        if len(self.default_currency) != 3:
            raise ValueError("default_currency must be a 3-letter ISO 4217 code")
        if self.balance_tolerance <= 0:
            raise ValueError("balance_tolerance must be positive")

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.debug("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create config from dictionary (e.g. a parsed YAML section)."""
        values = dict(data)
        if "balance_tolerance" in values:
            values["balance_tolerance"] = Decimal(str(values["balance_tolerance"]))
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(values.keys())},
        )
        return cls(**values)
