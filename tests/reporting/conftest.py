"""
Reporting-specific test fixtures.

Provides:
- ReportingService instances
- Synthetic AccountActivity rows for pure statement tests
- ReportMetadata for pure builders
"""

from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from ledger_kernel.domain.values import AccountType
from ledger_kernel.selectors.ledger_selector import AccountActivity
from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.models import ReportMetadata, ReportType
from ledger_modules.reporting.service import ReportingService


@pytest.fixture
def reporting_config() -> ReportingConfig:
    """Standard reporting configuration for tests."""
    return ReportingConfig.with_defaults()


@pytest.fixture
def reporting_service(
    session,
    deterministic_clock,
    reporting_config,
) -> ReportingService:
    """ReportingService wired to the test session."""
    return ReportingService(
        session=session,
        clock=deterministic_clock,
        config=reporting_config,
    )


# =========================================================================
# Synthetic account data for pure function tests (no DB required)
# =========================================================================


def make_activity(
    code: str,
    name: str,
    account_type: AccountType,
    debits: str = "0",
    credits: str = "0",
    account_id: UUID | None = None,
) -> AccountActivity:
    """Factory for AccountActivity used in pure tests."""
    return AccountActivity(
        account_id=account_id or uuid4(),
        account_code=code,
        account_name=name,
        account_type=account_type,
        debit_total=Decimal(debits),
        credit_total=Decimal(credits),
    )


@pytest.fixture
def activity():
    return make_activity


@pytest.fixture
def metadata():
    def _make(report_type: ReportType = ReportType.TRIAL_BALANCE) -> ReportMetadata:
        return ReportMetadata(
            report_type=report_type,
            client_id=UUID(int=1),
            entity_name="Company",
            currency="USD",
            generated_at="2024-01-01T12:00:00+00:00",
        )

    return _make
