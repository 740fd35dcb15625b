import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from ledger.config import settings
from ledger.errors import FetchFailure
from ledger.models.finance import FinanceEntry, PaymentMode
from ledger.schemas.finance import FinanceEntryResponse
from ledger.schemas.ledger import (
    AccountOptions,
    ExpenseOverview,
    GeneralLedger,
    LedgerSummary,
    UserLedger,
)
from ledger.services import expense_service, finance_service
from ledger.services.reconciliation import (
    compute_expense_overview,
    compute_general_totals,
    compute_summary,
    distinct_account_names,
)
from ledger.utils.date_helpers import period_range

logger = logging.getLogger(__name__)


async def get_ledger_summary(db: AsyncSession, submitted_by: str) -> LedgerSummary:
    """Fetch the submitter's deposits and expenses, then reconcile them.

    A failed fetch propagates as FetchFailure and nothing is computed.
    """
    deposits = await finance_service.list_deposits(db, submitted_by)
    expenses = await expense_service.list_expenses(db, submitted_by)
    return compute_summary(deposits, expenses)


async def get_expense_overview(db: AsyncSession, submitted_by: str) -> ExpenseOverview:
    deposits = await finance_service.list_deposits(db, submitted_by)
    expenses = await expense_service.list_expenses(db, submitted_by)
    return compute_expense_overview(deposits, expenses)


async def get_account_options(db: AsyncSession, submitted_by: str) -> AccountOptions:
    """Account names and expense categories for the expense form."""
    deposits = await finance_service.list_deposits(db, submitted_by)
    banks = distinct_account_names(deposits, PaymentMode.BANK)
    providers = distinct_account_names(deposits, PaymentMode.MOBILE_MONEY)
    providers.update(settings.MOBILE_PROVIDERS)
    return AccountOptions(
        bank=sorted(banks),
        mobile_money=sorted(providers),
        expense_categories=list(settings.EXPENSE_CATEGORIES),
    )


async def get_general_ledger(
    db: AsyncSession, period: str, now: datetime | None = None
) -> GeneralLedger:
    date_range = period_range(period, now or datetime.now(timezone.utc))
    entries = await finance_service.list_order_entries(db, date_range)
    return GeneralLedger(
        period=period,
        entries=[FinanceEntryResponse.model_validate(e) for e in entries],
        totals=compute_general_totals(entries),
    )


async def get_user_ledger(db: AsyncSession, user_id: str) -> UserLedger:
    entries = await finance_service.list_user_entries(db, user_id)
    return UserLedger(
        user_id=user_id,
        entries=[FinanceEntryResponse.model_validate(e) for e in entries],
        summary=compute_summary(entries, []),
    )


async def get_deposit_ledger(
    db: AsyncSession, submitted_by: str
) -> tuple[list[FinanceEntry], LedgerSummary]:
    deposits = await finance_service.list_deposits(db, submitted_by)
    expenses = await expense_service.list_expenses(db, submitted_by)
    return deposits, compute_summary(deposits, expenses)


async def refreshed_meta(
    db: AsyncSession, submitted_by: str, *, with_overview: bool = False
) -> dict:
    """Recompute the figures after a successful mutation.

    The mutation is already committed, so a failed re-fetch is reported in
    the meta instead of failing the whole response.
    """
    try:
        deposits = await finance_service.list_deposits(db, submitted_by)
        expenses = await expense_service.list_expenses(db, submitted_by)
    except FetchFailure as e:
        logger.warning("Summary refresh failed for %s: %s", submitted_by, e)
        return {"summary": None, "summary_error": str(e)}

    meta = {"summary": compute_summary(deposits, expenses).model_dump()}
    if with_overview:
        meta["overview"] = compute_expense_overview(deposits, expenses).model_dump()
    return meta
