from ledger.schemas.common import ApiResponse
from ledger.schemas.expense import ExpenseCreate, ExpenseResponse
from ledger.schemas.finance import DepositCreate, FinanceEntryResponse, OrderPaymentUpsert
from ledger.schemas.ledger import (
    AccountOptions,
    ChannelTotals,
    ExpenseOverview,
    GeneralLedger,
    GeneralLedgerTotals,
    LedgerSummary,
    UserLedger,
)

__all__ = [
    "ApiResponse",
    "ExpenseCreate",
    "ExpenseResponse",
    "DepositCreate",
    "FinanceEntryResponse",
    "OrderPaymentUpsert",
    "AccountOptions",
    "ChannelTotals",
    "ExpenseOverview",
    "GeneralLedger",
    "GeneralLedgerTotals",
    "LedgerSummary",
    "UserLedger",
]
