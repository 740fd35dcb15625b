from ledger.models.expense import Expense
from ledger.models.finance import FinanceEntry, MobileProvider, PaymentMode

__all__ = [
    "Expense",
    "FinanceEntry",
    "MobileProvider",
    "PaymentMode",
]
