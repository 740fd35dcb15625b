from pydantic import BaseModel, Field

from ledger.schemas.finance import FinanceEntryResponse


class ChannelTotals(BaseModel):
    cash: float = 0.0
    bank: float = 0.0
    mobile_money: float = 0.0


class LedgerSummary(BaseModel):
    # Deposit side
    cash: float = 0.0
    bank: float = 0.0
    mobile_money: float = 0.0
    mtn: float = 0.0
    airtel: float = 0.0
    bank_names: dict[str, float] = Field(default_factory=dict)

    # Expense side and deposits minus expenses, per channel
    expenses: ChannelTotals = Field(default_factory=ChannelTotals)
    balance_forward: ChannelTotals = Field(default_factory=ChannelTotals)


class ExpenseOverview(BaseModel):
    total_income: float = 0.0
    total_expenses: float = 0.0
    balance_forward: float = 0.0


class GeneralLedgerTotals(BaseModel):
    total_revenue: float = 0.0
    total_payments: float = 0.0
    outstanding_balance: float = 0.0


class GeneralLedger(BaseModel):
    period: str
    entries: list[FinanceEntryResponse]
    totals: GeneralLedgerTotals


class UserLedger(BaseModel):
    user_id: str
    entries: list[FinanceEntryResponse]
    summary: LedgerSummary


class AccountOptions(BaseModel):
    """Choices for the expense form's account and item selects."""

    bank: list[str] = Field(default_factory=list)
    mobile_money: list[str] = Field(default_factory=list)
    expense_categories: list[str] = Field(default_factory=list)
