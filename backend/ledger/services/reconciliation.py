"""Ledger balance reconciliation.

Pure functions that turn already-fetched finance and expense rows into the
per-channel figures shown on the ledger pages. Rows may be ORM objects,
pydantic models or plain mappings. Missing amounts count as zero and
unrecognised grouping keys are skipped, so none of these functions raise on
bad data.
"""

import enum
from collections.abc import Iterable, Mapping
from typing import Any

from ledger.models.finance import MobileProvider, PaymentMode
from ledger.schemas.ledger import (
    ChannelTotals,
    ExpenseOverview,
    GeneralLedgerTotals,
    LedgerSummary,
)

# mode_of_payment value -> ChannelTotals / LedgerSummary field
_CHANNEL_FIELDS: dict[str, str] = {
    PaymentMode.CASH.value: "cash",
    PaymentMode.BANK.value: "bank",
    PaymentMode.MOBILE_MONEY.value: "mobile_money",
}

_PROVIDER_FIELDS: dict[str, str] = {
    MobileProvider.MTN.value: "mtn",
    MobileProvider.AIRTEL.value: "airtel",
}


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _key(record: Any, name: str) -> str | None:
    """Grouping key of a record, or None when absent or empty."""
    value = _field(record, name)
    if isinstance(value, enum.Enum):
        value = value.value
    if value is None or value == "":
        return None
    return str(value)


def _amount(record: Any, name: str) -> float:
    value = _field(record, name)
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def compute_summary(
    deposits: Iterable[Any],
    expenses: Iterable[Any],
) -> LedgerSummary:
    """Per-channel deposit totals, sub-totals and balance forward.

    balance_forward[channel] is that channel's deposits minus that channel's
    expenses; channels never borrow from each other.
    """
    summary = LedgerSummary()

    for entry in deposits:
        channel = _CHANNEL_FIELDS.get(_key(entry, "mode_of_payment"))
        if channel is None:
            continue
        amount = _amount(entry, "amount_paid")
        setattr(summary, channel, getattr(summary, channel) + amount)

        if channel == "bank":
            bank_name = _key(entry, "bank_name")
            if bank_name is not None:
                summary.bank_names[bank_name] = (
                    summary.bank_names.get(bank_name, 0.0) + amount
                )
        elif channel == "mobile_money":
            provider = _PROVIDER_FIELDS.get(_key(entry, "mode_of_mobilemoney"))
            if provider is not None:
                setattr(summary, provider, getattr(summary, provider) + amount)

    spent = ChannelTotals()
    for expense in expenses:
        channel = _CHANNEL_FIELDS.get(_key(expense, "mode_of_payment"))
        if channel is None:
            continue
        amount = _amount(expense, "amount_spent")
        setattr(spent, channel, getattr(spent, channel) + amount)

    summary.expenses = spent
    summary.balance_forward = ChannelTotals(
        cash=summary.cash - spent.cash,
        bank=summary.bank - spent.bank,
        mobile_money=summary.mobile_money - spent.mobile_money,
    )
    return summary


def distinct_account_names(
    deposits: Iterable[Any],
    mode: PaymentMode | str,
) -> set[str]:
    """Bank names (Bank) or providers (Mobile Money) seen across deposits."""
    mode_value = mode.value if isinstance(mode, PaymentMode) else mode
    if mode_value == PaymentMode.BANK.value:
        account_field = "bank_name"
    elif mode_value == PaymentMode.MOBILE_MONEY.value:
        account_field = "mode_of_mobilemoney"
    else:
        raise ValueError(f"No account names for mode of payment {mode_value!r}")

    names = set()
    for entry in deposits:
        if _key(entry, "mode_of_payment") != mode_value:
            continue
        name = _key(entry, account_field)
        if name is not None:
            names.add(name)
    return names


def compute_expense_overview(
    deposits: Iterable[Any],
    expenses: Iterable[Any],
) -> ExpenseOverview:
    """Overall income (amount_available) against overall spending."""
    total_income = sum(_amount(d, "amount_available") for d in deposits)
    total_expenses = sum(_amount(e, "amount_spent") for e in expenses)
    return ExpenseOverview(
        total_income=total_income,
        total_expenses=total_expenses,
        balance_forward=total_income - total_expenses,
    )


def compute_general_totals(entries: Iterable[Any]) -> GeneralLedgerTotals:
    """Order revenue, payments received and outstanding balance."""
    totals = GeneralLedgerTotals()
    for entry in entries:
        totals.total_revenue += _amount(entry, "total_amount")
        totals.total_payments += _amount(entry, "amount_paid")
        totals.outstanding_balance += _amount(entry, "balance")
    return totals
