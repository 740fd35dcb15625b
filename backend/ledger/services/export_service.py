"""CSV and Excel exports of the ledgers.

The CSV exports join raw values with commas and do NOT quote or escape them;
a free-text value containing a comma shifts the columns of its row. Download
consumers depend on this exact layout.
"""

from __future__ import annotations

import io
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

import openpyxl
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ledger.schemas.ledger import LedgerSummary
from ledger.utils.currency import format_amount

EXPENSE_CSV_HEADERS = [
    "Item",
    "Amount Spent",
    "Department",
    "Mode of Payment",
    "Account",
    "Date",
]

GENERAL_LEDGER_CSV_HEADERS = [
    "Marketer Name",
    "Total Order Amount",
    "Amount Paid",
    "Balance",
    "Date",
]

DEPOSIT_SHEET_HEADERS = [
    "ID",
    "Amount Paid",
    "Mode of Payment",
    "Mobile Money",
    "Bank",
    "Purpose",
    "Date",
]


def _get(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _csv_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return f"{value.month}/{value.day}/{value.year}"
    return str(value)


def _csv(headers: list[str], rows: Iterable[list[Any]]) -> str:
    header = ",".join(headers) + "\n"
    return header + "\n".join(",".join(_csv_value(v) for v in row) for row in rows)


def expenses_to_csv(expenses: Iterable[Any]) -> str:
    return _csv(
        EXPENSE_CSV_HEADERS,
        (
            [
                _get(e, "item"),
                _get(e, "amount_spent"),
                _get(e, "department"),
                _get(e, "mode_of_payment"),
                _get(e, "account"),
                _get(e, "date"),
            ]
            for e in expenses
        ),
    )


def general_ledger_to_csv(entries: Iterable[Any]) -> str:
    """General ledger rows.

    No user directory is stored, so the "Marketer Name" column holds the
    marketer's user id, or "Unknown" when the row has none.
    """
    return _csv(
        GENERAL_LEDGER_CSV_HEADERS,
        (
            [
                _get(e, "user_id") or "Unknown",
                _get(e, "total_amount"),
                _get(e, "amount_paid"),
                _get(e, "balance"),
                _get(e, "created_at"),
            ]
            for e in entries
        ),
    )


def _write_rows(ws, headers: list[str], rows: Iterable[list[Any]]) -> None:
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in rows:
        ws.append([
            v.replace(tzinfo=None) if isinstance(v, datetime) else v for v in row
        ])
    for col in range(1, len(headers) + 1):
        ws.column_dimensions[get_column_letter(col)].width = 18


def ledger_workbook(
    summary: LedgerSummary,
    deposits: Iterable[Any],
    expenses: Iterable[Any],
) -> bytes:
    """Summary, Deposits and Expenses sheets as an .xlsx file."""
    wb = openpyxl.Workbook()

    ws = wb.active
    ws.title = "Summary"
    summary_rows = [
        ["Cash", format_amount(summary.cash)],
        ["Bank", format_amount(summary.bank)],
        ["Mobile Money", format_amount(summary.mobile_money)],
        ["MTN", format_amount(summary.mtn)],
        ["Airtel", format_amount(summary.airtel)],
    ]
    summary_rows += [
        [f"Bank: {name}", format_amount(amount)]
        for name, amount in sorted(summary.bank_names.items())
    ]
    summary_rows += [
        ["Balance Forward (Cash)", format_amount(summary.balance_forward.cash)],
        ["Balance Forward (Bank)", format_amount(summary.balance_forward.bank)],
        [
            "Balance Forward (Mobile Money)",
            format_amount(summary.balance_forward.mobile_money),
        ],
    ]
    _write_rows(ws, ["Channel", "Amount"], summary_rows)
    ws.column_dimensions["A"].width = 32

    _write_rows(
        wb.create_sheet("Deposits"),
        DEPOSIT_SHEET_HEADERS,
        (
            [
                _get(d, "id"),
                _get(d, "amount_paid"),
                _get(d, "mode_of_payment"),
                _get(d, "mode_of_mobilemoney"),
                _get(d, "bank_name"),
                _get(d, "purpose"),
                _get(d, "created_at"),
            ]
            for d in deposits
        ),
    )
    _write_rows(
        wb.create_sheet("Expenses"),
        EXPENSE_CSV_HEADERS,
        (
            [
                _get(e, "item"),
                _get(e, "amount_spent"),
                _get(e, "department"),
                _get(e, "mode_of_payment"),
                _get(e, "account"),
                _get(e, "date"),
            ]
            for e in expenses
        ),
    )

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
