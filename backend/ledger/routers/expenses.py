from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.database import get_db
from ledger.dependencies import get_submitter
from ledger.errors import LedgerError
from ledger.schemas.common import ApiResponse
from ledger.schemas.expense import ExpenseCreate, ExpenseResponse
from ledger.schemas.ledger import ExpenseOverview
from ledger.services import expense_service, export_service, ledger_service
from ledger.utils.date_helpers import PERIODS, period_range

router = APIRouter(prefix="/expenses", tags=["expenses"])

PERIOD_PATTERN = "^(" + "|".join(PERIODS) + ")$"


@router.get("")
async def list_expenses(
    period: str = Query("all", pattern=PERIOD_PATTERN),
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[ExpenseResponse]]:
    date_range = period_range(period, datetime.now(timezone.utc))
    try:
        expenses = await expense_service.list_expenses(db, submitted_by, date_range)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    return ApiResponse.ok(
        [ExpenseResponse.model_validate(e) for e in expenses],
        meta={"period": period, "total": len(expenses)},
    )


@router.get("/overview")
async def get_overview(
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ExpenseOverview]:
    """Total income, total expenses and the overall balance forward."""
    try:
        overview = await ledger_service.get_expense_overview(db, submitted_by)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    return ApiResponse.ok(overview)


@router.get("/export.csv")
async def export_expenses(
    period: str = Query("all", pattern=PERIOD_PATTERN),
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
):
    date_range = period_range(period, datetime.now(timezone.utc))
    try:
        expenses = await expense_service.list_expenses(db, submitted_by, date_range)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    return Response(
        content=export_service.expenses_to_csv(expenses),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="expenses.csv"'},
    )


@router.post("")
async def create_expense(
    body: ExpenseCreate,
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ExpenseResponse]:
    try:
        expense = await expense_service.insert_or_update_expense(db, body, submitted_by)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    meta = await ledger_service.refreshed_meta(db, submitted_by, with_overview=True)
    return ApiResponse.ok(ExpenseResponse.model_validate(expense), meta=meta)


@router.put("/{expense_id}")
async def update_expense(
    expense_id: int,
    body: ExpenseCreate,
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ExpenseResponse]:
    try:
        expense = await expense_service.insert_or_update_expense(
            db, body, submitted_by, expense_id
        )
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    if expense is None:
        return ApiResponse.fail(f"Expense with id {expense_id} not found")
    meta = await ledger_service.refreshed_meta(db, submitted_by, with_overview=True)
    return ApiResponse.ok(ExpenseResponse.model_validate(expense), meta=meta)


@router.delete("/{expense_id}")
async def delete_expense(
    expense_id: int,
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[None]:
    try:
        deleted = await expense_service.delete_expense(db, expense_id)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    if not deleted:
        return ApiResponse.fail(f"Expense with id {expense_id} not found")
    meta = await ledger_service.refreshed_meta(db, submitted_by, with_overview=True)
    return ApiResponse.ok(None, meta=meta)
