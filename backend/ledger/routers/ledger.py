from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.database import get_db
from ledger.dependencies import get_submitter
from ledger.errors import LedgerError
from ledger.routers.expenses import PERIOD_PATTERN
from ledger.schemas.common import ApiResponse
from ledger.schemas.finance import FinanceEntryResponse, OrderPaymentUpsert
from ledger.schemas.ledger import (
    AccountOptions,
    GeneralLedger,
    LedgerSummary,
    UserLedger,
)
from ledger.services import expense_service, export_service, finance_service, ledger_service

router = APIRouter(prefix="/ledger", tags=["ledger"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/summary")
async def get_summary(
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[LedgerSummary]:
    try:
        summary = await ledger_service.get_ledger_summary(db, submitted_by)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    return ApiResponse.ok(summary)


@router.get("/accounts")
async def get_accounts(
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[AccountOptions]:
    """Bank names and mobile providers for the expense account select."""
    try:
        options = await ledger_service.get_account_options(db, submitted_by)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    return ApiResponse.ok(options)


@router.get("/general")
async def get_general_ledger(
    period: str = Query("all", pattern=PERIOD_PATTERN),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[GeneralLedger]:
    try:
        general = await ledger_service.get_general_ledger(db, period)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    return ApiResponse.ok(general)


@router.get("/general/export.csv")
async def export_general_ledger(
    period: str = Query("all", pattern=PERIOD_PATTERN),
    db: AsyncSession = Depends(get_db),
):
    try:
        general = await ledger_service.get_general_ledger(db, period)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    return Response(
        content=export_service.general_ledger_to_csv(general.entries),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="general_ledger.csv"'},
    )


@router.get("/users/{user_id}")
async def get_user_ledger(
    user_id: str,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[UserLedger]:
    try:
        user_ledger = await ledger_service.get_user_ledger(db, user_id)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    return ApiResponse.ok(user_ledger)


@router.put("/orders/{order_id}/payment")
async def upsert_order_payment(
    order_id: int,
    body: OrderPaymentUpsert,
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[FinanceEntryResponse]:
    try:
        entry = await finance_service.upsert_order_payment(
            db, order_id, body, submitted_by
        )
        user_ledger = await ledger_service.get_user_ledger(db, body.user_id)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    return ApiResponse.ok(
        FinanceEntryResponse.model_validate(entry),
        meta={"summary": user_ledger.summary.model_dump()},
    )


@router.get("/export.xlsx")
async def export_workbook(
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
):
    try:
        deposits, summary = await ledger_service.get_deposit_ledger(db, submitted_by)
        expenses = await expense_service.list_expenses(db, submitted_by)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    return Response(
        content=export_service.ledger_workbook(summary, deposits, expenses),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="ledger.xlsx"'},
    )
