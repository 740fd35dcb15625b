from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.database import get_db
from ledger.dependencies import get_submitter
from ledger.errors import LedgerError
from ledger.schemas.common import ApiResponse
from ledger.schemas.finance import DepositCreate, FinanceEntryResponse
from ledger.services import finance_service, ledger_service

router = APIRouter(prefix="/finance", tags=["finance"])


@router.get("")
async def list_deposits(
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[FinanceEntryResponse]]:
    """Cashier deposits with the reconciled summary in ``meta.summary``."""
    try:
        deposits, summary = await ledger_service.get_deposit_ledger(db, submitted_by)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    return ApiResponse.ok(
        [FinanceEntryResponse.model_validate(d) for d in deposits],
        meta={"summary": summary.model_dump()},
    )


@router.post("")
async def create_deposit(
    body: DepositCreate,
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[FinanceEntryResponse]:
    try:
        entry = await finance_service.insert_deposit(db, body, submitted_by)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    meta = await ledger_service.refreshed_meta(db, submitted_by)
    return ApiResponse.ok(FinanceEntryResponse.model_validate(entry), meta=meta)


@router.delete("/{entry_id}")
async def delete_deposit(
    entry_id: int,
    submitted_by: str = Depends(get_submitter),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[None]:
    try:
        deleted = await finance_service.delete_deposit(db, entry_id)
    except LedgerError as e:
        return ApiResponse.fail(str(e))
    if not deleted:
        return ApiResponse.fail(f"Finance entry with id {entry_id} not found")
    meta = await ledger_service.refreshed_meta(db, submitted_by)
    return ApiResponse.ok(None, meta=meta)
