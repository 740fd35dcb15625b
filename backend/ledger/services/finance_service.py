import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.database import commit_or_fail
from ledger.errors import FetchFailure
from ledger.models.finance import FinanceEntry, PaymentMode
from ledger.schemas.finance import DepositCreate, OrderPaymentUpsert

logger = logging.getLogger(__name__)


async def _fetch_all(db: AsyncSession, query, what: str) -> list[FinanceEntry]:
    try:
        result = await db.execute(query)
    except SQLAlchemyError as e:
        logger.exception("Fetching %s failed", what)
        raise FetchFailure(f"Error fetching {what}: {e}") from e
    return list(result.scalars().all())


# --- Deposits ---


async def list_deposits(
    db: AsyncSession, submitted_by: str | None = None
) -> list[FinanceEntry]:
    """Finance rows, newest first.

    Order payments recorded under the same role count as deposits too.
    """
    query = select(FinanceEntry)
    if submitted_by is not None:
        query = query.where(FinanceEntry.submittedby == submitted_by)
    query = query.order_by(FinanceEntry.id.desc())
    return await _fetch_all(db, query, "ledger entries")


async def insert_deposit(
    db: AsyncSession, data: DepositCreate, submitted_by: str
) -> FinanceEntry:
    entry = FinanceEntry(
        amount_paid=data.amount_paid,
        amount_available=data.amount_paid,
        mode_of_payment=data.mode_of_payment.value,
        purpose=data.purpose,
        submittedby=submitted_by,
    )
    if data.mode_of_payment == PaymentMode.MOBILE_MONEY and data.mode_of_mobilemoney:
        entry.mode_of_mobilemoney = data.mode_of_mobilemoney.value
    elif data.mode_of_payment == PaymentMode.BANK:
        entry.bank_name = data.bank_name

    db.add(entry)
    await commit_or_fail(db, "Making deposit", entry)
    logger.info(
        "Deposit %d recorded: %.2f via %s by %s",
        entry.id, entry.amount_paid, entry.mode_of_payment, submitted_by,
    )
    return entry


async def delete_deposit(db: AsyncSession, entry_id: int) -> bool:
    entries = await _fetch_all(
        db, select(FinanceEntry).where(FinanceEntry.id == entry_id), "ledger entry"
    )
    if not entries:
        return False
    await db.delete(entries[0])
    await commit_or_fail(db, "Deleting entry")
    logger.info("Finance entry %d deleted", entry_id)
    return True


# --- Order payments (general and user ledgers) ---


async def upsert_order_payment(
    db: AsyncSession, order_id: int, data: OrderPaymentUpsert, submitted_by: str
) -> FinanceEntry:
    """Record or replace the payment of a user's order.

    One finance row per (user_id, order_id); a second submission overwrites
    the amounts of the first.
    """
    entries = await _fetch_all(
        db,
        select(FinanceEntry).where(
            FinanceEntry.user_id == data.user_id,
            FinanceEntry.order_id == order_id,
        ),
        "order payment",
    )
    entry = entries[0] if entries else None
    if entry is None:
        entry = FinanceEntry(user_id=data.user_id, order_id=order_id)
        db.add(entry)

    mode = data.mode_of_payment
    entry.total_amount = data.total_amount
    entry.amount_paid = data.amount_paid
    entry.amount_available = data.amount_paid
    entry.balance = data.total_amount - data.amount_paid
    entry.submittedby = submitted_by
    entry.mode_of_payment = mode.value if mode is not None else None
    entry.mode_of_mobilemoney = (
        data.mode_of_mobilemoney.value
        if mode == PaymentMode.MOBILE_MONEY and data.mode_of_mobilemoney
        else None
    )
    entry.bank_name = data.bank_name if mode == PaymentMode.BANK else None

    await commit_or_fail(db, "Submitting payment", entry)
    logger.info(
        "Order %d payment for user %s: %.2f of %.2f",
        order_id, data.user_id, data.amount_paid, data.total_amount,
    )
    return entry


async def list_order_entries(
    db: AsyncSession,
    date_range: tuple[datetime, datetime] | None = None,
) -> list[FinanceEntry]:
    query = select(FinanceEntry).where(FinanceEntry.order_id.isnot(None))
    if date_range is not None:
        start, end = date_range
        query = query.where(
            FinanceEntry.created_at >= start,
            FinanceEntry.created_at <= end,
        )
    query = query.order_by(FinanceEntry.created_at.desc(), FinanceEntry.id.desc())
    return await _fetch_all(db, query, "general ledger")


async def list_user_entries(db: AsyncSession, user_id: str) -> list[FinanceEntry]:
    query = (
        select(FinanceEntry)
        .where(FinanceEntry.user_id == user_id)
        .order_by(FinanceEntry.id.desc())
    )
    return await _fetch_all(db, query, "user ledger")
