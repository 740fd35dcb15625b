import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.database import commit_or_fail
from ledger.errors import FetchFailure, ValidationFailure
from ledger.models.expense import Expense
from ledger.schemas.expense import ExpenseCreate

logger = logging.getLogger(__name__)


async def _get_expense(db: AsyncSession, expense_id: int) -> Expense | None:
    try:
        result = await db.execute(select(Expense).where(Expense.id == expense_id))
    except SQLAlchemyError as e:
        logger.exception("Fetching expense %d failed", expense_id)
        raise FetchFailure(f"Error fetching expense: {e}") from e
    return result.scalar_one_or_none()


async def list_expenses(
    db: AsyncSession,
    submitted_by: str | None = None,
    date_range: tuple[datetime, datetime] | None = None,
) -> list[Expense]:
    """Expenses, most recent date first, optionally within an inclusive range."""
    query = select(Expense)
    if submitted_by is not None:
        query = query.where(Expense.submittedby == submitted_by)
    if date_range is not None:
        start, end = date_range
        query = query.where(Expense.date >= start, Expense.date <= end)
    query = query.order_by(Expense.date.desc(), Expense.id.desc())

    try:
        result = await db.execute(query)
    except SQLAlchemyError as e:
        logger.exception("Fetching expenses failed")
        raise FetchFailure(f"Error fetching expenses: {e}") from e
    return list(result.scalars().all())


async def insert_or_update_expense(
    db: AsyncSession,
    data: ExpenseCreate,
    submitted_by: str,
    expense_id: int | None = None,
) -> Expense | None:
    """Insert a new expense, or update ``expense_id`` in place.

    Returns None when ``expense_id`` does not exist.
    """
    item = data.resolved_item
    if not item:
        raise ValidationFailure("Item is required")

    if expense_id is None:
        expense = Expense()
        db.add(expense)
    else:
        expense = await _get_expense(db, expense_id)
        if expense is None:
            return None

    expense.item = item
    expense.amount_spent = data.amount_spent
    expense.department = data.department.strip()
    expense.mode_of_payment = (
        data.mode_of_payment.value if data.mode_of_payment is not None else None
    )
    expense.account = data.account
    expense.submittedby = submitted_by
    if data.date is not None:
        expense.date = data.date

    action = "Submitting expense" if expense_id is None else "Updating expense"
    await commit_or_fail(db, action, expense)
    logger.info(
        "Expense %d saved: %s %.2f (%s) by %s",
        expense.id, expense.item, expense.amount_spent,
        expense.mode_of_payment or "no mode", submitted_by,
    )
    return expense


async def delete_expense(db: AsyncSession, expense_id: int) -> bool:
    expense = await _get_expense(db, expense_id)
    if expense is None:
        return False
    await db.delete(expense)
    await commit_or_fail(db, "Deleting expense")
    logger.info("Expense %d deleted", expense_id)
    return True
