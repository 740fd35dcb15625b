from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ledger.models.base import Base


class Expense(Base):
    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item: Mapped[str] = mapped_column(String(200), nullable=False)
    amount_spent: Mapped[float] = mapped_column(Float, nullable=False)
    department: Mapped[str] = mapped_column(String(200), nullable=False)
    mode_of_payment: Mapped[str | None] = mapped_column(String(50), nullable=True)
    account: Mapped[str | None] = mapped_column(String(200), nullable=True)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    submittedby: Mapped[str | None] = mapped_column(String(100), nullable=True)
