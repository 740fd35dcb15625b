import enum
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ledger.models.base import Base


class PaymentMode(str, enum.Enum):
    CASH = "Cash"
    BANK = "Bank"
    MOBILE_MONEY = "Mobile Money"


class MobileProvider(str, enum.Enum):
    MTN = "MTN"
    AIRTEL = "Airtel"


class FinanceEntry(Base):
    """A row of the ``finance`` table.

    Cashier deposits leave the order columns empty. Order payments recorded
    from the user ledger carry ``order_id``, ``user_id``, ``total_amount``
    and ``balance``.
    """

    __tablename__ = "finance"
    __table_args__ = (
        UniqueConstraint("user_id", "order_id", name="uq_finance_user_order"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    amount_paid: Mapped[float | None] = mapped_column(Float, nullable=True)
    amount_available: Mapped[float | None] = mapped_column(Float, nullable=True)
    # Plain strings rather than Enum columns: legacy rows hold arbitrary values
    mode_of_payment: Mapped[str | None] = mapped_column(String(50), nullable=True)
    mode_of_mobilemoney: Mapped[str | None] = mapped_column(String(50), nullable=True)
    bank_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    purpose: Mapped[str | None] = mapped_column(Text, nullable=True)
    submittedby: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Order payment fields
    order_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    user_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    total_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    balance: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
