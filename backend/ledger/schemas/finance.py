from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from ledger.errors import ValidationFailure
from ledger.models.finance import MobileProvider, PaymentMode


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class DepositCreate(BaseModel):
    amount_paid: float = Field(..., gt=0)
    mode_of_payment: PaymentMode
    mode_of_mobilemoney: MobileProvider | None = None
    bank_name: str | None = Field(None, max_length=200)
    purpose: str = Field(..., max_length=1000)

    @field_validator("mode_of_mobilemoney", "bank_name", mode="before")
    @classmethod
    def _optional_blank(cls, value):
        return _blank_to_none(value)

    @field_validator("purpose")
    @classmethod
    def _purpose_required(cls, value: str) -> str:
        if not value.strip():
            raise ValidationFailure("Purpose is required")
        return value.strip()


class OrderPaymentUpsert(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=100)
    total_amount: float = Field(..., gt=0)
    amount_paid: float = Field(..., ge=0)
    mode_of_payment: PaymentMode | None = None
    mode_of_mobilemoney: MobileProvider | None = None
    bank_name: str | None = Field(None, max_length=200)

    @field_validator("mode_of_payment", "mode_of_mobilemoney", "bank_name", mode="before")
    @classmethod
    def _optional_blank(cls, value):
        return _blank_to_none(value)


class FinanceEntryResponse(BaseModel):
    id: int
    amount_paid: float | None
    amount_available: float | None
    mode_of_payment: str | None
    mode_of_mobilemoney: str | None
    bank_name: str | None
    purpose: str | None
    submittedby: str | None
    order_id: int | None
    user_id: str | None
    total_amount: float | None
    balance: float | None
    created_at: datetime

    model_config = {"from_attributes": True}
