from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from ledger.errors import ValidationFailure
from ledger.models.finance import PaymentMode

OTHER_CATEGORY = "Other"


class ExpenseCreate(BaseModel):
    """Expense form payload.

    ``item`` is either a predefined category or ``"Other"``, in which case
    ``custom_item`` carries the free-text item name.
    """

    item: str = Field("", max_length=200)
    custom_item: str | None = Field(None, max_length=200)
    amount_spent: float = Field(..., gt=0)
    department: str = Field("", max_length=200)
    mode_of_payment: PaymentMode | None = None
    account: str | None = Field(None, max_length=200)
    date: datetime | None = None

    @field_validator("mode_of_payment", "account", "custom_item", mode="before")
    @classmethod
    def _optional_blank(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _required_fields(self) -> "ExpenseCreate":
        if not self.resolved_item:
            raise ValidationFailure("Item is required")
        if not self.department.strip():
            raise ValidationFailure("Department is required")
        return self

    @property
    def resolved_item(self) -> str:
        if self.item == OTHER_CATEGORY:
            return (self.custom_item or "").strip()
        return self.item.strip()


class ExpenseResponse(BaseModel):
    id: int
    item: str
    amount_spent: float
    department: str
    mode_of_payment: str | None
    account: str | None
    date: datetime
    submittedby: str | None

    model_config = {"from_attributes": True}
