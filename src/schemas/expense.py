"""
Expense Schemas - Pydantic V2
"""

from pydantic import BeforeValidator, Field, computed_field
from typing import Annotated, Optional
from datetime import datetime, date
from decimal import Decimal
from enum import IntEnum

from src.config.settings import settings
from src.schemas.base import CamelModel
from src.utils.money import from_minor_units


class ExpenseStatusEnum(IntEnum):
    """Expense status ids as seeded in the ExpenseStatus table"""
    DRAFT = 1
    SUBMITTED = 2
    APPROVED = 3
    REJECTED = 4

    @property
    def label(self) -> str:
        return self.name.title()

    @classmethod
    def describe(cls) -> str:
        """e.g. '1=Draft, 2=Submitted, 3=Approved, 4=Rejected'"""
        return ", ".join(f"{status.value}={status.label}" for status in cls)


def _coerce_date(value):
    # SQL Server drivers may hand back a datetime for DATE columns
    if isinstance(value, datetime):
        return value.date()
    return value


ExpenseDate = Annotated[date, BeforeValidator(_coerce_date)]


class Expense(CamelModel):
    """Expense row as returned by the store"""
    expense_id: int
    user_id: int
    user_name: str
    email: str = ""
    category_id: int
    category_name: str
    status_id: int
    status_name: str
    amount_minor: int
    currency: str = "GBP"
    expense_date: ExpenseDate
    description: Optional[str] = None
    receipt_file: Optional[str] = None
    submitted_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None
    reviewer_name: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime

    @computed_field
    @property
    def amount(self) -> float:
        """Major-unit amount, for display only"""
        return float(from_minor_units(self.amount_minor))


class CreateExpenseRequest(CamelModel):
    """Schema for creating a new expense"""
    user_id: int
    category_id: int
    amount: Decimal = Field(..., ge=0, description="Amount in major units, e.g. 12.50")
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY, min_length=3, max_length=3)
    expense_date: ExpenseDate
    description: Optional[str] = Field(None, max_length=1000)
    receipt_file: Optional[str] = Field(None, max_length=500)


class UpdateExpenseRequest(CamelModel):
    """Schema for updating an existing expense"""
    category_id: int
    amount: Decimal = Field(..., ge=0)
    expense_date: ExpenseDate
    description: Optional[str] = Field(None, max_length=1000)
    receipt_file: Optional[str] = Field(None, max_length=500)


class ExpenseCreatedResponse(CamelModel):
    expense_id: int


class MessageResponse(CamelModel):
    message: str
