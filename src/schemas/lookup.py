"""
Lookup Schemas
Read-only reference data
"""

from typing import Optional

from src.schemas.base import CamelModel


class ExpenseCategory(CamelModel):
    category_id: int
    category_name: str
    is_active: bool = True


class ExpenseStatus(CamelModel):
    status_id: int
    status_name: str


class Role(CamelModel):
    role_id: int
    role_name: str
    description: Optional[str] = None
