"""
Chat Schemas
Request/response bodies for the chat endpoint and the argument models of
the tools offered to the language model
"""

from pydantic import Field
from typing import Dict, List, Optional
from datetime import date
from decimal import Decimal

from src.schemas.base import CamelModel


class ChatRequest(CamelModel):
    """Chat message with optional prior turns"""
    message: str = ""
    conversation_history: Optional[List[Dict[str, Optional[str]]]] = None


class ChatResponse(CamelModel):
    response: str


class GetExpensesArgs(CamelModel):
    """Arguments of the get_expenses tool"""
    user_id: Optional[int] = None
    status_id: Optional[int] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None


class CreateExpenseArgs(CamelModel):
    """Arguments of the create_expense tool"""
    user_id: int
    category_id: int
    amount: Decimal = Field(..., ge=0)
    expense_date: date
    description: Optional[str] = None
