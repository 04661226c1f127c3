"""
Expense Routes
CRUD and lifecycle endpoints for expenses
"""

from fastapi import APIRouter, Body, Depends, Query, Response, status
from typing import List, Optional
from datetime import date

from src.middleware.error_handler import ApiErrorRoute
from src.schemas.expense import (
    CreateExpenseRequest,
    Expense,
    ExpenseCreatedResponse,
    ExpenseStatusEnum,
    MessageResponse,
    UpdateExpenseRequest,
)
from src.services.expense_service import ExpenseService, get_expense_service
from src.utils.exceptions import NotFoundError, ensure_found

router = APIRouter(route_class=ApiErrorRoute)

ENTITY = "Expense"


@router.get("", response_model=List[Expense], summary="Retrieve expenses")
def get_expenses(
    user_id: Optional[int] = Query(None, alias="userId"),
    status_id: Optional[int] = Query(
        None, alias="statusId", description=f"Status ID ({ExpenseStatusEnum.describe()})"
    ),
    from_date: Optional[date] = Query(None, alias="fromDate"),
    to_date: Optional[date] = Query(None, alias="toDate"),
    service: ExpenseService = Depends(get_expense_service)
):
    """
    Get all expenses with optional filters

    **Parameters:**
    - userId: owner of the expense
    - statusId: one of the ExpenseStatus ids
    - fromDate / toDate: inclusive expense date range

    Filters are combined; omitting all of them returns every expense.
    """
    return service.list_expenses(user_id, status_id, from_date, to_date)


@router.get("/{expense_id}", response_model=Expense, summary="Retrieve expense")
def get_expense_by_id(
    expense_id: int,
    service: ExpenseService = Depends(get_expense_service)
):
    """Get a specific expense by ID"""
    expense = service.get_expense(expense_id)
    if expense is None:
        raise NotFoundError(ENTITY)
    return expense


@router.post(
    "",
    response_model=ExpenseCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create expense"
)
def create_expense(
    request: CreateExpenseRequest,
    response: Response,
    service: ExpenseService = Depends(get_expense_service)
):
    """Create a new expense in Draft status"""
    expense_id = service.create_expense(request)
    response.headers["Location"] = f"/api/expenses/{expense_id}"
    return ExpenseCreatedResponse(expense_id=expense_id)


@router.put("/{expense_id}", response_model=MessageResponse, summary="Update expense")
def update_expense(
    expense_id: int,
    request: UpdateExpenseRequest,
    service: ExpenseService = Depends(get_expense_service)
):
    """Update an existing expense"""
    ensure_found(service.update_expense(expense_id, request), ENTITY)
    return MessageResponse(message="Expense updated successfully")


@router.post("/{expense_id}/submit", response_model=MessageResponse, summary="Submit expense")
def submit_expense(
    expense_id: int,
    service: ExpenseService = Depends(get_expense_service)
):
    """Submit an expense for approval"""
    ensure_found(service.submit_expense(expense_id), ENTITY)
    return MessageResponse(message="Expense submitted successfully")


@router.post("/{expense_id}/approve", response_model=MessageResponse, summary="Approve expense")
def approve_expense(
    expense_id: int,
    reviewer_id: int = Body(..., description="Reviewer user ID (bare JSON integer)"),
    service: ExpenseService = Depends(get_expense_service)
):
    """Approve an expense"""
    ensure_found(service.approve_expense(expense_id, reviewer_id), ENTITY)
    return MessageResponse(message="Expense approved successfully")


@router.post("/{expense_id}/reject", response_model=MessageResponse, summary="Reject expense")
def reject_expense(
    expense_id: int,
    reviewer_id: int = Body(..., description="Reviewer user ID (bare JSON integer)"),
    service: ExpenseService = Depends(get_expense_service)
):
    """Reject an expense"""
    ensure_found(service.reject_expense(expense_id, reviewer_id), ENTITY)
    return MessageResponse(message="Expense rejected successfully")


@router.delete("/{expense_id}", response_model=MessageResponse, summary="Delete expense")
def delete_expense(
    expense_id: int,
    service: ExpenseService = Depends(get_expense_service)
):
    """Delete an expense"""
    ensure_found(service.delete_expense(expense_id), ENTITY)
    return MessageResponse(message="Expense deleted successfully")
