"""
Expense Service
Expense lifecycle operations on top of the stored procedure gateway.
Status-transition rules are enforced by the procedures themselves.
"""

from datetime import date
from typing import List, Optional

from src.database.gateway import ProcedureGateway, procedure_gateway
from src.schemas.expense import CreateExpenseRequest, Expense, ExpenseStatusEnum, UpdateExpenseRequest
from src.utils.logger import setup_logger, log_audit
from src.utils.money import to_minor_units

logger = setup_logger()


class ExpenseService:
    """Service for expense-related business logic"""

    def __init__(self, gateway: ProcedureGateway = procedure_gateway):
        self.gateway = gateway

    def list_expenses(
        self,
        user_id: Optional[int] = None,
        status_id: Optional[int] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None
    ) -> List[Expense]:
        """
        List expenses

        Args:
            user_id: Only expenses owned by this user
            status_id: Only expenses in this status (see ExpenseStatusEnum)
            from_date: Only expenses dated on or after this day
            to_date: Only expenses dated on or before this day

        Returns:
            List of expenses matching every supplied filter
        """
        return self.gateway.get_expenses(user_id, status_id, from_date, to_date)

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get an expense, or None when it does not exist"""
        return self.gateway.get_expense_by_id(expense_id)

    def create_expense(self, request: CreateExpenseRequest) -> int:
        """
        Create an expense in Draft status

        The major-unit amount is converted to minor units before persisting.

        Returns:
            int: New expense id
        """
        amount_minor = to_minor_units(request.amount)
        expense_id = self.gateway.create_expense(request, amount_minor)

        log_audit(request.user_id, "EXPENSE_CREATED", f"expense_id={expense_id} amount_minor={amount_minor} {request.currency}")
        logger.info(f"Expense {expense_id} created for user {request.user_id} as {ExpenseStatusEnum.DRAFT.label}")
        return expense_id

    def update_expense(self, expense_id: int, request: UpdateExpenseRequest) -> int:
        """Update an expense; returns rows affected"""
        amount_minor = to_minor_units(request.amount)
        rows_affected = self.gateway.update_expense(expense_id, request, amount_minor)
        if rows_affected:
            log_audit(None, "EXPENSE_UPDATED", f"expense_id={expense_id} amount_minor={amount_minor}")
        return rows_affected

    def submit_expense(self, expense_id: int) -> int:
        """Submit an expense for approval; returns rows affected"""
        rows_affected = self.gateway.submit_expense(expense_id)
        if rows_affected:
            log_audit(None, "EXPENSE_SUBMITTED", f"expense_id={expense_id}")
        return rows_affected

    def approve_expense(self, expense_id: int, reviewer_id: int) -> int:
        """Approve an expense; returns rows affected"""
        rows_affected = self.gateway.approve_expense(expense_id, reviewer_id)
        if rows_affected:
            log_audit(reviewer_id, "EXPENSE_APPROVED", f"expense_id={expense_id}")
        return rows_affected

    def reject_expense(self, expense_id: int, reviewer_id: int) -> int:
        """Reject an expense; returns rows affected"""
        rows_affected = self.gateway.reject_expense(expense_id, reviewer_id)
        if rows_affected:
            log_audit(reviewer_id, "EXPENSE_REJECTED", f"expense_id={expense_id}")
        return rows_affected

    def delete_expense(self, expense_id: int) -> int:
        """Delete an expense; returns rows affected"""
        rows_affected = self.gateway.delete_expense(expense_id)
        if rows_affected:
            log_audit(None, "EXPENSE_DELETED", f"expense_id={expense_id}")
        return rows_affected


# Create singleton instance
expense_service = ExpenseService()


def get_expense_service() -> ExpenseService:
    """FastAPI dependency"""
    return expense_service
