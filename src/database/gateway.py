"""
Stored Procedure Gateway
Executes the store's stored procedures and maps result rows to schema records.
No business rules live here; failures are logged and re-raised unchanged.
"""

from datetime import date
from typing import Any, Callable, List, Optional, Tuple

from sqlalchemy import Date, Integer, Unicode, bindparam, text
from sqlalchemy.engine import Engine
from sqlalchemy.types import TypeEngine

from src.config.database import get_engine
from src.schemas.expense import CreateExpenseRequest, Expense, UpdateExpenseRequest
from src.schemas.lookup import ExpenseCategory, ExpenseStatus, Role
from src.schemas.user import CreateUserRequest, UpdateUserRequest, User
from src.utils.logger import setup_logger

logger = setup_logger()

# (name, value, SQL type)
Param = Tuple[str, Any, TypeEngine]


def build_procedure_call(procedure: str, params: List[Param]):
    """
    Build an ``EXEC`` statement with typed bind parameters

    Args:
        procedure: Stored procedure name
        params: Ordered (name, value, type) triples; None binds as NULL

    Returns:
        TextClause ready for execution
    """
    assignments = ", ".join(f"@{name} = :{name}" for name, _, _ in params)
    sql = f"EXEC {procedure} {assignments}".rstrip()
    binds = [bindparam(name, value=value, type_=type_) for name, value, type_ in params]
    return text(sql).bindparams(*binds)


def map_expense(row) -> Expense:
    return Expense(
        expense_id=row["ExpenseId"],
        user_id=row["UserId"],
        user_name=row["UserName"],
        email=row["Email"],
        category_id=row["CategoryId"],
        category_name=row["CategoryName"],
        status_id=row["StatusId"],
        status_name=row["StatusName"],
        amount_minor=row["AmountMinor"],
        currency=row["Currency"],
        expense_date=row["ExpenseDate"],
        description=row["Description"],
        receipt_file=row["ReceiptFile"],
        submitted_at=row["SubmittedAt"],
        reviewed_by=row["ReviewedBy"],
        reviewer_name=row["ReviewerName"],
        reviewed_at=row["ReviewedAt"],
        created_at=row["CreatedAt"],
    )


def map_user(row) -> User:
    return User(
        user_id=row["UserId"],
        user_name=row["UserName"],
        email=row["Email"],
        role_id=row["RoleId"],
        role_name=row["RoleName"],
        manager_id=row["ManagerId"],
        manager_name=row["ManagerName"],
        is_active=row["IsActive"],
        created_at=row["CreatedAt"],
    )


class ProcedureGateway:
    """One method per entity/action pair, each on its own connection"""

    def __init__(self, engine_factory: Callable[[], Engine] = get_engine):
        self._engine_factory = engine_factory

    # ------------------------------------------------------------------
    # Execution helpers
    # ------------------------------------------------------------------

    def _fetch_mappings(self, procedure: str, params: List[Param]) -> list:
        statement = build_procedure_call(procedure, params)
        with self._engine_factory().begin() as connection:
            return list(connection.execute(statement).mappings().all())

    def _fetch_rows(self, procedure: str, params: List[Param]) -> list:
        statement = build_procedure_call(procedure, params)
        with self._engine_factory().begin() as connection:
            return list(connection.execute(statement).all())

    def _execute_scalar(self, procedure: str, params: List[Param]) -> int:
        """Run a procedure whose single row carries an id or a rows-affected count"""
        statement = build_procedure_call(procedure, params)
        with self._engine_factory().begin() as connection:
            return int(connection.execute(statement).scalar_one())

    # ------------------------------------------------------------------
    # Expenses
    # ------------------------------------------------------------------

    def get_expenses(
        self,
        user_id: Optional[int] = None,
        status_id: Optional[int] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None
    ) -> List[Expense]:
        try:
            rows = self._fetch_mappings("sp_GetExpenses", [
                ("UserId", user_id, Integer()),
                ("StatusId", status_id, Integer()),
                ("FromDate", from_date, Date()),
                ("ToDate", to_date, Date()),
            ])
            return [map_expense(row) for row in rows]
        except Exception:
            logger.exception("Error getting expenses")
            raise

    def get_expense_by_id(self, expense_id: int) -> Optional[Expense]:
        try:
            rows = self._fetch_mappings("sp_GetExpenseById", [
                ("ExpenseId", expense_id, Integer()),
            ])
            return map_expense(rows[0]) if rows else None
        except Exception:
            logger.exception(f"Error getting expense {expense_id}")
            raise

    def create_expense(self, request: CreateExpenseRequest, amount_minor: int) -> int:
        try:
            return self._execute_scalar("sp_CreateExpense", [
                ("UserId", request.user_id, Integer()),
                ("CategoryId", request.category_id, Integer()),
                ("AmountMinor", amount_minor, Integer()),
                ("Currency", request.currency, Unicode(3)),
                ("ExpenseDate", request.expense_date, Date()),
                ("Description", request.description, Unicode(1000)),
                ("ReceiptFile", request.receipt_file, Unicode(500)),
            ])
        except Exception:
            logger.exception("Error creating expense")
            raise

    def update_expense(self, expense_id: int, request: UpdateExpenseRequest, amount_minor: int) -> int:
        try:
            return self._execute_scalar("sp_UpdateExpense", [
                ("ExpenseId", expense_id, Integer()),
                ("CategoryId", request.category_id, Integer()),
                ("AmountMinor", amount_minor, Integer()),
                ("ExpenseDate", request.expense_date, Date()),
                ("Description", request.description, Unicode(1000)),
                ("ReceiptFile", request.receipt_file, Unicode(500)),
            ])
        except Exception:
            logger.exception(f"Error updating expense {expense_id}")
            raise

    def submit_expense(self, expense_id: int) -> int:
        try:
            return self._execute_scalar("sp_SubmitExpense", [
                ("ExpenseId", expense_id, Integer()),
            ])
        except Exception:
            logger.exception(f"Error submitting expense {expense_id}")
            raise

    def approve_expense(self, expense_id: int, reviewer_id: int) -> int:
        try:
            return self._execute_scalar("sp_ApproveExpense", [
                ("ExpenseId", expense_id, Integer()),
                ("ReviewerId", reviewer_id, Integer()),
            ])
        except Exception:
            logger.exception(f"Error approving expense {expense_id}")
            raise

    def reject_expense(self, expense_id: int, reviewer_id: int) -> int:
        try:
            return self._execute_scalar("sp_RejectExpense", [
                ("ExpenseId", expense_id, Integer()),
                ("ReviewerId", reviewer_id, Integer()),
            ])
        except Exception:
            logger.exception(f"Error rejecting expense {expense_id}")
            raise

    def delete_expense(self, expense_id: int) -> int:
        try:
            return self._execute_scalar("sp_DeleteExpense", [
                ("ExpenseId", expense_id, Integer()),
            ])
        except Exception:
            logger.exception(f"Error deleting expense {expense_id}")
            raise

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_users(self) -> List[User]:
        try:
            return [map_user(row) for row in self._fetch_mappings("sp_GetUsers", [])]
        except Exception:
            logger.exception("Error getting users")
            raise

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        try:
            rows = self._fetch_mappings("sp_GetUserById", [
                ("UserId", user_id, Integer()),
            ])
            return map_user(rows[0]) if rows else None
        except Exception:
            logger.exception(f"Error getting user {user_id}")
            raise

    def create_user(self, request: CreateUserRequest) -> int:
        try:
            return self._execute_scalar("sp_CreateUser", [
                ("UserName", request.user_name, Unicode(100)),
                ("Email", str(request.email), Unicode(255)),
                ("RoleId", request.role_id, Integer()),
                ("ManagerId", request.manager_id, Integer()),
            ])
        except Exception:
            logger.exception("Error creating user")
            raise

    def update_user(self, user_id: int, request: UpdateUserRequest) -> int:
        try:
            return self._execute_scalar("sp_UpdateUser", [
                ("UserId", user_id, Integer()),
                ("UserName", request.user_name, Unicode(100)),
                ("Email", str(request.email), Unicode(255)),
                ("RoleId", request.role_id, Integer()),
                ("ManagerId", request.manager_id, Integer()),
            ])
        except Exception:
            logger.exception(f"Error updating user {user_id}")
            raise

    # ------------------------------------------------------------------
    # Lookups (positional columns)
    # ------------------------------------------------------------------

    def get_expense_categories(self) -> List[ExpenseCategory]:
        try:
            return [
                ExpenseCategory(category_id=row[0], category_name=row[1], is_active=bool(row[2]))
                for row in self._fetch_rows("sp_GetExpenseCategories", [])
            ]
        except Exception:
            logger.exception("Error getting expense categories")
            raise

    def get_expense_statuses(self) -> List[ExpenseStatus]:
        try:
            return [
                ExpenseStatus(status_id=row[0], status_name=row[1])
                for row in self._fetch_rows("sp_GetExpenseStatuses", [])
            ]
        except Exception:
            logger.exception("Error getting expense statuses")
            raise

    def get_roles(self) -> List[Role]:
        try:
            return [
                Role(role_id=row[0], role_name=row[1], description=row[2])
                for row in self._fetch_rows("sp_GetRoles", [])
            ]
        except Exception:
            logger.exception("Error getting roles")
            raise


# Create singleton instance
procedure_gateway = ProcedureGateway()
