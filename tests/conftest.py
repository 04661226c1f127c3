"""
Shared test fixtures
In-memory stand-in for the stored procedure gateway
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Chat stays unconfigured in tests; no network calls
os.environ["GEMINI_API_KEY"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import date, datetime
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from src.main import app
from src.schemas.expense import Expense, ExpenseStatusEnum
from src.schemas.lookup import ExpenseCategory, ExpenseStatus, Role
from src.schemas.user import User
from src.services.expense_service import ExpenseService, get_expense_service
from src.services.lookup_service import LookupService, get_lookup_service
from src.services.user_service import UserService, get_user_service


class InMemoryGateway:
    """Mimics the stored procedures' contracts over plain lists"""

    def __init__(self):
        self.users = [
            User(user_id=1, user_name="Alice Example", email="alice@example.com", role_id=1,
                 role_name="Employee", manager_id=2, manager_name="Bob Manager",
                 is_active=True, created_at=datetime(2024, 1, 1)),
            User(user_id=2, user_name="Bob Manager", email="bob@example.com", role_id=2,
                 role_name="Manager", is_active=True, created_at=datetime(2024, 1, 1)),
        ]
        self.categories = [
            ExpenseCategory(category_id=1, category_name="Travel", is_active=True),
            ExpenseCategory(category_id=2, category_name="Meals", is_active=True),
        ]
        self.statuses = [
            ExpenseStatus(status_id=s.value, status_name=s.label) for s in ExpenseStatusEnum
        ]
        self.roles = [
            Role(role_id=1, role_name="Employee", description="Submits expenses"),
            Role(role_id=2, role_name="Manager", description=None),
        ]
        self.expenses: List[Expense] = []
        self.created_requests = []

    def add_expense(self, user_id, status_id, expense_date, amount_minor=1000, category_id=1):
        expense = Expense(
            expense_id=len(self.expenses) + 1,
            user_id=user_id,
            user_name=self._user(user_id).user_name,
            email=self._user(user_id).email,
            category_id=category_id,
            category_name=self._category(category_id).category_name,
            status_id=status_id,
            status_name=ExpenseStatusEnum(status_id).label,
            amount_minor=amount_minor,
            currency="GBP",
            expense_date=expense_date,
            created_at=datetime(2024, 1, 1),
        )
        self.expenses.append(expense)
        return expense

    def _user(self, user_id) -> User:
        return next(u for u in self.users if u.user_id == user_id)

    def _category(self, category_id) -> ExpenseCategory:
        return next(c for c in self.categories if c.category_id == category_id)

    def _find(self, expense_id) -> Optional[Expense]:
        return next((e for e in self.expenses if e.expense_id == expense_id), None)

    def _set_status(self, expense_id, status: ExpenseStatusEnum, **changes) -> int:
        expense = self._find(expense_id)
        if expense is None:
            return 0
        expense.status_id = status.value
        expense.status_name = status.label
        for key, value in changes.items():
            setattr(expense, key, value)
        return 1

    # Expenses
    def get_expenses(self, user_id=None, status_id=None, from_date=None, to_date=None):
        return [
            e for e in self.expenses
            if (user_id is None or e.user_id == user_id)
            and (status_id is None or e.status_id == status_id)
            and (from_date is None or e.expense_date >= from_date)
            and (to_date is None or e.expense_date <= to_date)
        ]

    def get_expense_by_id(self, expense_id):
        return self._find(expense_id)

    def create_expense(self, request, amount_minor):
        self.created_requests.append((request, amount_minor))
        expense = self.add_expense(
            request.user_id, ExpenseStatusEnum.DRAFT.value, request.expense_date,
            amount_minor=amount_minor, category_id=request.category_id,
        )
        expense.description = request.description
        return expense.expense_id

    def update_expense(self, expense_id, request, amount_minor):
        expense = self._find(expense_id)
        if expense is None:
            return 0
        expense.amount_minor = amount_minor
        expense.category_id = request.category_id
        expense.expense_date = request.expense_date
        expense.description = request.description
        return 1

    def submit_expense(self, expense_id):
        return self._set_status(expense_id, ExpenseStatusEnum.SUBMITTED, submitted_at=datetime(2024, 2, 1))

    def approve_expense(self, expense_id, reviewer_id):
        return self._set_status(expense_id, ExpenseStatusEnum.APPROVED, reviewed_by=reviewer_id)

    def reject_expense(self, expense_id, reviewer_id):
        return self._set_status(expense_id, ExpenseStatusEnum.REJECTED, reviewed_by=reviewer_id)

    def delete_expense(self, expense_id):
        expense = self._find(expense_id)
        if expense is None:
            return 0
        self.expenses.remove(expense)
        return 1

    # Users
    def get_users(self):
        return list(self.users)

    def get_user_by_id(self, user_id):
        return next((u for u in self.users if u.user_id == user_id), None)

    def create_user(self, request):
        user = User(
            user_id=len(self.users) + 1, user_name=request.user_name, email=str(request.email),
            role_id=request.role_id, role_name="Employee", manager_id=request.manager_id,
            is_active=True, created_at=datetime(2024, 3, 1),
        )
        self.users.append(user)
        return user.user_id

    def update_user(self, user_id, request):
        user = self.get_user_by_id(user_id)
        if user is None:
            return 0
        user.user_name = request.user_name
        user.email = str(request.email)
        user.role_id = request.role_id
        user.manager_id = request.manager_id
        return 1

    # Lookups
    def get_expense_categories(self):
        return list(self.categories)

    def get_expense_statuses(self):
        return list(self.statuses)

    def get_roles(self):
        return list(self.roles)


@pytest.fixture
def gateway():
    """Gateway seeded with three expenses"""
    gw = InMemoryGateway()
    gw.add_expense(1, ExpenseStatusEnum.DRAFT.value, date(2024, 1, 10), amount_minor=12550)
    gw.add_expense(1, ExpenseStatusEnum.SUBMITTED.value, date(2024, 2, 15), amount_minor=3450, category_id=2)
    gw.add_expense(2, ExpenseStatusEnum.SUBMITTED.value, date(2024, 3, 20), amount_minor=99)
    return gw


@pytest.fixture
def client(gateway):
    """Test client with services wired to the in-memory gateway"""
    app.dependency_overrides[get_expense_service] = lambda: ExpenseService(gateway)
    app.dependency_overrides[get_user_service] = lambda: UserService(gateway)
    app.dependency_overrides[get_lookup_service] = lambda: LookupService(gateway)
    yield TestClient(app)
    app.dependency_overrides.clear()
