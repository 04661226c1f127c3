"""
Lookup Service
Read-only reference data
"""

from typing import List

from src.database.gateway import ProcedureGateway, procedure_gateway
from src.schemas.lookup import ExpenseCategory, ExpenseStatus, Role


class LookupService:

    def __init__(self, gateway: ProcedureGateway = procedure_gateway):
        self.gateway = gateway

    def list_categories(self) -> List[ExpenseCategory]:
        return self.gateway.get_expense_categories()

    def list_statuses(self) -> List[ExpenseStatus]:
        return self.gateway.get_expense_statuses()

    def list_roles(self) -> List[Role]:
        return self.gateway.get_roles()


# Create singleton instance
lookup_service = LookupService()


def get_lookup_service() -> LookupService:
    """FastAPI dependency"""
    return lookup_service
