"""
Lookup Routes
Reference data: categories, statuses, roles
"""

from fastapi import APIRouter, Depends
from typing import List

from src.middleware.error_handler import ApiErrorRoute
from src.schemas.lookup import ExpenseCategory, ExpenseStatus, Role
from src.services.lookup_service import LookupService, get_lookup_service

router = APIRouter(route_class=ApiErrorRoute)


@router.get("/categories", response_model=List[ExpenseCategory], summary="Retrieve categories")
def get_categories(service: LookupService = Depends(get_lookup_service)):
    return service.list_categories()


@router.get("/statuses", response_model=List[ExpenseStatus], summary="Retrieve statuses")
def get_statuses(service: LookupService = Depends(get_lookup_service)):
    return service.list_statuses()


@router.get("/roles", response_model=List[Role], summary="Retrieve roles")
def get_roles(service: LookupService = Depends(get_lookup_service)):
    return service.list_roles()
