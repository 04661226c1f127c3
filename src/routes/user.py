"""
User Routes
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List

from src.middleware.error_handler import ApiErrorRoute
from src.schemas.expense import MessageResponse
from src.schemas.user import CreateUserRequest, UpdateUserRequest, User, UserCreatedResponse
from src.services.user_service import UserService, get_user_service
from src.utils.exceptions import NotFoundError, ensure_found

router = APIRouter(route_class=ApiErrorRoute)

ENTITY = "User"


@router.get("", response_model=List[User], summary="Retrieve users")
def get_users(service: UserService = Depends(get_user_service)):
    """Get all users"""
    return service.list_users()


@router.get("/{user_id}", response_model=User, summary="Retrieve user")
def get_user_by_id(user_id: int, service: UserService = Depends(get_user_service)):
    """Get a specific user by ID"""
    user = service.get_user(user_id)
    if user is None:
        raise NotFoundError(ENTITY)
    return user


@router.post(
    "",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user"
)
def create_user(
    request: CreateUserRequest,
    response: Response,
    service: UserService = Depends(get_user_service)
):
    """Create a new user"""
    user_id = service.create_user(request)
    response.headers["Location"] = f"/api/users/{user_id}"
    return UserCreatedResponse(user_id=user_id)


@router.put("/{user_id}", response_model=MessageResponse, summary="Update user")
def update_user(
    user_id: int,
    request: UpdateUserRequest,
    service: UserService = Depends(get_user_service)
):
    """Update an existing user"""
    ensure_found(service.update_user(user_id, request), ENTITY)
    return MessageResponse(message="User updated successfully")
