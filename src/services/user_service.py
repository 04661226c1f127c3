"""
User Service
"""

from typing import List, Optional

from src.database.gateway import ProcedureGateway, procedure_gateway
from src.schemas.user import CreateUserRequest, UpdateUserRequest, User
from src.utils.logger import setup_logger, log_audit

logger = setup_logger()


class UserService:
    """Service for user management"""

    def __init__(self, gateway: ProcedureGateway = procedure_gateway):
        self.gateway = gateway

    def list_users(self) -> List[User]:
        return self.gateway.get_users()

    def get_user(self, user_id: int) -> Optional[User]:
        """Get a user, or None when it does not exist"""
        return self.gateway.get_user_by_id(user_id)

    def create_user(self, request: CreateUserRequest) -> int:
        user_id = self.gateway.create_user(request)
        log_audit(user_id, "USER_CREATED", f"email={request.email} role_id={request.role_id}")
        logger.info(f"User {user_id} created")
        return user_id

    def update_user(self, user_id: int, request: UpdateUserRequest) -> int:
        """Update a user; returns rows affected"""
        rows_affected = self.gateway.update_user(user_id, request)
        if rows_affected:
            log_audit(user_id, "USER_UPDATED", f"email={request.email} role_id={request.role_id}")
        return rows_affected


# Create singleton instance
user_service = UserService()


def get_user_service() -> UserService:
    """FastAPI dependency"""
    return user_service
