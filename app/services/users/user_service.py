"""
User service: profile lookup and admin provisioning.
"""

import logging

from sqlalchemy.orm import Session

from app.core.exceptions import EntityAlreadyExistsError, RepositoryError
from app.core.security.password_hasher import PasswordHasher
from app.core.security.permissions import Action, Actor, has_capability
from app.models.user.user import User
from app.repositories.user import UserRepository
from app.schemas.user import UserCreateRequest
from app.services.base import BaseService, ServiceResult

logger = logging.getLogger(__name__)


class UserService(BaseService[User, UserRepository]):
    """
    Core user operations.

    Self-registration lives in ``AuthService``; this service covers the
    admin path that sets role, department and staff details explicitly.
    """

    resource_name = "User"

    def __init__(
        self,
        user_repository: UserRepository,
        db_session: Session,
        password_hasher: PasswordHasher,
    ):
        super().__init__(user_repository, db_session)
        self.hasher = password_hasher

    def create_user(self, actor: Actor, request: UserCreateRequest) -> ServiceResult[User]:
        """
        Provision a user account (admin only).

        Args:
            actor: Authenticated caller
            request: Account details including role and department

        Returns:
            ServiceResult with the created user; FORBIDDEN for non-admins,
            CONFLICT on duplicate email or employee id
        """
        if not has_capability(actor, Action.CREATE_USER):
            logger.warning("User creation denied", extra={"actor_id": actor.id})
            return ServiceResult.forbidden("Not authorized to create users")

        if self.repository.find_by_email(request.email) is not None:
            return ServiceResult.conflict("Email already registered")
        if request.employee_id and self.repository.find_by_employee_id(request.employee_id):
            return ServiceResult.conflict("Employee ID already in use")

        user = User(
            name=request.name,
            email=request.email.lower(),
            password_hash=self.hasher.hash(request.password),
            role=request.role,
            employee_id=request.employee_id,
            department=request.department,
            designation=request.designation,
            date_of_joining=request.date_of_joining,
        )
        try:
            with self.transaction():
                self.repository.create(user)
        except EntityAlreadyExistsError:
            return ServiceResult.conflict("Email or employee ID already in use")
        except RepositoryError as e:
            return self._handle_exception(e, "create user")

        logger.info(
            "User created",
            extra={"user_id": user.id, "role": user.role.value, "created_by": actor.id},
        )
        return ServiceResult.success(user, message="User created successfully")
