"""
Authentication service: registration, login, refresh and logout.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.exceptions import EntityAlreadyExistsError, RepositoryError
from app.core.security.password_hasher import PasswordHasher
from app.models.base.enums import UserRole
from app.models.user.user import User
from app.repositories.user import UserRepository
from app.schemas.auth import LoginRequest, RegisterRequest
from app.services.auth.token_service import TokenPair, TokenService
from app.services.base import BaseService, ServiceResult

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class AuthSession:
    """Authenticated user together with a freshly issued token pair."""

    user: User
    tokens: TokenPair


class AuthService(BaseService[User, UserRepository]):
    """
    Authentication service:

    - Self-registration (employee role, no department)
    - Email/password login
    - Refresh token rotation
    - Logout (refresh token revocation)
    """

    resource_name = "User"

    def __init__(
        self,
        user_repository: UserRepository,
        db_session: Session,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ):
        super().__init__(user_repository, db_session)
        self.hasher = password_hasher
        self.tokens = token_service

    def _issue(self, user: User) -> ServiceResult[AuthSession]:
        issued = self.tokens.issue_token_pair(user.id)
        if not issued:
            return issued
        return ServiceResult.success(AuthSession(user=user, tokens=issued.data))

    def register(self, request: RegisterRequest) -> ServiceResult[AuthSession]:
        """
        Create an employee account and sign it in.

        Returns:
            ServiceResult with the new user and tokens, or CONFLICT if the
            email is already registered
        """
        if self.repository.find_by_email(request.email) is not None:
            return ServiceResult.conflict("Email already registered")

        user = User(
            name=request.name,
            email=request.email.lower(),
            password_hash=self.hasher.hash(request.password),
            role=UserRole.EMPLOYEE,
        )
        try:
            with self.transaction():
                self.repository.create(user)
        except EntityAlreadyExistsError:
            return ServiceResult.conflict("Email already registered")
        except RepositoryError as e:
            return self._handle_exception(e, "register user")

        logger.info("User registered", extra={"user_id": user.id})
        result = self._issue(user)
        if result:
            result.message = "User registered successfully"
        return result

    def login(self, request: LoginRequest) -> ServiceResult[AuthSession]:
        """
        Verify credentials and issue a new token pair.

        Unknown email and wrong password produce the same UNAUTHORIZED
        result. A successful login replaces any earlier refresh token.
        """
        user = self.repository.find_by_email(request.email)
        if user is None or not self.hasher.verify(request.password, user.password_hash):
            logger.warning("Login failed")
            return ServiceResult.unauthorized(INVALID_CREDENTIALS)

        logger.info("User logged in", extra={"user_id": user.id})
        result = self._issue(user)
        if result:
            result.message = "Login successful"
        return result

    def refresh(self, refresh_token: str) -> ServiceResult[TokenPair]:
        """Rotate a refresh token into a new pair."""
        return self.tokens.rotate_refresh(refresh_token)

    def logout(self, user_id: str) -> ServiceResult[bool]:
        """Revoke the user's refresh token."""
        result = self.tokens.revoke(user_id)
        if result:
            logger.info("User logged out", extra={"user_id": user_id})
        return result
