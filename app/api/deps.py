"""
FastAPI dependencies: database session, authenticated actor and services.

Example usage in a router:

    from fastapi import APIRouter, Depends
    from app.api import deps

    router = APIRouter()

    @router.get("/me")
    def read_me(current_user = Depends(deps.get_current_user)):
        return current_user
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config.settings import Settings, get_settings
from app.core.exceptions import AuthenticationError
from app.core.logging import get_logger
from app.core.security.password_hasher import PasswordHasher
from app.core.security.permissions import Actor
from app.db.session import get_db
from app.models.user.user import User
from app.repositories.attendance import AttendanceRecordRepository
from app.repositories.file_management import FileMetadataRepository
from app.repositories.grievance import GrievanceRepository
from app.repositories.leave import LeaveApplicationRepository
from app.repositories.task import TaskRepository
from app.repositories.transfer import TransferRequestRepository
from app.repositories.user import UserRepository
from app.services.attendance import AttendanceService
from app.services.auth import AuthService, TokenService
from app.services.file_management import FileService, ObjectStore, build_object_store
from app.services.grievance import GrievanceService
from app.services.leave import LeaveApplicationService
from app.services.task import TaskService
from app.services.transfer import TransferRequestService
from app.services.users import UserService

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

__all__ = [
    "get_db",
    "get_settings",
    "get_object_store",
    "get_password_hasher",
    "get_token_service",
    "get_current_user",
    "get_current_actor",
]


# --- Infrastructure -----------------------------------------------------------

@lru_cache()
def _default_object_store() -> ObjectStore:
    return build_object_store(get_settings().storage_settings)


def get_object_store() -> ObjectStore:
    return _default_object_store()


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    return PasswordHasher(rounds=settings.PASSWORD_BCRYPT_ROUNDS)


def get_token_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TokenService:
    return TokenService(UserRepository(db), db, settings.token_settings)


# --- Authentication -----------------------------------------------------------

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the bearer access token to a user.

    Raises:
        AuthenticationError: Missing, invalid or expired token, or the
            user no longer exists
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Not authenticated")

    user_id = tokens.verify_access(credentials.credentials)
    if user_id is None:
        logger.warning("Rejected access token")
        raise AuthenticationError("Invalid or expired token")

    user = UserRepository(db).find_by_id(user_id)
    if user is None:
        logger.warning("Access token for unknown user", extra={"user_id": user_id})
        raise AuthenticationError("User not found")
    return user


def get_current_actor(current_user: User = Depends(get_current_user)) -> Actor:
    return Actor.from_user(current_user)


# --- Services -----------------------------------------------------------------

def get_auth_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(UserRepository(db), db, hasher, tokens)


def get_user_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(UserRepository(db), db, hasher)


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(TaskRepository(db), db)


def get_leave_service(db: Session = Depends(get_db)) -> LeaveApplicationService:
    return LeaveApplicationService(LeaveApplicationRepository(db), UserRepository(db), db)


def get_transfer_service(db: Session = Depends(get_db)) -> TransferRequestService:
    return TransferRequestService(TransferRequestRepository(db), UserRepository(db), db)


def get_grievance_service(
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
    settings: Settings = Depends(get_settings),
) -> GrievanceService:
    return GrievanceService(
        GrievanceRepository(db),
        FileMetadataRepository(db),
        db,
        store,
        allowed_mime_types=settings.ALLOWED_UPLOAD_MIME_TYPES,
        max_upload_size=settings.MAX_UPLOAD_SIZE,
    )


def get_attendance_service(db: Session = Depends(get_db)) -> AttendanceService:
    return AttendanceService(AttendanceRecordRepository(db), db)


def get_file_service(
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
    settings: Settings = Depends(get_settings),
) -> FileService:
    return FileService(
        FileMetadataRepository(db),
        db,
        store,
        url_expiry_seconds=int(settings.storage_settings.url_expiry.total_seconds()),
    )
