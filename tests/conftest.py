import itertools
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.config.settings import Settings, TokenSettings
from app.core.exceptions import StorageError
from app.core.security.password_hasher import PasswordHasher
from app.db.init_db import drop_db, init_db
from app.main import create_app
from app.models.base.enums import UserRole
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
from app.services.file_management import FileService
from app.services.grievance import GrievanceService
from app.services.leave import LeaveApplicationService
from app.services.task import TaskService
from app.services.transfer import TransferRequestService
from app.services.users import UserService

ACCESS_SECRET = "test-access-secret-0123456789abcdefghijklmnop"
REFRESH_SECRET = "test-refresh-secret-0123456789abcdefghijklmnop"
ALLOWED_MIME_TYPES = {"application/pdf", "image/jpeg", "image/png"}
MAX_UPLOAD_SIZE = 10 * 1024 * 1024


class InMemoryObjectStore:
    """Object store double that keeps objects in a dict."""

    def __init__(self):
        self.objects = {}
        self.fail_put = False
        self.deleted = []

    def put(self, key, data, content_type):
        if self.fail_put:
            raise StorageError("bucket unavailable")
        self.objects[key] = (data, content_type)
        return f"memory://bucket/{key}"

    def exists(self, key):
        return key in self.objects

    def signed_url(self, key, expires_in):
        return f"https://storage.test/{key}?expires_in={expires_in}"

    def delete(self, key):
        self.deleted.append(key)
        self.objects.pop(key, None)


# --- Database -------------------------------------------------------------------

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = Session()
    yield session
    session.close()


# --- Infrastructure -------------------------------------------------------------

@pytest.fixture
def token_settings():
    return TokenSettings(
        access_secret=ACCESS_SECRET,
        refresh_secret=REFRESH_SECRET,
        algorithm="HS256",
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=7),
    )


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def object_store():
    return InMemoryObjectStore()


@pytest.fixture
def make_user(db_session, hasher):
    counter = itertools.count(1)

    def _make(role=UserRole.EMPLOYEE, department=None, password="password123", email=None):
        n = next(counter)
        user = User(
            name=f"User {n}",
            email=email or f"user{n}@example.com",
            password_hash=hasher.hash(password),
            role=role,
            employee_id=f"EMP{n:04d}",
            department=department,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make


# --- Services -------------------------------------------------------------------

@pytest.fixture
def token_service(db_session, token_settings):
    return TokenService(UserRepository(db_session), db_session, token_settings)


@pytest.fixture
def auth_service(db_session, hasher, token_service):
    return AuthService(UserRepository(db_session), db_session, hasher, token_service)


@pytest.fixture
def user_service(db_session, hasher):
    return UserService(UserRepository(db_session), db_session, hasher)


@pytest.fixture
def task_service(db_session):
    return TaskService(TaskRepository(db_session), db_session)


@pytest.fixture
def leave_service(db_session):
    return LeaveApplicationService(
        LeaveApplicationRepository(db_session), UserRepository(db_session), db_session
    )


@pytest.fixture
def transfer_service(db_session):
    return TransferRequestService(
        TransferRequestRepository(db_session), UserRepository(db_session), db_session
    )


@pytest.fixture
def grievance_service(db_session, object_store):
    return GrievanceService(
        GrievanceRepository(db_session),
        FileMetadataRepository(db_session),
        db_session,
        object_store,
        allowed_mime_types=ALLOWED_MIME_TYPES,
        max_upload_size=MAX_UPLOAD_SIZE,
    )


@pytest.fixture
def attendance_service(db_session):
    return AttendanceService(AttendanceRecordRepository(db_session), db_session)


@pytest.fixture
def file_service(db_session, object_store):
    return FileService(FileMetadataRepository(db_session), db_session, object_store)


# --- HTTP -----------------------------------------------------------------------

@pytest.fixture
def test_settings():
    return Settings(
        ENVIRONMENT="test",
        JWT_ACCESS_SECRET=ACCESS_SECRET,
        JWT_REFRESH_SECRET=REFRESH_SECRET,
        PASSWORD_BCRYPT_ROUNDS=4,
        CORS_ORIGINS=["http://localhost:3000"],
    )


@pytest.fixture
def client(db_session, object_store, test_settings):
    app = create_app(test_settings)

    def override_get_db():
        yield db_session

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_settings] = lambda: test_settings
    app.dependency_overrides[deps.get_object_store] = lambda: object_store
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_headers(token_service):
    def _headers(user):
        pair = token_service.issue_token_pair(user.id).unwrap()
        return {"Authorization": f"Bearer {pair.access_token}"}

    return _headers
