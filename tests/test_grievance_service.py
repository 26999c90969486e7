from datetime import datetime, timedelta, timezone

from app.core.exceptions import RepositoryError
from app.core.security.permissions import Actor
from app.models.base.enums import (
    GrievanceCategory,
    GrievancePriority,
    GrievanceStatus,
    RelatedEntityType,
    UserRole,
)
from app.models.grievance.grievance import Grievance
from app.schemas.grievance import GrievanceCreate, GrievanceRespondRequest
from app.services.base import ErrorCode
from app.services.file_management import UploadedFile

DESCRIPTION = "My manager keeps scheduling meetings at 9pm."


def grievance(priority=GrievancePriority.MEDIUM, category=GrievanceCategory.MANAGEMENT):
    return GrievanceCreate(category=category, description=DESCRIPTION, priority=priority)


def pdf(size=1024, filename="evidence.pdf"):
    return UploadedFile(filename=filename, content_type="application/pdf", data=b"%" * size)


def test_create_without_attachment(grievance_service, make_user):
    actor = Actor.from_user(make_user())

    result = grievance_service.create(actor, grievance())

    created = result.unwrap()
    assert result.message == "Grievance submitted successfully"
    assert created.status == GrievanceStatus.OPEN
    assert created.file_url is None
    assert created.file_object_key is None


def test_create_with_attachment_records_metadata(grievance_service, make_user, object_store):
    actor = Actor.from_user(make_user())

    created = grievance_service.create(actor, grievance(), pdf()).unwrap()

    key = created.file_object_key
    assert key.endswith(".pdf")
    assert key in object_store.objects
    assert created.file_url == f"memory://bucket/{key}"

    meta = grievance_service.files.find_by_object_key(key)
    assert meta.original_name == "evidence.pdf"
    assert meta.file_name == key
    assert meta.mime_type == "application/pdf"
    assert meta.size == 1024
    assert meta.uploaded_by_id == actor.id
    assert meta.related_entity_type == RelatedEntityType.GRIEVANCE
    assert meta.related_entity_id == created.id


def test_disallowed_type_is_rejected_before_storage(grievance_service, make_user, object_store):
    actor = Actor.from_user(make_user())
    upload = UploadedFile(filename="run.exe", content_type="application/x-msdownload", data=b"MZ")

    result = grievance_service.create(actor, grievance(), upload)

    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert result.error.field == "file"
    assert object_store.objects == {}
    assert grievance_service.list_mine(actor).unwrap() == []


def test_oversized_file_is_rejected(grievance_service, make_user, object_store):
    actor = Actor.from_user(make_user())

    result = grievance_service.create(actor, grievance(), pdf(size=grievance_service.max_upload_size + 1))

    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert result.error.message == "File too large. Maximum size is 10MB."
    assert object_store.objects == {}


def test_empty_file_is_rejected(grievance_service, make_user):
    actor = Actor.from_user(make_user())

    result = grievance_service.create(actor, grievance(), pdf(size=0))

    assert result.error.message == "Uploaded file is empty"


def test_storage_failure_creates_nothing(grievance_service, make_user, object_store):
    actor = Actor.from_user(make_user())
    object_store.fail_put = True

    result = grievance_service.create(actor, grievance(), pdf())

    assert result.error.code == ErrorCode.EXTERNAL_SERVICE_ERROR
    assert grievance_service.list_mine(actor).unwrap() == []
    assert grievance_service.files.list_by_uploader(actor.id) == []


def test_database_failure_discards_stored_object(
    grievance_service, make_user, object_store, monkeypatch
):
    actor = Actor.from_user(make_user())

    def broken_create(entity):
        raise RepositoryError("insert failed")

    monkeypatch.setattr(grievance_service.files, "create", broken_create)
    result = grievance_service.create(actor, grievance(), pdf())

    assert not result
    assert len(object_store.deleted) == 1
    assert object_store.objects == {}
    assert grievance_service.list_mine(actor).unwrap() == []


def test_respond_sets_responder(grievance_service, make_user):
    owner = Actor.from_user(make_user())
    hr = Actor.from_user(make_user(role=UserRole.HR))
    created = grievance_service.create(owner, grievance()).unwrap()

    updated = grievance_service.respond(
        hr,
        created.id,
        GrievanceRespondRequest(status=GrievanceStatus.IN_PROGRESS, response="Looking into it"),
    ).unwrap()

    assert updated.status == GrievanceStatus.IN_PROGRESS
    assert updated.response == "Looking into it"
    assert updated.responded_by.id == hr.id
    assert updated.responded_at is not None


def test_response_text_is_kept_when_omitted(grievance_service, make_user):
    owner = Actor.from_user(make_user())
    hr = Actor.from_user(make_user(role=UserRole.HR))
    created = grievance_service.create(owner, grievance()).unwrap()
    grievance_service.respond(
        hr, created.id, GrievanceRespondRequest(status=GrievanceStatus.IN_PROGRESS, response="On it")
    ).unwrap()

    updated = grievance_service.respond(
        hr, created.id, GrievanceRespondRequest(status=GrievanceStatus.RESOLVED)
    ).unwrap()

    assert updated.status == GrievanceStatus.RESOLVED
    assert updated.response == "On it"


def test_closed_grievance_is_terminal(grievance_service, make_user):
    owner = Actor.from_user(make_user())
    admin = Actor.from_user(make_user(role=UserRole.ADMIN))
    created = grievance_service.create(owner, grievance()).unwrap()
    grievance_service.respond(
        admin, created.id, GrievanceRespondRequest(status=GrievanceStatus.CLOSED)
    ).unwrap()

    result = grievance_service.respond(
        admin, created.id, GrievanceRespondRequest(status=GrievanceStatus.IN_PROGRESS)
    )

    assert result.error.code == ErrorCode.CONFLICT
    assert result.error.message == "This grievance is already closed"


def test_employee_and_department_head_cannot_respond(grievance_service, make_user):
    owner = Actor.from_user(make_user(department="Engineering"))
    created = grievance_service.create(owner, grievance()).unwrap()
    head = Actor.from_user(make_user(role=UserRole.DEPARTMENT_HEAD, department="Engineering"))
    request = GrievanceRespondRequest(status=GrievanceStatus.RESOLVED)

    assert grievance_service.respond(owner, created.id, request).error.code == ErrorCode.FORBIDDEN
    assert grievance_service.respond(head, created.id, request).error.code == ErrorCode.FORBIDDEN


def test_queue_orders_by_priority_then_newest(grievance_service, make_user, db_session):
    owner = Actor.from_user(make_user())
    hr = Actor.from_user(make_user(role=UserRole.HR))
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)

    created = {}
    for offset, (label, priority) in enumerate(
        [
            ("old_urgent", GrievancePriority.URGENT),
            ("low", GrievancePriority.LOW),
            ("new_urgent", GrievancePriority.URGENT),
            ("high", GrievancePriority.HIGH),
            ("medium", GrievancePriority.MEDIUM),
        ]
    ):
        item = grievance_service.create(owner, grievance(priority=priority)).unwrap()
        item.created_at = base + timedelta(hours=offset)
        created[label] = item.id
    db_session.commit()

    queue = [g.id for g in grievance_service.list_all(hr).unwrap()]

    assert queue == [
        created["new_urgent"],
        created["old_urgent"],
        created["high"],
        created["medium"],
        created["low"],
    ]


def test_queue_filters(grievance_service, make_user):
    owner = Actor.from_user(make_user())
    hr = Actor.from_user(make_user(role=UserRole.HR))
    grievance_service.create(owner, grievance(category=GrievanceCategory.SALARY)).unwrap()
    grievance_service.create(
        owner, grievance(category=GrievanceCategory.BENEFITS, priority=GrievancePriority.HIGH)
    ).unwrap()

    salary = grievance_service.list_all(hr, category=GrievanceCategory.SALARY).unwrap()
    high = grievance_service.list_all(hr, priority=GrievancePriority.HIGH).unwrap()

    assert [g.category for g in salary] == [GrievanceCategory.SALARY]
    assert [g.priority for g in high] == [GrievancePriority.HIGH]


def test_queue_requires_capability(grievance_service, make_user):
    head = Actor.from_user(make_user(role=UserRole.DEPARTMENT_HEAD, department="Sales"))

    assert grievance_service.list_all(head).error.code == ErrorCode.FORBIDDEN


def test_list_mine_returns_only_own(grievance_service, make_user, db_session):
    me = Actor.from_user(make_user())
    other = Actor.from_user(make_user())
    grievance_service.create(me, grievance()).unwrap()
    grievance_service.create(other, grievance()).unwrap()

    mine = grievance_service.list_mine(me).unwrap()

    assert len(mine) == 1
    assert isinstance(mine[0], Grievance)
    assert mine[0].user_id == me.id
