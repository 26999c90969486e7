from datetime import date

from app.core.exceptions import RepositoryError
from app.core.security.permissions import Actor
from app.models.base.enums import TransferStatus, UserRole
from app.schemas.transfer import TransferCreateRequest, TransferDecisionRequest
from app.services.base import ErrorCode
from app.services.transfer import UNASSIGNED_DEPARTMENT


def transfer_to(department):
    return TransferCreateRequest(
        requested_department=department,
        reason="Want to work on the platform team",
    )


def test_request_snapshots_current_department(transfer_service, make_user):
    user = make_user(department="Engineering")

    transfer = transfer_service.request_transfer(
        Actor.from_user(user), transfer_to("Sales")
    ).unwrap()

    assert transfer.status == TransferStatus.PENDING
    assert transfer.current_department == "Engineering"
    assert transfer.requested_department == "Sales"


def test_request_without_department_uses_placeholder(transfer_service, make_user):
    user = make_user(department=None)

    transfer = transfer_service.request_transfer(
        Actor.from_user(user), transfer_to("Sales")
    ).unwrap()

    assert transfer.current_department == UNASSIGNED_DEPARTMENT


def test_second_pending_request_conflicts(transfer_service, make_user):
    actor = Actor.from_user(make_user(department="Engineering"))
    transfer_service.request_transfer(actor, transfer_to("Sales")).unwrap()

    result = transfer_service.request_transfer(actor, transfer_to("Marketing"))

    assert result.error.code == ErrorCode.CONFLICT
    assert result.error.message == "You already have a pending transfer request"


def test_request_to_current_department_is_invalid(transfer_service, make_user):
    actor = Actor.from_user(make_user(department="Engineering"))

    result = transfer_service.request_transfer(actor, transfer_to("Engineering"))

    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert result.error.field == "requested_department"


def test_approval_moves_user(transfer_service, make_user):
    user = make_user(department="Engineering")
    hr = Actor.from_user(make_user(role=UserRole.HR))
    transfer = transfer_service.request_transfer(
        Actor.from_user(user), transfer_to("Sales")
    ).unwrap()

    decided = transfer_service.decide(
        hr,
        transfer.id,
        TransferDecisionRequest(status=TransferStatus.APPROVED, effective_date=date(2024, 7, 1)),
    ).unwrap()

    assert decided.status == TransferStatus.APPROVED
    assert decided.approved_by_id == hr.id
    assert decided.effective_date == date(2024, 7, 1)
    assert decided.current_department == "Engineering"
    assert user.department == "Sales"


def test_rejection_keeps_department(transfer_service, make_user):
    user = make_user(department="Engineering")
    admin = Actor.from_user(make_user(role=UserRole.ADMIN))
    transfer = transfer_service.request_transfer(
        Actor.from_user(user), transfer_to("Sales")
    ).unwrap()

    transfer_service.decide(
        admin, transfer.id, TransferDecisionRequest(status=TransferStatus.REJECTED)
    ).unwrap()

    assert user.department == "Engineering"


def test_decided_request_allows_a_new_one(transfer_service, make_user):
    user = make_user(department="Engineering")
    hr = Actor.from_user(make_user(role=UserRole.HR))
    first = transfer_service.request_transfer(Actor.from_user(user), transfer_to("Sales")).unwrap()
    transfer_service.decide(
        hr, first.id, TransferDecisionRequest(status=TransferStatus.REJECTED)
    ).unwrap()

    assert transfer_service.request_transfer(Actor.from_user(user), transfer_to("Marketing"))


def test_decided_transfer_cannot_be_decided_again(transfer_service, make_user):
    user = make_user(department="Engineering")
    hr = Actor.from_user(make_user(role=UserRole.HR))
    transfer = transfer_service.request_transfer(
        Actor.from_user(user), transfer_to("Sales")
    ).unwrap()
    transfer_service.decide(
        hr, transfer.id, TransferDecisionRequest(status=TransferStatus.APPROVED)
    ).unwrap()

    result = transfer_service.decide(
        hr, transfer.id, TransferDecisionRequest(status=TransferStatus.REJECTED)
    )

    assert result.error.code == ErrorCode.CONFLICT
    assert result.error.message == "This transfer request has already been processed"
    assert user.department == "Sales"


def test_department_head_cannot_decide_transfers(transfer_service, make_user):
    user = make_user(department="Engineering")
    head = Actor.from_user(make_user(role=UserRole.DEPARTMENT_HEAD, department="Engineering"))
    transfer = transfer_service.request_transfer(
        Actor.from_user(user), transfer_to("Sales")
    ).unwrap()

    result = transfer_service.decide(
        head, transfer.id, TransferDecisionRequest(status=TransferStatus.APPROVED)
    )

    assert result.error.code == ErrorCode.FORBIDDEN


def test_hr_cannot_approve_own_transfer(transfer_service, make_user):
    hr_user = make_user(role=UserRole.HR, department="People")
    hr = Actor.from_user(hr_user)
    transfer = transfer_service.request_transfer(hr, transfer_to("Finance")).unwrap()

    result = transfer_service.decide(
        hr, transfer.id, TransferDecisionRequest(status=TransferStatus.APPROVED)
    )

    assert result.error.code == ErrorCode.FORBIDDEN
    assert hr_user.department == "People"


def test_failed_approval_rolls_back_both_writes(
    transfer_service, make_user, db_session, monkeypatch
):
    user = make_user(department="Engineering")
    hr = Actor.from_user(make_user(role=UserRole.HR))
    transfer = transfer_service.request_transfer(
        Actor.from_user(user), transfer_to("Sales")
    ).unwrap()

    def broken_flush():
        raise RepositoryError("connection lost")

    monkeypatch.setattr(transfer_service.repository, "flush", broken_flush)
    result = transfer_service.decide(
        hr, transfer.id, TransferDecisionRequest(status=TransferStatus.APPROVED)
    )

    assert not result
    db_session.expire_all()
    assert transfer_service.repository.find_by_id(transfer.id).status == TransferStatus.PENDING
    assert transfer_service.users.find_by_id(user.id).department == "Engineering"


def test_list_all_requires_capability(transfer_service, make_user):
    employee = Actor.from_user(make_user())
    hr = Actor.from_user(make_user(role=UserRole.HR))
    transfer_service.request_transfer(
        Actor.from_user(make_user(department="Engineering")), transfer_to("Sales")
    ).unwrap()

    assert transfer_service.list_all(employee).error.code == ErrorCode.FORBIDDEN
    assert len(transfer_service.list_all(hr).unwrap()) == 1
    assert transfer_service.list_all(hr, status=TransferStatus.APPROVED).unwrap() == []


def test_list_mine(transfer_service, make_user):
    me = Actor.from_user(make_user(department="Engineering"))
    other = Actor.from_user(make_user(department="Sales"))
    transfer_service.request_transfer(me, transfer_to("Sales")).unwrap()
    transfer_service.request_transfer(other, transfer_to("Engineering")).unwrap()

    mine = transfer_service.list_mine(me).unwrap()

    assert [t.user_id for t in mine] == [me.id]
