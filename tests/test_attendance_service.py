from datetime import date, datetime, timezone

from app.core.security.permissions import Actor
from app.models.base.enums import AttendanceStatus, UserRole
from app.schemas.attendance import AttendanceMarkRequest
from app.services.attendance import normalize_day
from app.services.base import ErrorCode


def mark(status=AttendanceStatus.PRESENT, day=None, remarks=None):
    return AttendanceMarkRequest(status=status, date=day, remarks=remarks)


def test_normalize_day_strips_time():
    assert normalize_day(datetime(2024, 3, 5, 23, 59, tzinfo=timezone.utc)) == date(2024, 3, 5)
    assert normalize_day(date(2024, 3, 5)) == date(2024, 3, 5)


def test_normalize_day_defaults_to_today():
    assert normalize_day(None) == datetime.now(timezone.utc).date()


def test_mark_records_day_and_timestamp(attendance_service, make_user):
    actor = Actor.from_user(make_user())

    result = attendance_service.mark(actor, mark(day=date(2024, 3, 5), remarks="On site"))

    record = result.unwrap()
    assert result.message == "Attendance marked successfully"
    assert record.date == date(2024, 3, 5)
    assert record.status == AttendanceStatus.PRESENT
    assert record.remarks == "On site"
    assert record.timestamp is not None


def test_mark_without_date_uses_today(attendance_service, make_user):
    actor = Actor.from_user(make_user())

    record = attendance_service.mark(actor, mark(status=AttendanceStatus.WFH)).unwrap()

    assert record.date == datetime.now(timezone.utc).date()


def test_same_day_with_different_times_conflicts(attendance_service, make_user):
    actor = Actor.from_user(make_user())
    attendance_service.mark(actor, mark(day=datetime(2024, 3, 5, 9, 0))).unwrap()

    result = attendance_service.mark(
        actor, mark(status=AttendanceStatus.LATE, day=datetime(2024, 3, 5, 17, 30))
    )

    assert result.error.code == ErrorCode.CONFLICT
    assert result.error.message == "Attendance already marked for this date"


def test_duplicate_caught_by_unique_index(attendance_service, make_user, monkeypatch):
    actor = Actor.from_user(make_user())
    attendance_service.mark(actor, mark(day=date(2024, 3, 5))).unwrap()
    monkeypatch.setattr(attendance_service.repository, "find_for_user_on", lambda *args: None)

    result = attendance_service.mark(actor, mark(day=date(2024, 3, 5)))

    assert result.error.code == ErrorCode.CONFLICT
    assert result.error.message == "Attendance already marked for this date"


def test_different_users_same_day(attendance_service, make_user):
    first = Actor.from_user(make_user())
    second = Actor.from_user(make_user())

    assert attendance_service.mark(first, mark(day=date(2024, 3, 5)))
    assert attendance_service.mark(second, mark(day=date(2024, 3, 5)))


def test_list_mine_date_range(attendance_service, make_user):
    actor = Actor.from_user(make_user())
    for day in (1, 2, 3, 4):
        attendance_service.mark(actor, mark(day=date(2024, 3, day))).unwrap()

    records = attendance_service.list_mine(
        actor, start_date=date(2024, 3, 2), end_date=date(2024, 3, 3)
    ).unwrap()

    assert sorted(r.date for r in records) == [date(2024, 3, 2), date(2024, 3, 3)]


def test_list_all_department_filter_before_limit(attendance_service, make_user):
    engineers = [Actor.from_user(make_user(department="Engineering")) for _ in range(3)]
    seller = Actor.from_user(make_user(department="Sales"))
    for actor in engineers:
        attendance_service.mark(actor, mark(day=date(2024, 3, 5))).unwrap()
    attendance_service.mark(seller, mark(day=date(2024, 3, 5))).unwrap()
    hr = Actor.from_user(make_user(role=UserRole.HR))

    sales = attendance_service.list_all(hr, department="Sales", limit=1).unwrap()
    engineering = attendance_service.list_all(hr, department="Engineering", limit=2).unwrap()

    assert [r.user_id for r in sales] == [seller.id]
    assert len(engineering) == 2
    assert all(r.user.department == "Engineering" for r in engineering)


def test_list_all_by_user(attendance_service, make_user):
    first = Actor.from_user(make_user())
    second = Actor.from_user(make_user())
    attendance_service.mark(first, mark(day=date(2024, 3, 5))).unwrap()
    attendance_service.mark(second, mark(day=date(2024, 3, 5))).unwrap()
    admin = Actor.from_user(make_user(role=UserRole.ADMIN))

    records = attendance_service.list_all(admin, user_id=second.id).unwrap()

    assert [r.user_id for r in records] == [second.id]


def test_list_all_forbidden_for_employee_and_head(attendance_service, make_user):
    employee = Actor.from_user(make_user())
    head = Actor.from_user(make_user(role=UserRole.DEPARTMENT_HEAD, department="Sales"))

    assert attendance_service.list_all(employee).error.code == ErrorCode.FORBIDDEN
    assert attendance_service.list_all(head).error.code == ErrorCode.FORBIDDEN
