from app.core.security.permissions import Actor
from app.models.base.enums import UserRole
from app.schemas.task import TaskCreate, TaskUpdate
from app.services.base import ErrorCode


def test_create_and_get_own_task(task_service, make_user):
    actor = Actor.from_user(make_user())

    created = task_service.create_task(actor, TaskCreate(title="Write report")).unwrap()
    fetched = task_service.get_task(actor, created.id).unwrap()

    assert fetched.id == created.id
    assert fetched.owner_id == actor.id
    assert fetched.description == ""


def test_list_tasks_own_vs_admin(task_service, make_user):
    alice = Actor.from_user(make_user())
    bob = Actor.from_user(make_user())
    admin = Actor.from_user(make_user(role=UserRole.ADMIN))
    task_service.create_task(alice, TaskCreate(title="A")).unwrap()
    task_service.create_task(bob, TaskCreate(title="B")).unwrap()

    assert [t.title for t in task_service.list_tasks(alice).unwrap()] == ["A"]
    assert len(task_service.list_tasks(admin).unwrap()) == 2


def test_hr_lists_only_own_tasks(task_service, make_user):
    employee = Actor.from_user(make_user())
    hr = Actor.from_user(make_user(role=UserRole.HR))
    task_service.create_task(employee, TaskCreate(title="A")).unwrap()

    assert task_service.list_tasks(hr).unwrap() == []


def test_other_employee_cannot_read(task_service, make_user):
    owner = Actor.from_user(make_user())
    other = Actor.from_user(make_user())
    task = task_service.create_task(owner, TaskCreate(title="Private")).unwrap()

    result = task_service.get_task(other, task.id)

    assert result.error.code == ErrorCode.FORBIDDEN
    assert result.error.message == "Not authorized to access this task"


def test_admin_reads_any_task(task_service, make_user):
    owner = Actor.from_user(make_user())
    admin = Actor.from_user(make_user(role=UserRole.ADMIN))
    task = task_service.create_task(owner, TaskCreate(title="Private")).unwrap()

    assert task_service.get_task(admin, task.id)


def test_partial_update_by_owner(task_service, make_user):
    owner = Actor.from_user(make_user())
    task = task_service.create_task(
        owner, TaskCreate(title="Draft", description="first pass")
    ).unwrap()

    updated = task_service.update_task(owner, task.id, TaskUpdate(title="Final")).unwrap()

    assert updated.title == "Final"
    assert updated.description == "first pass"


def test_admin_cannot_update_others_task(task_service, make_user):
    owner = Actor.from_user(make_user())
    admin = Actor.from_user(make_user(role=UserRole.ADMIN))
    task = task_service.create_task(owner, TaskCreate(title="Draft")).unwrap()

    result = task_service.update_task(admin, task.id, TaskUpdate(title="Hijacked"))

    assert result.error.code == ErrorCode.FORBIDDEN
    assert task_service.get_task(owner, task.id).unwrap().title == "Draft"


def test_admin_deletes_any_task(task_service, make_user):
    owner = Actor.from_user(make_user())
    admin = Actor.from_user(make_user(role=UserRole.ADMIN))
    task = task_service.create_task(owner, TaskCreate(title="Old")).unwrap()

    assert task_service.delete_task(admin, task.id).unwrap() is True
    assert task_service.get_task(owner, task.id).error.code == ErrorCode.NOT_FOUND


def test_employee_cannot_delete_others_task(task_service, make_user):
    owner = Actor.from_user(make_user())
    other = Actor.from_user(make_user())
    task = task_service.create_task(owner, TaskCreate(title="Mine")).unwrap()

    assert task_service.delete_task(other, task.id).error.code == ErrorCode.FORBIDDEN


def test_missing_task(task_service, make_user):
    actor = Actor.from_user(make_user())

    assert task_service.get_task(actor, "does-not-exist").error.code == ErrorCode.NOT_FOUND
