"""
Authorization policy.

A single pure decision table shared by every workflow resource. Route-level
gating asks ``has_capability``; per-record gating asks ``can_access``. Both
are side-effect free so they can be tested without a database.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional

from app.models.base.enums import UserRole

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """Actions checked against the policy."""

    # Owner actions: always allowed on a record the actor owns
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    READ_FILE = "read_file"

    # Decisions: never allowed on a record the actor owns
    DECIDE_LEAVE = "decide_leave"
    DECIDE_TRANSFER = "decide_transfer"
    RESPOND_GRIEVANCE = "respond_grievance"

    # Cross-user listings
    LIST_TASKS = "list_tasks"
    LIST_LEAVES = "list_leaves"
    LIST_TRANSFERS = "list_transfers"
    LIST_GRIEVANCES = "list_grievances"
    LIST_ATTENDANCE = "list_attendance"

    CREATE_USER = "create_user"


class Scope(str, Enum):
    """How far a role grant reaches."""

    ANY = "any"
    DEPARTMENT = "department"


OWNER_ACTIONS: FrozenSet[Action] = frozenset(
    {Action.READ, Action.UPDATE, Action.DELETE, Action.READ_FILE}
)

DECISION_ACTIONS: FrozenSet[Action] = frozenset(
    {Action.DECIDE_LEAVE, Action.DECIDE_TRANSFER, Action.RESPOND_GRIEVANCE}
)

# UPDATE is granted to no role: mutation is owner-only.
ROLE_GRANTS: Dict[UserRole, Dict[Action, Scope]] = {
    UserRole.EMPLOYEE: {},
    UserRole.HR: {
        Action.DECIDE_LEAVE: Scope.ANY,
        Action.DECIDE_TRANSFER: Scope.ANY,
        Action.RESPOND_GRIEVANCE: Scope.ANY,
        Action.LIST_LEAVES: Scope.ANY,
        Action.LIST_TRANSFERS: Scope.ANY,
        Action.LIST_GRIEVANCES: Scope.ANY,
        Action.LIST_ATTENDANCE: Scope.ANY,
        Action.READ_FILE: Scope.ANY,
    },
    UserRole.DEPARTMENT_HEAD: {
        Action.DECIDE_LEAVE: Scope.DEPARTMENT,
        Action.LIST_LEAVES: Scope.DEPARTMENT,
    },
    UserRole.ADMIN: {
        Action.READ: Scope.ANY,
        Action.DELETE: Scope.ANY,
        Action.READ_FILE: Scope.ANY,
        Action.DECIDE_LEAVE: Scope.ANY,
        Action.DECIDE_TRANSFER: Scope.ANY,
        Action.RESPOND_GRIEVANCE: Scope.ANY,
        Action.LIST_TASKS: Scope.ANY,
        Action.LIST_LEAVES: Scope.ANY,
        Action.LIST_TRANSFERS: Scope.ANY,
        Action.LIST_GRIEVANCES: Scope.ANY,
        Action.LIST_ATTENDANCE: Scope.ANY,
        Action.CREATE_USER: Scope.ANY,
    },
}

_ungoverned = set(UserRole) - set(ROLE_GRANTS)
if _ungoverned:
    raise RuntimeError(
        f"Authorization policy has no entry for roles: {sorted(r.value for r in _ungoverned)}"
    )


@dataclass(frozen=True)
class Actor:
    """The authenticated identity performing an operation."""

    id: str
    role: UserRole
    department: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> "Actor":
        return cls(id=str(user.id), role=UserRole(user.role), department=user.department)


def has_capability(actor: Actor, action: Action) -> bool:
    """True if the actor's role is granted ``action`` at any scope."""
    return action in ROLE_GRANTS[actor.role]


def can_access(
    actor: Actor,
    action: Action,
    owner_id: Optional[str] = None,
    resource_department: Optional[str] = None,
) -> bool:
    """
    Decide whether ``actor`` may perform ``action`` on one record.

    Precedence:
        1. A decision on a record the actor owns is denied.
        2. The owner may perform owner actions.
        3. The actor's role grant must cover the action.
        4. A department-scoped grant requires the record's department to
           equal the actor's department.

    Args:
        actor: Who is acting
        action: What is being attempted
        owner_id: Id of the user who owns the record, if any
        resource_department: Department of the record's owner, if known

    Returns:
        True to allow, False to deny
    """
    is_owner = owner_id is not None and str(owner_id) == actor.id

    if action in DECISION_ACTIONS and is_owner:
        return False

    if action in OWNER_ACTIONS and is_owner:
        return True

    scope = ROLE_GRANTS[actor.role].get(action)
    if scope is None:
        return False

    if scope is Scope.DEPARTMENT:
        return actor.department is not None and actor.department == resource_department

    return True


__all__ = [
    "Action",
    "Actor",
    "Scope",
    "ROLE_GRANTS",
    "OWNER_ACTIONS",
    "DECISION_ACTIONS",
    "has_capability",
    "can_access",
]
