"""
Leave application service.

Handles:
- Applying for leave with the no-overlap rule
- Deciding (approve/reject) a pending leave
- Listing own leaves and, for privileged roles, everyone's
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import RepositoryError
from app.core.security.permissions import Action, Actor, can_access, has_capability
from app.models.base.enums import LeaveStatus
from app.models.leave.leave_application import LeaveApplication
from app.repositories.leave import LeaveApplicationRepository, LeaveFilter
from app.repositories.user import UserRepository
from app.schemas.leave import LeaveApplyRequest, LeaveDecisionRequest
from app.services.base import BaseService, ServiceResult

logger = logging.getLogger(__name__)


class LeaveApplicationService(BaseService[LeaveApplication, LeaveApplicationRepository]):
    """
    Leave request workflow: pending -> approved | rejected, exactly once.

    Overlap rule: for one user, no two non-rejected leaves may share a day.
    A pending leave therefore blocks a new overlapping request; a rejected
    one frees its range.
    """

    resource_name = "Leave request"

    def __init__(
        self,
        repository: LeaveApplicationRepository,
        user_repository: UserRepository,
        db_session: Session,
    ):
        """
        Initialize leave service.

        Args:
            repository: LeaveApplicationRepository instance
            user_repository: Used to lock the applicant while checking overlap
            db_session: SQLAlchemy database session
        """
        super().__init__(repository, db_session)
        self.users = user_repository

    # =========================================================================
    # Apply
    # =========================================================================

    def apply(self, actor: Actor, request: LeaveApplyRequest) -> ServiceResult[LeaveApplication]:
        """
        Submit a leave request for the caller.

        The applicant's user row is locked before the overlap query so two
        concurrent applications by the same user are checked one after the
        other.

        Args:
            actor: Applicant
            request: Validated leave details (from_date <= to_date)

        Returns:
            ServiceResult with the pending leave, or CONFLICT on overlap
        """
        if request.from_date > request.to_date:
            return ServiceResult.validation_failure(
                "from_date must be on or before to_date", field="from_date"
            )

        try:
            with self.transaction():
                if self.users.find_by_id_for_update(actor.id) is None:
                    return ServiceResult.not_found("User", actor.id)

                overlapping = self.repository.find_overlapping(
                    actor.id, request.from_date, request.to_date
                )
                if overlapping is not None:
                    logger.info(
                        "Leave rejected: overlaps existing request",
                        extra={"user_id": actor.id, "existing_leave_id": overlapping.id},
                    )
                    return ServiceResult.conflict(
                        "You have an overlapping leave request for this period",
                        details={"leave_id": overlapping.id},
                    )

                leave = LeaveApplication(
                    user_id=actor.id,
                    leave_type=request.leave_type,
                    from_date=request.from_date,
                    to_date=request.to_date,
                    reason=request.reason,
                    status=LeaveStatus.PENDING,
                )
                self.repository.create(leave)
        except RepositoryError as e:
            return self._handle_exception(e, "apply for leave", actor.id)

        logger.info(
            "Leave applied",
            extra={"user_id": actor.id, "leave_id": leave.id, "leave_type": leave.leave_type.value},
        )
        return ServiceResult.success(leave, message="Leave application submitted successfully")

    # =========================================================================
    # Decide
    # =========================================================================

    def decide(
        self,
        actor: Actor,
        leave_id: str,
        request: LeaveDecisionRequest,
    ) -> ServiceResult[LeaveApplication]:
        """
        Approve or reject a pending leave.

        Args:
            actor: HR, admin, or a department head of the applicant's department
            leave_id: Leave to decide
            request: Target status and optional remarks

        Returns:
            ServiceResult with the decided leave; NOT_FOUND, CONFLICT if
            already decided, FORBIDDEN for self-decision or department mismatch
        """
        if request.status == LeaveStatus.PENDING:
            return ServiceResult.validation_failure(
                "status must be approved or rejected", field="status"
            )

        try:
            with self.transaction():
                leave = self.repository.find_by_id_for_update(leave_id)
                if leave is None:
                    return ServiceResult.not_found(self.resource_name, leave_id)

                if not leave.is_pending:
                    return ServiceResult.conflict("This leave request has already been processed")

                if not can_access(
                    actor,
                    Action.DECIDE_LEAVE,
                    owner_id=leave.user_id,
                    resource_department=leave.user.department,
                ):
                    logger.warning(
                        "Leave decision denied",
                        extra={"leave_id": leave_id, "actor_id": actor.id, "role": actor.role.value},
                    )
                    if not has_capability(actor, Action.DECIDE_LEAVE):
                        return ServiceResult.forbidden("Not authorized to decide leave requests")
                    if leave.user_id == actor.id:
                        return ServiceResult.forbidden("You cannot decide your own leave request")
                    return ServiceResult.forbidden("You can only approve leaves from your department")

                leave.status = request.status
                leave.approved_by_id = actor.id
                leave.approver_remarks = request.approver_remarks
                self.repository.flush()
                self.db.refresh(leave)
        except RepositoryError as e:
            return self._handle_exception(e, "update leave status", leave_id)

        logger.info(
            "Leave status updated",
            extra={"leave_id": leave_id, "status": leave.status.value, "approved_by": actor.id},
        )
        return ServiceResult.success(leave, message=f"Leave {leave.status.value} successfully")

    # =========================================================================
    # Listing
    # =========================================================================

    def list_mine(
        self,
        actor: Actor,
        status: Optional[LeaveStatus] = None,
        limit: int = 20,
    ) -> ServiceResult[List[LeaveApplication]]:
        try:
            leaves = self.repository.list_leaves(
                LeaveFilter(user_id=actor.id, status=status, limit=limit)
            )
        except RepositoryError as e:
            return self._handle_exception(e, "list leaves", actor.id)
        return ServiceResult.success(leaves)

    def list_all(
        self,
        actor: Actor,
        status: Optional[LeaveStatus] = None,
        department: Optional[str] = None,
        limit: int = 50,
    ) -> ServiceResult[List[LeaveApplication]]:
        """
        List leaves across users.

        Two-phase read: the query is broad (status and explicit department
        filter only), then each row is narrowed through the authorization
        policy, which scopes a department head to their own department.
        The limit applies after narrowing.
        """
        if not has_capability(actor, Action.LIST_LEAVES):
            return ServiceResult.forbidden("Not authorized to list leave requests")

        try:
            candidates = self.repository.list_leaves(
                LeaveFilter(status=status, department=department)
            )
        except RepositoryError as e:
            return self._handle_exception(e, "list leaves")

        visible = [
            leave
            for leave in candidates
            if can_access(actor, Action.LIST_LEAVES, resource_department=leave.user.department)
        ]
        return ServiceResult.success(visible[:limit])
