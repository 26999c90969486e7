"""
Transfer request service.

Handles:
- Requesting a department transfer (one pending request per user)
- Deciding a transfer; approval moves the user in the same transaction
- Listing own and all transfer requests
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import EntityAlreadyExistsError, RepositoryError
from app.core.security.permissions import Action, Actor, can_access, has_capability
from app.models.base.enums import TransferStatus
from app.models.transfer.transfer_request import TransferRequest
from app.repositories.transfer import TransferFilter, TransferRequestRepository
from app.repositories.user import UserRepository
from app.schemas.transfer import TransferCreateRequest, TransferDecisionRequest
from app.services.base import BaseService, ServiceResult

logger = logging.getLogger(__name__)

UNASSIGNED_DEPARTMENT = "Not Assigned"


class TransferRequestService(BaseService[TransferRequest, TransferRequestRepository]):
    """
    Department transfer workflow.

    ``current_department`` is a snapshot taken when the request is made.
    Approval writes the transfer status and the user's new department
    together; a failure in either write rolls back both.
    """

    resource_name = "Transfer request"

    def __init__(
        self,
        repository: TransferRequestRepository,
        user_repository: UserRepository,
        db_session: Session,
    ):
        super().__init__(repository, db_session)
        self.users = user_repository

    # =========================================================================
    # Request
    # =========================================================================

    def request_transfer(
        self,
        actor: Actor,
        request: TransferCreateRequest,
    ) -> ServiceResult[TransferRequest]:
        """
        Create a pending transfer request for the caller.

        Returns:
            ServiceResult with the request; CONFLICT if one is already
            pending, VALIDATION_ERROR if the target is the current department
        """
        user = self.users.find_by_id(actor.id)
        if user is None:
            return ServiceResult.not_found("User", actor.id)

        if self.repository.find_pending_for_user(actor.id) is not None:
            return ServiceResult.conflict("You already have a pending transfer request")

        if user.department is not None and user.department == request.requested_department:
            return ServiceResult.validation_failure(
                "You are already in this department", field="requested_department"
            )

        transfer = TransferRequest(
            user_id=actor.id,
            current_department=user.department or UNASSIGNED_DEPARTMENT,
            requested_department=request.requested_department,
            reason=request.reason,
            status=TransferStatus.PENDING,
        )
        try:
            with self.transaction():
                self.repository.create(transfer)
        except EntityAlreadyExistsError:
            # lost a race against a concurrent request by the same user
            return ServiceResult.conflict("You already have a pending transfer request")
        except RepositoryError as e:
            return self._handle_exception(e, "request transfer", actor.id)

        logger.info(
            "Transfer requested",
            extra={
                "transfer_id": transfer.id,
                "user_id": actor.id,
                "from_department": transfer.current_department,
                "to_department": transfer.requested_department,
            },
        )
        return ServiceResult.success(transfer, message="Transfer request submitted successfully")

    # =========================================================================
    # Decide
    # =========================================================================

    def decide(
        self,
        actor: Actor,
        transfer_id: str,
        request: TransferDecisionRequest,
    ) -> ServiceResult[TransferRequest]:
        """
        Approve or reject a pending transfer.

        On approval the requesting user's department becomes the requested
        department. Both rows are locked and written in one transaction.

        Args:
            actor: HR or admin
            transfer_id: Transfer to decide
            request: Target status, remarks and optional effective date

        Returns:
            ServiceResult with the decided transfer; NOT_FOUND, CONFLICT if
            already decided, FORBIDDEN for self-decision or missing role
        """
        if request.status == TransferStatus.PENDING:
            return ServiceResult.validation_failure(
                "status must be approved or rejected", field="status"
            )

        try:
            with self.transaction():
                transfer = self.repository.find_by_id_for_update(transfer_id)
                if transfer is None:
                    return ServiceResult.not_found(self.resource_name, transfer_id)

                if not transfer.is_pending:
                    return ServiceResult.conflict("This transfer request has already been processed")

                if not can_access(actor, Action.DECIDE_TRANSFER, owner_id=transfer.user_id):
                    logger.warning(
                        "Transfer decision denied",
                        extra={"transfer_id": transfer_id, "actor_id": actor.id},
                    )
                    return ServiceResult.forbidden("Not authorized to decide this transfer request")

                user = None
                if request.status == TransferStatus.APPROVED:
                    user = self.users.find_by_id_for_update(transfer.user_id)
                    if user is None:
                        return ServiceResult.not_found("User", transfer.user_id)

                transfer.status = request.status
                transfer.approved_by_id = actor.id
                transfer.approver_remarks = request.approver_remarks
                transfer.effective_date = request.effective_date
                if user is not None:
                    user.department = transfer.requested_department

                self.repository.flush()
                self.db.refresh(transfer)
        except RepositoryError as e:
            return self._handle_exception(e, "update transfer status", transfer_id)

        logger.info(
            "Transfer status updated",
            extra={
                "transfer_id": transfer_id,
                "status": transfer.status.value,
                "approved_by": actor.id,
            },
        )
        return ServiceResult.success(transfer, message=f"Transfer {transfer.status.value} successfully")

    # =========================================================================
    # Listing
    # =========================================================================

    def list_mine(self, actor: Actor) -> ServiceResult[List[TransferRequest]]:
        try:
            transfers = self.repository.list_transfers(TransferFilter(user_id=actor.id))
        except RepositoryError as e:
            return self._handle_exception(e, "list transfers", actor.id)
        return ServiceResult.success(transfers)

    def list_all(
        self,
        actor: Actor,
        status: Optional[TransferStatus] = None,
        limit: int = 50,
    ) -> ServiceResult[List[TransferRequest]]:
        if not has_capability(actor, Action.LIST_TRANSFERS):
            return ServiceResult.forbidden("Not authorized to list transfer requests")
        try:
            transfers = self.repository.list_transfers(
                TransferFilter(status=status, limit=limit)
            )
        except RepositoryError as e:
            return self._handle_exception(e, "list transfers")
        return ServiceResult.success(transfers)
